"""
Tests for the authentication app.

Test modules:
    - test_models.py: User fixture rules and UserPasskey
    - test_shared_user.py: SharedUserMixin capabilities
    - test_managers.py: UserManager
    - test_signals.py: post_validation receiver
    - test_services.py: AuthService
"""
