"""
Authentication application.

This app provides the user model built from the shared user bundle, the
passkeys it owns, and the services that drive sign-in tracking, lockout
and passkey use.

Key components:
    - User model: Email-based user composed from OrmShimMixin and SharedUserMixin
    - UserPasskey model: WebAuthn credentials owned by a user
    - AuthService: Sign-in, confirmation and passkey business logic

Usage:
    from authentication.models import User, UserPasskey
    from authentication.services import AuthService
"""
