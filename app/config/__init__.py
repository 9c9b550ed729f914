# =============================================================================
# Django Project Configuration Package
# =============================================================================
# This package contains the Django settings for the shared user test
# application.
# =============================================================================
