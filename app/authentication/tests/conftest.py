"""
Test configuration and fixtures for authentication tests.

This module provides:
- User fixtures in common states (basic, locked, with passkeys)
- A fixture that resets the process-wide validation marker
- A request factory fixture for sign-in tracking

Usage:
    def test_example(user_with_passkeys):
        assert user_with_passkeys.passkeys.count() == 3
"""

import pytest
from django.test import RequestFactory
from django.utils import timezone

from authentication.models import User
from authentication.tests.factories import UserFactory, UserPasskeyFactory


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def user(db):
    """Create a basic active user with password TestPass123!."""
    return UserFactory()


@pytest.fixture
def locked_user(db):
    """Create a user whose account was locked just now."""
    return UserFactory(locked_at=timezone.now(), failed_attempts=20)


@pytest.fixture
def user_with_passkeys(db):
    """Create a user owning three passkeys."""
    user = UserFactory()
    UserPasskeyFactory.create_batch(3, user=user)
    return user


# =============================================================================
# Validation Marker
# =============================================================================


@pytest.fixture
def fresh_validation_marker():
    """
    Reset User.validations_performed to its initial value.

    The marker is process-wide, so any earlier test that validated a user
    has already set it. Restores False afterwards as well.
    """
    User.validations_performed = False
    yield
    User.validations_performed = False


# =============================================================================
# Request Fixtures
# =============================================================================


@pytest.fixture
def sign_in_request():
    """A request from 203.0.113.10 behind a proxy."""
    return RequestFactory().post(
        "/sign-in/",
        HTTP_X_FORWARDED_FOR="203.0.113.10, 10.0.0.1",
        REMOTE_ADDR="10.0.0.1",
    )
