"""
Shared user capability bundle.

SharedUserMixin is the reusable set of authentication fields and behaviour
that every user model in the application is composed from. The concrete
User model in models.py adds its own declarations on top.

Capabilities:
    - Validatable: email normalisation, password length and confirmation
    - Trackable: sign-in counter, timestamps and IP addresses
    - Confirmable: email confirmation token and timestamp
    - Lockable: failed attempt counter and time-limited lockout

Configuration (settings.SHARED_USER):
    PASSWORD_LENGTH: (min, max) length of a newly set password
    MAXIMUM_ATTEMPTS: Failed sign-ins before the account is locked
    UNLOCK_IN: timedelta after which a lock expires on its own

Related files:
    - models.py: User composes this mixin
    - services.py: AuthService drives tracking and lockout
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone

from core.helpers import generate_token, get_client_ip

if TYPE_CHECKING:
    from typing import Any

    from django.http import HttpRequest


SHARED_USER_DEFAULTS = {
    "PASSWORD_LENGTH": (7, 72),
    "MAXIMUM_ATTEMPTS": 20,
    "UNLOCK_IN": timedelta(hours=1),
}


def get_shared_user_setting(name: str) -> Any:
    """Read a SHARED_USER setting, falling back to the bundle default."""
    return getattr(settings, "SHARED_USER", {}).get(name, SHARED_USER_DEFAULTS[name])


class SharedUserMixin(models.Model):
    """
    Abstract user fields and behaviour shared by all user models.

    Fields:
        email: Primary identifier, unique, stored lower-cased
        is_active: Whether the account may sign in
        is_staff: Whether the user can access the admin site
        date_joined: When the account was created
        sign_in_count: Number of successful sign-ins
        current_sign_in_at / last_sign_in_at: Latest two sign-in times
        current_sign_in_ip / last_sign_in_ip: Latest two sign-in addresses
        confirmation_token: Pending email confirmation token
        confirmed_at: When the email address was confirmed
        confirmation_sent_at: When the pending token was generated
        failed_attempts: Consecutive failed sign-ins
        locked_at: When the account was locked (null if unlocked)

    Attributes (not persisted):
        password_confirmation: Must equal a newly set raw password
        raw_confirmation_token: Clear value of the last generated token

    Note:
        Methods that change state (update_tracked_fields, confirm,
        lock_access, ...) only modify the instance. Callers save.
    """

    email = models.EmailField(
        unique=True,
        db_index=True,
        max_length=254,
        help_text="User's email address (primary identifier)",
    )
    is_active = models.BooleanField(
        default=True,
        help_text="Whether this user account is active. Deselect instead of deleting.",
    )
    is_staff = models.BooleanField(
        default=False,
        help_text="Whether the user can access the admin site.",
    )
    date_joined = models.DateTimeField(
        auto_now_add=True,
        help_text="When the user account was created",
    )

    # Trackable
    sign_in_count = models.PositiveIntegerField(
        default=0,
        null=True,
        blank=True,
        help_text="Number of successful sign-ins",
    )
    current_sign_in_at = models.DateTimeField(null=True, blank=True)
    last_sign_in_at = models.DateTimeField(null=True, blank=True)
    current_sign_in_ip = models.GenericIPAddressField(null=True, blank=True)
    last_sign_in_ip = models.GenericIPAddressField(null=True, blank=True)

    # Confirmable
    confirmation_token = models.CharField(
        max_length=64,
        unique=True,
        null=True,
        blank=True,
        help_text="Pending email confirmation token",
    )
    confirmed_at = models.DateTimeField(null=True, blank=True)
    confirmation_sent_at = models.DateTimeField(null=True, blank=True)

    # Lockable
    failed_attempts = models.PositiveIntegerField(
        default=0,
        help_text="Consecutive failed sign-in attempts",
    )
    locked_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the account was locked (null if unlocked)",
    )

    password_confirmation = None
    raw_confirmation_token = None

    class Meta:
        abstract = True

    # -------------------------------------------------------------------------
    # Validatable
    # -------------------------------------------------------------------------

    def full_clean(self, *args: Any, **kwargs: Any) -> None:
        """Strip and lower-case the email before any validator sees it."""
        if self.email:
            self.email = self.email.strip().lower()
        super().full_clean(*args, **kwargs)

    def clean(self) -> None:
        """Check a newly set raw password against length and confirmation."""
        super().clean()

        # AbstractBaseUser keeps the raw password here until the next save
        raw_password = getattr(self, "_password", None)
        if raw_password is None:
            return

        errors: dict[str, list[str]] = {}
        min_length, max_length = get_shared_user_setting("PASSWORD_LENGTH")
        if len(raw_password) < min_length:
            errors["password"] = [
                f"is too short (minimum is {min_length} characters)"
            ]
        elif len(raw_password) > max_length:
            errors["password"] = [
                f"is too long (maximum is {max_length} characters)"
            ]

        if (
            self.password_confirmation is not None
            and self.password_confirmation != raw_password
        ):
            errors["password_confirmation"] = ["doesn't match Password"]

        if errors:
            raise ValidationError(errors)

    # -------------------------------------------------------------------------
    # Trackable
    # -------------------------------------------------------------------------

    def update_tracked_fields(self, request: HttpRequest | None = None) -> None:
        """
        Record a successful sign-in.

        The previous current_sign_in_* values become last_sign_in_*; on a
        first sign-in both are set to the new values.

        Args:
            request: Request the sign-in came from (for the client IP)
        """
        now = timezone.now()
        self.last_sign_in_at = self.current_sign_in_at or now
        self.current_sign_in_at = now

        ip = get_client_ip(request)
        self.last_sign_in_ip = self.current_sign_in_ip or ip
        self.current_sign_in_ip = ip

        self.sign_in_count = (self.sign_in_count or 0) + 1

    def update_tracked_fields_and_save(self, request: HttpRequest | None = None) -> None:
        """Record a successful sign-in and save the instance."""
        self.update_tracked_fields(request)
        self.save()

    # -------------------------------------------------------------------------
    # Confirmable
    # -------------------------------------------------------------------------

    @property
    def is_confirmed(self) -> bool:
        return self.confirmed_at is not None

    def generate_confirmation_token(self) -> str:
        """
        Create a new confirmation token.

        Returns:
            The token in clear, also kept on raw_confirmation_token
        """
        self.raw_confirmation_token = generate_token(32)
        self.confirmation_token = self.raw_confirmation_token
        self.confirmation_sent_at = timezone.now()
        return self.raw_confirmation_token

    def confirm(self) -> bool:
        """
        Mark the email address as confirmed.

        Returns:
            False if the address was already confirmed, True otherwise
        """
        if self.is_confirmed:
            return False
        self.confirmed_at = timezone.now()
        self.confirmation_token = None
        return True

    # -------------------------------------------------------------------------
    # Lockable
    # -------------------------------------------------------------------------

    def lock_expired(self) -> bool:
        """Whether an existing lock is older than UNLOCK_IN."""
        if self.locked_at is None:
            return False
        return self.locked_at + get_shared_user_setting("UNLOCK_IN") < timezone.now()

    def access_locked(self) -> bool:
        """Whether the account is currently locked."""
        return self.locked_at is not None and not self.lock_expired()

    def lock_access(self) -> None:
        self.locked_at = timezone.now()

    def unlock_access(self) -> None:
        self.locked_at = None
        self.failed_attempts = 0

    def increment_failed_attempts(self) -> bool:
        """
        Count a failed sign-in, locking the account at MAXIMUM_ATTEMPTS.

        An expired lock is cleared first, so the user starts over with a
        full set of attempts.

        Returns:
            Whether the account is locked afterwards
        """
        if self.lock_expired():
            self.unlock_access()
        self.failed_attempts = (self.failed_attempts or 0) + 1
        if (
            self.failed_attempts >= get_shared_user_setting("MAXIMUM_ATTEMPTS")
            and not self.access_locked()
        ):
            self.lock_access()
        return self.access_locked()
