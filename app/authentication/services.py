"""
Authentication services.

This module provides the AuthService class for password sign-in with
tracking and lockout, email confirmation, passkey registration and use,
and account deletion.

Related files:
    - models.py: User, UserPasskey
    - shared_user.py: Tracking, confirmation and lockout primitives

Security:
    - Unknown emails and wrong passwords return the same error
    - Accounts lock after SHARED_USER["MAXIMUM_ATTEMPTS"] failures
    - Passkey signature counters must increase (clone detection)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.core.exceptions import ValidationError
from django.utils import timezone

from core.services import BaseService, ServiceResult

if TYPE_CHECKING:
    from django.http import HttpRequest

    from authentication.models import User, UserPasskey


class AuthService(BaseService):
    """
    Centralized authentication business logic.

    Usage:
        from authentication.services import AuthService

        result = AuthService.authenticate("user@example.com", "secret123", request)
        if result:
            user = result.data

        result = AuthService.register_passkey(user, credential_id, public_key)
        AuthService.record_passkey_use(result.data, sign_count=1)
    """

    @classmethod
    def authenticate(
        cls,
        email: str,
        password: str,
        request: HttpRequest | None = None,
    ) -> ServiceResult[User]:
        """
        Sign a user in with email and password.

        A wrong password counts as a failed attempt and may lock the
        account. A successful sign-in clears failed attempts (and an
        expired lock) and records the tracked fields.

        Args:
            email: Email address, matched case-insensitively
            password: Raw password
            request: Request the sign-in came from (for the client IP)

        Returns:
            ServiceResult with the user, or one of the error codes
            INVALID_CREDENTIALS, ACCOUNT_INACTIVE, ACCOUNT_LOCKED
        """
        from authentication.models import User

        logger = cls.get_logger()
        user = User.find_by(email=(email or "").strip().lower())
        if user is None or not user.has_usable_password():
            return ServiceResult.failure(
                "Invalid email or password", error_code="INVALID_CREDENTIALS"
            )

        if not user.is_active:
            return ServiceResult.failure(
                "This account is inactive", error_code="ACCOUNT_INACTIVE"
            )

        if user.access_locked():
            return ServiceResult.failure(
                "This account is locked", error_code="ACCOUNT_LOCKED"
            )

        if not user.check_password(password):
            locked = user.increment_failed_attempts()
            user.save(update_fields=["failed_attempts", "locked_at"])
            if locked:
                logger.warning(
                    f"Locked user {user.pk} after {user.failed_attempts} failed attempts"
                )
                return ServiceResult.failure(
                    "This account is locked", error_code="ACCOUNT_LOCKED"
                )
            return ServiceResult.failure(
                "Invalid email or password", error_code="INVALID_CREDENTIALS"
            )

        with cls.atomic():
            user.unlock_access()
            user.update_tracked_fields_and_save(request)

        logger.info(f"User {user.pk} signed in (count={user.sign_in_count})")
        return ServiceResult.ok(user)

    @classmethod
    def confirm_email(cls, token: str) -> ServiceResult[User]:
        """
        Confirm the email address holding a confirmation token.

        Returns:
            ServiceResult with the user, or INVALID_TOKEN / ALREADY_CONFIRMED
        """
        from authentication.models import User

        user = User.find_by(confirmation_token=token) if token else None
        if user is None:
            return ServiceResult.failure(
                "Invalid confirmation token", error_code="INVALID_TOKEN"
            )

        if not user.confirm():
            return ServiceResult.failure(
                "Email was already confirmed", error_code="ALREADY_CONFIRMED"
            )

        user.save()
        cls.get_logger().info(f"Email confirmed for user: {user.email}")
        return ServiceResult.ok(user)

    @classmethod
    def register_passkey(
        cls,
        user: User,
        external_id: str,
        public_key: str,
        label: str = "",
    ) -> ServiceResult[UserPasskey]:
        """
        Store a new passkey credential for a user.

        Returns:
            ServiceResult with the passkey, or PASSKEY_EXISTS /
            VALIDATION_ERROR (with field errors)
        """
        from authentication.models import UserPasskey

        if UserPasskey.objects.filter(external_id=external_id).exists():
            return ServiceResult.failure(
                "This passkey is already registered", error_code="PASSKEY_EXISTS"
            )

        passkey = UserPasskey(
            user=user,
            external_id=external_id,
            public_key=public_key,
            label=label,
        )
        try:
            passkey.save()
        except ValidationError as e:
            return ServiceResult.failure(
                "Invalid passkey",
                error_code="VALIDATION_ERROR",
                errors=e.message_dict,
            )

        cls.get_logger().info(f"Registered passkey {passkey.pk} for user {user.pk}")
        return ServiceResult.ok(passkey)

    @classmethod
    def record_passkey_use(
        cls, passkey: UserPasskey, sign_count: int
    ) -> ServiceResult[UserPasskey]:
        """
        Record a successful passkey assertion.

        Authenticators without a counter always report 0. Otherwise the
        counter must be greater than the stored one; a counter that does
        not increase suggests a cloned authenticator.

        Returns:
            ServiceResult with the passkey, or SIGN_COUNT_REGRESSION
        """
        if (sign_count or passkey.sign_count) and sign_count <= passkey.sign_count:
            cls.get_logger().warning(
                f"Sign count regression for passkey {passkey.pk}: "
                f"stored={passkey.sign_count} received={sign_count}"
            )
            return ServiceResult.failure(
                "Passkey signature counter did not increase",
                error_code="SIGN_COUNT_REGRESSION",
            )

        passkey.sign_count = sign_count
        passkey.last_used_at = timezone.now()
        passkey.save(update_fields=["sign_count", "last_used_at", "updated_at"])
        return ServiceResult.ok(passkey)

    @classmethod
    def destroy_user(cls, user: User) -> int:
        """
        Delete a user together with its passkeys.

        Returns:
            Number of passkeys deleted

        Raises:
            CascadeDeleteError: If the passkeys could not be deleted; the
                user is left in place
        """
        from authentication.models import UserPasskey

        _, rows = user.delete()
        return rows.get(UserPasskey._meta.label, 0)
