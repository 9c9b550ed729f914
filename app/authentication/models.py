"""
Authentication models.

This module defines:
- User: The user model, composed from the ORM shim and the shared user
  bundle, with its own sign-in count rule and validation marker
- UserPasskey: WebAuthn credentials owned by a user

Related files:
    - shared_user.py: SharedUserMixin capability bundle
    - managers.py: Custom user manager for email-based creation
    - signals.py: post_validation receiver that sets the marker
    - services.py: AuthService sign-in and passkey logic

Validation:
    Both models validate on every save (ValidationCallbacksMixin). A record
    failing validation raises django.core.exceptions.ValidationError and is
    not written.
"""

import logging
from collections import Counter

from django.conf import settings
from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import DatabaseError, models, router, transaction

from core.exceptions import CascadeDeleteError
from core.model_mixins import OrmShimMixin, ValidationCallbacksMixin
from core.models import BaseModel
from authentication.managers import UserManager
from authentication.shared_user import SharedUserMixin

logger = logging.getLogger(__name__)


class User(
    OrmShimMixin,
    SharedUserMixin,
    ValidationCallbacksMixin,
    AbstractBaseUser,
    PermissionsMixin,
):
    """
    User model used to exercise the shared user bundle.

    On top of the mixins this model declares:
        - sign_in_count must be present on every validation pass
        - passkeys: owned UserPasskey records, deleted with the user
        - validations_performed: class-level marker set after any
          validation run on any instance

    Usage:
        user = User.objects.create_user(
            email="user@example.com",
            password="securepassword",
        )

        User.validations_performed  # True

        user.sign_in_count = None
        user.save()  # ValidationError: {"sign_in_count": ["can't be blank"]}

    Note:
        validations_performed is process-wide. Nothing in the application
        resets it; tests that assert on it reset it themselves.
    """

    sign_in_count = models.PositiveIntegerField(
        default=0,
        error_messages={
            "null": "can't be blank",
            "blank": "can't be blank",
        },
        help_text="Number of successful sign-ins",
    )

    validations_performed = False

    USERNAME_FIELD = "email"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = []

    objects = UserManager()

    class Meta:
        verbose_name = "user"
        verbose_name_plural = "users"
        ordering = ["-date_joined"]

    def __str__(self):
        return self.email

    @classmethod
    def mark_validations_performed(cls):
        """Set the process-wide validation marker."""
        User.validations_performed = True

    def delete(self, using=None, keep_parents=False):
        """
        Delete the user and every passkey it owns in one transaction.

        Passkeys are deleted first, then the user. If the passkeys cannot be
        deleted the whole transaction rolls back and the user is kept.

        Returns:
            Tuple of (total rows deleted, rows deleted per model label)

        Raises:
            CascadeDeleteError: If deleting the passkeys fails
        """
        using = using or router.db_for_write(self.__class__, instance=self)
        user_id = self.pk

        with transaction.atomic(using=using):
            try:
                _, passkey_rows = (
                    UserPasskey.objects.using(using).filter(user=self).delete()
                )
            except DatabaseError as exc:
                raise CascadeDeleteError(
                    f"Could not delete passkeys for user {user_id}",
                    details={"user_id": user_id, "relation": "passkeys"},
                ) from exc

            _, user_rows = super().delete(using=using, keep_parents=keep_parents)

        rows = Counter(user_rows)
        rows.update(passkey_rows)
        logger.info(
            f"Deleted user {user_id} with "
            f"{rows.get(UserPasskey._meta.label, 0)} passkeys"
        )
        return sum(rows.values()), dict(rows)


class UserPasskey(ValidationCallbacksMixin, BaseModel):
    """
    WebAuthn credential registered by a user.

    Fields:
        user: Owning user (deleted with the user)
        label: Name the user gave the credential
        external_id: Credential ID reported by the authenticator
        public_key: Encoded public key of the credential
        sign_count: Last signature counter reported by the authenticator
        last_used_at: When the credential last authenticated

    Usage:
        user.passkeys.create(
            external_id="credential-id",
            public_key="pQECAyYgASFYIP...",
            label="Laptop",
        )
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="passkeys",
        help_text="User this passkey belongs to",
    )
    label = models.CharField(
        max_length=100,
        blank=True,
        help_text="Name given to this passkey",
    )
    external_id = models.CharField(
        max_length=255,
        unique=True,
        help_text="Credential ID reported by the authenticator",
    )
    public_key = models.TextField(
        help_text="Encoded credential public key",
    )
    sign_count = models.PositiveBigIntegerField(
        default=0,
        help_text="Last signature counter reported by the authenticator",
    )
    last_used_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When this passkey last authenticated",
    )

    class Meta:
        db_table = "authentication_user_passkey"
        verbose_name = "passkey"
        verbose_name_plural = "passkeys"
        ordering = ["-created_at"]

    def __str__(self):
        return self.label or f"Passkey {self.external_id[:8]}"
