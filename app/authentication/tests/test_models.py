"""
Tests for authentication models.

This module tests:
- User: sign_in_count presence rule, validations_performed marker,
  cascading delete of owned passkeys
- UserPasskey: field constraints and string representation

Test Organization:
    - Each behaviour has its own test class
    - Test names follow the pattern: test_<scenario>_<expected_outcome>

Dependencies:
    - pytest and pytest-django for test framework
    - Factory Boy fixtures from conftest.py
"""

import pytest
from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.db.models.signals import pre_delete

from authentication.models import User, UserPasskey
from authentication.tests.factories import UserFactory, UserPasskeyFactory
from core.exceptions import CascadeDeleteError


# =============================================================================
# sign_in_count Presence
# =============================================================================


class TestSignInCountPresence:
    """
    Tests for the sign_in_count presence rule declared on User.

    The shared user bundle allows a missing count; User requires it on
    every validation pass and refuses to save without it.
    """

    def test_missing_sign_in_count_is_rejected(self, db):
        """A user without sign_in_count fails validation with a field error."""
        with pytest.raises(ValidationError) as exc_info:
            User.objects.create_user(
                email="nocount@example.com",
                password="TestPass123!",
                sign_in_count=None,
            )

        assert exc_info.value.message_dict["sign_in_count"] == ["can't be blank"]

    def test_missing_sign_in_count_is_not_persisted(self, db):
        """Nothing is written when the presence check fails."""
        with pytest.raises(ValidationError):
            User.objects.create_user(
                email="nocount@example.com",
                password="TestPass123!",
                sign_in_count=None,
            )

        assert not User.objects.filter(email="nocount@example.com").exists()

    def test_zero_sign_in_count_passes(self, db):
        """Zero is a present value."""
        user = User.objects.create_user(
            email="zero@example.com",
            password="TestPass123!",
            sign_in_count=0,
        )

        assert user.pk is not None
        assert User.objects.get(pk=user.pk).sign_in_count == 0

    def test_positive_sign_in_count_passes(self, db):
        user = UserFactory(sign_in_count=12)

        assert User.objects.get(pk=user.pk).sign_in_count == 12

    def test_clearing_sign_in_count_on_update_is_rejected(self, user):
        """An existing user cannot be saved after its count is cleared."""
        user.sign_in_count = None

        with pytest.raises(ValidationError) as exc_info:
            user.save()

        assert "sign_in_count" in exc_info.value.message_dict
        user.refresh_from_db()
        assert user.sign_in_count == 0

    def test_other_errors_are_collected_alongside(self, db):
        """Field errors are collected together rather than raised one at a time."""
        user = User(email="not-an-email", sign_in_count=None)
        user.set_password("TestPass123!")

        with pytest.raises(ValidationError) as exc_info:
            user.full_clean()

        assert "sign_in_count" in exc_info.value.message_dict
        assert "email" in exc_info.value.message_dict


# =============================================================================
# validations_performed Marker
# =============================================================================


class TestValidationsPerformedMarker:
    """
    Tests for the class-level validations_performed marker.

    The marker is set by the post_validation receiver once any user
    finishes a validation run, valid or not, and is never reset by the
    application.
    """

    def test_marker_is_false_before_any_validation(self, db, fresh_validation_marker):
        """Building an instance without validating it leaves the marker unset."""
        User(email="idle@example.com")

        assert User.validations_performed is False

    def test_marker_set_after_valid_save(self, db, fresh_validation_marker):
        UserFactory()

        assert User.validations_performed is True

    def test_marker_set_after_failed_validation(self, db, fresh_validation_marker):
        """The hook fires even when validation fails."""
        user = User(email="broken@example.com", sign_in_count=None)

        with pytest.raises(ValidationError):
            user.save()

        assert User.validations_performed is True

    def test_marker_set_by_direct_full_clean(self, db, fresh_validation_marker):
        user = User(email="direct@example.com")
        user.set_password("TestPass123!")

        user.full_clean()

        assert User.validations_performed is True

    def test_marker_is_shared_across_instances(self, db, fresh_validation_marker):
        """Validating a second instance does not reset the marker."""
        first = User(email="first@example.com")
        first.set_password("TestPass123!")
        second = User(email="second@example.com", sign_in_count=None)

        first.full_clean()
        assert User.validations_performed is True

        with pytest.raises(ValidationError):
            second.full_clean()
        assert User.validations_performed is True
        assert first.validations_performed is True
        assert second.validations_performed is True

    def test_passkey_validation_does_not_set_marker(self, user, fresh_validation_marker):
        """Only user validation runs count."""
        UserPasskeyFactory(user=user)

        assert User.validations_performed is False

    def test_mark_validations_performed_sets_class_attribute(self, fresh_validation_marker):
        User.mark_validations_performed()

        assert User.validations_performed is True


# =============================================================================
# Cascading Delete
# =============================================================================


class TestUserPasskeyCascade:
    """
    Tests for deleting a user together with the passkeys it owns.

    User.delete() removes the passkeys and then the user in a single
    transaction; a failure on the passkeys leaves everything in place.
    """

    def test_delete_removes_all_passkeys(self, user_with_passkeys):
        user_id = user_with_passkeys.pk

        user_with_passkeys.delete()

        assert not User.objects.filter(pk=user_id).exists()
        assert UserPasskey.objects.filter(user_id=user_id).count() == 0

    def test_delete_reports_passkeys_in_counts(self, user_with_passkeys):
        total, rows = user_with_passkeys.delete()

        assert rows[UserPasskey._meta.label] == 3
        assert rows[User._meta.label] == 1
        assert total == sum(rows.values())

    def test_delete_without_passkeys(self, user):
        user_id = user.pk

        user.delete()

        assert not User.objects.filter(pk=user_id).exists()

    def test_delete_leaves_other_users_passkeys(self, user_with_passkeys):
        other = UserPasskeyFactory()

        user_with_passkeys.delete()

        assert UserPasskey.objects.filter(pk=other.pk).exists()

    def test_queryset_delete_also_cascades(self, user_with_passkeys):
        """Bulk deletes cascade through the foreign key."""
        user_id = user_with_passkeys.pk

        User.objects.filter(pk=user_id).delete()

        assert UserPasskey.objects.filter(user_id=user_id).count() == 0

    def test_failed_passkey_delete_raises_and_keeps_user(self, user_with_passkeys):
        """A failing child delete propagates and rolls the parent back."""

        def refuse_delete(sender, instance, **kwargs):
            raise DatabaseError("passkey table is locked")

        pre_delete.connect(
            refuse_delete, sender=UserPasskey, dispatch_uid="refuse_passkey_delete"
        )
        try:
            with pytest.raises(CascadeDeleteError) as exc_info:
                user_with_passkeys.delete()
        finally:
            pre_delete.disconnect(
                sender=UserPasskey, dispatch_uid="refuse_passkey_delete"
            )

        assert isinstance(exc_info.value.__cause__, DatabaseError)
        assert exc_info.value.error_code == "CASCADE_DELETE_FAILED"
        assert exc_info.value.details["user_id"] == user_with_passkeys.pk
        assert User.objects.filter(pk=user_with_passkeys.pk).exists()
        assert UserPasskey.objects.filter(user=user_with_passkeys).count() == 3


# =============================================================================
# UserPasskey Model Tests
# =============================================================================


class TestUserPasskeyModel:
    """Tests for the UserPasskey model."""

    def test_passkeys_reachable_from_user(self, user_with_passkeys):
        assert user_with_passkeys.passkeys.count() == 3

    def test_external_id_must_be_unique(self, user):
        passkey = UserPasskeyFactory(user=user)

        with pytest.raises(ValidationError) as exc_info:
            UserPasskeyFactory(user=user, external_id=passkey.external_id)

        assert "external_id" in exc_info.value.message_dict

    def test_public_key_is_required(self, user):
        with pytest.raises(ValidationError) as exc_info:
            UserPasskeyFactory(user=user, public_key="")

        assert "public_key" in exc_info.value.message_dict

    def test_str_uses_label(self, user):
        passkey = UserPasskeyFactory(user=user, label="Laptop")

        assert str(passkey) == "Laptop"

    def test_str_without_label_uses_external_id(self, user):
        passkey = UserPasskeyFactory(user=user, label="", external_id="abcdefghijkl")

        assert str(passkey) == "Passkey abcdefgh"
