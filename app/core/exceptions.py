"""
Base exception classes for application-wide error handling.

Exception Hierarchy:
    BaseApplicationError (base)
    └── CascadeDeleteError - Owned child records could not be removed

Usage:
    from core.exceptions import CascadeDeleteError

    try:
        user.delete()
    except CascadeDeleteError as e:
        logger.error(str(e), extra=e.details)

Note:
    Field validation failures are reported with Django's own
    django.core.exceptions.ValidationError, raised from Model.full_clean().
    These exceptions cover failures outside the validation pipeline.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base exception for all application-specific errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable code for callers
        details: Additional error context (record ids, counts, etc.)
    """

    default_error_code: str = "APPLICATION_ERROR"

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to a dictionary.

        Returns:
            Dict with error, error_code and (when present) details keys
        """
        result: dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class CascadeDeleteError(BaseApplicationError):
    """
    Raised when records owned by a parent cannot be deleted with it.

    The parent delete runs in the same transaction as the child delete,
    so when this is raised neither the parent nor its children have been
    removed. The database error that caused it is chained as __cause__.

    Example:
        raise CascadeDeleteError(
            "Could not delete passkeys for user",
            details={"user_id": user.pk, "relation": "passkeys"},
        ) from exc
    """

    default_error_code: str = "CASCADE_DELETE_FAILED"
