"""
Model mixins providing reusable functionality for Django models.

This module contains abstract mixin classes that can be combined with
BaseModel (or any concrete model base) to add specific functionality.
They are generic infrastructure classes with no domain-specific logic.

Available Mixins:
    ValidationCallbacksMixin: Validate before every save, post_validation hook
    OrmShimMixin: Record lookup helpers shared by mixins written for other ORMs

Usage:
    from core.models import BaseModel
    from core.model_mixins import OrmShimMixin, ValidationCallbacksMixin

    class Document(OrmShimMixin, ValidationCallbacksMixin, BaseModel):
        name = models.CharField(max_length=100)

    doc = Document(name="")
    doc.save()  # raises django.core.exceptions.ValidationError

    Document.find_by(name="Report")  # None when missing

Note:
    - Always list mixins before the concrete base in inheritance
    - Mixins are abstract and don't create database tables
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.db import models

from core.signals import post_validation

if TYPE_CHECKING:
    from typing import Any

logger = logging.getLogger(__name__)


class ValidationCallbacksMixin(models.Model):
    """
    Run the full validation pipeline before every save.

    Django only validates models through forms and serializers; models
    using this mixin validate themselves on save() instead, so a record
    that fails validation is never written.

    Once the pipeline has finished (field validators, clean() of every
    class in the MRO, unique checks and constraints) the post_validation
    signal is sent. It is sent exactly once per full_clean() call, after
    the last validator, whether or not validation passed. A receiver that
    raises is logged and does not replace the validation outcome.

    Usage:
        class Article(ValidationCallbacksMixin, BaseModel):
            title = models.CharField(max_length=200)

        article = Article(title="")
        try:
            article.save()
        except ValidationError as e:
            e.message_dict  # {"title": ["This field cannot be blank."]}

    Note:
        Bulk operations (QuerySet.update, bulk_create) bypass save() and
        are therefore not validated.
    """

    class Meta:
        abstract = True

    def full_clean(self, *args: Any, **kwargs: Any) -> None:
        """
        Validate the instance and notify post_validation receivers.

        Raises:
            django.core.exceptions.ValidationError: With every collected
                field and non-field error.
        """
        valid = False
        try:
            super().full_clean(*args, **kwargs)
            valid = True
        finally:
            logger.debug(
                f"Validated {self.__class__.__name__}(id={self.pk}): "
                f"{'valid' if valid else 'invalid'}"
            )
            responses = post_validation.send_robust(
                sender=self.__class__, instance=self, valid=valid
            )
            for receiver, response in responses:
                if isinstance(response, Exception):
                    logger.error(
                        f"post_validation receiver {receiver!r} failed for "
                        f"{self.__class__.__name__}(id={self.pk}): {response}",
                        exc_info=response,
                    )

    def save(self, *args: Any, **kwargs: Any) -> None:
        """Refuse to save unless full_clean() passes."""
        self.full_clean()
        super().save(*args, **kwargs)


class OrmShimMixin(models.Model):
    """
    Lookup helpers expected by shared mixins written against other ORMs.

    Gives a model the small record-level API that shared authentication
    code relies on, expressed with the default manager.

    Methods:
        find(pk): Fetch by primary key, raising DoesNotExist when missing
        find_by(**lookups): First matching record or None
        to_key(): Primary key as a list, None for unsaved records
        is_persisted: Whether the record has been written to the database

    Usage:
        user = User.find(42)
        user = User.find_by(email="user@example.com")
        user.to_key()  # [42]
    """

    class Meta:
        abstract = True

    @classmethod
    def find(cls, pk: Any):
        """
        Fetch a record by primary key.

        Raises:
            DoesNotExist: If no record has this primary key
        """
        return cls._default_manager.get(pk=pk)

    @classmethod
    def find_by(cls, **lookups: Any):
        """Return the first record matching lookups, or None."""
        return cls._default_manager.filter(**lookups).order_by("pk").first()

    @property
    def is_persisted(self) -> bool:
        """Whether this instance has been saved and not deleted."""
        return not self._state.adding and self.pk is not None

    def to_key(self) -> list[Any] | None:
        """Return [pk] for persisted records, None otherwise."""
        return [self.pk] if self.is_persisted else None
