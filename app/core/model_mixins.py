"""
Abstract model mixins shared by the domain apps.

    UUIDPrimaryKeyMixin   random UUID primary key
    SoftDeleteMixin       is_deleted / deleted_at with soft_delete() and restore()
    OrderableMixin        integer position, ordered ascending

Mixins go before BaseModel in the bases list. Models using SoftDeleteMixin
declare ``objects = SoftDeleteManager()`` and ``all_objects = models.Manager()``
(see core.managers).
"""

from __future__ import annotations

import uuid

from django.db import models
from django.utils import timezone


class UUIDPrimaryKeyMixin(models.Model):
    """Random UUID primary key. Callers check ids with core.helpers.validate_uuid first."""

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Record identifier",
    )

    class Meta:
        abstract = True


class SoftDeleteMixin(models.Model):
    """
    Rows are flagged instead of removed.

    A flagged row disappears from the default manager and from every
    aggregate built on it, and can be brought back with restore().
    """

    is_deleted = models.BooleanField(
        default=False,
        db_index=True,
        help_text="Hidden from normal queries when set",
    )
    deleted_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the row was flagged as deleted",
    )

    class Meta:
        abstract = True

    def _set_deleted(self, flag: bool) -> None:
        self.is_deleted = flag
        self.deleted_at = timezone.now() if flag else None
        self.save(update_fields=["is_deleted", "deleted_at", "updated_at"])

    def soft_delete(self) -> None:
        """Flag the row. A second call keeps the first deleted_at."""
        if not self.is_deleted:
            self._set_deleted(True)

    def restore(self) -> None:
        if self.is_deleted:
            self._set_deleted(False)

    def hard_delete(self) -> None:
        """Remove the row from the database for good."""
        super().delete()


class OrderableMixin(models.Model):
    """
    Zero-based position within a parent.

    Uniqueness per parent is declared on the concrete model.
    """

    position = models.PositiveIntegerField(
        default=0,
        db_index=True,
        help_text="Sort key, lowest first",
    )

    class Meta:
        abstract = True
        ordering = ["position"]
