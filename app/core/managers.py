"""
Managers for models built on SoftDeleteMixin.

    objects = SoftDeleteManager()    live rows only
    all_objects = models.Manager()   every row, flagged or not

``Payment.objects.deleted()`` lists flagged rows and
``Payment.objects.with_deleted()`` lifts the filter while keeping the
soft-delete queryset methods.
"""

from __future__ import annotations

from django.db import models
from django.utils import timezone


class SoftDeleteQuerySet(models.QuerySet):
    """
    Bulk soft-delete operations.

    ``delete()`` flags rows instead of removing them; ``hard_delete()`` is the
    real DELETE. No rows are hidden here; the live-only filter is applied by
    SoftDeleteManager.
    """

    def delete(self) -> tuple[int, dict[str, int]]:
        """Flag every live row. Returns Django's ``(count, {label: count})`` shape."""
        now = timezone.now()
        count = self.filter(is_deleted=False).update(
            is_deleted=True, deleted_at=now, updated_at=now
        )
        return count, {self.model._meta.label: count}

    def hard_delete(self) -> tuple[int, dict[str, int]]:
        return super().delete()

    def restore(self) -> int:
        """Unflag every deleted row and return how many changed."""
        return self.filter(is_deleted=True).update(
            is_deleted=False, deleted_at=None, updated_at=timezone.now()
        )

    def deleted(self) -> SoftDeleteQuerySet:
        return self.filter(is_deleted=True)

    def active(self) -> SoftDeleteQuerySet:
        return self.filter(is_deleted=False)

    delete.queryset_only = True
    hard_delete.queryset_only = True
    restore.queryset_only = True


class SoftDeleteManager(models.Manager.from_queryset(SoftDeleteQuerySet)):
    """Default manager that hides flagged rows."""

    def with_deleted(self) -> SoftDeleteQuerySet:
        return super().get_queryset()

    def get_queryset(self) -> SoftDeleteQuerySet:
        return super().get_queryset().active()

    def deleted(self) -> SoftDeleteQuerySet:
        return self.with_deleted().deleted()
