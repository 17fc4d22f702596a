"""
Abstract base model with creation and modification timestamps.

Domain models combine it with the mixins in core.model_mixins:

    class Mediator(UUIDPrimaryKeyMixin, BaseModel):
        name = models.CharField(max_length=100)
"""

from __future__ import annotations

from django.db import models


class BaseModel(models.Model):
    """created_at / updated_at, newest rows first."""

    created_at = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        help_text="When the row was inserted",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the row was last saved",
    )

    class Meta:
        abstract = True
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{type(self).__name__}(id={self.pk})"
