"""
Base class for the stateless service layer.

Services hold the business rules; views only translate HTTP to service calls
and BaseApplicationError back to HTTP. Service methods are classmethods, log
through ``cls.get_logger()`` with structured ``extra`` fields and wrap writes
in ``cls.atomic()``.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

from django.db import transaction

if TYPE_CHECKING:
    from collections.abc import Iterator


class BaseService:
    """Shared logger and transaction helpers for service classes."""

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """Logger named ``<module>.<ClassName>``, e.g. payments.services.payment_service.PaymentService."""
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    @contextmanager
    def atomic(cls) -> Iterator[None]:
        with transaction.atomic():
            yield
