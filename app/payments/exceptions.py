"""
Payment-specific exceptions for settlement operations.

Exception Hierarchy:
    PaymentError (base for payment domain)
    ├── PaymentNotFoundError - Payment lookup failures (404)
    ├── OrderNotFoundError - Referenced order does not exist (404)
    ├── MediatorNotFoundError - Referenced mediator does not exist (404)
    ├── BankNotFoundError - Referenced bank does not exist (404)
    └── PaymentValidationError - Invalid input, rejected before any write (400)

Each not-found error also inherits core.exceptions.NotFoundError and the
validation error inherits core.exceptions.ValidationError, so callers can
catch either the payment-specific or the generic class.

Usage:
    from payments.exceptions import PaymentValidationError

    if gross < 0:
        raise PaymentValidationError(
            "gross_amount_usd must not be negative",
            details={"gross_amount_usd": str(gross)},
        )
"""

from __future__ import annotations

from core.exceptions import BaseApplicationError, NotFoundError, ValidationError


class PaymentError(BaseApplicationError):
    """
    Base exception for all payment operations.

    Example:
        try:
            PaymentService.create_payment(data)
        except PaymentError as e:
            return Response(e.to_dict(), status=e.status_code)
    """

    default_error_code: str = "PAYMENT_ERROR"


class PaymentNotFoundError(PaymentError, NotFoundError):
    """Raised when a payment id does not resolve to a live payment."""

    default_error_code: str = "PAYMENT_NOT_FOUND"


class OrderNotFoundError(PaymentError, NotFoundError):
    """Raised when a referenced order does not exist."""

    default_error_code: str = "ORDER_NOT_FOUND"


class MediatorNotFoundError(PaymentError, NotFoundError):
    """Raised when a referenced mediator does not exist."""

    default_error_code: str = "MEDIATOR_NOT_FOUND"


class BankNotFoundError(PaymentError, NotFoundError):
    """Raised when a referenced bank does not exist."""

    default_error_code: str = "BANK_NOT_FOUND"


class PaymentValidationError(PaymentError, ValidationError):
    """
    Raised when payment input is invalid.

    Use for:
    - Negative gross, rate or commission values
    - Commission exceeding the gross amount
    - Unknown payment status or commission type
    - Malformed ids
    """

    default_error_code: str = "PAYMENT_VALIDATION_ERROR"
