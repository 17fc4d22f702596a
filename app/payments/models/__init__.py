"""
Payment domain models.

This module contains all payment-related models:
- Mediator: Commission-bearing intermediary (commission terms source)
- Bank: Company bank account a payment is credited to
- Payment: Settlement slot tracked from mediator to bank credit
"""

from payments.models.mediator import Bank, Mediator
from payments.models.payment import Payment

__all__ = [
    "Bank",
    "Mediator",
    "Payment",
]
