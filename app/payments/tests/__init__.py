"""
Tests for payments app.

This package contains test modules for:
- test_money.py, test_derivation.py: Rounding and derived-field rules
- test_models.py, test_state_transitions.py: Models and lifecycle
- test_services.py: PaymentService
- test_profit_service.py: Profit summaries and payment-status verdicts
- test_views.py: API endpoint tests

Usage:
    pytest app/payments/tests/
    pytest app/payments/tests/test_profit_service.py
"""
