"""
Tests for the application exception hierarchy.
"""

from core.exceptions import BaseApplicationError, NotFoundError, ValidationError
from payments.exceptions import OrderNotFoundError, PaymentValidationError


class TestBaseApplicationError:
    """Tests for BaseApplicationError."""

    def test_to_dict_without_details(self):
        error = BaseApplicationError("Something broke")

        assert error.to_dict() == {
            "error": "Something broke",
            "error_code": "APPLICATION_ERROR",
        }

    def test_to_dict_with_details(self):
        error = ValidationError("Bad amount", error_code="INVALID_AMOUNT", details={"x": "1"})

        assert error.to_dict()["details"] == {"x": "1"}

    def test_str(self):
        assert str(NotFoundError("Gone")) == "[NOT_FOUND] Gone"


class TestStatusCodes:
    """Payment errors answer with the status of their generic class."""

    def test_validation_is_400(self):
        error = PaymentValidationError("bad")

        assert isinstance(error, ValidationError)
        assert error.status_code == 400
        assert error.error_code == "PAYMENT_VALIDATION_ERROR"

    def test_not_found_is_404(self):
        error = OrderNotFoundError("missing")

        assert isinstance(error, NotFoundError)
        assert error.status_code == 404
        assert error.error_code == "ORDER_NOT_FOUND"
