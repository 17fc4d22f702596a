"""
Error types raised by services and turned into HTTP answers by views.

Every error carries a human message, a stable machine code and an optional
details mapping, plus the HTTP status the API answers with:

    BaseApplicationError        400, APPLICATION_ERROR
    ├── ValidationError         400, VALIDATION_ERROR
    └── NotFoundError           404, NOT_FOUND

Views catch BaseApplicationError and reply with
``Response(error.to_dict(), status=error.status_code)``. Request-shape
problems stay with DRF serializers; these types cover rules enforced in the
service layer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Root of the service-layer error tree.

    Attributes:
        message: Text shown to the API caller
        error_code: Stable code clients can branch on
        details: Extra context such as the offending field and value
        status_code: HTTP status used by the views
    """

    default_error_code: str = "APPLICATION_ERROR"
    status_code: int = 400

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code if error_code else self.default_error_code
        self.details = dict(details) if details else {}

    def to_dict(self) -> dict[str, Any]:
        """Body of the error response; ``details`` only appears when set."""
        body: dict[str, Any] = {"error": self.message, "error_code": self.error_code}
        if self.details:
            body["details"] = self.details
        return body

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        name = type(self).__name__
        return f"{name}({self.message!r}, error_code={self.error_code!r}, details={self.details!r})"


class ValidationError(BaseApplicationError):
    """Input that parses but breaks a business rule (bad amount, unknown enum, bad id)."""

    default_error_code: str = "VALIDATION_ERROR"


class NotFoundError(BaseApplicationError):
    """
    A single record looked up by id does not exist.

    Listing calls never raise this; they return an empty result.
    """

    default_error_code: str = "NOT_FOUND"
    status_code: int = 404
