"""
give.it SDK Error Types

Two families live here:
- ProductError: accumulated, non-fatal records collected on a ProductDocument
  and rendered into the error fragment.
- GiveItError subclasses: raised for conditions that stop the current call.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    """Kinds of errors a product or the render pipeline can report"""
    MISSING_FIELD = "missing_field"
    INVALID_FIELD_TYPE = "invalid_field_type"
    INVALID_CURRENCY_CODE = "invalid_currency_code"
    DUPLICATE_OPTION_ID = "duplicate_option_id"
    PRODUCT_INVALID = "product_invalid"
    ENCODER_UNAVAILABLE = "encoder_unavailable"
    ENCODING_FAILED = "encoding_failed"
    UNSUPPORTED_FIELD_TYPE = "unsupported_field_type"


@dataclass(frozen=True)
class ProductError:
    """A single accumulated error: its kind and the human-readable message"""

    kind: ErrorKind
    message: str

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, str]:
        return {"kind": self.kind.value, "message": self.message}


class GiveItError(Exception):
    """Base exception for errors raised by the SDK."""

    def __init__(
        self,
        error_code: ErrorKind,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        self.error_code = error_code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_error(self) -> ProductError:
        """Convert to an accumulated error record."""
        return ProductError(self.error_code, self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_code": self.error_code.value,
            "message": self.message,
            "details": self.details
        }


class DuplicateOptionError(GiveItError):
    """An option with the same id already exists for the audience."""

    def __init__(self, audience: str, option_id: str):
        super().__init__(
            ErrorKind.DUPLICATE_OPTION_ID,
            f"cannot add option with duplicate id {option_id}",
            {"audience": audience, "option_id": option_id}
        )


class EncoderUnavailableError(GiveItError):
    """No key holder was supplied before rendering."""

    def __init__(self, message: str = "encoder must be initialized before rendering"):
        super().__init__(ErrorKind.ENCODER_UNAVAILABLE, message)


class EncodingError(GiveItError):
    """
    The encoder could not produce ciphertext.

    The reason is opaque to the pipeline and is reported as-is.
    """

    def __init__(self, reason: str):
        super().__init__(ErrorKind.ENCODING_FAILED, reason)


class UnsupportedFieldTypeError(GiveItError):
    """A schema entry names a field kind the validator does not know."""

    def __init__(self, field_path: str, descriptor: str):
        super().__init__(
            ErrorKind.UNSUPPORTED_FIELD_TYPE,
            f"{field_path} - unsupported type {descriptor}",
            {"field": field_path, "descriptor": descriptor}
        )
