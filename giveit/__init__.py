"""
give.it Product SDK

Builds a validated, fingerprinted product payload with buyer and recipient
options, encrypts it and wraps it into an embeddable button fragment.
"""

from .version import VERSION, SDK_VERSION_TAG

from .errors import (
    ErrorKind,
    ProductError,
    GiveItError,
    DuplicateOptionError,
    EncoderUnavailableError,
    EncodingError,
    UnsupportedFieldTypeError,
)
from .schema.models import Audience, Option, Metadata
from .schema.field_schema import FieldKind, FieldSpec, FieldSchema, PRODUCT_SCHEMA
from .options.option_tree import OptionTree, PriceWarning, strip_recipient_prices
from .product.document import ProductDocument
from .crypt import Encoder, KeyHolder, AesCrypt
from .builder import PayloadPipeline, PipelineState, RenderResult

__all__ = [
    "VERSION",
    "SDK_VERSION_TAG",
    "ErrorKind",
    "ProductError",
    "GiveItError",
    "DuplicateOptionError",
    "EncoderUnavailableError",
    "EncodingError",
    "UnsupportedFieldTypeError",
    "Audience",
    "Option",
    "Metadata",
    "FieldKind",
    "FieldSpec",
    "FieldSchema",
    "PRODUCT_SCHEMA",
    "OptionTree",
    "PriceWarning",
    "strip_recipient_prices",
    "ProductDocument",
    "Encoder",
    "KeyHolder",
    "AesCrypt",
    "PayloadPipeline",
    "PipelineState",
    "RenderResult",
]
