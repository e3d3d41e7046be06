"""
Product Document - The product data handed to the give.it button

Holds:
- details: free-form product fields, of which a required subset is schema-checked
- currency: optional 3-letter ISO code
- options: buyer and recipient option trees
- metadata: fingerprint, timestamp and SDK version, stamped once at creation

Field, currency and duplicate-option problems are accumulated on the
document instead of raised; they surface when the document is rendered.
"""

import copy
import logging
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from ..errors import DuplicateOptionError, ErrorKind, ProductError
from ..exporter.json_exporter import fingerprint
from ..options.option_tree import OptionTree, PriceWarning, strip_recipient_prices
from ..schema.field_schema import PRODUCT_SCHEMA, FieldSchema
from ..schema.models import Audience, Metadata, Option
from ..validator.field_validator import FieldValidator
from ..version import SDK_VERSION_TAG

logger = logging.getLogger(__name__)

OptionInput = Union[Option, Mapping[str, Any]]


def flatten_mapping(data: Mapping[str, Any], prefix: str = "") -> Dict[str, Any]:
    """
    Flatten nested mappings into ``section:field`` keys

    Example:
        {"details": {"code": "A1", "size": {"w": 2}}}
        -> {"details:code": "A1", "details:size:w": 2}
    """
    flat: Dict[str, Any] = {}

    for key, value in data.items():
        path = f"{prefix}:{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(flatten_mapping(value, path))
        else:
            flat[path] = value

    return flat


def _to_option(option: OptionInput) -> Option:
    if isinstance(option, Option):
        return option
    return Option.from_dict(option)


class ProductDocument:
    """
    A purchasable product and its selectable options

    Usage:
    ```python
    product = ProductDocument({"code": "SKU-1", "price": 1999})
    product.set_details({"name": "Mug", "image": "https://..."}).set_currency("USD")
    product.add_buyer_option(Option(id="colour", choices=[...]))
    product.validate()
    ```
    """

    def __init__(
        self,
        details: Optional[Mapping[str, Any]] = None,
        currency: Optional[str] = None,
        options: Optional[Mapping[str, Any]] = None,
        schema: FieldSchema = PRODUCT_SCHEMA,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Args:
            details: Initial product details
            currency: Initial currency code, checked like set_currency
            options: ``{audience: [option, ...]}`` or ``{audience: {id: option}}``
            schema: Required fields checked by validate()
            clock: Source of the metadata timestamp
        """
        self.details: Dict[str, Any] = {}
        self.currency: Optional[str] = None
        self.options = OptionTree()
        self.schema = schema
        self.errors: List[ProductError] = []
        self.warnings: List[PriceWarning] = []
        self.metadata: Optional[Metadata] = None
        self._clock = clock or datetime.now

        if details:
            self.set_details(details)
        if currency is not None:
            self.set_currency(currency)
        for audience, audience_options in (options or {}).items():
            if isinstance(audience_options, Mapping):
                audience_options = list(audience_options.values())
            if Audience(audience) is Audience.RECIPIENT:
                self.add_recipient_option(audience_options)
            else:
                self.add_buyer_option(audience_options)

        self.stamp_metadata()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], **kwargs) -> "ProductDocument":
        """Build a document from ``{details, currency?, options?}``"""
        return cls(
            details=data.get("details"),
            currency=data.get("currency"),
            options=data.get("options"),
            **kwargs
        )

    # ------------------------------------------------------------------
    # Population
    # ------------------------------------------------------------------

    def set_details(self, details: Mapping[str, Any]) -> "ProductDocument":
        """Merge details into the product, last write wins per key"""
        for key, value in details.items():
            self.details[key] = value
        return self

    def set_currency(self, code: str = "USD") -> "ProductDocument":
        """
        Set the currency if ``code`` is 3 characters long

        Any other value records an invalid currency error and leaves the
        currency untouched.
        """
        if isinstance(code, str) and len(code) == 3:
            self.currency = code
        else:
            self.add_error(
                ErrorKind.INVALID_CURRENCY_CODE,
                f"invalid currency {code}, must be a 3-letter ISO code"
            )
        return self

    def add_buyer_option(self, option: Union[OptionInput, Iterable[OptionInput]]) -> bool:
        """Add a buyer option (or each of a sequence); False if any id was a duplicate"""
        return self._add_option(Audience.BUYER, option)

    def add_recipient_option(self, option: Union[OptionInput, Iterable[OptionInput]]) -> bool:
        """
        Add a recipient option (or each of a sequence) with all prices removed

        Non-zero prices are recorded in ``warnings``; they never fail the call.
        """
        return self._add_option(Audience.RECIPIENT, option)

    def _add_option(self, audience: Audience, option) -> bool:
        if isinstance(option, (Option, Mapping)):
            options = [_to_option(option)]
        else:
            options = [_to_option(item) for item in option]

        if audience is Audience.RECIPIENT:
            options = [strip_recipient_prices(item, self.warnings.append) for item in options]

        _, duplicates = self.options.add_options(audience, options)
        for duplicate in duplicates:
            self.errors.append(duplicate.to_error())

        return not duplicates

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------

    def add_error(self, kind: ErrorKind, message: str) -> None:
        logger.debug(f"Product error ({kind.value}): {message}")
        self.errors.append(ProductError(kind, message))

    def error_messages(self) -> List[str]:
        return [error.message for error in self.errors]

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def content(self) -> Dict[str, Any]:
        """Product data without metadata: details, currency if set, options"""
        data: Dict[str, Any] = {"details": copy.deepcopy(self.details)}
        if self.currency is not None:
            data["currency"] = self.currency
        data["options"] = self.options.to_dict()
        return data

    def flatten(self) -> Dict[str, Any]:
        """Flat ``section:field`` view of details and currency, options excluded"""
        data: Dict[str, Any] = {"details": self.details}
        if self.currency is not None:
            data["currency"] = self.currency
        return flatten_mapping(data)

    def validate(self) -> bool:
        """
        Check required fields against the schema

        Appends one error per missing or mis-typed field, in schema order.

        Returns:
            True if this call found no problems. Errors recorded earlier
            (currency, duplicate options) do not affect the result.
        """
        errors = FieldValidator(self.schema).validate(self.flatten())
        self.errors.extend(errors)

        if errors:
            logger.info(f"Product validation failed with {len(errors)} error(s)")
        return not errors

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    def stamp_metadata(self) -> Metadata:
        """
        Fingerprint the current content, once

        Later calls return the existing metadata; changes made after the
        first stamp are not reflected in it.
        """
        if self.metadata is not None:
            return self.metadata

        now = self._clock()
        self.metadata = Metadata(
            fingerprint=fingerprint(self.content()),
            rendered_at=f"{now.strftime('%Y-%m-%d %H:%M:%S')} {now.timestamp():.4f}",
            sdk_version=SDK_VERSION_TAG,
        )
        return self.metadata
