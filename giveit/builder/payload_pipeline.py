"""
Payload Pipeline - Turns a product document into a button fragment

Stages:
- Validate: required fields checked against the document's schema
- Encode: canonical JSON of the document encrypted with the data key
- Embed: ciphertext wrapped into the button fragment

Any failing stage ends in FAILED. With render_errors enabled a failure
yields the error fragment; otherwise it yields no fragment at all.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from ..crypt.aes_crypt import AesCrypt
from ..crypt.encoder import Encoder
from ..crypt.keys import KeyHolder
from ..errors import EncoderUnavailableError, EncodingError, ErrorKind, ProductError
from ..exporter.json_exporter import JsonExporter
from ..product.document import ProductDocument
from .fragment import button_fragment, error_fragment

logger = logging.getLogger(__name__)

DEFAULT_BUTTON_TYPE = "blue_rect_sm"


class PipelineState(str, Enum):
    """Where a render attempt ended up"""
    DRAFT = "draft"
    VALIDATED = "validated"
    ENCODED = "encoded"
    EMBEDDED = "embedded"
    FAILED = "failed"


@dataclass
class RenderResult:
    """
    Outcome of a render attempt

    Truthy only when the button was embedded. ``fragment`` is the button on
    success, the error fragment on a verbose failure and None otherwise.
    """
    state: PipelineState
    fragment: Optional[str] = None
    errors: List[ProductError] = field(default_factory=list)
    encoded: Optional[str] = None

    def __bool__(self) -> bool:
        return self.state is PipelineState.EMBEDDED

    @property
    def error_messages(self) -> List[str]:
        return [error.message for error in self.errors]


class PayloadPipeline:
    """
    Renders product documents into embeddable buttons

    Usage:
    ```python
    pipeline = PayloadPipeline(KeyHolder(data_key="..."), render_errors=True)
    html = pipeline.render_html(product, button_type="blue_rect_sm")
    ```
    """

    def __init__(
        self,
        key_holder: Optional[KeyHolder] = None,
        encoder: Optional[Encoder] = None,
        exporter: Optional[JsonExporter] = None,
        render_errors: bool = False,
    ):
        """
        Args:
            key_holder: Supplies the data key; required before rendering
            encoder: Encrypts the serialized document (default: AesCrypt)
            exporter: Serializes the document (default: JsonExporter)
            render_errors: Return the error fragment instead of nothing on failure
        """
        self.key_holder = key_holder
        self.encoder = encoder or AesCrypt()
        self.exporter = exporter or JsonExporter()
        self.render_errors = render_errors

    def render(
        self,
        document: ProductDocument,
        button_type: str = DEFAULT_BUTTON_TYPE,
        key_holder: Optional[KeyHolder] = None,
    ) -> RenderResult:
        """
        Run a document through validate, encode and embed

        Args:
            document: The product to render
            button_type: Button variant shown to the visitor
            key_holder: Overrides the pipeline's key holder for this call

        Returns:
            RenderResult; its errors are the document's accumulated errors

        Raises:
            EncoderUnavailableError: the document is valid but no data key is available
        """
        if not document.validate():
            document.add_error(ErrorKind.PRODUCT_INVALID, "product data is invalid")
            return self._fail(document)

        state = PipelineState.VALIDATED
        logger.debug(f"Product {document.details.get('code')} is {state.value}")

        key_holder = key_holder or self.key_holder
        if key_holder is None or not key_holder.is_ready:
            error = EncoderUnavailableError()
            document.errors.append(error.to_error())
            logger.error(error.message)
            raise error

        plaintext = self.exporter.export(document)

        try:
            encoded = self.encoder.encode(plaintext, key_holder.data_key)
        except EncodingError as e:
            logger.error(f"Error encoding product payload: {e.message}")
            document.errors.append(e.to_error())
            return self._fail(document)

        state = PipelineState.ENCODED
        logger.debug(f"Product {document.details.get('code')} is {state.value}")

        fragment = button_fragment(button_type, encoded)
        logger.info(f"Rendered {button_type} button for product {document.details.get('code')}")

        return RenderResult(
            state=PipelineState.EMBEDDED,
            fragment=fragment,
            errors=list(document.errors),
            encoded=encoded,
        )

    def render_html(
        self,
        document: ProductDocument,
        button_type: str = DEFAULT_BUTTON_TYPE,
        key_holder: Optional[KeyHolder] = None,
    ) -> Optional[str]:
        """Fragment for the document, or None when nothing should be rendered"""
        return self.render(document, button_type, key_holder).fragment

    def _fail(self, document: ProductDocument) -> RenderResult:
        errors = list(document.errors)
        logger.info(f"Product render failed with {len(errors)} error(s)")

        fragment = error_fragment(errors) if self.render_errors else None
        return RenderResult(state=PipelineState.FAILED, fragment=fragment, errors=errors)
