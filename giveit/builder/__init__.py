"""
Payload Pipeline Module

Turns product documents into embeddable give.it buttons:
- PayloadPipeline: validate, encode and embed
- fragment: button and error markup
"""

from .payload_pipeline import PayloadPipeline, PipelineState, RenderResult, DEFAULT_BUTTON_TYPE
from .fragment import button_fragment, error_fragment

__all__ = [
    "PayloadPipeline",
    "PipelineState",
    "RenderResult",
    "DEFAULT_BUTTON_TYPE",
    "button_fragment",
    "error_fragment",
]
