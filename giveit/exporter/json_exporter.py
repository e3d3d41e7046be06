"""JSON exporter."""
import hashlib
import json
from typing import Any, Dict


def canonical_json(data: Dict[str, Any]) -> str:
    """
    Canonical JSON representation.

    Sorted keys, no whitespace, non-ASCII kept as UTF-8, so identical input
    always yields identical text. Values JSON has no type for (Decimal,
    date, ...) are written as their str().
    """
    return json.dumps(data, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=str)


def fingerprint(data: Dict[str, Any]) -> str:
    """SHA-256 hex digest of the canonical JSON of ``data``."""
    return hashlib.sha256(canonical_json(data).encode("utf-8")).hexdigest()


class JsonExporter:
    """Export a product document as the payload handed to the encoder."""

    METADATA_KEY = "give.it"

    def to_payload(self, document) -> Dict[str, Any]:
        """Build ``{details, currency?, options, give.it}`` for a document."""
        payload = document.content()
        payload[self.METADATA_KEY] = document.metadata.to_dict()
        return payload

    def export(self, document) -> str:
        """Serialize a document to canonical JSON."""
        return canonical_json(self.to_payload(document))

    def export_pretty(self, document) -> str:
        """Indented form of the same payload, for humans."""
        return json.dumps(self.to_payload(document), indent=2, sort_keys=True, ensure_ascii=False, default=str)
