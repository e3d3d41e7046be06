"""
Field Schema - Declarative table of required product fields

Each entry maps a flattened field path (``section:name``) to a type
descriptor of the form ``kind`` or ``kind:constraint``:
- ``string`` / ``string:40``: a str, optionally no longer than 40 characters
- ``integer``: an int (bools are rejected); a constraint is ignored

Descriptors are parsed once, when the schema is built. Unknown kinds raise
UnsupportedFieldTypeError there instead of failing later during validation.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple
import logging

from ..errors import UnsupportedFieldTypeError

logger = logging.getLogger(__name__)


class FieldKind(str, Enum):
    """Primitive kinds a required field can be checked against"""
    STRING = "string"
    INTEGER = "integer"


@dataclass(frozen=True)
class FieldSpec:
    """A single required field: its path, kind and optional max length"""
    path: str
    kind: FieldKind
    max_length: Optional[int] = None

    @property
    def section(self) -> str:
        return self.path.split(":", 1)[0]

    @property
    def name(self) -> str:
        return self.path.split(":", 1)[-1]

    def check(self, value: Any) -> Optional[str]:
        """
        Check a value against this field's kind

        Returns:
            None when the value is acceptable, otherwise the constraint
            violation (e.g. "must be no more than 40 characters")
        """
        if self.kind is FieldKind.INTEGER:
            if isinstance(value, int) and not isinstance(value, bool):
                return None
            return "must be an integer"

        if self.kind is FieldKind.STRING:
            if not isinstance(value, str):
                return "must be a string"
            if self.max_length is not None and len(value) > self.max_length:
                return f"must be no more than {self.max_length} characters"
            return None

        return f"unsupported type {self.kind}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "kind": self.kind.value,
            "max_length": self.max_length,
        }

    @classmethod
    def parse(cls, path: str, descriptor: str) -> "FieldSpec":
        """
        Parse a ``kind`` or ``kind:constraint`` descriptor

        Raises:
            UnsupportedFieldTypeError: unknown kind or non-numeric string constraint
        """
        kind_name, _, constraint = descriptor.partition(":")

        try:
            kind = FieldKind(kind_name.strip())
        except ValueError:
            raise UnsupportedFieldTypeError(path, descriptor) from None

        max_length = None
        if constraint and kind is FieldKind.STRING:
            try:
                max_length = int(constraint)
            except ValueError:
                raise UnsupportedFieldTypeError(path, descriptor) from None
        elif constraint:
            logger.debug(f"Ignoring constraint '{constraint}' on {kind.value} field {path}")

        return cls(path=path, kind=kind, max_length=max_length)


class FieldSchema:
    """
    Ordered collection of required fields

    Iteration follows declaration order, so validation errors come out in a
    stable, reproducible order.

    Usage:
    ```python
    schema = FieldSchema.from_descriptors({
        "details:code": "string:40",
        "details:price": "integer",
    })
    schema.resolve("details:code")  # (FieldKind.STRING, 40)
    ```
    """

    def __init__(self, fields: Optional[List[FieldSpec]] = None):
        self._fields: Dict[str, FieldSpec] = {}
        for spec in fields or []:
            self._fields[spec.path] = spec

    @classmethod
    def from_descriptors(cls, descriptors: Dict[str, str]) -> "FieldSchema":
        """Build a schema from a ``{path: descriptor}`` mapping"""
        return cls([FieldSpec.parse(path, descriptor) for path, descriptor in descriptors.items()])

    def resolve(self, field_path: str) -> Optional[Tuple[FieldKind, Optional[int]]]:
        """Return ``(kind, max_length)`` for a path, or None if it is not required"""
        spec = self._fields.get(field_path)
        if spec is None:
            return None
        return spec.kind, spec.max_length

    def get(self, field_path: str) -> Optional[FieldSpec]:
        return self._fields.get(field_path)

    @property
    def paths(self) -> List[str]:
        return list(self._fields)

    def __iter__(self) -> Iterator[FieldSpec]:
        return iter(self._fields.values())

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, field_path: object) -> bool:
        return field_path in self._fields


# Required fields of every give.it product
PRODUCT_SCHEMA = FieldSchema.from_descriptors({
    "details:code": "string:40",
    "details:price": "integer",
    "details:name": "string:200",
    "details:image": "string",
})
