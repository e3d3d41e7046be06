"""Product field validation."""
from typing import Any, Dict, List

from ..errors import ErrorKind, ProductError
from ..schema.field_schema import FieldSchema


class FieldValidator:
    """Validates a flattened product against a field schema."""

    def __init__(self, schema: FieldSchema):
        self.schema = schema

    def validate(self, flat: Dict[str, Any]) -> List[ProductError]:
        """
        Check every required field, in schema order.

        Does not stop at the first failure: one error per missing or
        mis-typed field.
        """
        errors = []

        for spec in self.schema:
            if flat.get(spec.path) is None:
                errors.append(ProductError(ErrorKind.MISSING_FIELD, f"missing field {spec.path}"))
                continue

            problem = spec.check(flat[spec.path])
            if problem is not None:
                errors.append(ProductError(ErrorKind.INVALID_FIELD_TYPE, f"{spec.path} - {problem}"))

        return errors
