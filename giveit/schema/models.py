"""Data models for product options and payload metadata."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class Audience(str, Enum):
    """The two independent option namespaces."""

    BUYER = "buyer"
    RECIPIENT = "recipient"


@dataclass(frozen=True)
class Option:
    """
    A selectable option, possibly with nested choices.

    Options are immutable; operations that change prices return a new tree.
    Anything beyond id, price and choices (name, type, ...) is kept in
    ``attributes`` and serialized alongside.
    """

    id: str
    price: Optional[float] = None
    choices: Tuple["Option", ...] = ()
    attributes: Dict[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        # Accept any sequence of choices, store a tuple
        if not isinstance(self.choices, tuple):
            object.__setattr__(self, "choices", tuple(self.choices))

    def without_price(self) -> "Option":
        """Return a copy of this node with the price removed."""
        return Option(id=self.id, price=None, choices=self.choices, attributes=dict(self.attributes))

    def with_choices(self, choices) -> "Option":
        """Return a copy of this node with different choices."""
        return Option(id=self.id, price=self.price, choices=tuple(choices), attributes=dict(self.attributes))

    def walk(self):
        """Yield this option and every nested choice, depth-first pre-order."""
        yield self
        for choice in self.choices:
            yield from choice.walk()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data = dict(self.attributes)
        data["id"] = self.id
        if self.price is not None:
            data["price"] = self.price
        if self.choices:
            data["choices"] = [choice.to_dict() for choice in self.choices]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Option":
        """Build an option tree from a dictionary."""
        if "id" not in data:
            raise ValueError(f"Option is missing an id: {data}")

        attributes = {k: v for k, v in data.items() if k not in ("id", "price", "choices")}
        return cls(
            id=str(data["id"]),
            price=data.get("price"),
            choices=tuple(cls.from_dict(choice) for choice in data.get("choices") or []),
            attributes=attributes,
        )


@dataclass(frozen=True)
class Metadata:
    """Provenance block stamped onto a document when it is created."""

    fingerprint: str
    rendered_at: str
    sdk_version: str

    def to_dict(self) -> Dict[str, str]:
        """Convert to dictionary."""
        return {
            "fingerprint": self.fingerprint,
            "rendered_at": self.rendered_at,
            "sdk_version": self.sdk_version,
        }
