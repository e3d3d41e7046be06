"""Key holder for the data encryption key."""
import os
from dataclasses import dataclass


@dataclass(frozen=True)
class KeyHolder:
    """
    Carries the data key used to encrypt product payloads.

    Passed explicitly into each render call and never modified by it, so a
    single instance can be shared between concurrent renders.
    """

    data_key: str

    @property
    def is_ready(self) -> bool:
        return bool(self.data_key)

    @classmethod
    def from_env(cls) -> "KeyHolder":
        """Load the data key from GIVEIT_DATA_KEY."""
        return cls(data_key=os.getenv("GIVEIT_DATA_KEY", ""))
