"""Encoder interface."""
from abc import ABC, abstractmethod


class Encoder(ABC):
    """
    Turns the serialized product into opaque ciphertext.

    Implementations raise EncodingError when they cannot encode; the reason
    is reported verbatim by the pipeline.
    """

    @abstractmethod
    def encode(self, plaintext: str, key: str) -> str:
        """Encrypt plaintext with key."""
        pass
