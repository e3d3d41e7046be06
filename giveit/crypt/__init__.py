"""
Payload encryption

The pipeline only depends on the Encoder protocol and on a KeyHolder
carrying the data key; AesCrypt is the default encoder.
"""

from .encoder import Encoder
from .keys import KeyHolder
from .aes_crypt import AesCrypt

__all__ = ["Encoder", "KeyHolder", "AesCrypt"]
