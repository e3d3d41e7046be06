"""
AES Crypt - Default payload encoder

AES-256-CBC with PKCS7 padding via the cryptography library:
- cipher key: SHA-256 digest of the data key
- a fresh random 16-byte IV per call, prepended to the ciphertext
- output: base64 text of IV + ciphertext, safe inside an HTML attribute
"""

import base64
import binascii
import hashlib
import logging
import os

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from ..errors import EncodingError
from .encoder import Encoder

logger = logging.getLogger(__name__)


class AesCrypt(Encoder):
    """Encrypts and decrypts product payloads with a shared data key"""

    BLOCK_SIZE = 128
    IV_SIZE = 16

    @staticmethod
    def _derive_key(key: str) -> bytes:
        if not key:
            raise EncodingError("no data key given")
        return hashlib.sha256(key.encode("utf-8")).digest()

    def encode(self, plaintext: str, key: str) -> str:
        """
        Encrypt ``plaintext`` with ``key``

        Raises:
            EncodingError: missing key or input that is not text
        """
        if not isinstance(plaintext, str):
            raise EncodingError(f"cannot encode {type(plaintext).__name__}, expected text")

        iv = os.urandom(self.IV_SIZE)
        padder = padding.PKCS7(self.BLOCK_SIZE).padder()
        padded = padder.update(plaintext.encode("utf-8")) + padder.finalize()

        encryptor = Cipher(algorithms.AES(self._derive_key(key)), modes.CBC(iv)).encryptor()
        ciphertext = encryptor.update(padded) + encryptor.finalize()

        logger.debug(f"Encrypted {len(plaintext)} characters of payload")
        return base64.b64encode(iv + ciphertext).decode("ascii")

    def decode(self, encoded: str, key: str) -> str:
        """
        Decrypt the output of encode()

        Raises:
            EncodingError: malformed input or wrong key
        """
        try:
            raw = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as e:
            raise EncodingError(f"encoded data is not valid base64: {e}") from e

        if len(raw) <= self.IV_SIZE or (len(raw) - self.IV_SIZE) % (self.BLOCK_SIZE // 8):
            raise EncodingError("encoded data has an invalid length")

        iv, ciphertext = raw[:self.IV_SIZE], raw[self.IV_SIZE:]
        decryptor = Cipher(algorithms.AES(self._derive_key(key)), modes.CBC(iv)).decryptor()
        padded = decryptor.update(ciphertext) + decryptor.finalize()

        try:
            unpadder = padding.PKCS7(self.BLOCK_SIZE).unpadder()
            data = unpadder.update(padded) + unpadder.finalize()
            return data.decode("utf-8")
        except (ValueError, UnicodeDecodeError) as e:
            raise EncodingError("could not decrypt data, wrong key?") from e
