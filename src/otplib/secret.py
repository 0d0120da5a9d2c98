import secrets
from hmac import compare_digest
from typing import Any, Union

from . import utils
from .encoding import Ascii, Base32, Base64, Base64URL, Hex, Latin1, Utf8

DEFAULT_SECRET_LENGTH = 20

BytesLike = Union[bytes, bytearray, memoryview]


class Secret(object):
    """
    Immutable key material shared by the OTP handlers.

    Build one with :meth:`create` or one of the ``from_*`` constructors;
    read it back with :meth:`to_bytes` or one of the ``to_*`` encoders.
    """

    __slots__ = ("_bytes",)

    def __init__(self, data: BytesLike) -> None:
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError("The secret bytes must be bytes-like")
        # copy so later changes to a bytearray or memoryview never reach the key
        self._bytes = bytes(data)

    @classmethod
    def _create_from(cls, secret: str, encoder: Any) -> "Secret":
        if not isinstance(secret, str):
            raise TypeError("The secret must be a string")
        return cls(encoder.decode(secret))

    @classmethod
    def create(cls, length: int = DEFAULT_SECRET_LENGTH) -> "Secret":
        """
        Generates a secret from a cryptographically secure random source.

        :param length: number of random bytes, 20 (160 bits) by default
        """
        if not utils.is_non_negative_integer(length):
            raise ValueError("The secret length must be a non-negative integer")
        return cls(secrets.token_bytes(length))

    @classmethod
    def from_bytes(cls, secret: BytesLike) -> "Secret":
        return cls(secret)

    @classmethod
    def from_base32(cls, secret: str) -> "Secret":
        return cls._create_from(secret, Base32)

    @classmethod
    def from_base64(cls, secret: str) -> "Secret":
        return cls._create_from(secret, Base64)

    @classmethod
    def from_base64url(cls, secret: str) -> "Secret":
        return cls._create_from(secret, Base64URL)

    @classmethod
    def from_hex(cls, secret: str) -> "Secret":
        return cls._create_from(secret, Hex)

    @classmethod
    def from_ascii(cls, secret: str) -> "Secret":
        return cls._create_from(secret, Ascii)

    @classmethod
    def from_latin1(cls, secret: str) -> "Secret":
        return cls._create_from(secret, Latin1)

    @classmethod
    def from_utf8(cls, secret: str) -> "Secret":
        return cls._create_from(secret, Utf8)

    def to_bytes(self) -> bytes:
        return bytes(self._bytes)

    def to_base32(self) -> str:
        return Base32.encode(self._bytes)

    def to_base64(self) -> str:
        return Base64.encode(self._bytes)

    def to_base64url(self) -> str:
        return Base64URL.encode(self._bytes)

    def to_hex(self) -> str:
        return Hex.encode(self._bytes)

    def to_ascii(self) -> str:
        return Ascii.encode(self._bytes)

    def to_latin1(self) -> str:
        return Latin1.encode(self._bytes)

    def to_utf8(self) -> str:
        return Utf8.encode(self._bytes)

    def __len__(self) -> int:
        return len(self._bytes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Secret):
            return NotImplemented
        return compare_digest(self._bytes, other._bytes)

    def __hash__(self) -> int:
        return hash(self._bytes)

    def __repr__(self) -> str:
        return "<Secret length={}>".format(len(self._bytes))
