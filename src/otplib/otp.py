import enum
import hashlib
import hmac
import logging
import struct
import threading
from typing import Any, Mapping, Optional

from . import utils
from .secret import Secret

logger = logging.getLogger(__name__)

DEFAULT_DIGITS = 6

# counters are packed as unsigned 64-bit big-endian integers
MAX_COUNTER = 0xFFFFFFFFFFFFFFFF


class HashAlgorithm(str, enum.Enum):
    """
    Hash algorithms usable in the HMAC, named in the compact ``otpauth``
    form and valued in the NIST form.
    """

    SHA1 = "SHA-1"
    SHA256 = "SHA-256"
    SHA384 = "SHA-384"
    SHA512 = "SHA-512"

    @property
    def hashlib_name(self) -> str:
        return self.value.replace("-", "").lower()


DEFAULT_ALGORITHM = HashAlgorithm.SHA1


class OTP(object):
    """
    One-time password engine shared by :class:`~otplib.hotp.HOTP` and
    :class:`~otplib.totp.TOTP`.

    Knows nothing about counters or clocks: callers hand it the counter
    values to generate for or verify against.
    """

    def __init__(
        self,
        secret: Optional[Secret] = None,
        algorithm: Any = DEFAULT_ALGORITHM,
        digits: int = DEFAULT_DIGITS,
    ) -> None:
        try:
            algorithm = HashAlgorithm(algorithm)
        except ValueError:
            raise ValueError('The algorithm "{}" is not supported'.format(algorithm)) from None

        if secret is None:
            secret = Secret.create()
        elif not isinstance(secret, Secret):
            raise TypeError("The secret must be an instance of Secret")

        if not utils.is_positive_integer(digits):
            raise ValueError("The digits must be a positive integer")

        self._algorithm = algorithm
        self._secret = secret
        self._digits = digits
        self._key: Optional[Any] = None
        self._key_lock = threading.Lock()

    @property
    def algorithm(self) -> HashAlgorithm:
        return self._algorithm

    @property
    def digits(self) -> int:
        return self._digits

    @property
    def secret(self) -> Secret:
        return self._secret

    def _get_key(self) -> Any:
        # created once per instance; every digest works on a copy
        if self._key is None:
            with self._key_lock:
                if self._key is None:
                    logger.debug("Deriving %s key for OTP instance %#x", self._algorithm.value, id(self))
                    self._key = hmac.new(
                        self._secret.to_bytes(), digestmod=getattr(hashlib, self._algorithm.hashlib_name)
                    )
        return self._key

    def digest(self, counter: int) -> bytes:
        """
        HMAC of the counter value, RFC 4226 section 5.3.

        :param counter: the HMAC counter value; either a HOTP counter, or the
            time step computed from a Unix timestamp
        """
        if not utils.is_integer(counter):
            raise TypeError("The counter must be an integer")
        if counter < 0 or counter > MAX_COUNTER:
            raise ValueError("The counter must be an unsigned 64-bit integer")

        hasher = self._get_key().copy()
        hasher.update(struct.pack(">Q", counter))
        return hasher.digest()

    def code(self, counter: int) -> str:
        """
        Dynamic truncation of the counter digest, RFC 4226 section 5.4.

        :param counter: the HMAC counter value
        :returns: the code, left-padded with zeros to ``digits`` characters
        """
        hmac_hash = self.digest(counter)
        offset = hmac_hash[-1] & 0xF
        code = (
            (hmac_hash[offset] & 0x7F) << 24
            | (hmac_hash[offset + 1] & 0xFF) << 16
            | (hmac_hash[offset + 2] & 0xFF) << 8
            | (hmac_hash[offset + 3] & 0xFF)
        )
        return str(code % 10**self._digits).rjust(self._digits, "0")

    def verify_delta(self, code: str, counters: Mapping[int, int]) -> Optional[int]:
        """
        Finds which candidate counter produced ``code``.

        :param code: the code to check
        :param counters: candidate counters keyed by their delta, tried in
            insertion order
        :returns: the delta of the first matching counter, or None
        """
        if not isinstance(code, str) or len(code) != self._digits:
            logger.debug("Rejecting code without computing digests: length is not %d", self._digits)
            return None

        for delta, counter in counters.items():
            if utils.strings_equal(self.code(counter), code):
                return delta

        return None

    def verify(self, code: str, counters: Mapping[int, int]) -> bool:
        return self.verify_delta(code, counters) is not None
