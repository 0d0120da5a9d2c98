from typing import Any, Dict, Optional

from . import utils
from .otp import DEFAULT_ALGORITHM, DEFAULT_DIGITS, MAX_COUNTER, OTP, HashAlgorithm
from .secret import Secret


class HOTP(object):
    """
    Handler for HMAC-based OTP counters (RFC 4226).
    """

    def __init__(
        self,
        secret: Optional[Secret] = None,
        algorithm: Any = DEFAULT_ALGORITHM,
        digits: int = DEFAULT_DIGITS,
        counter: int = 0,
        look_ahead: int = 0,
    ) -> None:
        """
        :param secret: the shared secret, 20 random bytes when omitted
        :param algorithm: hash algorithm used in the HMAC
        :param digits: number of digits in the code. Some apps expect this to
            be 6 digits, others support more.
        :param counter: current HMAC counter value, defaults to 0
        :param look_ahead: how many counters past the current one verification
            also accepts, defaults to 0
        """
        self._otp = OTP(secret=secret, algorithm=algorithm, digits=digits)

        if not utils.is_non_negative_integer(look_ahead):
            raise ValueError("The look_ahead must be a non-negative integer")
        if not utils.is_non_negative_integer(counter):
            raise ValueError("The counter must be a non-negative integer")
        if counter > MAX_COUNTER:
            raise ValueError("The counter must fit in an unsigned 64-bit integer")

        self._look_ahead = look_ahead
        self._counter = counter

    @property
    def algorithm(self) -> HashAlgorithm:
        return self._otp.algorithm

    @property
    def digits(self) -> int:
        return self._otp.digits

    @property
    def secret(self) -> Secret:
        return self._otp.secret

    @property
    def look_ahead(self) -> int:
        return self._look_ahead

    @property
    def counter(self) -> int:
        return self._counter

    @counter.setter
    def counter(self, counter: int) -> None:
        # negative values are stored as their magnitude
        if not utils.is_integer(counter):
            raise TypeError("The counter must be an integer")
        if abs(counter) > MAX_COUNTER:
            raise ValueError("The counter must fit in an unsigned 64-bit integer")
        self._counter = abs(counter)

    def at(self, counter: int) -> str:
        """
        Generates the OTP for the given counter, leaving the stored one alone.

        :param counter: the OTP HMAC counter
        :returns: OTP
        """
        return self._otp.code(counter)

    def generate(self) -> str:
        """
        Generates the OTP for the current counter.
        """
        return self._otp.code(self._counter)

    def verify_delta(self, code: str) -> Optional[int]:
        """
        Verifies the OTP against the current counter and the ``look_ahead``
        counters after it. Counters below the current one never match.

        :param code: the OTP to check against
        :returns: how far past the current counter the match was, or None
        """
        counters: Dict[int, int] = {}
        # the look-ahead stops at the last 64-bit counter
        for delta in range(min(self._look_ahead, MAX_COUNTER - self._counter) + 1):
            counters[delta] = self._counter + delta

        return self._otp.verify_delta(code, counters)

    def verify(self, code: str) -> bool:
        return self.verify_delta(code) is not None

    def __repr__(self) -> str:
        return "HOTP(algorithm={}, digits={}, counter={})".format(self.algorithm.value, self.digits, self._counter)
