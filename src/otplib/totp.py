import datetime
import time
from typing import Any, Dict, Optional, Sequence, Tuple, Union

from . import utils
from .otp import DEFAULT_ALGORITHM, DEFAULT_DIGITS, MAX_COUNTER, OTP, HashAlgorithm
from .secret import Secret

DEFAULT_PERIOD = 30

WindowType = Union[int, Sequence[int]]


class TOTP(object):
    """
    Handler for time-based OTP counters (RFC 6238).
    """

    def __init__(
        self,
        secret: Optional[Secret] = None,
        algorithm: Any = DEFAULT_ALGORITHM,
        digits: int = DEFAULT_DIGITS,
        period: int = DEFAULT_PERIOD,
        window: WindowType = 0,
    ) -> None:
        """
        :param secret: the shared secret, 20 random bytes when omitted
        :param algorithm: hash algorithm used in the HMAC
        :param digits: number of digits in the code
        :param period: the time step in seconds
        :param window: time steps accepted on each side of the current one,
            either one integer or a ``(past, future)`` pair
        """
        if utils.is_non_negative_integer(window):
            window = (window, window)
        elif (
            isinstance(window, (list, tuple))
            and len(window) == 2
            and all(utils.is_non_negative_integer(w) for w in window)
        ):
            window = (window[0], window[1])
        else:
            raise ValueError("The window must be a non-negative integer or a pair of two non-negative integers")

        if not utils.is_positive_integer(period):
            raise ValueError("The period must be a positive integer")

        self._otp = OTP(secret=secret, algorithm=algorithm, digits=digits)
        self._window: Tuple[int, int] = window
        self._period = period

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
    def period(self) -> int:
        return self._period

    @property
    def window(self) -> Tuple[int, int]:
        return self._window

    @staticmethod
    def _timestamp() -> int:
        return int(time.time())

    def timecode(self, for_time: Union[int, float, datetime.datetime]) -> int:
        """
        Accepts either a Unix timestamp or a datetime object and returns the
        time step counter it falls in.
        """
        if isinstance(for_time, datetime.datetime):
            for_time = for_time.timestamp()
        return int(for_time) // self._period

    @property
    def counter(self) -> int:
        return self._timestamp() // self._period

    @property
    def time_used(self) -> int:
        """Seconds elapsed in the current time step."""
        return self._timestamp() % self._period

    @property
    def time_remaining(self) -> int:
        """Seconds until the next time step."""
        return self._period - self.time_used

    def at(self, for_time: Union[int, float, datetime.datetime]) -> str:
        """
        Generates the OTP for the given time.

        :param for_time: Unix timestamp or datetime object
        :returns: OTP value
        """
        return self._otp.code(self.timecode(for_time))

    def generate(self) -> str:
        """
        Generates the OTP for the current time.
        """
        return self._otp.code(self.counter)

    def verify_delta(
        self, code: str, for_time: Optional[Union[int, float, datetime.datetime]] = None
    ) -> Optional[int]:
        """
        Verifies the OTP against the current time step and the window
        around it.

        :param code: the OTP to check against
        :param for_time: time to check the OTP at, defaults to now
        :returns: the time step offset of the match (negative in the past),
            or None
        """
        counter = self.counter if for_time is None else self.timecode(for_time)
        past, future = self._window

        counters: Dict[int, int] = {0: counter}
        for i in range(1, max(past, future) + 1):
            if i <= past and counter - i >= 0:
                counters[-i] = counter - i
            if i <= future and counter + i <= MAX_COUNTER:
                counters[i] = counter + i

        return self._otp.verify_delta(code, counters)

    def verify(self, code: str, for_time: Optional[Union[int, float, datetime.datetime]] = None) -> bool:
        return self.verify_delta(code, for_time) is not None

    def __repr__(self) -> str:
        return "TOTP(algorithm={}, digits={}, period={})".format(self.algorithm.value, self.digits, self._period)
