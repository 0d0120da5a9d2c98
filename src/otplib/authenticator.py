"""
Authenticator apps and the ``otpauth://`` key URI format.

The URL looks like this::

    otpauth://totp/FooCorp:alice@example.com?secret=JBSWY3DPEHPK3PXP&issuer=FooCorp&algorithm=SHA256&digits=6&period=30

``totp`` or ``hotp`` is the type, ``FooCorp:alice@example.com`` the label
(issuer and account name), and the query carries the key parameters.

See also:
    https://github.com/google/google-authenticator/wiki/Key-Uri-Format
"""
import enum
import logging
import re
from typing import Any, Dict, Optional, Tuple, Union
from urllib.parse import parse_qs, unquote, urlparse

from . import utils
from .hotp import HOTP
from .otp import MAX_COUNTER, HashAlgorithm
from .secret import Secret
from .totp import TOTP

logger = logging.getLogger(__name__)

_DECIMAL = re.compile(r"[0-9]+")


class AuthenticatorType(str, enum.Enum):
    HOTP = "hotp"
    TOTP = "totp"


def _parse_decimal(value: str) -> Optional[int]:
    if _DECIMAL.fullmatch(value) is None:
        return None
    return int(value)


def _parse_url(uri: str, otp_type: AuthenticatorType) -> Tuple[Dict[str, Any], Dict[str, str]]:
    """
    Parses the parts of a key URI common to HOTP and TOTP.

    :param uri: the key URI to parse
    :param otp_type: the type the URI must carry
    :returns: the authenticator options read so far, and the first value of
        every query parameter
    """
    parsed_uri = urlparse(uri)

    if parsed_uri.scheme != "otpauth":
        raise ValueError("The authenticator URI protocol is invalid")

    if parsed_uri.netloc != otp_type.value:
        raise ValueError("The authenticator URI type is invalid")

    label = unquote(parsed_uri.path[1:])
    if not label:
        raise ValueError("The authenticator URI label is invalid")

    # parse_qs gives a list per key; like the authenticator apps, only the first value counts
    params = {key: values[0] for key, values in parse_qs(parsed_uri.query, keep_blank_values=True).items()}

    options: Dict[str, Any] = {"account": label}

    separator = label.find(":")
    if separator != -1:
        options["account"] = label[separator + 1 :]

    # the issuer parameter wins over the label prefix
    if "issuer" in params:
        options["issuer"] = params["issuer"]
    elif separator > 0:
        options["issuer"] = label[:separator]

    secret = params.get("secret")
    if not secret:
        raise ValueError("The authenticator URI secret is required")
    options["secret"] = Secret.from_base32(secret)

    if "algorithm" in params:
        try:
            options["algorithm"] = HashAlgorithm[params["algorithm"].upper()]
        except KeyError:
            raise ValueError("The authenticator URI algorithm is not supported") from None

    if "digits" in params:
        digits = _parse_decimal(params["digits"])
        if not utils.is_positive_integer(digits):
            raise ValueError("The authenticator URI digits is invalid")
        options["digits"] = digits

    return options, params


def _check_identity(account: Any, issuer: Any) -> None:
    if not isinstance(account, str) or not account:
        raise ValueError("The account must be a non-empty string")
    if issuer is not None and not isinstance(issuer, str):
        raise ValueError("The issuer must be a string or None")


class HOTPAuthenticator(object):
    """
    A HOTP handler together with the account and issuer an authenticator
    app shows for it.
    """

    def __init__(self, account: str, issuer: Optional[str] = None, **options: Any) -> None:
        """
        :param account: name of the user account
        :param issuer: the name of the OTP issuer; this will be the
            organization title of the OTP entry in Authenticator
        :param options: passed on to :class:`~otplib.hotp.HOTP`
        """
        _check_identity(account, issuer)
        self.otp = HOTP(**options)
        self.account = account
        self.issuer = issuer

    @property
    def algorithm(self) -> HashAlgorithm:
        return self.otp.algorithm

    @property
    def digits(self) -> int:
        return self.otp.digits

    @property
    def secret(self) -> Secret:
        return self.otp.secret

    @property
    def look_ahead(self) -> int:
        return self.otp.look_ahead

    @property
    def counter(self) -> int:
        return self.otp.counter

    @counter.setter
    def counter(self, counter: int) -> None:
        self.otp.counter = counter

    def generate(self) -> str:
        return self.otp.generate()

    def verify_delta(self, code: str) -> Optional[int]:
        return self.otp.verify_delta(code)

    def verify(self, code: str) -> bool:
        return self.otp.verify(code)

    @classmethod
    def from_uri(cls, uri: str) -> "HOTPAuthenticator":
        """
        Parses a ``otpauth://hotp/...`` key URI.

        :param uri: the hotp URI to parse
        :returns: HOTPAuthenticator object
        """
        options, params = _parse_url(uri, AuthenticatorType.HOTP)

        if "counter" not in params:
            raise ValueError("The authenticator URI counter is required")
        counter = _parse_decimal(params["counter"])
        if not utils.is_non_negative_integer(counter) or counter > MAX_COUNTER:
            raise ValueError("The authenticator URI counter is invalid")
        options["counter"] = counter

        logger.debug("Parsed HOTP key URI for account %r", options["account"])
        return cls(**options)

    def to_uri(self) -> str:
        """
        Returns the key URI for the authenticator. This can then be
        encoded in a QR Code and used to provision an OTP app like
        Google Authenticator.

        :returns: key URI
        """
        return utils.build_uri(
            AuthenticatorType.HOTP.value,
            self.secret.to_base32(),
            account=self.account,
            issuer=self.issuer,
            algorithm=self.algorithm.name,
            digits=self.digits,
            counter=self.counter,
        )

    def __repr__(self) -> str:
        return "HOTPAuthenticator(account={!r}, issuer={!r})".format(self.account, self.issuer)


class TOTPAuthenticator(object):
    """
    A TOTP handler together with the account and issuer an authenticator
    app shows for it.
    """

    def __init__(self, account: str, issuer: Optional[str] = None, **options: Any) -> None:
        """
        :param account: name of the user account
        :param issuer: the name of the OTP issuer; this will be the
            organization title of the OTP entry in Authenticator
        :param options: passed on to :class:`~otplib.totp.TOTP`
        """
        _check_identity(account, issuer)
        self.otp = TOTP(**options)
        self.account = account
        self.issuer = issuer

    @property
    def algorithm(self) -> HashAlgorithm:
        return self.otp.algorithm

    @property
    def digits(self) -> int:
        return self.otp.digits

    @property
    def secret(self) -> Secret:
        return self.otp.secret

    @property
    def period(self) -> int:
        return self.otp.period

    @property
    def window(self) -> Tuple[int, int]:
        return self.otp.window

    @property
    def counter(self) -> int:
        return self.otp.counter

    @property
    def time_used(self) -> int:
        return self.otp.time_used

    @property
    def time_remaining(self) -> int:
        return self.otp.time_remaining

    def generate(self) -> str:
        return self.otp.generate()

    def verify_delta(self, code: str) -> Optional[int]:
        return self.otp.verify_delta(code)

    def verify(self, code: str) -> bool:
        return self.otp.verify(code)

    @classmethod
    def from_uri(cls, uri: str) -> "TOTPAuthenticator":
        """
        Parses a ``otpauth://totp/...`` key URI.

        :param uri: the totp URI to parse
        :returns: TOTPAuthenticator object
        """
        options, params = _parse_url(uri, AuthenticatorType.TOTP)

        if "period" in params:
            period = _parse_decimal(params["period"])
            if not utils.is_positive_integer(period):
                raise ValueError("The authenticator URI period is invalid")
            options["period"] = period

        logger.debug("Parsed TOTP key URI for account %r", options["account"])
        return cls(**options)

    def to_uri(self) -> str:
        """
        Returns the key URI for the authenticator. The window is not part of
        the URI format and is left out.

        :returns: key URI
        """
        return utils.build_uri(
            AuthenticatorType.TOTP.value,
            self.secret.to_base32(),
            account=self.account,
            issuer=self.issuer,
            algorithm=self.algorithm.name,
            digits=self.digits,
            period=self.period,
        )

    def __repr__(self) -> str:
        return "TOTPAuthenticator(account={!r}, issuer={!r})".format(self.account, self.issuer)


Authenticator = Union[HOTPAuthenticator, TOTPAuthenticator]
