from hmac import compare_digest
from typing import Any, Dict, Optional, Union
from urllib.parse import quote, urlencode


def is_integer(value: Any) -> bool:
    # bool is a subclass of int, but True is not a digit count
    return isinstance(value, int) and not isinstance(value, bool)


def is_positive_integer(value: Any) -> bool:
    return is_integer(value) and value > 0


def is_non_negative_integer(value: Any) -> bool:
    return is_integer(value) and value >= 0


def build_uri(
    otp_type: str,
    secret: str,
    account: str,
    issuer: Optional[str] = None,
    algorithm: Optional[str] = None,
    digits: Optional[int] = None,
    counter: Optional[int] = None,
    period: Optional[int] = None,
) -> str:
    """
    Returns the key URI for an authenticator; works for either TOTP or HOTP.

    This can then be encoded in a QR Code and used to provision the Google
    Authenticator app.

    For module-internal use.

    See also:
        https://github.com/google/google-authenticator/wiki/Key-Uri-Format

    :param otp_type: ``hotp`` or ``totp``
    :param secret: the base32 secret
    :param account: name of the account
    :param issuer: the name of the OTP issuer; this will be the
        organization title of the OTP entry in Authenticator
    :param algorithm: the algorithm name without hyphen, e.g. ``SHA256``
    :param digits: the length of the OTP generated code
    :param counter: the HOTP counter, emitted when not None
    :param period: the TOTP period in seconds, emitted when not None
    :returns: key uri
    """
    base_uri = "otpauth://{0}/{1}?{2}"
    url_args: Dict[str, Union[int, str]] = {}

    label = quote(account, safe="")
    if issuer:
        label = quote(issuer, safe="") + ":" + label
        url_args["issuer"] = issuer

    if algorithm is not None:
        url_args["algorithm"] = algorithm
    url_args["secret"] = secret
    if digits is not None:
        url_args["digits"] = digits

    # counter may be 0 as a valid param
    if counter is not None:
        url_args["counter"] = counter
    if period is not None:
        url_args["period"] = period

    return base_uri.format(otp_type, label, urlencode(url_args).replace("+", "%20"))


def strings_equal(s1: str, s2: str) -> bool:
    """
    Timing-attack resistant string comparison.

    Normal comparison using == will short-circuit on the first mismatching
    character. This avoids that by scanning the whole string, though we
    still reveal to a timing attack whether the strings are the same
    length.
    """
    return compare_digest(s1.encode("utf-8"), s2.encode("utf-8"))
