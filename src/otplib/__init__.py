import logging
from urllib.parse import urlparse

from .authenticator import Authenticator as Authenticator
from .authenticator import AuthenticatorType as AuthenticatorType
from .authenticator import HOTPAuthenticator as HOTPAuthenticator
from .authenticator import TOTPAuthenticator as TOTPAuthenticator
from .hotp import HOTP as HOTP
from .otp import OTP as OTP
from .otp import HashAlgorithm as HashAlgorithm
from .secret import Secret as Secret
from .totp import TOTP as TOTP

logging.getLogger(__name__).addHandler(logging.NullHandler())


def parse_uri(uri: str) -> Authenticator:
    """
    Parses the key URI of an authenticator; works for either TOTP or HOTP.

    See also:
        https://github.com/google/google-authenticator/wiki/Key-Uri-Format

    :param uri: the hotp/totp URI to parse
    :returns: HOTPAuthenticator or TOTPAuthenticator object
    """
    # the type is checked again, with the other fields, by from_uri
    if urlparse(uri).netloc == AuthenticatorType.HOTP.value:
        return HOTPAuthenticator.from_uri(uri)
    return TOTPAuthenticator.from_uri(uri)
