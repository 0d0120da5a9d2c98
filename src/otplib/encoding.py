"""
Text encodings for secret bytes.

Every codec exposes ``encode(bytes) -> str`` and ``decode(str) -> bytes``;
decoding errors raise :class:`ValueError` naming the offending character and
its 1-indexed position where one exists.
"""
import base64
import binascii


class Base32(object):
    """
    RFC 4648 section 6 base32.

    Decoding is case-insensitive and does not require padding, since secrets
    in ``otpauth`` URIs are usually given without it.
    """

    alphabet = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
    padding = "="

    @staticmethod
    def encode(data: bytes) -> str:
        return base64.b32encode(bytes(data)).decode("ascii")

    @classmethod
    def decode(cls, text: str) -> bytes:
        value = text.replace(cls.padding, "").upper()
        result = bytearray()
        bits = 0
        buffer = 0

        for i, char in enumerate(value):
            index = cls.alphabet.find(char)
            if index == -1:
                raise ValueError('The base32 character "{}" at position {} is invalid'.format(char, i + 1))

            buffer = ((buffer << 5) | index) & 0xFFFF
            bits += 5
            if bits >= 8:
                bits -= 8
                result.append((buffer >> bits) & 0xFF)

        return bytes(result)


class Base64(object):
    """
    RFC 4648 section 4 base64.
    """

    @staticmethod
    def encode(data: bytes) -> str:
        return base64.b64encode(bytes(data)).decode("ascii")

    @staticmethod
    def decode(text: str) -> bytes:
        missing_padding = len(text) % 4
        if missing_padding != 0:
            text += "=" * (4 - missing_padding)
        try:
            return base64.b64decode(text, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError("The base64 text is invalid") from e


class Base64URL(Base64):
    """
    RFC 4648 section 5 base64 with the URL and filename safe alphabet.
    Padding is dropped on encode.
    """

    @staticmethod
    def encode(data: bytes) -> str:
        return Base64.encode(data).replace("+", "-").replace("/", "_").replace("=", "")

    @staticmethod
    def decode(text: str) -> bytes:
        return Base64.decode(text.replace("-", "+").replace("_", "/"))


class Hex(object):
    alphabet = "0123456789abcdef"

    @staticmethod
    def encode(data: bytes) -> str:
        return bytes(data).hex()

    @classmethod
    def decode(cls, text: str) -> bytes:
        if len(text) % 2 != 0:
            raise ValueError("The hexadecimal text length must be even")

        result = bytearray()
        for i in range(0, len(text), 2):
            chunk = text[i : i + 2].lower()
            if chunk[0] not in cls.alphabet or chunk[1] not in cls.alphabet:
                raise ValueError('The hexadecimal character "{}" at position {} is invalid'.format(chunk, i + 1))
            result.append(int(chunk, 16))

        return bytes(result)


class Ascii(object):
    @staticmethod
    def encode(data: bytes) -> str:
        return "".join(chr(byte & 0x7F) for byte in bytes(data))

    @staticmethod
    def decode(text: str) -> bytes:
        for i, char in enumerate(text):
            if ord(char) > 0x7F:
                raise ValueError('The ascii character "{}" at position {} is invalid'.format(char, i + 1))
        return text.encode("ascii")


class Latin1(object):
    @staticmethod
    def encode(data: bytes) -> str:
        return bytes(data).decode("latin-1")

    @staticmethod
    def decode(text: str) -> bytes:
        for i, char in enumerate(text):
            if ord(char) > 0xFF:
                raise ValueError('The latin1 character "{}" at position {} is invalid'.format(char, i + 1))
        return text.encode("latin-1")


class Utf8(object):
    @staticmethod
    def encode(data: bytes) -> str:
        # malformed sequences become U+FFFD instead of failing
        return bytes(data).decode("utf-8", errors="replace")

    @staticmethod
    def decode(text: str) -> bytes:
        return text.encode("utf-8")
