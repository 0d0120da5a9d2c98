"""
Unit tests for the secret text encodings.

Vectors from RFC 4648 section 10.
"""

import os

import pytest

from otplib.encoding import Ascii, Base32, Base64, Base64URL, Hex, Latin1, Utf8


RFC4648_VECTORS = [
    (b"", "", "", ""),
    (b"f", "MY======", "Zg==", "66"),
    (b"fo", "MZXQ====", "Zm8=", "666f"),
    (b"foo", "MZXW6===", "Zm9v", "666f6f"),
    (b"foob", "MZXW6YQ=", "Zm9vYg==", "666f6f62"),
    (b"fooba", "MZXW6YTB", "Zm9vYmE=", "666f6f6261"),
    (b"foobar", "MZXW6YTBOI======", "Zm9vYmFy", "666f6f626172"),
]


class TestBase32:
    """Tests for base32."""

    @pytest.mark.parametrize("data,base32,_b64,_hex", RFC4648_VECTORS)
    def test_encode(self, data, base32, _b64, _hex):
        assert Base32.encode(data) == base32

    @pytest.mark.parametrize("data,base32,_b64,_hex", RFC4648_VECTORS)
    def test_decode(self, data, base32, _b64, _hex):
        assert Base32.decode(base32) == data

    def test_decode_without_padding(self):
        assert Base32.decode("MZXW6YTBOI") == b"foobar"

    def test_decode_is_case_insensitive(self):
        assert Base32.decode("mzxw6ytboi======") == b"foobar"

    def test_decode_drops_partial_bits(self):
        """Six characters hold 30 bits, so only three bytes come out."""
        assert Base32.decode("234567") == b"\xd6\xf9\xdf"

    def test_decode_invalid_character(self):
        with pytest.raises(ValueError, match='The base32 character "1" at position 3 is invalid'):
            Base32.decode("MZ1W6===")

    def test_position_counted_after_padding_removed(self):
        with pytest.raises(ValueError, match='The base32 character "8" at position 3 is invalid'):
            Base32.decode("M=Z8")


class TestBase64:
    """Tests for base64 and base64url."""

    @pytest.mark.parametrize("data,_b32,b64,_hex", RFC4648_VECTORS)
    def test_encode(self, data, _b32, b64, _hex):
        assert Base64.encode(data) == b64

    @pytest.mark.parametrize("data,_b32,b64,_hex", RFC4648_VECTORS)
    def test_decode(self, data, _b32, b64, _hex):
        assert Base64.decode(b64) == data

    def test_decode_missing_padding(self):
        assert Base64.decode("Zm9vYg") == b"foob"

    @pytest.mark.parametrize("text", ["Zm9v!", "Z", "Zm9vé"])
    def test_decode_invalid(self, text):
        with pytest.raises(ValueError, match="The base64 text is invalid"):
            Base64.decode(text)

    def test_url_encode_substitutes_and_drops_padding(self):
        assert Base64.encode(b"\xfb\xff") == "+/8="
        assert Base64URL.encode(b"\xfb\xff") == "-_8"

    def test_url_decode(self):
        assert Base64URL.decode("-_8") == b"\xfb\xff"
        assert Base64URL.decode("-_8=") == b"\xfb\xff"


class TestHex:
    """Tests for hexadecimal."""

    @pytest.mark.parametrize("data,_b32,_b64,hexa", RFC4648_VECTORS)
    def test_encode(self, data, _b32, _b64, hexa):
        assert Hex.encode(data) == hexa

    def test_encode_is_lowercase(self):
        assert Hex.encode(b"\xab\xcd") == "abcd"

    def test_decode_is_case_insensitive(self):
        assert Hex.decode("ABcd") == b"\xab\xcd"

    def test_decode_odd_length(self):
        with pytest.raises(ValueError, match="The hexadecimal text length must be even"):
            Hex.decode("abc")

    def test_decode_invalid_chunk(self):
        with pytest.raises(ValueError, match='The hexadecimal character "zz" at position 3 is invalid'):
            Hex.decode("00zz")

    def test_decode_rejects_whitespace(self):
        with pytest.raises(ValueError, match="at position 1"):
            Hex.decode(" a")


class TestAsciiLatin1:
    """Tests for the single byte encodings."""

    def test_ascii_decode(self):
        assert Ascii.decode("12345678901234567890") == b"12345678901234567890"

    def test_ascii_decode_invalid(self):
        with pytest.raises(ValueError, match='The ascii character "é" at position 3 is invalid'):
            Ascii.decode("abé")

    def test_ascii_encode_masks_high_bit(self):
        assert Ascii.encode(b"\xc1") == "A"

    def test_latin1_decode(self):
        assert Latin1.decode("é") == b"\xe9"

    def test_latin1_decode_invalid(self):
        with pytest.raises(ValueError, match='The latin1 character "€" at position 2 is invalid'):
            Latin1.decode("a€")

    def test_latin1_encode(self):
        assert Latin1.encode(b"\xe9") == "é"


class TestUtf8:
    def test_encode(self):
        assert Utf8.encode(b"\xc3\xa9") == "é"

    def test_decode(self):
        assert Utf8.decode("é") == b"\xc3\xa9"

    def test_encode_replaces_malformed(self):
        assert Utf8.encode(b"\xff") == "�"


class TestRoundTrip:
    """decode(encode(b)) gives b back for every codec's domain."""

    @pytest.mark.parametrize("codec", [Base32, Base64, Base64URL, Hex])
    def test_binary_codecs(self, codec):
        for length in (0, 1, 7, 20, 64):
            data = os.urandom(length)
            assert codec.decode(codec.encode(data)) == data

    def test_ascii(self):
        data = bytes(range(128))
        assert Ascii.decode(Ascii.encode(data)) == data

    def test_latin1(self):
        data = bytes(range(256))
        assert Latin1.decode(Latin1.encode(data)) == data

    def test_utf8(self):
        data = "pässwörd ✓".encode("utf-8")
        assert Utf8.decode(Utf8.encode(data)) == data
