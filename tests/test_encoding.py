import pytest

from imtools.encoding import DecodeError, base64_decode, base64_encode


def test_base64_encode_decode():
    original = "This is a test string!"
    encoded = base64_encode(original)
    assert encoded != ""
    assert base64_decode(encoded) == original


def test_base64_known_value():
    assert base64_encode("hi") == "aGk="
    assert base64_decode("aGk=") == "hi"


def test_base64_ignores_line_breaks():
    assert base64_decode("aG\r\nk=") == "hi"


def test_base64_unicode_round_trip():
    assert base64_decode(base64_encode("héllo wörld")) == "héllo wörld"


def test_base64_decode_error_handling():
    with pytest.raises(DecodeError):
        base64_decode("This is not base64!")


def test_base64_decode_missing_padding():
    with pytest.raises(DecodeError):
        base64_decode("aGk")