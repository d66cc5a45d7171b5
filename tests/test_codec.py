import pytest

from kaiscrape.core.codec import KaiCodec, decode, decode_mega, encode


def test_encode_known_value():
    assert encode("hello") == "aGVsbG8"


def test_encode_uses_url_safe_alphabet():
    # "?>?" encodes to "Pz4/" in standard base64
    assert encode("?>?") == "Pz4_"
    assert decode("Pz4_") == "?>?"


@pytest.mark.parametrize("text", [
    "c4S88Q",
    "葬送のフリーレン",
    "naïve café 🎌",
    "a",
    "ab",
    "tokens/with+symbols=",
])
def test_round_trip(text):
    token = encode(text)
    assert "=" not in token
    assert "+" not in token and "/" not in token
    assert decode(token) == text


def test_empty_input():
    assert encode("") == ""
    assert decode("") == ""


@pytest.mark.parametrize("token", [
    "@@@@",
    "a",
    "abc$",
    "_w",  # valid base64 of 0xff, which is not UTF-8
])
def test_malformed_tokens_decode_to_empty(token):
    assert decode(token) == ""


def test_non_string_input_is_rejected():
    assert encode(None) == ""
    assert decode(None) == ""
    assert decode(1234) == ""


def test_lone_surrogate_cannot_be_encoded():
    assert encode("\ud800") == ""


def test_decode_mega_matches_decode():
    token = encode('{"sources": []}')
    assert decode_mega(token) == decode(token) == '{"sources": []}'
    assert KaiCodec.decode_mega("@@") == ""


def test_padded_token_is_accepted():
    assert decode("aGVsbG8=") == decode("aGVsbG8") == "hello"


def test_standard_alphabet_token_is_rejected():
    assert decode("Pz4/") == ""
    assert decode("a+b=") == ""


def test_encode_matches_urlsafe_b64():
    import base64

    text = "?>?~ 葬送"
    expected = base64.urlsafe_b64encode(text.encode("utf-8")).decode("ascii").rstrip("=")
    assert encode(text) == expected
