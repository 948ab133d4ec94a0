"""Tests for the Base64 payload decoder."""

import pytest

from core.encoding import from_base64, to_base64url
from core.errors import FailureKind, QueryRejected


class TestFromBase64:
    """Tests for decoding transport payloads."""

    def test_standard_padded(self):
        assert from_base64("c2VsZWN0IDE=") == "select 1"

    def test_standard_unpadded(self):
        assert from_base64("c2VsZWN0IDE") == "select 1"

    def test_two_missing_padding_chars(self):
        assert from_base64("aGVsbG8") == "hello"
        assert from_base64("eyJpZCI6MX0") == '{"id":1}'

    def test_standard_alphabet_with_plus_and_slash(self):
        assert from_base64("PDw/Pz4+") == "<<??>>"

    def test_url_safe_alphabet(self):
        assert from_base64("PDw_Pz4-") == "<<??>>"

    def test_space_restored_to_plus(self):
        # '+' decoded to ' ' by query-string parsing upstream
        assert from_base64("PDw/Pz4 ") == "<<??>>"

    def test_missing_payload(self):
        for payload in (None, ""):
            with pytest.raises(QueryRejected) as exc_info:
                from_base64(payload)
            assert exc_info.value.kind == FailureKind.MISSING_PAYLOAD

    def test_invalid_length(self):
        for payload in ("a", "abcde", "c2VsZWN0I"):
            with pytest.raises(QueryRejected) as exc_info:
                from_base64(payload)
            assert exc_info.value.kind == FailureKind.INVALID_LENGTH

    def test_url_safe_unpadded(self):
        assert from_base64("Pz4") == "?>"
        assert from_base64("Pz4-") == "?>>"

    def test_invalid_characters(self):
        with pytest.raises(QueryRejected) as exc_info:
            from_base64("ab$d")
        assert exc_info.value.kind == FailureKind.INVALID_ENCODING

    def test_non_ascii_input(self):
        with pytest.raises(QueryRejected) as exc_info:
            from_base64("abcé")
        assert exc_info.value.kind == FailureKind.INVALID_ENCODING

    def test_invalid_utf8_is_rejected(self):
        with pytest.raises(QueryRejected) as exc_info:
            from_base64("//4=")
        assert exc_info.value.kind == FailureKind.INVALID_ENCODING
        assert "UTF-8" in exc_info.value.message


class TestToBase64Url:
    """Tests for the URL-safe encoder."""

    def test_no_padding_or_standard_only_chars(self):
        encoded = to_base64url("<<??>>?")
        assert "=" not in encoded
        assert "+" not in encoded
        assert "/" not in encoded

    @pytest.mark.parametrize("text", [
        "select * from t",
        "héllo wörld ✓",
        "emoji 🙂 and 漢字",
        "\x00\x01\x02\n\t\x7f",
        "a",
        "ab",
        "abc",
    ])
    def test_round_trip(self, text):
        assert from_base64(to_base64url(text)) == text
