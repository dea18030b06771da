"""Unit tests for percent-encoding, case folding and character classes."""

import pytest

from purl_core.codec import (
    is_alpha,
    is_digit,
    is_key_char,
    is_type_char,
    is_unreserved,
    is_whitespace,
    percent_decode,
    percent_encode,
    to_lower_ascii,
)
from purl_core.errors import MalformedInputError, PercentDecodingError


class TestPercentEncode:
    """Test suite for percent_encode."""

    def test_unreserved_is_unchanged(self):
        """Test strings without reserved bytes are returned as-is."""
        value = "Abc-1.0_beta~2"
        assert percent_encode(value) is value

    def test_reserved_ascii(self):
        """Test reserved ASCII characters are encoded with upper-case hex."""
        assert percent_encode("@angular") == "%40angular"
        assert percent_encode("sha256:abc") == "sha256%3Aabc"
        assert percent_encode("a b") == "a%20b"
        assert percent_encode("a/b") == "a%2Fb"
        assert percent_encode("c++") == "c%2B%2B"

    def test_non_ascii(self):
        """Test non-ASCII characters are encoded byte by byte."""
        assert percent_encode("é") == "%C3%A9"
        assert percent_encode("日本") == "%E6%97%A5%E6%9C%AC"

    def test_empty_and_none(self):
        """Test empty and missing values pass through."""
        assert percent_encode("") == ""
        assert percent_encode(None) is None


class TestPercentDecode:
    """Test suite for percent_decode."""

    def test_no_percent_is_unchanged(self):
        """Test strings without '%' are returned as-is."""
        value = "plain-value"
        assert percent_decode(value) is value

    def test_decode(self):
        """Test upper- and lower-case hex digits decode."""
        assert percent_decode("%40angular") == "@angular"
        assert percent_decode("%c3%a9") == "é"
        assert percent_decode("a%2Fb%20c") == "a/b c"

    @pytest.mark.parametrize(
        "value",
        ["simple", "a/b?c#d&e=f", "100%", "日本語", "emoji 🎉", "~._-", "Ünïcödé"],
    )
    def test_round_trip(self, value):
        """Test decode(encode(s)) == s."""
        assert percent_decode(percent_encode(value)) == value

    def test_incomplete_sequence(self):
        """Test a truncated escape reports its offset and fragment."""
        with pytest.raises(PercentDecodingError) as exc_info:
            percent_decode("abc%4")

        assert exc_info.value.offset == 3
        assert exc_info.value.fragment == "%4"
        assert "Incomplete percent encoding at offset 3" in str(exc_info.value)

    def test_invalid_first_digit(self):
        """Test a non-hex first digit is reported."""
        with pytest.raises(PercentDecodingError) as exc_info:
            percent_decode("%G1")

        assert exc_info.value.offset == 1
        assert exc_info.value.fragment == "G"
        assert "char 1" in str(exc_info.value)

    def test_invalid_second_digit(self):
        """Test a non-hex second digit is reported."""
        with pytest.raises(PercentDecodingError) as exc_info:
            percent_decode("ab%1Z")

        assert exc_info.value.offset == 4
        assert exc_info.value.fragment == "Z"
        assert "char 2" in str(exc_info.value)

    def test_offset_counts_bytes(self):
        """Test offsets are byte offsets in the UTF-8 input."""
        with pytest.raises(PercentDecodingError) as exc_info:
            percent_decode("é%zz")

        # 'é' is two bytes
        assert exc_info.value.offset == 3

    @pytest.mark.parametrize(
        "value,offset,fragment",
        [("%é1", 1, "é"), ("%4é", 2, "é"), ("x%日1", 2, "日")],
    )
    def test_non_ascii_fragment(self, value, offset, fragment):
        """Test a non-ASCII offending character is reported as written."""
        with pytest.raises(PercentDecodingError) as exc_info:
            percent_decode(value)

        assert exc_info.value.offset == offset
        assert exc_info.value.fragment == fragment
        assert f"'{fragment}'" in str(exc_info.value)

    def test_invalid_utf8(self):
        """Test decoded bytes must form valid UTF-8."""
        with pytest.raises(MalformedInputError):
            percent_decode("%FF")

    def test_decoding_error_is_malformed_input(self):
        """Test PercentDecodingError can be caught as MalformedInputError."""
        with pytest.raises(MalformedInputError):
            percent_decode("%")


class TestToLowerAscii:
    """Test suite for to_lower_ascii."""

    def test_ascii(self):
        assert to_lower_ascii("KEY") == "key"
        assert to_lower_ascii("MiXeD-Case_1") == "mixed-case_1"

    def test_non_ascii_untouched(self):
        """Test only A-Z are folded."""
        assert to_lower_ascii("ÄÖÜ") == "ÄÖÜ"
        assert to_lower_ascii("İI") == "İi"

    def test_none(self):
        assert to_lower_ascii(None) is None

    def test_turkish_letters(self):
        """Test 'I' folds to 'i', never 'ı', and 'İ' is left alone."""
        assert to_lower_ascii("I") == "i"
        assert to_lower_ascii("I") != "ı"
        assert to_lower_ascii("KEY") == "key"
        assert to_lower_ascii("TITLE") == "title"
        assert to_lower_ascii("İ") == "İ"
        assert to_lower_ascii("ı") == "ı"


class TestCharacterClasses:
    """Test character predicates."""

    def test_digit_and_alpha(self):
        assert is_digit("5")
        assert not is_digit("a")
        assert is_alpha("Z")
        assert not is_alpha("é")
        assert not is_alpha("1")

    def test_type_chars(self):
        for c in "aZ9.+-":
            assert is_type_char(c)
        for c in "_~@/ ":
            assert not is_type_char(c)

    def test_key_chars(self):
        for c in "aZ9._-":
            assert is_key_char(c)
        for c in "+~@/ ":
            assert not is_key_char(c)

    def test_unreserved(self):
        assert is_unreserved("~")
        assert is_unreserved("_")
        assert not is_unreserved("+")

    def test_accepts_code_points(self):
        """Test predicates accept integer code points as well as characters."""
        assert is_type_char(ord("+"))
        assert is_unreserved(ord("~"))
        assert not is_unreserved(0xC3)

    def test_whitespace(self):
        assert is_whitespace(" ")
        assert is_whitespace("\t")
        assert not is_whitespace("x")
