"""
Character classes, ASCII case folding and percent-encoding.

Everything here works on ASCII code points only, so results never depend on
the host locale or on Unicode case mapping rules.
"""

from typing import Optional

from purl_core.errors import MalformedInputError, PercentDecodingError

_PERCENT = ord("%")
_HEX_DIGITS = "0123456789ABCDEF"

# Maps A-Z to a-z and nothing else
_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)


def _code(c) -> int:
    return c if isinstance(c, int) else ord(c)


def is_digit(c) -> bool:
    """Return True for 0-9."""
    c = _code(c)
    return 0x30 <= c <= 0x39


def is_upper(c) -> bool:
    c = _code(c)
    return 0x41 <= c <= 0x5A


def is_lower(c) -> bool:
    c = _code(c)
    return 0x61 <= c <= 0x7A


def is_alpha(c) -> bool:
    """Return True for ASCII letters."""
    return is_upper(c) or is_lower(c)


def is_alpha_numeric(c) -> bool:
    return is_digit(c) or is_alpha(c)


def is_type_char(c) -> bool:
    """Return True if the character may appear in a purl type."""
    return is_alpha_numeric(c) or _code(c) in (0x2E, 0x2B, 0x2D)  # . + -


def is_key_char(c) -> bool:
    """Return True if the character may appear in a qualifier key."""
    return is_alpha_numeric(c) or _code(c) in (0x2E, 0x5F, 0x2D)  # . _ -


def is_unreserved(c) -> bool:
    """Return True if the character is emitted without percent-encoding."""
    return is_key_char(c) or _code(c) == 0x7E  # ~


def is_whitespace(c) -> bool:
    return _code(c) in (0x09, 0x0A, 0x0B, 0x0C, 0x0D, 0x1C, 0x1D, 0x1E, 0x1F, 0x20)


def to_lower_ascii(s: Optional[str]) -> Optional[str]:
    """
    Lower-case ASCII letters only.

    Unlike str.lower(), code points outside A-Z are returned untouched, so
    'I' always becomes 'i' and 'İ' stays 'İ'.
    """
    if s is None:
        return None
    return s.translate(_ASCII_LOWER)


def percent_encode(source: Optional[str]) -> Optional[str]:
    """
    Percent-encode every UTF-8 byte outside the unreserved set.

    Args:
        source: Decoded text

    Returns:
        Encoded text using upper-case hex digits; the same object when no
        byte needs encoding
    """
    if not source:
        return source

    data = source.encode("utf-8")
    start = next((i for i, b in enumerate(data) if not is_unreserved(b)), -1)
    if start == -1:
        return source

    out = [data[:start].decode("ascii")]
    for b in data[start:]:
        if is_unreserved(b):
            out.append(chr(b))
        else:
            out.append("%" + _HEX_DIGITS[b >> 4] + _HEX_DIGITS[b & 0xF])
    return "".join(out)


def _hex_value(b: int) -> int:
    if is_digit(b):
        return b - 0x30
    if 0x41 <= b <= 0x46:
        return b - 0x41 + 10
    if 0x61 <= b <= 0x66:
        return b - 0x61 + 10
    return -1


def _char_at(data: bytes, pos: int) -> str:
    """Return the UTF-8 character starting at pos (continuation bytes included)."""
    end = pos + 1
    while end < len(data) and data[end] & 0xC0 == 0x80:
        end += 1
    return data[pos:end].decode("utf-8", errors="replace")


def percent_decode(source: Optional[str]) -> Optional[str]:
    """
    Decode %XX sequences.

    Args:
        source: Percent-encoded text

    Returns:
        Decoded text; the same object when it contains no '%'

    Raises:
        PercentDecodingError: If a '%' is not followed by two hex digits
        MalformedInputError: If the decoded bytes are not valid UTF-8
    """
    if not source or "%" not in source:
        return source

    data = source.encode("utf-8")
    length = len(data)
    out = bytearray()
    i = 0
    while i < length:
        b = data[i]
        if b != _PERCENT:
            out.append(b)
            i += 1
            continue

        if i + 2 >= length:
            fragment = data[i:].decode("utf-8", errors="replace")
            raise PercentDecodingError(
                f"Incomplete percent encoding at offset {i} with value '{fragment}'",
                offset=i,
                fragment=fragment,
            )

        high = _hex_value(data[i + 1])
        if high == -1:
            fragment = _char_at(data, i + 1)
            raise PercentDecodingError(
                f"Invalid percent encoding char 1 at offset {i + 1} with value '{fragment}'",
                offset=i + 1,
                fragment=fragment,
            )

        low = _hex_value(data[i + 2])
        if low == -1:
            fragment = _char_at(data, i + 2)
            raise PercentDecodingError(
                f"Invalid percent encoding char 2 at offset {i + 2} with value '{fragment}'",
                offset=i + 2,
                fragment=fragment,
            )

        out.append((high << 4) + low)
        i += 3

    try:
        return out.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedInputError(
            f"Percent-decoded value of '{source}' is not valid UTF-8: {e.reason}"
        ) from e
