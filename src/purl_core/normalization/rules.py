"""
Generic component rules shared by the grammar, the pipeline and
PackageIdentifier.

Each check returns the component in its stored form (type and qualifier keys
folded, paths '/'-joined, empty optionals as None) or raises.
"""

from collections.abc import Mapping, Sequence
from typing import Optional, Union

from purl_core.codec import is_alpha, is_digit, is_key_char, is_type_char, to_lower_ascii
from purl_core.errors import InvalidArgumentError, MalformedInputError

PathInput = Union[str, Sequence[str], None]

DOT_SEGMENTS = (".", "..")


def validate_type(value: Optional[str]) -> str:
    """
    Check a purl type and return it folded to lower case.

    Raises:
        InvalidArgumentError: If the type is missing or empty
        MalformedInputError: If it starts with a non-letter or has invalid characters
    """
    if value is None or value == "":
        raise InvalidArgumentError("a type is always required")
    if not isinstance(value, str):
        raise InvalidArgumentError(f"type must be a string, got {type(value).__name__}")

    first = value[0]
    if is_digit(first):
        raise MalformedInputError(f"type cannot start with a number: '{value}'")
    if not is_alpha(first):
        raise MalformedInputError(f"type must start with a letter: '{value}'")

    invalid = sorted({c for c in value if not is_type_char(c)})
    if invalid:
        raise MalformedInputError(
            f"type '{value}' contains invalid characters: {''.join(invalid)!r}"
        )

    return to_lower_ascii(value)


def validate_name(value: Optional[str]) -> str:
    if value is None or value == "":
        raise InvalidArgumentError("a name is always required")
    if not isinstance(value, str):
        raise InvalidArgumentError(f"name must be a string, got {type(value).__name__}")
    return value


def validate_version(value: Optional[str]) -> Optional[str]:
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise MalformedInputError(f"version must be a string, got {type(value).__name__}")
    return value


def validate_path(value: PathInput, label: str, allow_dot_segments: bool) -> Optional[str]:
    """
    Check namespace or subpath segments and join them with '/'.

    Args:
        value: '/'-joined string or a sequence of segments
        label: Component name used in error messages
        allow_dot_segments: False to reject '.' and '..' segments

    Returns:
        Joined path or None when there are no segments

    Raises:
        MalformedInputError: On an empty segment, a segment containing '/',
            or a rejected dot segment
    """
    if value is None:
        return None
    if isinstance(value, str):
        if not value:
            return None
        segments = value.split("/")
    elif isinstance(value, Sequence):
        segments = list(value)
        if not segments:
            return None
    else:
        raise MalformedInputError(
            f"{label} must be a string or a sequence of segments, got {type(value).__name__}"
        )

    for segment in segments:
        if not isinstance(segment, str):
            raise MalformedInputError(f"Segments in the {label} must be strings: {segment!r}")
        if not segment:
            raise MalformedInputError(f"Segments in the {label} may not be empty")
        if "/" in segment:
            raise MalformedInputError(
                f"Segments in the {label} may not contain a forward slash ('/'): '{segment}'"
            )
        if not allow_dot_segments and segment in DOT_SEGMENTS:
            raise MalformedInputError(
                f"Segments in the {label} may not be a period ('.') or repeated period ('..')"
            )

    return "/".join(segments)


def validate_qualifier_key(key: str) -> str:
    """Check a qualifier key and return it folded to lower case."""
    if not isinstance(key, str) or not key:
        raise MalformedInputError(f"Qualifier key is invalid: {key!r}")

    folded = to_lower_ascii(key)
    if is_digit(folded[0]):
        raise MalformedInputError(f"Qualifier key cannot start with a number: '{key}'")
    if not all(is_key_char(c) for c in folded):
        raise MalformedInputError(
            f"The qualifier key '{key}' contains invalid characters"
        )
    return folded


def validate_qualifiers(values: Optional[Mapping[str, str]]) -> dict[str, str]:
    """
    Check qualifiers and return them with folded keys, sorted by key.

    Raises:
        MalformedInputError: On an invalid or duplicate key, or an empty value
    """
    if not values:
        return {}

    result: dict[str, str] = {}
    for key, value in values.items():
        folded = validate_qualifier_key(key)
        if folded in result:
            raise MalformedInputError(f"duplicate qualifiers key '{folded}'")
        if value is None or value == "":
            raise MalformedInputError(
                f"The qualifier '{folded}' has an empty or null value"
            )
        if not isinstance(value, str):
            raise MalformedInputError(
                f"The qualifier '{folded}' must have a string value, got {type(value).__name__}"
            )
        result[folded] = value

    return dict(sorted(result.items()))
