"""
Split a purl string into its raw components.

Grammar:
    pkg:type/namespace/name@version?qualifiers#subpath

The split is positional: the fragment is the subpath, the query the
qualifiers, the first path segment the type, the text after the last '@'
the version and the last remaining segment the name. The type characters
are checked as soon as the type is sliced off; everything else is
percent-decoded here, and casing and per-type rules are applied later.
"""

from dataclasses import dataclass, field
from typing import Optional
from urllib.parse import urlsplit

from purl_core.codec import percent_decode, to_lower_ascii
from purl_core.errors import MalformedInputError

from .rules import DOT_SEGMENTS, validate_type

SCHEME_PREFIX = "pkg:"


@dataclass(frozen=True)
class RawComponents:
    """
    Decoded, not yet validated purl components.

    Attributes:
        type: Type exactly as written (not case-folded)
        namespace: Namespace segments, empty segments dropped
        name: Package name
        version: Version or None
        qualifiers: Qualifiers with folded keys, empty values dropped
        subpath: Subpath segments, empty and dot segments dropped
    """

    type: str
    name: str
    namespace: tuple[str, ...] = ()
    version: Optional[str] = None
    qualifiers: dict[str, str] = field(default_factory=dict)
    subpath: tuple[str, ...] = ()


def split_purl(raw: str) -> RawComponents:
    """
    Split a purl string into decoded components.

    Args:
        raw: purl string

    Returns:
        RawComponents

    Raises:
        MalformedInputError: If the string is not a syntactically valid purl
    """
    if raw is None or not isinstance(raw, str) or not raw.strip():
        raise MalformedInputError("Invalid purl: Contains an empty or null value")

    if not raw.startswith(SCHEME_PREFIX):
        raise MalformedInputError(f"Invalid purl '{raw}': must start with '{SCHEME_PREFIX}'")

    _reject_authority(raw)

    remainder = raw[len(SCHEME_PREFIX):]
    remainder, _, fragment = remainder.partition("#")
    remainder, _, query = remainder.partition("?")

    # pkg:///type/... and pkg:type/... are equivalent
    path = remainder.strip("/")

    purl_type, separator, rest = path.partition("/")
    if not separator or not purl_type:
        raise MalformedInputError(f"Invalid purl '{raw}': does not contain both a type and name")

    # The type is checked before anything else is decoded
    validate_type(purl_type)

    version = None
    at = rest.rfind("@")
    if at >= 0:
        version = percent_decode(rest[at + 1:]) or None
        rest = rest[:at]

    slash = rest.rfind("/")
    if slash < 0:
        name, namespace_raw = rest, ""
    else:
        name, namespace_raw = rest[slash + 1:], rest[:slash]

    name = percent_decode(name)
    if not name:
        raise MalformedInputError(f"Invalid purl '{raw}': a name is always required")

    return RawComponents(
        type=purl_type,
        name=name,
        namespace=_split_path(namespace_raw, drop_dot_segments=False),
        version=version,
        qualifiers=split_qualifiers(query),
        subpath=_split_path(fragment, drop_dot_segments=True),
    )


def split_qualifiers(query: str) -> dict[str, str]:
    """
    Parse a qualifier string ('k1=v1&k2=v2').

    Pieces without '=' or with an empty value are dropped. Keys are folded
    to lower case and must stay unique.

    Raises:
        MalformedInputError: On a duplicate key
    """
    qualifiers: dict[str, str] = {}
    if not query:
        return qualifiers

    for piece in query.split("&"):
        key, separator, value = piece.partition("=")
        if not separator or not value:
            continue

        key = to_lower_ascii(key)
        if key in qualifiers:
            raise MalformedInputError(
                "Duplicate package qualifier encountered: more than one value "
                f"was specified for '{key}'"
            )
        qualifiers[key] = percent_decode(value)

    return qualifiers


def _split_path(value: str, drop_dot_segments: bool) -> tuple[str, ...]:
    segments = []
    for segment in value.split("/"):
        if not segment:
            continue
        segment = percent_decode(segment)
        if drop_dot_segments and segment in DOT_SEGMENTS:
            continue
        segments.append(segment)
    return tuple(segments)


def _reject_authority(raw: str) -> None:
    """Fail if the purl carries user info or a port (pkg://user@host:port/...)."""
    if not raw[len(SCHEME_PREFIX):].startswith("//"):
        return

    try:
        parts = urlsplit(raw)
        port = parts.port
    except ValueError as e:
        raise MalformedInputError(f"Invalid purl '{raw}': {e}") from e

    if parts.username is not None or parts.password is not None or port is not None:
        raise MalformedInputError(
            f"Invalid purl '{raw}': contains an authority (user info or port), "
            "which is not supported by package URLs"
        )
