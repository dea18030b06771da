"""
Canonical string form of a package URL.

Qualifiers are emitted in ascending key order, so two identifiers that differ
only in qualifier input order serialize identically.
"""

from typing import TYPE_CHECKING

from purl_core.codec import percent_encode

if TYPE_CHECKING:
    from .identifier import PackageIdentifier

SCHEME = "pkg"


def _encode_path(path: str) -> str:
    return "/".join(percent_encode(segment) for segment in path.split("/"))


def canonicalize(identifier: "PackageIdentifier", coordinates_only: bool = False) -> str:
    """
    Build the canonical purl string.

    Args:
        identifier: Validated identifier
        coordinates_only: Omit qualifiers and subpath

    Returns:
        Canonical purl string
    """
    parts = [SCHEME, ":", identifier.type, "/"]

    if identifier.namespace is not None:
        parts.append(_encode_path(identifier.namespace))
        parts.append("/")

    parts.append(percent_encode(identifier.name))

    if identifier.version is not None:
        parts.append("@")
        parts.append(percent_encode(identifier.version))

    if not coordinates_only:
        if identifier.qualifiers:
            parts.append("?")
            parts.append(
                "&".join(
                    f"{key}={percent_encode(value)}"
                    for key, value in sorted(identifier.qualifiers.items())
                )
            )
        if identifier.subpath is not None:
            parts.append("#")
            parts.append(_encode_path(identifier.subpath))

    return "".join(parts)


def to_string(identifier: "PackageIdentifier") -> str:
    """Return the canonical purl string."""
    return canonicalize(identifier)


def to_coordinates(identifier: "PackageIdentifier") -> str:
    """Return the canonical type/namespace/name/version part only."""
    return canonicalize(identifier, coordinates_only=True)
