"""
purl parsing, validation, normalization and canonicalization.

Handles the grammar split, generic and per-type rules, and the canonical
string form.
"""

from .canonical import canonicalize, to_coordinates, to_string
from .grammar import RawComponents, split_purl, split_qualifiers
from .identifier import PackageIdentifier
from .rules import (
    validate_path,
    validate_qualifier_key,
    validate_qualifiers,
    validate_type,
)
from .validator import from_components, parse

__all__ = [
    "PackageIdentifier",
    "RawComponents",
    "canonicalize",
    "from_components",
    "parse",
    "split_purl",
    "split_qualifiers",
    "to_coordinates",
    "to_string",
    "validate_path",
    "validate_qualifier_key",
    "validate_qualifiers",
    "validate_type",
]
