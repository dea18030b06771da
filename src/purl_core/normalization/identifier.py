"""
The immutable package identifier value object.
"""

from dataclasses import dataclass, field
from functools import cached_property
from types import MappingProxyType
from typing import Any, ClassVar, Mapping, Optional

from .canonical import SCHEME, canonicalize
from .rules import (
    validate_name,
    validate_path,
    validate_qualifiers,
    validate_type,
    validate_version,
)


@dataclass(frozen=True)
class PackageIdentifier:
    """
    A validated, normalized package URL.

    Instances are normally produced by parse() and from_components(), which
    also apply the per-type policy. Direct construction checks the generic
    rules only: the type and qualifier keys are folded to lower case, paths
    may be given as segments, and empty optional components become None.
    Equality and hashing cover all six components.

    Attributes:
        type: Lower-case package type (e.g. 'maven', 'npm')
        namespace: '/'-joined, decoded namespace segments or None
        name: Package name
        version: Version or None
        qualifiers: Read-only mapping, sorted by key
        subpath: '/'-joined, decoded subpath segments or None
    """

    scheme: ClassVar[str] = SCHEME

    type: str
    namespace: Optional[str]
    name: str
    version: Optional[str] = None
    qualifiers: Mapping[str, str] = field(default_factory=dict)
    subpath: Optional[str] = None

    def __post_init__(self):
        checked = {
            "type": validate_type(self.type),
            "namespace": validate_path(self.namespace, "namespace", allow_dot_segments=True),
            "name": validate_name(self.name),
            "version": validate_version(self.version),
            # Sorted, read-only view
            "qualifiers": MappingProxyType(validate_qualifiers(self.qualifiers)),
            "subpath": validate_path(self.subpath, "subpath", allow_dot_segments=False),
        }
        for name, value in checked.items():
            object.__setattr__(self, name, value)

    def __hash__(self) -> int:
        return hash(
            (
                self.type,
                self.namespace,
                self.name,
                self.version,
                tuple(self.qualifiers.items()),
                self.subpath,
            )
        )

    def __str__(self) -> str:
        return self.canonical

    @cached_property
    def canonical(self) -> str:
        """Canonical purl string."""
        return canonicalize(self)

    @cached_property
    def coordinates(self) -> str:
        """Canonical purl string without qualifiers and subpath."""
        return canonicalize(self, coordinates_only=True)

    @property
    def namespace_segments(self) -> list[str]:
        return self.namespace.split("/") if self.namespace else []

    @property
    def subpath_segments(self) -> list[str]:
        return self.subpath.split("/") if self.subpath else []

    def is_coordinates_equal(self, other: "PackageIdentifier") -> bool:
        """Compare type, namespace, name and version only."""
        return (
            self.type == other.type
            and self.namespace == other.namespace
            and self.name == other.name
            and self.version == other.version
        )

    def is_canonical_equal(self, other: "PackageIdentifier") -> bool:
        """Compare the canonical string forms."""
        return self.canonical == other.canonical

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "type": self.type,
            "namespace": self.namespace,
            "name": self.name,
            "version": self.version,
            "qualifiers": dict(self.qualifiers),
            "subpath": self.subpath,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PackageIdentifier":
        """Create from dictionary, validating and normalizing the components."""
        return cls.from_components(
            data.get("type"),
            namespace=data.get("namespace"),
            name=data.get("name"),
            version=data.get("version"),
            qualifiers=data.get("qualifiers"),
            subpath=data.get("subpath"),
        )

    @classmethod
    def parse(cls, raw: str) -> "PackageIdentifier":
        """Parse a purl string (see purl_core.normalization.validator.parse)."""
        from .validator import parse

        return parse(raw)

    @classmethod
    def from_components(cls, type: str, **components) -> "PackageIdentifier":
        """Build from components (see purl_core.normalization.validator.from_components)."""
        from .validator import from_components

        return from_components(type, **components)
