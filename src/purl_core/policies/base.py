"""
Type policy building blocks.

A type policy carries the ecosystem-specific rules for one purl type: which
components are required or forbidden, which are case-folded, and any extra
structural checks. Policies see the components after generic validation and
return normalized components; they never build identifiers themselves.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Mapping, Optional

from purl_core.codec import to_lower_ascii
from purl_core.errors import MalformedInputError


@dataclass(frozen=True)
class Components:
    """
    Validated purl components handed to a type policy.

    Attributes:
        type: Lower-case purl type
        namespace: '/'-joined namespace or None
        name: Package name
        version: Version or None
        qualifiers: Qualifiers sorted by key (possibly empty)
        subpath: '/'-joined subpath or None
    """

    type: str
    namespace: Optional[str]
    name: str
    version: Optional[str] = None
    qualifiers: Mapping[str, str] = field(default_factory=dict)
    subpath: Optional[str] = None

    def replace(self, **changes) -> "Components":
        """Return a copy with the given fields changed."""
        return replace(self, **changes)


class TypePolicy:
    """
    Base policy: accepts everything and changes nothing.

    Subclass and override validate() and/or normalize() to add rules for a
    type, then register the instance with the policy registry.
    """

    def validate(self, components: Components) -> None:
        """Raise MalformedInputError if the components break a type rule."""

    def normalize(self, components: Components) -> Components:
        """Return components with type-specific transforms applied."""
        return components


class Presence(str, Enum):
    """Whether a component is optional, required or forbidden for a type."""

    OPTIONAL = "optional"
    REQUIRED = "required"
    FORBIDDEN = "forbidden"


Check = Callable[[Components], None]


@dataclass(frozen=True)
class RulePolicy(TypePolicy):
    """
    Table-driven policy.

    Usage:
        policy = RulePolicy(namespace=Presence.REQUIRED, lowercase_name=True)
        policy.validate(components)
        components = policy.normalize(components)
    """

    namespace: Presence = Presence.OPTIONAL
    version: Presence = Presence.OPTIONAL
    lowercase_namespace: bool = False
    lowercase_name: bool = False
    lowercase_version: bool = False
    name_transform: Optional[Callable[[str], str]] = None
    checks: tuple[Check, ...] = ()

    def validate(self, components: Components) -> None:
        self._check_presence("namespace", self.namespace, components.namespace, components.type)
        self._check_presence("version", self.version, components.version, components.type)
        for check in self.checks:
            check(components)

    def normalize(self, components: Components) -> Components:
        namespace = components.namespace
        name = components.name
        version = components.version

        if self.lowercase_namespace and namespace is not None:
            namespace = to_lower_ascii(namespace)
        if self.lowercase_name:
            name = to_lower_ascii(name)
        if self.name_transform is not None:
            name = self.name_transform(name)
        if self.lowercase_version and version is not None:
            version = to_lower_ascii(version)

        return components.replace(namespace=namespace, name=name, version=version)

    @staticmethod
    def _check_presence(
        label: str, presence: Presence, value: Optional[str], purl_type: str
    ) -> None:
        if presence is Presence.REQUIRED and not value:
            raise MalformedInputError(f"a {label} is required for type '{purl_type}'")
        if presence is Presence.FORBIDDEN and value:
            raise MalformedInputError(f"a {label} is not allowed for type '{purl_type}'")
