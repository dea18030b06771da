"""
Validation and normalization pipeline.

Both entry points converge here:
- parse(): purl string -> grammar split -> strict pipeline
- from_components(): caller-supplied components -> strict pipeline

The pipeline checks the generic rules (type characters, required name,
path segments, qualifier keys and values), then applies the type policy
resolved from the registry. The only leniencies (dropped empty qualifier
values, dropped empty and dot path segments) live in the grammar, so they
apply to string parsing alone.
"""

from collections.abc import Mapping
from typing import Optional

from purl_core.errors import MalformedInputError
from purl_core.policies import Components, PolicyRegistry, get_registry

from .grammar import split_purl
from .identifier import PackageIdentifier
from .rules import (
    PathInput,
    validate_name,
    validate_path,
    validate_qualifiers,
    validate_type,
    validate_version,
)


def from_components(
    type: str,
    namespace: PathInput = None,
    name: Optional[str] = None,
    version: Optional[str] = None,
    qualifiers: Optional[Mapping[str, str]] = None,
    subpath: PathInput = None,
    registry: Optional[PolicyRegistry] = None,
) -> PackageIdentifier:
    """
    Build a validated, normalized identifier from components.

    Args:
        type: Package type
        namespace: '/'-joined namespace or its segments
        name: Package name
        version: Version
        qualifiers: Qualifier mapping (keys case-insensitive, values non-empty)
        subpath: '/'-joined subpath or its segments ('.'/'..' rejected)
        registry: Policy registry (defaults to the process-wide one)

    Returns:
        PackageIdentifier

    Raises:
        InvalidArgumentError: If type or name is missing
        MalformedInputError: If any component breaks a generic or type rule
    """
    purl_type = validate_type(type)
    name = validate_name(name)

    components = Components(
        type=purl_type,
        namespace=validate_path(namespace, "namespace", allow_dot_segments=True),
        name=name,
        version=validate_version(version),
        qualifiers=validate_qualifiers(qualifiers),
        subpath=validate_path(subpath, "subpath", allow_dot_segments=False),
    )

    return _apply_policy(components, registry or get_registry())


def parse(raw: str, registry: Optional[PolicyRegistry] = None) -> PackageIdentifier:
    """
    Parse a purl string into a validated, normalized identifier.

    Args:
        raw: purl string, e.g. 'pkg:maven/org.apache.commons/io@1.3.4'
        registry: Policy registry (defaults to the process-wide one)

    Returns:
        PackageIdentifier

    Raises:
        MalformedInputError: If the string is not a valid purl
    """
    parts = split_purl(raw)
    return from_components(
        parts.type,
        namespace=parts.namespace,
        name=parts.name,
        version=parts.version,
        qualifiers=parts.qualifiers,
        subpath=parts.subpath,
        registry=registry,
    )


def _apply_policy(components: Components, registry: PolicyRegistry) -> PackageIdentifier:
    policy = registry.resolve(components.type)
    policy.validate(components)

    normalized = policy.normalize(components)
    if not isinstance(normalized, Components):
        raise TypeError(
            f"{type(policy).__name__}.normalize() must return Components, "
            f"got {type(normalized).__name__}"
        )
    if not normalized.name:
        raise MalformedInputError(
            f"a name is always required: empty after normalization for type '{components.type}'"
        )

    # The generic rules are checked again on the policy output
    return PackageIdentifier(
        type=components.type,
        namespace=normalized.namespace,
        name=normalized.name,
        version=normalized.version,
        qualifiers=normalized.qualifiers,
        subpath=normalized.subpath,
    )
