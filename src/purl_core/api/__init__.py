"""
Public API.

Parse purl strings, build identifiers from components, canonicalize and
extend the per-type rules.
"""

from purl_core.api.models import PurlComponentsModel
from purl_core.errors import (
    InvalidArgumentError,
    MalformedInputError,
    PercentDecodingError,
    PurlError,
    RegistryError,
)
from purl_core.normalization import (
    PackageIdentifier,
    from_components,
    parse,
    to_coordinates,
    to_string,
)
from purl_core.policies import (
    Components,
    Presence,
    RulePolicy,
    StandardTypes,
    TypePolicy,
    get_registry,
    register_policy,
)

__all__ = [
    "PackageIdentifier",
    "PurlComponentsModel",
    "parse",
    "from_components",
    "to_string",
    "to_coordinates",
    "Components",
    "Presence",
    "RulePolicy",
    "StandardTypes",
    "TypePolicy",
    "get_registry",
    "register_policy",
    "PurlError",
    "MalformedInputError",
    "PercentDecodingError",
    "InvalidArgumentError",
    "RegistryError",
]
