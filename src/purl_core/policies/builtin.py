"""
Built-in type policies for well-known package ecosystems.
"""

import re
from urllib.parse import urlsplit

from purl_core.codec import is_whitespace, to_lower_ascii
from purl_core.errors import MalformedInputError

from .base import Components, Presence, RulePolicy, TypePolicy


class StandardTypes:
    """Well-known purl type names."""

    APK = "apk"
    BITBUCKET = "bitbucket"
    BITNAMI = "bitnami"
    CARGO = "cargo"
    COCOAPODS = "cocoapods"
    COMPOSER = "composer"
    CONAN = "conan"
    CONDA = "conda"
    CPAN = "cpan"
    CRAN = "cran"
    DEBIAN = "deb"
    DOCKER = "docker"
    GEM = "gem"
    GENERIC = "generic"
    GITHUB = "github"
    GOLANG = "golang"
    HACKAGE = "hackage"
    HEX = "hex"
    HUGGINGFACE = "huggingface"
    LUAROCKS = "luarocks"
    MAVEN = "maven"
    MLFLOW = "mlflow"
    NIXPKGS = "nixpkgs"
    NPM = "npm"
    NUGET = "nuget"
    OCI = "oci"
    PUB = "pub"
    PYPI = "pypi"
    QPKG = "qpkg"
    RPM = "rpm"
    SWIFT = "swift"


# Hosts of the managed MLflow service, whose model names are case-insensitive
MLFLOW_MANAGED_HOST_SUFFIX = "azuredatabricks.net"

_PUB_INVALID_CHARS = re.compile(r"[^a-z0-9_]")


def _pypi_name(name: str) -> str:
    return name.replace("_", "-")


def _pub_name(name: str) -> str:
    return _PUB_INVALID_CHARS.sub("_", name)


def _check_cocoapods_name(components: Components) -> None:
    name = components.name
    if any(is_whitespace(c) for c in name) or name.startswith(".") or "+" in name:
        raise MalformedInputError(f"invalid cocoapods purl invalid name '{name}'")


def _check_conan_channel(components: Components) -> None:
    has_channel = "channel" in components.qualifiers
    if components.namespace and not has_channel:
        raise MalformedInputError("invalid conan purl only namespace")
    if not components.namespace and has_channel:
        raise MalformedInputError("invalid conan purl only channel qualifier")


def _check_cpan_name(components: Components) -> None:
    if not components.namespace and "-" in components.name:
        raise MalformedInputError(
            f"cpan module name like distribution name: '{components.name}'"
        )
    if components.namespace and "::" in components.name:
        raise MalformedInputError(
            f"cpan distribution name like module name: '{components.name}'"
        )


class MlflowPolicy(TypePolicy):
    """
    MLflow models: no namespace; names are case-insensitive on the managed
    service, so they are lower-cased when repository_url points there.
    """

    def validate(self, components: Components) -> None:
        if components.namespace:
            raise MalformedInputError(
                f"a namespace is not allowed for type '{components.type}'"
            )

    def normalize(self, components: Components) -> Components:
        repository_url = components.qualifiers.get("repository_url")
        if repository_url is None:
            return components

        try:
            host = urlsplit(repository_url).hostname
        except ValueError as e:
            raise MalformedInputError(
                f"'{repository_url}' is not a valid URL for repository_url"
            ) from e

        if host and host.endswith(MLFLOW_MANAGED_HOST_SUFFIX):
            return components.replace(name=to_lower_ascii(components.name))
        return components


_LOWERCASE_NAMESPACE_AND_NAME = RulePolicy(lowercase_namespace=True, lowercase_name=True)
_LOWERCASE_NAMESPACE = RulePolicy(lowercase_namespace=True)
_LOWERCASE_VERSION = RulePolicy(lowercase_version=True)
_VERSION_REQUIRED = RulePolicy(version=Presence.REQUIRED)

BUILTIN_POLICIES: dict[str, TypePolicy] = {
    StandardTypes.APK: _LOWERCASE_NAMESPACE_AND_NAME,
    StandardTypes.BITBUCKET: _LOWERCASE_NAMESPACE_AND_NAME,
    StandardTypes.BITNAMI: _LOWERCASE_NAMESPACE,
    StandardTypes.COCOAPODS: RulePolicy(
        namespace=Presence.FORBIDDEN, checks=(_check_cocoapods_name,)
    ),
    StandardTypes.COMPOSER: _LOWERCASE_NAMESPACE_AND_NAME,
    StandardTypes.CONAN: RulePolicy(checks=(_check_conan_channel,)),
    StandardTypes.CPAN: RulePolicy(checks=(_check_cpan_name,)),
    StandardTypes.CRAN: _VERSION_REQUIRED,
    StandardTypes.DEBIAN: _LOWERCASE_NAMESPACE_AND_NAME,
    StandardTypes.GENERIC: TypePolicy(),
    StandardTypes.GITHUB: _LOWERCASE_NAMESPACE_AND_NAME,
    StandardTypes.GOLANG: _LOWERCASE_NAMESPACE,
    StandardTypes.HACKAGE: _VERSION_REQUIRED,
    StandardTypes.HEX: _LOWERCASE_NAMESPACE_AND_NAME,
    StandardTypes.HUGGINGFACE: _LOWERCASE_VERSION,
    StandardTypes.LUAROCKS: _LOWERCASE_VERSION,
    StandardTypes.MAVEN: RulePolicy(namespace=Presence.REQUIRED),
    StandardTypes.MLFLOW: MlflowPolicy(),
    StandardTypes.OCI: RulePolicy(
        namespace=Presence.FORBIDDEN, lowercase_name=True, lowercase_version=True
    ),
    StandardTypes.PUB: RulePolicy(lowercase_name=True, name_transform=_pub_name),
    StandardTypes.PYPI: RulePolicy(lowercase_name=True, name_transform=_pypi_name),
    StandardTypes.QPKG: _LOWERCASE_NAMESPACE,
    StandardTypes.RPM: _LOWERCASE_NAMESPACE,
    StandardTypes.SWIFT: RulePolicy(
        namespace=Presence.REQUIRED, version=Presence.REQUIRED
    ),
}
