"""
JSON models for purl components.

Defines the Pydantic model emitted by the command line interface.
"""

from typing import Optional

from pydantic import BaseModel, Field

from purl_core.normalization import PackageIdentifier, from_components


class PurlComponentsModel(BaseModel):
    """Components of a parsed package URL plus its canonical forms."""

    type: str = Field(..., description="Package type (lower-case)")
    namespace: Optional[str] = Field(None, description="Namespace, '/'-joined")
    name: str = Field(..., description="Package name")
    version: Optional[str] = Field(None, description="Package version")
    qualifiers: dict[str, str] = Field(
        default_factory=dict, description="Qualifiers sorted by key"
    )
    subpath: Optional[str] = Field(None, description="Subpath, '/'-joined")
    canonical: Optional[str] = Field(None, description="Canonical purl string")
    coordinates: Optional[str] = Field(
        None, description="Canonical purl without qualifiers and subpath"
    )

    @classmethod
    def from_identifier(cls, identifier: PackageIdentifier) -> "PurlComponentsModel":
        return cls(
            **identifier.to_dict(),
            canonical=identifier.canonical,
            coordinates=identifier.coordinates,
        )

    def to_identifier(self) -> PackageIdentifier:
        """Validate and normalize the components into an identifier."""
        return from_components(
            self.type,
            namespace=self.namespace,
            name=self.name,
            version=self.version,
            qualifiers=self.qualifiers,
            subpath=self.subpath,
        )
