"""
Exception types raised while parsing and building package URLs.
"""


class PurlError(ValueError):
    """Base class for package URL errors."""


class MalformedInputError(PurlError):
    """A purl or one of its components violates the grammar or a type rule."""


class PercentDecodingError(MalformedInputError):
    """
    A percent-encoded sequence could not be decoded.

    Attributes:
        offset: Byte offset (in the UTF-8 input) of the failing character
        fragment: The offending text
    """

    def __init__(self, message: str, offset: int, fragment: str):
        super().__init__(message)
        self.offset = offset
        self.fragment = fragment


class InvalidArgumentError(PurlError):
    """A required component was passed empty or missing."""


class RegistryError(RuntimeError):
    """The type policy registry was used incorrectly."""


__all__ = [
    "PurlError",
    "MalformedInputError",
    "PercentDecodingError",
    "InvalidArgumentError",
    "RegistryError",
]
