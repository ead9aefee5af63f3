"""Exceptions raised while converting scripture documents.

Every error is terminal for the document being converted. Callers that
process several documents decide whether to continue or abort.
"""


class ConversionError(Exception):
    """Base class for all conversion failures."""


class MalformedMarkupError(ConversionError):
    """The document could not be parsed into a tree (or decoded)."""


class InvalidRootElementError(ConversionError):
    """The XML root element is not ``<usx>``."""


class MissingBookCodeError(ConversionError):
    """No ``<book code="...">`` element was found under the root."""


class DocumentIOError(ConversionError):
    """A document could not be read or its CSV could not be written."""


class InputResolutionError(ConversionError):
    """Command-line inputs did not resolve to convertible files."""
