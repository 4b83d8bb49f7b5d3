"""Domain errors."""


class S1OCNError(Exception):
    """Base domain error."""


class CatalogUnavailableError(S1OCNError):
    """Attribute catalogue could not be fetched or parsed."""


class InvalidAttributeNameError(S1OCNError):
    """Attribute name is not advertised by the catalogue."""

    def __init__(self, attribute_name: str) -> None:
        self.attribute_name = attribute_name
        super().__init__(f"{attribute_name} is not a valid attribute")


class InvalidOperatorError(S1OCNError):
    """Comparison operator is not supported."""


class InvalidSearchCriteriaError(S1OCNError):
    """Search criteria failed validation."""


class CatalogueRequestError(S1OCNError):
    """Catalogue request or response parsing failed."""


class AuthenticationError(S1OCNError):
    """Access token could not be obtained."""


class ProductDownloadError(S1OCNError):
    """Product package could not be downloaded."""


class ArchiveExtractionError(S1OCNError):
    """Product package could not be read."""
