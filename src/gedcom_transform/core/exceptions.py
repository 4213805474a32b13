class TransformError(Exception):
    """Base exception for gedcom-transform failures."""


class UnsupportedVersionError(TransformError, ValueError):
    """Raised when a GEDCOM version other than 5.5.1 or 7.0 is requested."""


class DocumentFormatError(TransformError):
    """Raised when a serialized Document (JSON) cannot be read back."""


class MediaBundleError(TransformError):
    """Raised when a media file cannot be placed inside a GEDZIP archive."""
