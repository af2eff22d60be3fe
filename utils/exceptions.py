"""
Custom exception hierarchy for the release title parser.

Parse entry points never raise these to their callers: expected failures
(rejected titles, pattern misses, invalid dates) are reported as ``None``.
The classes below cover the surrounding layers - configuration, tag reading
and filesystem scanning - where a caller can act on the failure.
"""


class ReleaseParserError(Exception):
    """Base class for all application-specific errors."""
    pass


class ConfigurationError(ReleaseParserError):
    """Raised when there are configuration-related issues."""
    pass


class FileProcessingError(ReleaseParserError):
    """Base class for errors while reading a media file."""
    pass


class MetadataExtractionError(FileProcessingError):
    """Raised when tags cannot be read from an audio file."""

    def __init__(self, file_path: str, reason: str = None):
        self.file_path = file_path
        self.reason = reason

        message = f"Failed to extract metadata from file: {file_path}"
        if reason:
            message += f" - {reason}"

        super().__init__(message)


class FilesystemError(ReleaseParserError):
    """Raised when filesystem operations fail."""

    def __init__(self, path: str, operation: str, reason: str = None):
        self.path = path
        self.operation = operation
        self.reason = reason

        message = f"Filesystem error during {operation} on {path}"
        if reason:
            message += f": {reason}"

        super().__init__(message)
