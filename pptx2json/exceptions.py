class ConversionError(Exception):
    """Base class for all errors raised while converting a presentation."""

    def __init__(self, message: str, *, cause: Exception = None):
        super().__init__(message)
        # Use exception chaining if cause is provided
        self.__cause__ = cause


class PartNotFoundError(ConversionError):
    """Raised when a required part or relationship target is missing."""

    def __init__(self, part_path: str, message: str = None, *, cause: Exception = None):
        self.part_path = part_path
        if message is None:
            message = f"Required part not found: {part_path}"
        super().__init__(message, cause=cause)


class MalformedTreeError(ConversionError):
    """Raised when a child or attribute guaranteed by the schema is absent."""

    def __init__(self, part_path: str | None, detail: str, *, cause: Exception = None):
        self.part_path = part_path
        self.detail = detail
        location = f" [{part_path}]" if part_path else ""
        super().__init__(f"Malformed part{location}: {detail}", cause=cause)


class UnsupportedNodeError(ConversionError):
    """Raised for a recognized node that cannot be turned into an element."""

    def __init__(self, tag: str, message: str = None, *, cause: Exception = None):
        self.tag = tag
        if message is None:
            message = f"Unsupported node: {tag}"
        super().__init__(message, cause=cause)


class FileEncryptedError(ConversionError):
    """Raised when the presentation is password protected."""

    def __init__(self, message: str = None, *, cause: Exception = None):
        if message is None:
            message = "Presentation is encrypted or password protected"
        super().__init__(message, cause=cause)


class ZipBombError(ConversionError):
    """Raised when the archive looks like a ZIP bomb."""
