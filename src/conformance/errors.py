# src/conformance/errors.py

class ConformanceError(Exception):
    """Base class for errors surfaced to callers of the checker."""
    pass


class InvalidInputError(ConformanceError):
    """Raised before any traversal when no document root is supplied."""
    pass


class UnsupportedExportFormatError(ConformanceError):
    """Raised when a report is exported to a file type without a writer."""
    pass
