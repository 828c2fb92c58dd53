"""
Domain errors for graph building, layout and record loading.
All are ValueError subclasses so callers that already catch ValueError keep working.
"""

from typing import Optional


class GraphError(ValueError):
    """Base class for app graph failures."""


class RecordFormatError(GraphError):
    """Input is not a list of {appId, name, isPrimary} records."""


class InvalidTopologyError(GraphError):
    """Input does not describe a star: zero or several primary records."""


class DuplicateNodeIdError(InvalidTopologyError):
    """Two records map to the same node id (raw id strategy)."""


class DanglingReferenceError(GraphError):
    """An edge points at a node id that is not in the node set."""


class FetchError(GraphError):
    """Record source could not be read. Never retried by the core."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
