"""Shared models, errors and constants for builder, layout and API."""

from .errors import (
    DanglingReferenceError,
    DuplicateNodeIdError,
    FetchError,
    GraphError,
    InvalidTopologyError,
    RecordFormatError,
)
from .models import ApplicationRecord, GraphEdge, GraphNode, LayoutResult, Position

__all__ = [
    "ApplicationRecord",
    "DanglingReferenceError",
    "DuplicateNodeIdError",
    "FetchError",
    "GraphEdge",
    "GraphError",
    "GraphNode",
    "InvalidTopologyError",
    "LayoutResult",
    "Position",
    "RecordFormatError",
]
