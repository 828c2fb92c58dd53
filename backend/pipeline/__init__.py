"""
Pipeline Module
Records -> star graph -> positioned layout. Nothing is returned unless every step succeeds.
"""

from typing import Any, Optional

import orjson
from loguru import logger

from builder import DEFAULT_ID_STRATEGY, build_graph, parse_records
from db import get_effective_settings, load_records
from layout import layout_graph
from shared.errors import RecordFormatError
from shared.models import LayoutResult


def build_layout_from_records(
    data: Any,
    direction: Optional[str] = None,
    id_strategy: Optional[str] = None,
) -> LayoutResult:
    """Build and lay out a graph from a record array (decoded, or a JSON string/bytes).
    Unset direction / id_strategy use the built-in defaults (TB, composite)."""
    if isinstance(data, (str, bytes)):
        try:
            data = orjson.loads(data)
        except orjson.JSONDecodeError as e:
            raise RecordFormatError(f"Invalid records JSON: {e}") from e

    records = parse_records(data)
    nodes, edges = build_graph(records, id_strategy=id_strategy or DEFAULT_ID_STRATEGY)
    result = layout_graph(nodes, edges, direction=direction)
    logger.info("Built app graph: {} nodes, {} edges", len(result.nodes), len(result.edges))
    return result


async def build_layout(
    data: Any = None,
    direction: Optional[str] = None,
    id_strategy: Optional[str] = None,
) -> LayoutResult:
    """
    Settings-aware entry point. data=None loads records from the configured source
    (sourceUrl or local app.json; FetchError on failure). Unset direction / id_strategy
    fall back to settings.json values.
    """
    settings = await get_effective_settings()
    if data is None:
        data = await load_records(settings)
    return build_layout_from_records(
        data,
        direction=direction or settings["direction"],
        id_strategy=id_strategy or settings["idStrategy"],
    )


__all__ = ["build_layout", "build_layout_from_records"]
