"""Layout API - build + lay out the app graph from the configured source or inline records."""

from typing import Optional

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
from loguru import logger

from pipeline import build_layout
from shared.errors import FetchError
from shared.models import LayoutResult

from .. import state as api_state
from ..schemas import LayoutRequest

router = APIRouter()


async def _store(result: LayoutResult) -> dict:
    async with api_state.canvas.lock:
        api_state.canvas.result = result
    return {"layout": result.to_payload()}


@router.get("")
async def get_layout(direction: Optional[str] = Query(None)):
    """Load records from settings.sourceUrl (or local app.json), then build and lay out."""
    try:
        result = await build_layout(direction=direction)
    except FetchError as e:
        logger.exception("Record fetch failed")
        return JSONResponse(status_code=502, content={"error": str(e)})
    except ValueError as e:
        logger.warning("Layout rejected: {}", e)
        return JSONResponse(status_code=422, content={"error": str(e)})
    return await _store(result)


@router.post("")
async def post_layout(body: LayoutRequest):
    """Build and lay out inline records."""
    try:
        result = await build_layout(body.records, direction=body.direction, id_strategy=body.id_strategy)
    except ValueError as e:
        logger.warning("Layout rejected: {}", e)
        return JSONResponse(status_code=422, content={"error": str(e)})
    return await _store(result)
