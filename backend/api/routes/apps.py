"""Apps API - the stored application records (app.json)."""

from typing import Any, List

from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse
from loguru import logger

from builder import build_graph
from db import get_apps, save_apps
from shared.errors import FetchError

router = APIRouter()


@router.get("")
async def get_apps_route():
    try:
        return {"apps": await get_apps()}
    except FetchError as e:
        return JSONResponse(status_code=404, content={"error": str(e)})


@router.put("")
async def replace_apps(records: List[Any] = Body(...)):
    """Overwrite app.json. Records must form a valid star (exactly one primary) or nothing is written."""
    try:
        build_graph(records)
    except ValueError as e:
        logger.warning("Rejected app records: {}", e)
        return JSONResponse(status_code=422, content={"error": str(e)})
    await save_apps(records)
    logger.info("Saved {} application records", len(records))
    return {"success": True, "count": len(records)}
