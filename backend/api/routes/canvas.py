"""Canvas API - current layout and hand-placed palette nodes."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from loguru import logger

from builder import append_node, create_palette_node
from shared.models import LayoutResult

from .. import state as api_state
from ..schemas import PaletteNodeRequest

router = APIRouter()


@router.get("")
async def get_canvas():
    return {"canvas": api_state.canvas.snapshot()}


@router.post("/nodes")
async def add_palette_node(body: PaletteNodeRequest):
    """Drop a palette node at the given position. The existing layout is not recomputed."""
    try:
        node = create_palette_node(body.type, body.position)
    except ValueError as e:
        return JSONResponse(status_code=422, content={"error": str(e)})

    canvas = api_state.canvas
    async with canvas.lock:
        try:
            nodes = append_node(canvas.result.nodes, node)
        except ValueError as e:
            return JSONResponse(status_code=409, content={"error": str(e)})
        canvas.result = LayoutResult(nodes=nodes, edges=canvas.result.edges)

    logger.info("Palette node {} added at ({}, {})", node.id, node.position.x, node.position.y)
    return {"node": node.model_dump(by_alias=True)}


@router.delete("")
async def clear_canvas():
    async with api_state.canvas.lock:
        api_state.canvas.result = LayoutResult()
    return {"success": True}
