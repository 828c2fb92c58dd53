"""API route modules."""

from fastapi import FastAPI

from . import apps, canvas, config, layout
from ..state import CanvasState, init_api_state


def register_routes(app: FastAPI, canvas_state: CanvasState):
    """Register all API routers. Call after app and canvas state are created."""
    init_api_state(canvas_state)

    app.include_router(layout.router, prefix="/api/layout", tags=["layout"])
    app.include_router(apps.router, prefix="/api/apps", tags=["apps"])
    app.include_router(canvas.router, prefix="/api/canvas", tags=["canvas"])
    app.include_router(config.router, prefix="/api/config", tags=["config"])
