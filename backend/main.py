"""
App Graph Backend - FastAPI entry point.
Serves the application records and their positioned star graph to the diagram frontend.
"""

from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

from api import CanvasState, register_routes
from db import get_apps
from shared.errors import FetchError

app = FastAPI(title="App Graph Backend")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Disable cache for static files and records (dev: always fetch latest)
NO_CACHE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


class NoCacheMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        response = await call_next(request)
        path = request.url.path
        if path == "/" or path.endswith((".html", ".css", ".js", ".json")):
            for k, v in NO_CACHE_HEADERS.items():
                response.headers[k] = v
        return response


app.add_middleware(NoCacheMiddleware)

canvas_state = CanvasState()
register_routes(app, canvas_state)


# Frontend static files
FRONTEND_DIR = Path(__file__).parent.parent / "frontend"


@app.get("/app.json")
async def api_app_json():
    """Raw application records, as the frontend fetches them."""
    try:
        return await get_apps()
    except FetchError as e:
        logger.error("Serving app.json failed: {}", e)
        return JSONResponse(status_code=404, content={"error": str(e)})


# Static file serving - MUST come after all API routes
if FRONTEND_DIR.exists():
    app.mount("/", StaticFiles(directory=str(FRONTEND_DIR), html=True), name="static")
