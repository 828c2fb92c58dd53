"""
API module - routes and schemas.
Routes are split by domain: apps, layout, canvas, config.
"""

from .routes import register_routes
from .state import CanvasState

__all__ = ["CanvasState", "register_routes"]
