"""
Shared API state - the canvas (latest layout plus hand-placed palette nodes).
Initialized by main.py after creating the app.
"""

import asyncio
from typing import Optional

from shared.models import LayoutResult


class CanvasState:
    """Mutable container for the current canvas. lock guards replace/append on one event loop."""

    def __init__(self):
        self.lock = asyncio.Lock()
        self.result = LayoutResult()

    def snapshot(self) -> dict:
        return self.result.to_payload()


# Set by main.py
canvas: Optional[CanvasState] = None


def init_api_state(canvas_state: CanvasState):
    global canvas
    canvas = canvas_state
