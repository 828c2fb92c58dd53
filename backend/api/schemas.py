"""Pydantic request/response schemas for API."""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from shared.models import Position


class LayoutRequest(BaseModel):
    """Inline records to build and lay out. Unset direction/idStrategy fall back to settings."""
    model_config = ConfigDict(populate_by_name=True)
    records: List[Any] = Field(..., description="Application records: {appId, name, isPrimary}")
    direction: Optional[str] = None
    id_strategy: Optional[str] = Field(default=None, alias="idStrategy")


class PaletteNodeRequest(BaseModel):
    """Node dropped from the palette at a canvas position."""
    model_config = ConfigDict(populate_by_name=True)
    type: str = Field(..., description="Palette node type: input, default or output")
    position: Position = Field(default_factory=Position)
