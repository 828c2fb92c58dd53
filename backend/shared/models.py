"""Pydantic models for application records and the positioned node/edge graph."""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .constants import NODE_HEIGHT, NODE_WIDTH

Side = Literal["top", "bottom", "left", "right"]


class ApplicationRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    app_id: str = Field(..., alias="appId")
    name: str
    is_primary: bool = Field(..., alias="isPrimary")


class Position(BaseModel):
    x: float = 0.0
    y: float = 0.0


class GraphNode(BaseModel):
    """Node as consumed by the renderer. position is top-left; only layout or the palette sets it."""
    model_config = ConfigDict(populate_by_name=True)
    id: str
    label: str
    width: float = NODE_WIDTH
    height: float = NODE_HEIGHT
    position: Position = Field(default_factory=Position)
    source_side: Optional[Side] = Field(default=None, alias="sourceSide")
    target_side: Optional[Side] = Field(default=None, alias="targetSide")
    type: Optional[str] = None


class GraphEdge(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    id: str
    source_node_id: str = Field(..., alias="sourceNodeId")
    target_node_id: str = Field(..., alias="targetNodeId")
    style: Literal["smoothstep"] = "smoothstep"
    animated: bool = True


class LayoutResult(BaseModel):
    nodes: List[GraphNode] = Field(default_factory=list)
    edges: List[GraphEdge] = Field(default_factory=list)

    def to_payload(self) -> dict:
        """camelCase dict for JSON responses."""
        return self.model_dump(by_alias=True)
