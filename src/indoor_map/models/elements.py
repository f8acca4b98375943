"""Map elements and the connections between them.

Elements are axis-aligned rectangles placed on one floor. Rotation is kept
for display but ignored by every geometric test in this package.

Field names are snake_case in Python; multi-word fields also accept and
emit the camelCase names used by editor documents (``fromElementId``,
``visuallyImpaired``...).
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from indoor_map.models.geometry import Point2D


class ElementType(str, Enum):
    """Kinds of placeable element.

    WALL and PILLAR are obstacles: they never take part in a connection.
    """

    CORRIDOR = "corridor"
    SHOP = "shop"
    STAIRS = "stairs"
    ELEVATOR = "elevator"
    ESCALATOR = "escalator"
    ENTRANCE = "entrance"
    EXIT = "exit"
    RESTROOM = "restroom"
    INFORMATION = "information"
    WAITING_AREA = "waiting_area"
    PLATFORM = "platform"
    TICKET_GATE = "ticket_gate"
    WALL = "wall"
    PILLAR = "pillar"

    @property
    def is_obstacle(self) -> bool:
        return self in (ElementType.WALL, ElementType.PILLAR)


class ConnectionType(str, Enum):
    """How two connected elements are traversed."""

    WALKABLE = "walkable"
    DOOR = "door"
    STAIRS_UP = "stairs_up"
    STAIRS_DOWN = "stairs_down"
    ELEVATOR_UP = "elevator_up"
    ELEVATOR_DOWN = "elevator_down"
    ESCALATOR_UP = "escalator_up"
    ESCALATOR_DOWN = "escalator_down"


class Accessibility(BaseModel):
    """Per-element accessibility flags. Everything is accessible unless stated."""

    model_config = ConfigDict(populate_by_name=True)

    wheelchair: bool = True
    visually_impaired: bool = Field(default=True, alias="visuallyImpaired")
    hearing_impaired: bool = Field(default=True, alias="hearingImpaired")


class MapElement(BaseModel):
    """A rectangle placed on a floor.

    ``x``/``y`` is the top-left corner in planar units (editor pixels).
    Geometry and floor are not required or constrained here: a missing
    field or a zero or negative size is reported by the map validator
    rather than rejected on construction.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = ""
    type: Optional[ElementType] = None
    x: Optional[float] = None
    y: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    rotation: float = Field(default=0.0, description="Degrees, display only")
    floor: Optional[int] = Field(default=None, description="Level of the owning floor")
    name: Optional[str] = None
    description: Optional[str] = None
    accessibility: Optional[Accessibility] = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def has_geometry(self) -> bool:
        """True when position and size are all set."""
        return None not in (self.x, self.y, self.width, self.height)

    @property
    def right(self) -> float | None:
        if not self.has_geometry:
            return None
        return self.x + self.width

    @property
    def bottom(self) -> float | None:
        if not self.has_geometry:
            return None
        return self.y + self.height

    @property
    def center(self) -> Point2D | None:
        """Centre of the rectangle, or None without geometry."""
        if not self.has_geometry:
            return None
        return Point2D(x=self.x + self.width / 2, y=self.y + self.height / 2)

    @property
    def is_wheelchair_accessible(self) -> bool:
        if self.accessibility is None:
            return True
        return self.accessibility.wheelchair


class ElementConnection(BaseModel):
    """An edge between two elements on the same floor.

    Inferred connections are always bidirectional and their id is
    ``"{from_element_id}-{to_element_id}"``.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    from_element_id: str = Field(alias="fromElementId")
    to_element_id: str = Field(alias="toElementId")
    type: ConnectionType
    distance: Optional[float] = Field(default=None, description="Meters")
    time: Optional[int] = Field(default=None, description="Seconds")
    accessible: bool = True
    bidirectional: bool = True
