"""Indoor map data models."""

from indoor_map.models.ids import generate_id
from indoor_map.models.geometry import Point2D, haversine_km
from indoor_map.models.elements import (
    Accessibility,
    ConnectionType,
    ElementConnection,
    ElementType,
    MapElement,
)
from indoor_map.models.map import (
    Floor,
    Location,
    MapData,
    MapMetadata,
    MapSaveRequest,
    MapTemplate,
    Rating,
    Statistics,
    TemplateCategory,
    TemplateMetadata,
)

__all__ = [
    "generate_id",
    "Point2D",
    "haversine_km",
    "Accessibility",
    "ConnectionType",
    "ElementConnection",
    "ElementType",
    "MapElement",
    "Floor",
    "Location",
    "MapData",
    "MapMetadata",
    "MapSaveRequest",
    "MapTemplate",
    "Rating",
    "Statistics",
    "TemplateCategory",
    "TemplateMetadata",
]
