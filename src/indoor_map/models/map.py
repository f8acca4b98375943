"""Top-level map model: MapData and Floor, plus template and request shapes.

A map owns floors; a floor owns its elements and connections. Fields that
a half-built map may lack (``floors``, ``metadata``, a floor's ``level``)
are optional so partial maps can be validated and the violations reported.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from indoor_map.models.elements import ElementConnection, ElementType, MapElement
from indoor_map.models.ids import generate_id


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TemplateCategory(str, Enum):
    """Building category a map or template belongs to."""

    STATION = "station"
    SHOPPING = "shopping"
    OFFICE = "office"
    HOSPITAL = "hospital"
    AIRPORT = "airport"
    EDUCATION = "education"
    PARKING = "parking"
    CUSTOM = "custom"


class Floor(BaseModel):
    """One story of the building. Level may be negative for basements."""

    id: str = Field(default_factory=generate_id)
    level: Optional[int] = None
    name: str = ""
    height: Optional[float] = Field(default=None, description="Floor height in meters")
    elements: list[MapElement] = Field(default_factory=list)
    connections: list[ElementConnection] = Field(default_factory=list)

    def get_element(self, element_id: str) -> MapElement | None:
        """Find an element by id."""
        return next((e for e in self.elements if e.id == element_id), None)

    def element_types(self) -> set[ElementType]:
        """Distinct element types placed on this floor."""
        return {e.type for e in self.elements if e.type is not None}


class Location(BaseModel):
    latitude: float
    longitude: float
    address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None


class MapMetadata(BaseModel):
    """Map-wide dimensions (planar units) and descriptive data."""

    model_config = ConfigDict(populate_by_name=True)

    total_width: Optional[float] = Field(default=None, alias="totalWidth")
    total_height: Optional[float] = Field(default=None, alias="totalHeight")
    total_floors: Optional[int] = Field(default=None, alias="totalFloors")
    tags: list[str] = Field(default_factory=list)
    location: Optional[Location] = None


class Rating(BaseModel):
    average: float = 0.0
    count: int = 0


class Statistics(BaseModel):
    views: int = 0
    uses: int = 0
    shares: int = 0


class MapData(BaseModel):
    """A complete (or partially built) indoor map."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=generate_id)
    name: str = ""
    description: Optional[str] = None
    category: TemplateCategory = TemplateCategory.CUSTOM
    floors: Optional[list[Floor]] = None
    metadata: Optional[MapMetadata] = None
    created_by: str = Field(default="", alias="createdBy")
    created_at: datetime = Field(default_factory=_utcnow, alias="createdAt")
    updated_at: datetime = Field(default_factory=_utcnow, alias="updatedAt")
    version: int = 1
    is_published: bool = Field(default=False, alias="isPublished")
    is_template: bool = Field(default=False, alias="isTemplate")
    rating: Optional[Rating] = None
    statistics: Optional[Statistics] = None

    # ── File I/O ──────────────────────────────────────────────────────

    @classmethod
    def load(cls, path: str | Path) -> MapData:
        """Load a map from a JSON file."""
        path = Path(path)
        return cls.model_validate_json(path.read_text())

    def save(self, path: str | Path) -> Path:
        """Save the map to a JSON file. Creates parent dirs if needed."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(indent=2, by_alias=True))
        return path

    def to_document(self) -> dict:
        """JSON-compatible dict using the editor's camelCase field names."""
        return json.loads(self.model_dump_json(by_alias=True, exclude_none=True))

    # ── Lookups ───────────────────────────────────────────────────────

    def get_floor(self, level: int) -> Floor | None:
        """Find a floor by level."""
        return next((f for f in self.floors or [] if f.level == level), None)

    def all_elements(self) -> list[MapElement]:
        """Every element on every floor, in floor order."""
        return [e for f in self.floors or [] for e in f.elements]

    def element_types(self) -> set[ElementType]:
        """Distinct element types across all floors."""
        types: set[ElementType] = set()
        for floor in self.floors or []:
            types |= floor.element_types()
        return types


class TemplateMetadata(BaseModel):
    width: float
    height: float
    floors: int = 1
    tags: list[str] = Field(default_factory=list)


class MapTemplate(BaseModel):
    """A reusable starting layout offered by the template catalog."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=generate_id)
    name: str
    category: TemplateCategory
    description: str = ""
    thumbnail: Optional[str] = None
    preview_url: Optional[str] = Field(default=None, alias="previewUrl")
    elements: list[MapElement] = Field(default_factory=list)
    metadata: TemplateMetadata
    is_official: bool = Field(default=False, alias="isOfficial")
    is_premium: bool = Field(default=False, alias="isPremium")


class MapSaveRequest(BaseModel):
    """What an editor submits when saving a new map."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: Optional[str] = None
    category: TemplateCategory = TemplateCategory.CUSTOM
    floors: list[Floor] = Field(default_factory=list)
    metadata: MapMetadata = Field(default_factory=MapMetadata)
    is_published: bool = Field(default=False, alias="isPublished")
    is_template: bool = Field(default=False, alias="isTemplate")
