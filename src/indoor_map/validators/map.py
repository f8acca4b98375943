"""Map-level validation.

Checks a (possibly partial) map against a rule set: dimension bounds,
floor count, element and connection ceilings, and required element types.
Every check runs; violations are collected as readable strings so the
caller sees all of them at once. Nothing here raises for a bad map.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from indoor_map.errors import MapValidationError
from indoor_map.models.elements import ElementType, MapElement
from indoor_map.models.map import MapData


class ValidationRules(BaseModel):
    """Bounds a map must satisfy. Dimensions are in planar units."""

    model_config = ConfigDict(populate_by_name=True)

    min_width: float = Field(default=10, alias="minWidth")
    max_width: float = Field(default=1000, alias="maxWidth")
    min_height: float = Field(default=10, alias="minHeight")
    max_height: float = Field(default=1000, alias="maxHeight")
    max_floors: int = Field(default=20, alias="maxFloors")
    max_elements: int = Field(default=1000, alias="maxElements")
    max_connections: int = Field(default=2000, alias="maxConnections")
    required_elements: list[ElementType] = Field(
        default_factory=lambda: [ElementType.ENTRANCE], alias="requiredElements"
    )

    @classmethod
    def load(cls, path: str | Path) -> ValidationRules:
        """Load a rule set from a JSON file. Missing keys keep their defaults."""
        path = Path(path)
        return cls.model_validate_json(path.read_text())


DEFAULT_RULES = ValidationRules()


@dataclass
class MapValidationResult:
    """Outcome of validating a map."""

    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def raise_if_invalid(self) -> None:
        if self.errors:
            raise MapValidationError(self.errors)

    def to_dict(self) -> dict:
        return {"is_valid": self.is_valid, "errors": list(self.errors)}


def _fmt(value: float) -> str:
    return f"{value:g}"


def _is_number(value: object) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def is_valid_element(element: MapElement) -> bool:
    """An element needs an id, a type, finite coordinates, a positive size and a floor."""
    return bool(
        element.id
        and element.type is not None
        and _is_number(element.x)
        and _is_number(element.y)
        and _is_number(element.width)
        and element.width > 0
        and _is_number(element.height)
        and element.height > 0
        and isinstance(element.floor, int)
    )


def validate_map(
    map_data: MapData,
    rules: ValidationRules | None = None,
) -> MapValidationResult:
    """Validate a map against ``rules`` (defaults when omitted).

    Absent metadata fields are skipped, not reported. Floor, element,
    count and required-type checks run only when the map has a floor list
    (an empty list counts). Required types are looked up across all floors.
    """
    rules = rules or DEFAULT_RULES
    errors: list[str] = []

    metadata = map_data.metadata
    if metadata is not None:
        width, height = metadata.total_width, metadata.total_height
        if width is not None and not rules.min_width <= width <= rules.max_width:
            errors.append(
                f"Map width must be between {_fmt(rules.min_width)} "
                f"and {_fmt(rules.max_width)}"
            )
        if height is not None and not rules.min_height <= height <= rules.max_height:
            errors.append(
                f"Map height must be between {_fmt(rules.min_height)} "
                f"and {_fmt(rules.max_height)}"
            )
        if metadata.total_floors is not None and metadata.total_floors > rules.max_floors:
            errors.append(f"Map cannot have more than {rules.max_floors} floors")

    if map_data.floors is None:
        return MapValidationResult(errors=errors)

    total_elements = 0
    total_connections = 0
    found_types: set[ElementType] = set()

    for index, floor in enumerate(map_data.floors):
        if floor.level is None:
            errors.append(f"Floor at index {index} must have a level")
        if not floor.name:
            errors.append(f"Floor at index {index} must have a name")

        total_elements += len(floor.elements)
        for element in floor.elements:
            if element.type is not None:
                found_types.add(element.type)
            if not is_valid_element(element):
                errors.append(f"Invalid element {element.id} on floor {floor.level}")

        total_connections += len(floor.connections)

    if total_elements > rules.max_elements:
        errors.append(f"Map cannot have more than {rules.max_elements} elements")
    if total_connections > rules.max_connections:
        errors.append(f"Map cannot have more than {rules.max_connections} connections")

    for required in rules.required_elements:
        if required not in found_types:
            errors.append(f"Map must have at least one {required.value} element")

    return MapValidationResult(errors=errors)
