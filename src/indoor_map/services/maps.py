"""Save-time preparation of maps.

Composes validation and connection inference the way a persistence
layer needs them: build a map from an editor request, validate it,
backfill connections on floors that have none, and apply owner-checked
updates. Storage itself is left to the caller; everything here returns
new ``MapData`` objects and never touches the inputs.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Iterable

from indoor_map.errors import MapOwnershipError, MapValidationError
from indoor_map.models.geometry import haversine_km
from indoor_map.models.map import (
    Floor,
    MapData,
    MapMetadata,
    MapSaveRequest,
    TemplateCategory,
)
from indoor_map.queries.connections import ensure_connections
from indoor_map.validators.map import ValidationRules, validate_map

logger = logging.getLogger(__name__)

DEFAULT_MAP_WIDTH = 500.0
DEFAULT_MAP_HEIGHT = 500.0


def create_empty_map(name: str, created_by: str) -> MapData:
    """A new map with a single empty ground floor."""
    return MapData(
        name=name,
        category=TemplateCategory.CUSTOM,
        floors=[Floor(level=0, name="Ground Floor")],
        metadata=MapMetadata(
            total_width=DEFAULT_MAP_WIDTH,
            total_height=DEFAULT_MAP_HEIGHT,
            total_floors=1,
        ),
        created_by=created_by,
    )


def build_map(request: MapSaveRequest, created_by: str) -> MapData:
    """Turn a save request into a map, filling metadata defaults.

    Zero or missing dimensions fall back to 500; the floor count always
    reflects the floors actually submitted.
    """
    meta = request.metadata
    return MapData(
        name=request.name,
        description=request.description,
        category=request.category,
        floors=[f.model_copy(deep=True) for f in request.floors],
        metadata=MapMetadata(
            total_width=meta.total_width or DEFAULT_MAP_WIDTH,
            total_height=meta.total_height or DEFAULT_MAP_HEIGHT,
            total_floors=len(request.floors),
            tags=list(meta.tags),
            location=meta.location,
        ),
        created_by=created_by,
        is_published=request.is_published,
        is_template=request.is_template,
    )


def prepare_map(map_data: MapData, rules: ValidationRules | None = None) -> MapData:
    """Validate a map and backfill missing connections.

    Raises:
        MapValidationError: the map breaks one or more rules. The message
            lists every violation.
    """
    result = validate_map(map_data, rules)
    if not result.is_valid:
        logger.warning("Map %s failed validation: %s", map_data.id, result.errors)
        raise MapValidationError(result.errors)

    floors = [ensure_connections(f) for f in map_data.floors or []]
    prepared = map_data.model_copy(update={"floors": floors}, deep=True)
    logger.info(
        "Prepared map %s: %d floors, %d connections",
        prepared.id, len(floors), sum(len(f.connections) for f in floors),
    )
    return prepared


def apply_update(
    existing: MapData,
    updates: dict[str, Any],
    user_id: str,
    rules: ValidationRules | None = None,
) -> MapData:
    """Apply field updates to a map owned by ``user_id``.

    ``updates`` uses MapData field names. The version is bumped and
    ``updated_at`` refreshed. When floors change, the merged map is
    validated and the new floors get their connections backfilled.

    Raises:
        MapOwnershipError: ``user_id`` is not the map's creator.
        MapValidationError: updated floors make the map invalid.
    """
    if existing.created_by != user_id:
        raise MapOwnershipError(f"Unauthorized to update map {existing.id}")

    merged = MapData.model_validate(
        {**existing.model_dump(), **updates}
    )

    if "floors" in updates:
        result = validate_map(merged, rules)
        if not result.is_valid:
            logger.warning("Update of map %s rejected: %s", existing.id, result.errors)
            raise MapValidationError(result.errors)
        merged.floors = [ensure_connections(f) for f in merged.floors or []]

    merged.version = existing.version + 1
    merged.updated_at = datetime.now(timezone.utc)
    return merged


def toggle_published(existing: MapData, user_id: str) -> MapData:
    """Flip the published flag of a map owned by ``user_id``."""
    return apply_update(existing, {"is_published": not existing.is_published}, user_id)


def maps_within_radius(
    maps: Iterable[MapData],
    latitude: float,
    longitude: float,
    radius_km: float,
) -> list[MapData]:
    """Maps whose location lies within ``radius_km`` of a point.

    Maps without a location are left out.
    """
    nearby = []
    for m in maps:
        location = m.metadata.location if m.metadata else None
        if location is None:
            continue
        if haversine_km(latitude, longitude, location.latitude, location.longitude) <= radius_km:
            nearby.append(m)
    return nearby
