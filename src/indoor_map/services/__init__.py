"""Save-time map preparation."""

from indoor_map.services.maps import (
    apply_update,
    build_map,
    create_empty_map,
    maps_within_radius,
    prepare_map,
    toggle_published,
)

__all__ = [
    "apply_update",
    "build_map",
    "create_empty_map",
    "maps_within_radius",
    "prepare_map",
    "toggle_published",
]
