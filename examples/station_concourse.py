"""Small station concourse: end-to-end walk through the library.

One floor, 10 px = 1 m:

    +----------+----------+----------+
    | entrance | corridor | elevator |
    +----------+----------+----------+
    |  shop    |  stairs  |  pillar  |
    +----------+----------+----------+

Builds the map, validates it, infers connections and writes the result.
"""

from pathlib import Path

from indoor_map.models import (
    Accessibility,
    ElementType,
    Floor,
    MapElement,
    MapMetadata,
    MapSaveRequest,
    TemplateCategory,
)
from indoor_map.services.maps import build_map, prepare_map
from indoor_map.validators.map import validate_map

CELL_W = 100
CELL_H = 60

LAYOUT = [
    [ElementType.ENTRANCE, ElementType.CORRIDOR, ElementType.ELEVATOR],
    [ElementType.SHOP, ElementType.STAIRS, ElementType.PILLAR],
]

elements = []
for row, types in enumerate(LAYOUT):
    for col, element_type in enumerate(types):
        elements.append(
            MapElement(
                id=f"{element_type.value}-{row}{col}",
                type=element_type,
                x=col * CELL_W,
                y=row * CELL_H,
                width=CELL_W,
                height=CELL_H,
                floor=0,
                accessibility=(
                    Accessibility(wheelchair=False)
                    if element_type == ElementType.STAIRS
                    else None
                ),
            )
        )

request = MapSaveRequest(
    name="Small Station",
    category=TemplateCategory.STATION,
    metadata=MapMetadata(total_width=3 * CELL_W, total_height=2 * CELL_H, tags=["demo"]),
    floors=[Floor(level=0, name="Concourse", elements=elements)],
)

map_data = build_map(request, created_by="demo")

result = validate_map(map_data)
print(f"Valid: {result.is_valid}")
for error in result.errors:
    print(f"  - {error}")

prepared = prepare_map(map_data)
for conn in prepared.floors[0].connections:
    print(
        f"{conn.from_element_id:>14} -> {conn.to_element_id:<14} "
        f"{conn.type.value:<12} {conn.distance:5.1f} m {conn.time:3d} s "
        f"{'accessible' if conn.accessible else ''}"
    )

out = prepared.save(Path(__file__).parent / "output" / "small_station.json")
print(f"Saved to {out}")
