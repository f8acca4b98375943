"""Connection inference between elements on one floor.

Two elements are connected when their rectangles touch (within a small
tolerance) along a shared edge and neither of them is an obstacle. The
connection type comes from the element types, in priority order:

    stairs > elevator > escalator > shop (door) > walkable

Vertical transport always gets the ``*_up`` variant; direction between
floors is not inferred.

The scan is pairwise over the floor's elements in list order (``i < j``),
so connection ids and endpoint order are stable across runs.
"""

from __future__ import annotations

import logging
import math

from indoor_map.models.elements import (
    ConnectionType,
    ElementConnection,
    ElementType,
    MapElement,
)
from indoor_map.models.map import Floor

logger = logging.getLogger(__name__)

ADJACENCY_TOLERANCE = 5.0  # planar units
UNITS_PER_METER = 10.0
WALKING_SPEED = 1.4  # m/s

# First match wins.
_TYPE_PRIORITY: list[tuple[ElementType, ConnectionType]] = [
    (ElementType.STAIRS, ConnectionType.STAIRS_UP),
    (ElementType.ELEVATOR, ConnectionType.ELEVATOR_UP),
    (ElementType.ESCALATOR, ConnectionType.ESCALATOR_UP),
    (ElementType.SHOP, ConnectionType.DOOR),
]


# ── Geometry ─────────────────────────────────────────────────────────


def are_adjacent(
    a: MapElement,
    b: MapElement,
    tolerance: float = ADJACENCY_TOLERANCE,
) -> bool:
    """Check whether two rectangles touch along a vertical or horizontal edge.

    Side by side: the vertical extents overlap and the right edge of one
    is within ``tolerance`` of the left edge of the other.
    Stacked: same test with the axes swapped. Elements without
    position or size never touch anything.
    """
    if not (a.has_geometry and b.has_geometry):
        return False
    side_by_side = abs(a.y - b.y) < a.height + b.height and (
        abs(a.right - b.x) < tolerance or abs(b.right - a.x) < tolerance
    )
    stacked = abs(a.x - b.x) < a.width + b.width and (
        abs(a.bottom - b.y) < tolerance or abs(b.bottom - a.y) < tolerance
    )
    return side_by_side or stacked


def center_distance(a: MapElement, b: MapElement) -> float:
    """Distance between rectangle centres, in meters."""
    return a.center.distance_to(b.center) / UNITS_PER_METER


def walking_time(distance: float) -> int:
    """Seconds to walk ``distance`` meters, rounded half up."""
    return math.floor(distance / WALKING_SPEED + 0.5)


# ── Classification ───────────────────────────────────────────────────


def classify_connection(
    type_a: ElementType | None,
    type_b: ElementType | None,
) -> ConnectionType | None:
    """Connection type for a pair of element types, or None if either is an obstacle."""
    pair = (type_a, type_b)
    if any(t is not None and t.is_obstacle for t in pair):
        return None

    for element_type, connection_type in _TYPE_PRIORITY:
        if element_type in pair:
            return connection_type
    return ConnectionType.WALKABLE


def connect_elements(a: MapElement, b: MapElement) -> ElementConnection | None:
    """Build the connection from ``a`` to ``b``, or None if they don't connect."""
    if a.floor is None or b.floor is None or a.floor != b.floor:
        return None

    connection_type = classify_connection(a.type, b.type)
    if connection_type is None:
        return None

    if not are_adjacent(a, b):
        return None

    distance = center_distance(a, b)
    return ElementConnection(
        id=f"{a.id}-{b.id}",
        from_element_id=a.id,
        to_element_id=b.id,
        type=connection_type,
        distance=distance,
        time=walking_time(distance),
        accessible=a.is_wheelchair_accessible and b.is_wheelchair_accessible,
        bidirectional=True,
    )


# ── Floor-level entry points ─────────────────────────────────────────


def detect_connections(floor: Floor) -> list[ElementConnection]:
    """Infer every connection between the elements of a floor.

    Never fails: an empty floor, or one without adjacent pairs, yields an
    empty list. The floor is not modified.
    """
    elements = floor.elements
    connections: list[ElementConnection] = []

    for i, first in enumerate(elements):
        for second in elements[i + 1 :]:
            connection = connect_elements(first, second)
            if connection is not None:
                connections.append(connection)

    logger.debug(
        "Floor %s: %d elements, %d connections inferred",
        floor.level, len(elements), len(connections),
    )
    return connections


def ensure_connections(floor: Floor) -> Floor:
    """Return a copy of ``floor`` that carries connections.

    Explicit connections win: a floor that already lists any is returned
    as-is (copied), without merging inferred ones in.
    """
    if floor.connections:
        return floor.model_copy(deep=True)
    return floor.model_copy(
        update={"connections": detect_connections(floor)}, deep=True
    )
