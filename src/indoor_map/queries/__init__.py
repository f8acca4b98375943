"""Derived data over floors.

- connections: adjacency-based connection inference between elements
"""

from indoor_map.queries.connections import (
    are_adjacent,
    center_distance,
    classify_connection,
    connect_elements,
    detect_connections,
    ensure_connections,
    walking_time,
)

__all__ = [
    "are_adjacent",
    "center_distance",
    "classify_connection",
    "connect_elements",
    "detect_connections",
    "ensure_connections",
    "walking_time",
]
