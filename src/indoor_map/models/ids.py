"""Map and floor identifier generation.

Identifiers are 22-character compressed GUIDs: short enough to read in a
JSON document, unique enough to be created offline by any editor.
Connection ids are not generated here; they are derived from the ids of
the two elements they join.
"""

from __future__ import annotations

import uuid

import ifcopenshell.guid


def generate_id() -> str:
    """Generate a new unique identifier (22 characters)."""
    return ifcopenshell.guid.compress(uuid.uuid4().hex)

