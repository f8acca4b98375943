"""Map validation.

- map: dimension bounds, floor/element/connection ceilings, required types
"""

from indoor_map.validators.map import (
    DEFAULT_RULES,
    MapValidationResult,
    ValidationRules,
    is_valid_element,
    validate_map,
)

__all__ = [
    "DEFAULT_RULES",
    "MapValidationResult",
    "ValidationRules",
    "is_valid_element",
    "validate_map",
]
