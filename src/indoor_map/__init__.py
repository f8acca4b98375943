"""Indoor map data model, validation and connection inference."""

__version__ = "0.1.0"
