"""Pipeline support module (catalog validation)."""

from src.pipeline.validation import validate_catalog

__all__ = [
    "validate_catalog",
]
