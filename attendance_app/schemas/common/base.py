# --- File: attendance_app/schemas/common/base.py ---
"""
Base schema classes with common configurations.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

__all__ = [
    "BaseSchema",
    "FrozenSchema",
    "BaseFilterSchema",
]


class BaseSchema(BaseModel):
    """
    Base schema with common Pydantic configuration.

    All application-facing schemas should ideally inherit from this to ensure
    consistent behaviour (aliases, validation, enum handling).
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        # Keep enums as Enum instances to retain full type information;
        # callers can still access `.value` if needed.
        use_enum_values=False,
        str_strip_whitespace=True,
        validate_assignment=True,
    )


class FrozenSchema(BaseSchema):
    """
    Immutable value schema.

    Used for snapshot data and computed results that must never be
    mutated after construction (records, buckets, summaries).
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        use_enum_values=False,
        str_strip_whitespace=True,
        frozen=True,
    )


class BaseFilterSchema(BaseSchema):
    """Base schema for filter parameters."""
    pass
