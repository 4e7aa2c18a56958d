# --- File: app/schemas/common/base.py ---
"""
Base schema classes with common fields and configurations.

Field names are snake_case in Python and camelCase on the wire; input is
accepted under either name.
"""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

__all__ = [
    "BaseSchema",
    "BaseCreateSchema",
    "BaseUpdateSchema",
    "BaseResponseSchema",
]


class BaseSchema(BaseModel):
    """
    Base schema with common Pydantic configuration.

    All application-facing schemas inherit from this to ensure
    consistent behaviour.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
        # Keep enums as Enum instances; JSON output uses their values.
        use_enum_values=False,
        str_strip_whitespace=True,
        validate_assignment=True,
    )

    def to_wire(self) -> dict:
        """JSON-ready dict using camelCase names."""
        return self.model_dump(mode="json", by_alias=True)


class BaseCreateSchema(BaseSchema):
    """Base schema for create operations."""
    pass


class BaseUpdateSchema(BaseSchema):
    """
    Base schema for update operations.

    Subclasses declare their fields as Optional[...] with ``None`` defaults;
    services apply only the fields the client sent
    (``model_dump(exclude_unset=True)``). Fields listed in
    ``non_nullable_fields`` back NOT NULL columns, so an explicit ``null``
    for them is rejected here rather than at flush time.
    """

    non_nullable_fields: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        nulled = [
            name for name in self.non_nullable_fields
            if name in self.model_fields_set and getattr(self, name) is None
        ]
        if nulled:
            raise ValueError(f"{', '.join(to_camel(name) for name in nulled)} cannot be null")
        return self


class BaseResponseSchema(BaseSchema):
    """Base schema for API responses of database entities."""

    id: str = Field(..., description="Unique identifier")
    created_at: Optional[datetime] = Field(default=None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(default=None, description="Last update timestamp")
