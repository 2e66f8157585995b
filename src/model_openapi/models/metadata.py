"""Per-field metadata supplied by the host data model."""
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

Bound = Optional[Union[int, float]]


class FieldMetadata(BaseModel):
    """
    Annotations a host model declares for one field: required flag, description,
    property kind and numeric/length bounds.

    Validation is lenient: values of the wrong type are dropped to None
    instead of failing the whole model.
    """
    model_config = ConfigDict(
        extra="ignore", # host configs carry many unrelated keys (choices, defaults, ...)
        populate_by_name=True,
        frozen=True,
    )

    required: bool = False
    description: Optional[str] = None
    property_type: Optional[str] = Field(default=None, alias="propertyType")
    min_value: Bound = Field(default=None, alias="minValue")
    max_value: Bound = Field(default=None, alias="maxValue")
    min_length: Bound = Field(default=None, alias="minLength")
    max_length: Bound = Field(default=None, alias="maxLength")

    @field_validator("required", mode="before")
    @classmethod
    def coerce_required(cls, value: Any) -> bool:
        return bool(value)

    @field_validator("description", "property_type", mode="before")
    @classmethod
    def drop_non_text(cls, value: Any) -> Optional[str]:
        return value if isinstance(value, str) else None

    @field_validator("min_value", "max_value", "min_length", "max_length", mode="before")
    @classmethod
    def drop_non_numeric(cls, value: Any) -> Bound:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        return value

    @property
    def is_object_property(self) -> bool:
        return self.property_type == "Object"
