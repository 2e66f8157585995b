"""
Entry points that turn a host data model (or a bare schema tree) into an
OpenAPI schema object.

A host model exposes `get_model_definition()` returning an object or mapping
with `schema` (the root validation-schema node) and `properties` (field name
-> property object with `get_config()` and `get_property_type()`).
"""
from collections.abc import Mapping
from typing import Any, Dict, Optional

from ..models.metadata import FieldMetadata
from .probes import MISSING, read_field
from .translator import SchemaTranslator


def read_model_definition(model: Any) -> Any:
    """Returns the model definition, or None when the model exposes none."""
    getter = read_field(model, "get_model_definition")
    if callable(getter):
        return getter()
    definition = read_field(model, "model_definition")
    return None if definition is MISSING else definition


def read_model_schema(model: Any) -> Any:
    schema = read_field(read_model_definition(model), "schema")
    return None if schema is MISSING else schema


def _call_or(prop: Any, name: str, fallback: Any) -> Any:
    accessor = read_field(prop, name)
    return accessor() if callable(accessor) else fallback


def extract_field_metadata(model: Any) -> Dict[str, FieldMetadata]:
    """Builds one FieldMetadata per declared property: its config plus its property kind."""
    properties = read_field(read_model_definition(model), "properties")
    if not isinstance(properties, Mapping):
        return {}

    metadata: Dict[str, FieldMetadata] = {}
    for name, prop in properties.items():
        config = _call_or(prop, "get_config", {})
        entry: Dict[str, Any] = dict(config) if isinstance(config, Mapping) else {}
        property_type = _call_or(prop, "get_property_type", None)
        if property_type is not None:
            entry["propertyType"] = property_type
        metadata[name] = FieldMetadata.model_validate(entry)
    return metadata


def schema_to_openapi(schema: Any, field_metadata: Optional[Mapping[str, FieldMetadata]] = None) -> Dict[str, Any]:
    """Translates a schema tree from its root. Non-object roots are returned as they come out."""
    return SchemaTranslator(field_metadata).translate(schema, depth=0)


def model_to_openapi(model: Any) -> Dict[str, Any]:
    return schema_to_openapi(read_model_schema(model), extract_field_metadata(model))
