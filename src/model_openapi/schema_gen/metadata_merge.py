"""
Merges host-supplied FieldMetadata into structurally derived field schemas.

Precedence:
- description: metadata wins at depth 0, the node's inline description elsewhere
- bounds: metadata overwrites minimum/maximum on number, integer and string schemas
- free-form object fields: metadata `propertyType == "Object"` replaces an empty result
"""
from typing import Any, Dict, Optional

from ..models.metadata import FieldMetadata
from .probes import ProbeChain, is_text, on_node

_OWN_DESCRIPTION = ProbeChain(on_node("description"), on_node("_def", "description"), on_node("def", "description"), accept=is_text)
_WRAPPER_DESCRIPTION = ProbeChain(on_node("_def", "description"), on_node("def", "description"), accept=is_text)


def inline_description(child: Any, unwrapped: Any) -> Optional[str]:
    """Description attached to the concrete node, else to the wrapper around it."""
    return _OWN_DESCRIPTION.first(unwrapped) or _WRAPPER_DESCRIPTION.first(child)


def with_description(schema: Dict[str, Any], metadata: Optional[FieldMetadata], inline: Optional[str], depth: int) -> Dict[str, Any]:
    if metadata is not None and metadata.description and depth == 0:
        return {**schema, "description": metadata.description}
    if inline:
        return {**schema, "description": inline}
    return schema


def is_untyped_object(schema: Dict[str, Any]) -> bool:
    return (
        schema.get("type") == "object"
        and not schema.get("properties")
        and schema.get("additionalProperties") in (None, False)
    )


def rescue_object_property(schema: Dict[str, Any], metadata: Optional[FieldMetadata]) -> Optional[Dict[str, Any]]:
    """Replacement schema for a declared object field whose structure was not resolvable."""
    if metadata is None or not metadata.is_object_property:
        return None
    if schema and not is_untyped_object(schema):
        return None
    if metadata.required:
        return {"type": "object"}
    return {"type": "object", "nullable": True}


def apply_bounds(schema: Dict[str, Any], metadata: Optional[FieldMetadata]) -> Dict[str, Any]:
    if metadata is None:
        return schema
    schema_type = schema.get("type")
    if schema_type in ("number", "integer"):
        minimum, maximum = metadata.min_value, metadata.max_value
    elif schema_type == "string":
        minimum, maximum = metadata.min_length, metadata.max_length
    else:
        return schema

    out = dict(schema)
    if minimum is not None:
        out["minimum"] = minimum
    if maximum is not None:
        out["maximum"] = maximum
    return out
