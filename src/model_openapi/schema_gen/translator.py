"""
Recursive schema translator: walks a validation-schema tree and builds the
equivalent OpenAPI schema object, merging host field metadata on the way.

The walk never raises for malformed trees; unresolvable pieces come out as
emptier schemas (`{}` at worst).
"""
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Tuple

import structlog

from ..models.metadata import FieldMetadata
from .introspection import NodeKind, classify, is_schema_node, unwrap
from .metadata_merge import apply_bounds, inline_description, rescue_object_property, with_description
from .primitives import (
    enum_values,
    literal_values,
    translate_boolean,
    translate_enum,
    translate_literal,
    translate_number,
    translate_string,
    unique_values,
)
from .probes import ProbeChain, is_present, is_text, on_def, on_node

logger = structlog.get_logger(__name__)


def _is_shape_candidate(value: Any) -> bool:
    return isinstance(value, Mapping) or callable(value)


SHAPE = ProbeChain(on_node("shape"), on_def("shape"), on_def("properties"), accept=_is_shape_candidate, name="shape")
OBJECT_DESCRIPTION = ProbeChain(
    on_def("_def", "description"),
    on_def("def", "description"),
    on_def("description"),
    on_node("description"),
    accept=is_text,
    name="object_description",
)
ARRAY_ELEMENT = ProbeChain(
    on_def("element"),
    on_def("inner"),
    on_def("schema"),
    on_def("type"),
    on_node("_def", "element"),
    on_node("_def", "inner"),
    on_node("_def", "schema"),
    accept=is_schema_node,
    name="array_element",
)
UNION_OPTIONS = ProbeChain(
    on_def("options"),
    on_node("options"),
    on_node("_def", "options"),
    accept=is_present,
    name="union_options",
)
RECORD_VALUE = ProbeChain(
    on_node("_def", "valueType"),
    on_node("_def", "value"),
    on_node("_def", "type"),
    on_def("valueType"),
    on_def("value"),
    on_def("type"),
    on_def("_def", "valueType"),
    on_def("_def", "value"),
    on_def("_def", "type"),
    on_def("_def", "element"),
    on_def("element"),
    accept=is_schema_node,
    name="record_value",
)


class SchemaTranslator:
    """
    Translates one schema tree. Instances hold the field metadata table and the
    set of nodes on the current recursion path; create one per conversion.
    """

    def __init__(self, field_metadata: Optional[Mapping[str, FieldMetadata]] = None):
        self.field_metadata: Dict[str, FieldMetadata] = dict(field_metadata or {})
        self._active: set[int] = set()

    def translate(self, schema: Any, depth: int = 0) -> Dict[str, Any]:
        node = unwrap(schema)
        kind, definition = classify(node)
        marker = id(node)
        if marker in self._active:
            logger.debug("Schema node re-entered on its own path; emitting empty schema.", kind=kind.value, depth=depth)
            return {}
        self._active.add(marker)
        try:
            return self._dispatch(kind, node, definition, depth)
        finally:
            self._active.discard(marker)

    def _dispatch(self, kind: NodeKind, node: Any, definition: Any, depth: int) -> Dict[str, Any]:
        if kind is NodeKind.STRING:
            return translate_string(node, definition)
        if kind is NodeKind.NUMBER:
            return translate_number(node, definition)
        if kind is NodeKind.BOOLEAN:
            return translate_boolean(node, definition)
        if kind is NodeKind.LITERAL:
            return translate_literal(node, definition)
        if kind is NodeKind.ENUM:
            return translate_enum(node, definition)
        if kind is NodeKind.OBJECT:
            return self._translate_object(node, definition, depth)
        if kind is NodeKind.ARRAY:
            return self._translate_array(node, definition, depth)
        if kind is NodeKind.UNION:
            return self._translate_union(node, definition)
        if kind is NodeKind.RECORD:
            return self._translate_record(node, definition, depth)
        # Dates, unresolved wrappers and everything unmodelled.
        logger.debug("No translation for schema kind; emitting empty schema.", kind=kind.value, depth=depth)
        return {}

    # --- objects ---

    def _resolve_shape(self, node: Any, definition: Any) -> Dict[Any, Any]:
        for candidate in SHAPE.candidates(node, definition):
            if callable(candidate) and not isinstance(candidate, Mapping):
                try:
                    candidate = candidate()
                except Exception: # shape accessors belong to the schema library
                    logger.debug("Shape accessor failed; trying next candidate.", exc_info=True)
                    continue
            if isinstance(candidate, Mapping) and candidate:
                return dict(candidate)
        return {}

    def _translate_field(self, key: Any, child: Any, depth: int) -> Tuple[Dict[str, Any], bool]:
        """Returns the merged field schema and whether the field is required."""
        translated = self.translate(child, depth + 1) or {}
        metadata = self.field_metadata.get(key)
        merged = with_description(translated, metadata, inline_description(child, unwrap(child)), depth)

        rescued = rescue_object_property(merged, metadata)
        if rescued is not None:
            return rescued, bool(metadata.required and depth == 0)

        return apply_bounds(merged, metadata), not classify(child).kind.is_modifier

    def _translate_object(self, node: Any, definition: Any, depth: int) -> Dict[str, Any]:
        shape = self._resolve_shape(node, definition)
        if not shape:
            return {"type": "object"}

        properties: Dict[Any, Dict[str, Any]] = {}
        required: List[Any] = []
        for key, child in shape.items():
            properties[key], is_required = self._translate_field(key, child, depth)
            if is_required:
                required.append(key)

        out: Dict[str, Any] = {"type": "object", "properties": properties, "additionalProperties": False}
        description = OBJECT_DESCRIPTION.first(node, definition)
        if description:
            out["description"] = description
        # Only the root object lists its required fields.
        if required and depth == 0:
            out["required"] = required
        return out

    # --- arrays, unions, records ---

    def _translate_array(self, node: Any, definition: Any, depth: int) -> Dict[str, Any]:
        element = ARRAY_ELEMENT.first(node, definition)
        items = self.translate(element, depth + 1) if element is not None else {}
        return {"type": "array", "items": items}

    def _union_options(self, node: Any, definition: Any) -> List[Any]:
        options = UNION_OPTIONS.first(node, definition)
        if isinstance(options, Mapping):
            return list(options.values())
        if isinstance(options, (list, tuple)):
            return list(options)
        return []

    def _translate_union(self, node: Any, definition: Any) -> Dict[str, Any]:
        options = self._union_options(node, definition)

        collected: List[Any] = []
        all_literals = True
        for option in options:
            concrete = unwrap(option)
            kind, option_definition = classify(concrete)
            if kind is NodeKind.LITERAL:
                values = literal_values(concrete, option_definition)
            elif kind is NodeKind.ENUM:
                values = enum_values(concrete, option_definition)
            else:
                all_literals = False
                break
            if not values:
                all_literals = False
                break
            collected.extend(values)

        if all_literals and collected:
            unique = unique_values(collected)
            if all(isinstance(value, str) for value in unique):
                return {"type": "string", "enum": unique}

        option_kinds = {classify(option).kind for option in options}
        if NodeKind.DATE in option_kinds or {NodeKind.STRING, NodeKind.NUMBER} <= option_kinds:
            return {"type": "string"}
        logger.debug("Ambiguous union left untyped.", option_kinds=sorted(k.value for k in option_kinds))
        return {}

    def _translate_record(self, node: Any, definition: Any, depth: int) -> Dict[str, Any]:
        value_type = RECORD_VALUE.first(node, definition)
        # Record values are translated as roots of their own.
        value_schema = self.translate(value_type) if value_type is not None else {}
        return {"type": "object", "additionalProperties": value_schema}
