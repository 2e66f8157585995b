"""
Translators for leaf schema nodes: string, number, boolean, literal and enum.

Each translator takes the unwrapped node and its definition record and builds a
fresh OpenAPI fragment. Length bounds are emitted as `minimum`/`maximum` too,
consumers of the generated documents rely on that shape.
"""
import json
from collections.abc import Iterable, Mapping
from typing import Any, Dict, List, Optional, Tuple

from .probes import (
    MISSING,
    ProbeChain,
    is_defined,
    is_non_empty_collection,
    is_number,
    is_sequence,
    on_def,
    on_node,
    read_field,
    read_path,
)

CHECKS = ProbeChain(on_def("checks"), on_node("_def", "checks"), accept=is_sequence, name="checks")


def _tags(check: Any) -> set:
    tags = (read_field(check, "kind"), read_field(check, "check"), read_path(check, "def", "type"))
    return {tag for tag in tags if isinstance(tag, str)}


def _tagged_value(tag: str):
    """Accessor for `{kind|check|def.type: tag, value: n}` constraints."""
    def accessor(check: Any, _definition: Any = None) -> Any:
        return read_field(check, "value") if tag in _tags(check) else MISSING
    return accessor


def _zod_check(check_name: str, key: str):
    """Accessor for constraints that keep their definition under `_zod.def`."""
    def accessor(check: Any, _definition: Any = None) -> Any:
        zod_def = read_path(check, "_zod", "def")
        if read_field(zod_def, "check") != check_name:
            return MISSING
        return read_field(zod_def, key)
    return accessor


STRING_MIN = ProbeChain(_tagged_value("min"), on_node("def", "minLength"), _zod_check("min_length", "minimum"), accept=is_number, name="string_min")
STRING_MAX = ProbeChain(_tagged_value("max"), on_node("def", "maxLength"), _zod_check("max_length", "maximum"), accept=is_number, name="string_max")
NUMBER_MIN = ProbeChain(_tagged_value("min"), on_node("def", "minValue"), _zod_check("greater_than", "value"), accept=is_number, name="number_min")
NUMBER_MAX = ProbeChain(_tagged_value("max"), on_node("def", "maxValue"), _zod_check("less_than", "value"), accept=is_number, name="number_max")

LITERAL_VALUE = ProbeChain(
    on_def("value"),
    on_def("_def", "value"),
    on_node("_def", "value"),
    on_node("value"),
    accept=is_defined,
    name="literal_value",
)

ENUM_VALUES = ProbeChain(
    on_node("_def", "values"),
    on_node("_def", "options"),
    on_node("values"),
    on_node("options"),
    on_def("values"),
    on_def("options"),
    on_def("_def", "values"),
    on_def("_def", "options"),
    on_def("entries"),
    on_node("enum"),
    on_def("enum"),
    accept=is_non_empty_collection,
    name="enum_values",
)


def _is_constraint(check: Any) -> bool:
    return check is not None and not isinstance(check, (str, bytes, int, float, bool))


def constraints_of(node: Any, definition: Any) -> List[Any]:
    return list(CHECKS.first(node, definition, default=()))


def extract_bounds(checks: Iterable[Any], min_chain: ProbeChain, max_chain: ProbeChain) -> Tuple[Optional[float], Optional[float]]:
    """Scans constraints in order; a later bound overrides an earlier one."""
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    for check in checks:
        if not _is_constraint(check):
            continue
        candidate_min = min_chain.first(check)
        candidate_max = max_chain.first(check)
        if candidate_min is not None:
            minimum = candidate_min
        if candidate_max is not None:
            maximum = candidate_max
    return minimum, maximum


def _serialize_check(check: Any) -> str:
    try:
        return json.dumps(check, default=lambda o: getattr(o, "__dict__", repr(o)), sort_keys=True)
    except (TypeError, ValueError): # circular or unserialisable constraint objects
        return repr(check)


def is_integer_check(check: Any) -> bool:
    if check == "int":
        return True
    if not _is_constraint(check):
        return False
    return "int" in _tags(check) or "int" in _serialize_check(check)


def unique_values(values: Iterable[Any]) -> List[Any]:
    """De-duplicates keeping first-seen order; 1 and True stay distinct."""
    unique: List[Any] = []
    for value in values:
        if not any(type(value) is type(seen) and value == seen for seen in unique):
            unique.append(value)
    return unique


def _with_bounds(base: Dict[str, Any], minimum: Optional[float], maximum: Optional[float]) -> Dict[str, Any]:
    out = dict(base)
    if minimum is not None:
        out["minimum"] = minimum
    if maximum is not None:
        out["maximum"] = maximum
    return out


def translate_string(node: Any, definition: Any) -> Dict[str, Any]:
    minimum, maximum = extract_bounds(constraints_of(node, definition), STRING_MIN, STRING_MAX)
    return _with_bounds({"type": "string"}, minimum, maximum)


def translate_number(node: Any, definition: Any) -> Dict[str, Any]:
    checks = constraints_of(node, definition)
    minimum, maximum = extract_bounds(checks, NUMBER_MIN, NUMBER_MAX)
    is_integer = any(is_integer_check(check) for check in checks)
    return _with_bounds({"type": "integer" if is_integer else "number"}, minimum, maximum)


def translate_boolean(node: Any, definition: Any) -> Dict[str, Any]:
    return {"type": "boolean"}


def literal_values(node: Any, definition: Any) -> List[Any]:
    value = LITERAL_VALUE.first(node, definition, default=MISSING)
    if value is not MISSING:
        return [value]
    # Newer definitions keep literals as a list of allowed values.
    values = read_field(definition, "values")
    if isinstance(values, (list, tuple, set, frozenset)):
        return list(values)
    return []


def translate_literal(node: Any, definition: Any) -> Dict[str, Any]:
    values = literal_values(node, definition)
    if not values:
        return {}
    if all(isinstance(value, str) for value in values):
        return {"type": "string", "enum": values}
    return {"enum": values}


def enum_values(node: Any, definition: Any) -> List[Any]:
    found = ENUM_VALUES.first(node, definition, default=())
    if isinstance(found, Mapping):
        found = found.values()
    return unique_values(found)


def translate_enum(node: Any, definition: Any) -> Dict[str, Any]:
    return {"type": "string", "enum": enum_values(node, definition)}
