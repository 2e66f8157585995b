"""
Node introspection: finds the definition record of a schema node, classifies
it into a canonical NodeKind and strips modifier wrappers.

Two naming conventions are understood: a capitalised `typeName` tag
("ZodOptional") and a lower-case string `type` tag ("optional").
"""
from enum import Enum
from typing import Any, NamedTuple, Optional

import structlog

from .probes import ProbeChain, is_present, on_def, on_node

logger = structlog.get_logger(__name__)


class NodeKind(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    LITERAL = "literal"
    ENUM = "enum"
    OBJECT = "object"
    ARRAY = "array"
    UNION = "union"
    RECORD = "record"
    DATE = "date"
    OPTIONAL = "optional"
    NULLABLE = "nullable"
    DEFAULT = "default"
    NULLISH = "nullish"
    UNKNOWN = "unknown"

    @property
    def is_modifier(self) -> bool:
        return self in MODIFIER_KINDS


MODIFIER_KINDS = frozenset({NodeKind.OPTIONAL, NodeKind.NULLABLE, NodeKind.DEFAULT, NodeKind.NULLISH})

_KIND_BY_TAG = {
    "string": NodeKind.STRING,
    "number": NodeKind.NUMBER,
    "boolean": NodeKind.BOOLEAN,
    "literal": NodeKind.LITERAL,
    "enum": NodeKind.ENUM,
    "nativeenum": NodeKind.ENUM,
    "object": NodeKind.OBJECT,
    "array": NodeKind.ARRAY,
    "union": NodeKind.UNION,
    "record": NodeKind.RECORD,
    "date": NodeKind.DATE,
    "optional": NodeKind.OPTIONAL,
    "nullable": NodeKind.NULLABLE,
    "default": NodeKind.DEFAULT,
    "nullish": NodeKind.NULLISH,
}


class Classification(NamedTuple):
    kind: NodeKind
    definition: Any


def normalize_tag(raw: Any) -> str:
    """'ZodNativeEnum' -> 'nativeenum', 'optional' -> 'optional', anything else -> ''."""
    if not isinstance(raw, str):
        return ""
    tag = raw[3:] if raw.startswith("Zod") and len(raw) > 3 else raw
    return tag.lower()


def _is_known_tag(value: Any) -> bool:
    return normalize_tag(value) in _KIND_BY_TAG


DEFINITION = ProbeChain(on_node("_def"), on_node("def"), accept=is_present, name="definition")
TYPE_TAG = ProbeChain(on_def("type"), on_def("typeName"), accept=_is_known_tag, name="type_tag")


def definition_of(node: Any) -> Optional[Any]:
    return DEFINITION.first(node)


def is_schema_node(value: Any) -> bool:
    """A value looks like a schema node when it carries a definition record."""
    return definition_of(value) is not None


def classify(node: Any) -> Classification:
    definition = definition_of(node)
    if definition is None:
        return Classification(NodeKind.UNKNOWN, None)
    tag = TYPE_TAG.first(node, definition)
    kind = _KIND_BY_TAG.get(normalize_tag(tag), NodeKind.UNKNOWN)
    return Classification(kind, definition)


INNER_NODE = ProbeChain(
    on_def("innerType"),
    on_def("type"),
    on_def("schema"),
    on_def("payload"),
    on_def("value"),
    on_def("inner"),
    on_def("_def", "inner"),
    on_def("_def", "type"),
    accept=is_schema_node,
    name="inner_node",
)


def unwrap(node: Any) -> Any:
    """Strips optional/nullable/default/nullish wrappers until a concrete node remains.

    Stops at a fixpoint (no inner node, or the same node again) and when a
    wrapper chain loops back onto a node already seen.
    """
    current = node
    seen = {id(node)}
    while True:
        kind, definition = classify(current)
        if not kind.is_modifier:
            return current
        inner = INNER_NODE.first(current, definition)
        if inner is None or inner is current:
            logger.debug("Modifier without a distinct inner node; stopping unwrap.", kind=kind.value)
            return current
        if id(inner) in seen:
            logger.debug("Cyclic modifier chain; stopping unwrap.", kind=kind.value)
            return current
        seen.add(id(inner))
        current = inner
