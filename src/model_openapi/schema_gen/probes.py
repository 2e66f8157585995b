"""
Probe chains: ordered fallback lookups over schema nodes whose internal field
names differ between versions of the schema library.

A probe chain is a list of accessors tried in sequence; the first value the
chain accepts wins. Accessors never raise, absent fields come back as MISSING.
"""
from collections.abc import Callable, Iterator, Mapping
from typing import Any, Optional


class _Missing:
    """Sentinel for a field that is not present at all (distinct from None)."""

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()

Accessor = Callable[[Any, Any], Any]
Predicate = Callable[[Any], bool]


def read_field(obj: Any, name: str) -> Any:
    """Reads `name` from a mapping key or an attribute, MISSING when absent."""
    if obj is None or obj is MISSING:
        return MISSING
    if isinstance(obj, Mapping):
        try:
            return obj[name] if name in obj else MISSING
        except TypeError: # unhashable or odd mapping keys
            return MISSING
    try:
        return getattr(obj, name)
    except Exception: # computed attributes on partial nodes may fail with anything
        return MISSING


def read_path(obj: Any, *names: str) -> Any:
    for name in names:
        obj = read_field(obj, name)
        if obj is MISSING:
            return MISSING
    return obj


class FieldPath:
    """Accessor reading a dotted path from either the node or its definition record."""

    def __init__(self, root: str, names: tuple[str, ...]):
        if root not in ("node", "definition"):
            raise ValueError(f"Unknown probe root: {root}")
        self.root = root
        self.names = names

    def __call__(self, node: Any, definition: Any = None) -> Any:
        start = node if self.root == "node" else definition
        return read_path(start, *self.names)

    def __repr__(self) -> str:
        return f"{self.root}.{'.'.join(self.names)}"


def on_node(*names: str) -> FieldPath:
    return FieldPath("node", names)


def on_def(*names: str) -> FieldPath:
    return FieldPath("definition", names)


# Acceptance predicates

def is_present(value: Any) -> bool:
    return value is not MISSING and value is not None


def is_defined(value: Any) -> bool:
    return value is not MISSING


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value)


def is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_non_empty_collection(value: Any) -> bool:
    return isinstance(value, (list, tuple, Mapping)) and len(value) > 0


class ProbeChain:
    """An ordered sequence of accessors; the first accepted value wins."""

    def __init__(self, *accessors: Accessor, accept: Predicate = is_present, name: Optional[str] = None):
        self.accessors = accessors
        self.accept = accept
        self.name = name

    def candidates(self, node: Any, definition: Any = None) -> Iterator[Any]:
        """Yields every accepted value, in accessor order."""
        for accessor in self.accessors:
            value = accessor(node, definition)
            if self.accept(value):
                yield value

    def first(self, node: Any, definition: Any = None, default: Any = None) -> Any:
        return next(self.candidates(node, definition), default)

    def __repr__(self) -> str:
        label = self.name or "ProbeChain"
        return f"{label}({', '.join(repr(a) for a in self.accessors)})"
