"""
Unit tests for the probe-chain helpers.
"""
from types import SimpleNamespace

import pytest

from model_openapi.schema_gen.probes import (
    MISSING,
    ProbeChain,
    is_defined,
    is_number,
    on_def,
    on_node,
    read_field,
    read_path,
)


class ExplodingAttribute:
    @property
    def value(self):
        raise RuntimeError("partial node")


def test_read_field_from_mapping_and_attribute():
    assert read_field({"a": 1}, "a") == 1
    assert read_field(SimpleNamespace(a=2), "a") == 2
    assert read_field({"a": 1}, "b") is MISSING
    assert read_field(SimpleNamespace(), "b") is MISSING


def test_read_field_never_raises():
    assert read_field(None, "a") is MISSING
    assert read_field(MISSING, "a") is MISSING
    assert read_field("optional", "innerType") is MISSING
    assert read_field(ExplodingAttribute(), "value") is MISSING


def test_read_path_stops_at_first_missing_step():
    node = {"_def": SimpleNamespace(inner={"type": "string"})}
    assert read_path(node, "_def", "inner", "type") == "string"
    assert read_path(node, "_def", "missing", "type") is MISSING


def test_missing_is_falsy_and_distinct_from_none():
    assert not MISSING
    assert MISSING is not None
    assert repr(MISSING) == "MISSING"


def test_probe_chain_returns_first_accepted_value():
    chain = ProbeChain(on_def("innerType"), on_def("schema"), on_node("inner"))
    node = {"inner": "from-node"}
    assert chain.first(node, {"schema": "from-def"}) == "from-def"
    assert chain.first(node, {}) == "from-node"
    assert chain.first({}, {}) is None
    assert chain.first({}, {}, default="fallback") == "fallback"


def test_probe_chain_default_predicate_skips_none():
    chain = ProbeChain(on_def("a"), on_def("b"))
    assert chain.first({}, {"a": None, "b": 0}) == 0


def test_probe_chain_with_custom_predicate():
    numbers = ProbeChain(on_def("a"), on_def("b"), accept=is_number)
    assert numbers.first({}, {"a": "3", "b": 3}) == 3
    assert numbers.first({}, {"a": True}) is None

    defined = ProbeChain(on_def("value"), accept=is_defined)
    assert defined.first({}, {"value": None}, default=MISSING) is None
    assert defined.first({}, {}, default=MISSING) is MISSING


def test_probe_chain_candidates_are_ordered():
    chain = ProbeChain(on_def("a"), on_def("b"), on_def("c"))
    assert list(chain.candidates({}, {"c": 3, "a": 1})) == [1, 3]


def test_probe_chain_repr_lists_paths():
    chain = ProbeChain(on_def("_def", "inner"), on_node("value"), name="inner")
    assert repr(chain) == "inner(definition._def.inner, node.value)"


def test_field_path_rejects_unknown_root():
    from model_openapi.schema_gen.probes import FieldPath
    with pytest.raises(ValueError):
        FieldPath("parent", ("a",))
