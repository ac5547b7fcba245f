"""Tests for schema tree traversal and parameter flattening."""

import pytest

from ipweave.errors import SchemaShapeError
from ipweave.model.param_schema import ParamNode
from ipweave.schema.walker import (
    ParamLeaf,
    flatten_params,
    mapping_children,
    param_children,
    reduce,
    walk,
)

TREE = {"aw": {"valid": 1, "bits": {"addr": "addrWidth"}}, "irq": -1}


class TestWalk:
    def test_visit_order(self):
        events = []
        walk(
            TREE,
            enter=lambda node, path: events.append(("enter", path)),
            leaf=lambda node, path: events.append(("leaf", path)),
            leave=lambda node, path: events.append(("leave", path)),
        )
        assert events == [
            ("enter", ()),
            ("enter", ("aw",)),
            ("enter", ("aw", "valid")),
            ("leaf", ("aw", "valid")),
            ("leave", ("aw", "valid")),
            ("enter", ("aw", "bits")),
            ("enter", ("aw", "bits", "addr")),
            ("leaf", ("aw", "bits", "addr")),
            ("leave", ("aw", "bits", "addr")),
            ("leave", ("aw", "bits")),
            ("leave", ("aw",)),
            ("enter", ("irq",)),
            ("leaf", ("irq",)),
            ("leave", ("irq",)),
            ("leave", ()),
        ]

    def test_leaf_only(self):
        leaves = []
        walk(TREE, leaf=lambda node, path: leaves.append((path, node)))
        assert leaves == [
            (("aw", "valid"), 1),
            (("aw", "bits", "addr"), "addrWidth"),
            (("irq",), -1),
        ]

    def test_scalar_root_is_a_leaf(self):
        leaves = []
        walk(5, leaf=lambda node, path: leaves.append((path, node)))
        assert leaves == [((), 5)]


class TestReduce:
    def test_lists_are_flattened_and_none_skipped(self):
        result = reduce(
            TREE,
            leaf=lambda node, path: [path[-1], path[-1]] if path[-1] == "irq" else None,
        )
        assert result == ["irq", "irq"]

    def test_scalars_are_appended(self):
        assert reduce(TREE, leaf=lambda node, path: ".".join(path)) == [
            "aw.valid",
            "aw.bits.addr",
            "irq",
        ]

    def test_identical_trees_reduce_identically(self):
        first = reduce(TREE, enter=lambda node, path: ".".join(path))
        second = reduce(dict(TREE), enter=lambda node, path: ".".join(path))
        assert first == second

    def test_children_functions(self):
        assert mapping_children(3) is None
        assert list(mapping_children({"a": 1})) == [("a", 1)]
        leaf = ParamNode(type="integer", default=1)
        assert param_children(leaf) is None
        assert param_children({"a": 1}) is None


class TestFlattenParams:
    def test_nested_names_are_joined(self):
        schema = ParamNode.model_validate(
            {
                "type": "object",
                "properties": {
                    "dataWidth": {"type": "integer", "default": 32},
                    "fifo": {
                        "type": "object",
                        "properties": {
                            "depth": {"type": "integer", "default": 4},
                            "mode": {"type": "integer"},
                        },
                    },
                },
            }
        )
        assert flatten_params(schema) == [
            ParamLeaf(path=("dataWidth",), name="dataWidth", default=32),
            ParamLeaf(path=("fifo", "depth"), name="fifo_depth", default=4),
            ParamLeaf(path=("fifo", "mode"), name="fifo_mode", default=None),
        ]

    def test_missing_default(self):
        leaf = ParamLeaf(path=("w",), name="w")
        assert not leaf.has_default
        assert ParamLeaf(path=("w",), name="w", default=0).has_default

    def test_no_schema(self):
        assert flatten_params(None) == []

    def test_empty_object(self):
        assert flatten_params(ParamNode(type="object")) == []

    def test_duplicate_flattened_names(self):
        schema = ParamNode.model_validate(
            {
                "type": "object",
                "properties": {
                    "a_b": {"type": "integer"},
                    "a": {"type": "object", "properties": {"b": {"type": "integer"}}},
                },
            }
        )
        with pytest.raises(SchemaShapeError, match="duplicate parameter name 'a_b'"):
            flatten_params(schema)

    def test_integer_root_rejected(self):
        with pytest.raises(SchemaShapeError, match="root must be an object"):
            flatten_params(ParamNode(type="integer", default=3))
