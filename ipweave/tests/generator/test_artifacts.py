"""Tests for artifact trees."""

import pytest

from ipweave.generator.artifacts import ArtifactTree, leaves


def test_leaves_in_insertion_order():
    tree = {"b": "1", "regmap": {"csr": {"x-base": "2"}, "P": "3"}}
    assert leaves(tree) == [
        (("b",), "1"),
        (("regmap", "csr", "x-base"), "2"),
        (("regmap", "P"), "3"),
    ]


def test_merge_combines_nested_trees():
    tree = ArtifactTree(base={"regmap": {"P": "p"}}, user={"A": "a"})
    other = ArtifactTree(base={"regmap": {"mm": {"blk-base": "b"}}}, user={"B": "b"})
    assert tree.merge(other) is tree
    assert tree.base == {"regmap": {"P": "p", "mm": {"blk-base": "b"}}}
    assert tree.user == {"A": "a", "B": "b"}


def test_merge_rejects_duplicates():
    tree = ArtifactTree(base={"regmap": {"P": "p"}})
    with pytest.raises(ValueError, match="artifact 'regmap/P' is generated twice"):
        tree.merge(ArtifactTree(base={"regmap": {"P": "q"}}))


def test_iter_leaves_lists_base_before_user():
    tree = ArtifactTree(base={"X-base": "x"}, user={"X": "y"})
    assert list(tree.iter_leaves()) == [("base", ("X-base",), "x"), ("user", ("X",), "y")]
