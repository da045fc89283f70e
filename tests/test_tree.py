import dataclasses

import pytest

import dataknobs_forest.tree as dk_tree


def test_leaf_and_branch_basics():
    leaf = dk_tree.Leaf(5)
    branch = dk_tree.Branch("dir", [leaf, dk_tree.Leaf(6)])
    assert leaf.value == 5
    assert branch.value == "dir"
    assert branch.children == (dk_tree.Leaf(5), dk_tree.Leaf(6))
    assert branch.children[0] is leaf
    assert dk_tree.is_tree_leaf(leaf)
    assert not dk_tree.is_tree_branch(leaf)
    assert dk_tree.is_tree_branch(branch)
    assert not dk_tree.is_tree_leaf(branch)


def test_empty_branch_is_not_a_leaf():
    empty = dk_tree.Branch("emptyDir")
    assert empty.children == ()
    assert dk_tree.is_tree_branch(empty)
    assert empty != dk_tree.Leaf("emptyDir")


def test_nodes_are_immutable():
    leaf = dk_tree.Leaf(5)
    with pytest.raises(dataclasses.FrozenInstanceError):
        leaf.value = 6
    branch = dk_tree.Branch("dir", [leaf])
    with pytest.raises(dataclasses.FrozenInstanceError):
        branch.children = ()


def test_structural_equality():
    a = dk_tree.Branch("dir", [dk_tree.Leaf(1), dk_tree.Branch("sub")])
    b = dk_tree.Branch("dir", (dk_tree.Leaf(1), dk_tree.Branch("sub", [])))
    assert a == b
    assert a != dk_tree.Branch("dir", [dk_tree.Leaf(2), dk_tree.Branch("sub")])


def test_build_tree_from_list():
    tree = dk_tree.build_tree_from_list(["subdir", 7, ["emptySubdir"]])
    assert tree == dk_tree.Branch("subdir", [dk_tree.Leaf(7), dk_tree.Branch("emptySubdir")])
    assert dk_tree.build_tree_from_list("x") == dk_tree.Leaf("x")
    with pytest.raises(ValueError):
        dk_tree.build_tree_from_list([])


def test_build_trees_from_list():
    trees = dk_tree.build_trees_from_list([["a", 1], 2])
    assert trees == (dk_tree.Branch("a", [dk_tree.Leaf(1)]), dk_tree.Leaf(2))
