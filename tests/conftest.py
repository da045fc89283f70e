"""Pytest fixtures shared by the forest tests."""

import pytest

from dataknobs_forest import Branch, Forest, Leaf


@pytest.fixture
def nodes():
    """The individual nodes of the sample forest, by name."""
    value_a = Leaf(5)
    value_b = Leaf(6)
    value_c = Leaf(7)
    empty_dir = Branch("emptyDir")
    empty_subdir = Branch("emptySubdir")
    subdir = Branch("subdir", (value_c, empty_subdir))
    non_empty_dir = Branch("nonEmptyDir", (value_b, subdir))
    return {
        "value_a": value_a,
        "value_b": value_b,
        "value_c": value_c,
        "empty_dir": empty_dir,
        "empty_subdir": empty_subdir,
        "subdir": subdir,
        "non_empty_dir": non_empty_dir,
    }


@pytest.fixture
def trees(nodes):
    # emptyDir, 5, nonEmptyDir(6, subdir(7, emptySubdir))
    return (nodes["empty_dir"], nodes["value_a"], nodes["non_empty_dir"])


@pytest.fixture
def forest(trees):
    return Forest(trees)
