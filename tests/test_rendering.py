import graphviz

from dataknobs_forest import Branch, Forest, Leaf, RenderConfig
from dataknobs_forest.rendering import DEFAULT_RENDER_CONFIG, build_dot, render_trees


def test_render_trees_matches_str(forest):
    assert render_trees(forest.trees) == str(forest)
    assert render_trees(forest.trees, DEFAULT_RENDER_CONFIG) == forest.to_string()


def test_render_single_nested_chain():
    forest = Forest([Branch("a", [Branch("b", [Leaf("c")])])])
    assert str(forest) == "└a\n └b\n  └c"


def test_render_with_config(forest):
    config = RenderConfig(tee="+", last="`", pipe="|", blank=".", value_formatter=repr)
    assert "\n" + forest.to_string(config) == """
+'emptyDir'
+5
`'nonEmptyDir'
.+6
.`'subdir'
..+7
..`'emptySubdir'"""


def test_render_config_defaults():
    config = RenderConfig()
    assert (config.tee, config.last, config.pipe, config.blank) == ("├", "└", "│", " ")
    assert config.value_formatter(5) == "5"


def test_build_dot(forest):
    dot = forest.build_dot(name="Forest")
    assert isinstance(dot, graphviz.Digraph)
    source = dot.source
    assert "N_0 [label=emptyDir]" in source
    assert "N_2_1_1 [label=emptySubdir]" in source
    assert "N_2 -> N_2_0" in source
    assert "N_2_1 -> N_2_1_1" in source
    assert "N_0 ->" not in source


def test_build_dot_with_node_names(trees):
    dot = build_dot(trees, node_name_fn=lambda tree: f"[{tree.value}]")
    assert 'label="[subdir]"' in dot.source


def test_build_dot_deep_chain():
    tree = Leaf("bottom")
    for value in range(3000):
        tree = Branch(value, [tree])
    source = build_dot([tree]).source
    assert source.count("->") == 3000
    assert "N_0 [label=2999]" in source
