"""Tests for command registration and path resolution."""

import pytest

from chatroute.commands.models import CommandDescriptor, Walk
from chatroute.commands.tree import CommandTree
from chatroute.models import StructuralError


def empty(request, router):
    pass


@pytest.fixture
def tree(test_logger):
    tree = CommandTree(test_logger)
    tree.register("a", empty)
    tree.register("a aa", empty)
    tree.register("a aa aaa", empty)
    tree.register("b", empty)
    return tree


def test_top_level_registration(test_logger):
    tree = CommandTree(test_logger)
    tree.register("test", empty)
    tree.register("anotherTest", empty)
    tree.add(CommandDescriptor("test2", empty))
    assert tree.names() == ["test", "anotherTest", "test2"]
    assert len(tree) == 3
    for name in tree:
        node = tree.roots[name]
        assert node.handler is empty
        assert node.children == {}
        assert node.help is None
        assert node.path == (name,)


def test_subcommand_needs_parent(test_logger):
    tree = CommandTree(test_logger)
    with pytest.raises(StructuralError) as exc:
        tree.register("test this", empty)
    assert exc.value.path == ("test", "this")
    assert tree.roots == {}


def test_subcommands(test_logger):
    tree = CommandTree(test_logger)
    tree.register("test", empty)
    tree.register("test this", empty)
    tree.register("test this script", empty)
    script = tree.roots["test"].children["this"].children["script"]
    assert script.name == "script"
    assert script.path == ("test", "this", "script")
    assert "test this script" in tree
    assert "test that" not in tree


def test_register_empty_path(test_logger):
    with pytest.raises(StructuralError):
        CommandTree(test_logger).register("   ", empty)


def test_overwrite_drops_children(test_logger):
    tree = CommandTree(test_logger)
    tree.register("test", empty)
    tree.register("test this", empty)

    def other(request, router):
        pass

    tree.register("test", other)
    assert tree.roots["test"].handler is other
    assert tree.roots["test"].children == {}


def test_set_help(test_logger):
    tree = CommandTree(test_logger)
    with pytest.raises(StructuralError):
        tree.set_help("test", "Help!")
    tree.register("test", empty)
    tree.register("test this", empty)
    tree.set_help("test", "Help!")
    tree.set_help("test this", "Help!")
    assert tree.roots["test"].help == "Help!"
    assert tree.roots["test"].children["this"].help == "Help!"
    tree.register("test2", empty, "Help!")
    assert tree.roots["test2"].help == "Help!"


def test_descriptor_with_children(test_logger):
    tree = CommandTree(test_logger)

    def reset(request, router):
        pass

    tree.add(
        CommandDescriptor(
            "count",
            empty,
            help="Counts",
            children=[CommandDescriptor("reset", reset, help="Resets", children=[CommandDescriptor("all", reset)])],
        )
    )
    node = tree.strict_walk(["count", "reset", "all"])
    assert node.path == ("count", "reset", "all")
    assert tree.roots["count"].children["reset"].help == "Resets"


def test_descriptor_child_single_segment(test_logger):
    tree = CommandTree(test_logger)
    descriptor = CommandDescriptor("count", empty, children=[CommandDescriptor("reset all", empty)])
    with pytest.raises(StructuralError):
        tree.add(descriptor)
    assert "count" not in tree


def test_strict_walk(tree):
    assert tree.strict_walk(["a"]) is tree.roots["a"]
    assert tree.strict_walk(["b"]) is tree.roots["b"]
    assert tree.strict_walk(["a", "aa"]) is tree.roots["a"].children["aa"]
    assert tree.strict_walk(["a", "aa", "aaa"]) is tree.roots["a"].children["aa"].children["aaa"]


@pytest.mark.parametrize("segments", [["z"], ["a", "b"], ["a", "aa", "aaa", "b"], []])
def test_strict_walk_fails(tree, segments):
    with pytest.raises(StructuralError):
        tree.strict_walk(segments)


def test_permissive_walk_no_args(tree):
    assert tree.permissive_walk(["a"]) == Walk(("a",), tree.roots["a"])
    aa = tree.roots["a"].children["aa"]
    assert tree.permissive_walk(["a", "aa"]) == Walk(("a", "aa"), aa)
    assert tree.permissive_walk(["a", "aa", "aaa"]) == Walk(("a", "aa", "aaa"), aa.children["aaa"])


def test_permissive_walk_with_args(tree):
    assert tree.permissive_walk(["a", "b", "c"]) == Walk(("a",), tree.roots["a"])
    assert tree.permissive_walk(["b", "c"]) == Walk(("b",), tree.roots["b"])
    assert tree.permissive_walk(["a", "aa", "b", "c"]).through == ("a", "aa")


def test_permissive_walk_no_match(tree):
    assert tree.permissive_walk(["z", "a", "aa"]) == Walk((), None)
    assert tree.permissive_walk([]) == Walk()
