"""Unit tests for the build graph."""

import io

import pytest
from pathlib import Path

from manifix.core.exceptions import GraphError, ValidationError
from manifix.graph import (
    BuildParams,
    InMemoryBuildGraph,
    Rule,
    escape,
    escape_path,
    join_with_prefix,
    write_ninja,
)

COPY = Rule(name="copy", command="cp $flags $in $out", command_deps=("cp",), arg_names=("flags",))


def node(output="out/a.txt", **kwargs):
    return BuildParams(rule=COPY, input=Path("a.txt"), output=Path(output), **kwargs)


class TestBuildParams:
    """Tests for command rendering."""

    def test_command(self):
        """Test substitution of $in, $out and node arguments."""
        params = node(args={"flags": "-p"})
        assert params.command() == "cp -p a.txt out/a.txt"

    def test_missing_argument_renders_empty(self):
        """Test that unset arguments render as nothing."""
        assert node().command() == "cp a.txt out/a.txt"

    def test_escaped_dollar(self):
        """Test that $$ in argument values reaches the shell as $."""
        params = node(args={"flags": "$$(cat v.txt)"})
        assert params.command() == "cp $(cat v.txt) a.txt out/a.txt"

    def test_braced_variable(self):
        """Test ${name} references in templates."""
        rule = Rule(name="echo", command="echo ${in}>${out}")
        params = BuildParams(rule=rule, input=Path("x"), output=Path("y"))
        assert params.command() == "echo x>y"


class TestInMemoryBuildGraph:
    """Tests for node registration."""

    def test_register_and_lookup(self, graph):
        """Test that nodes are returned in registration order."""
        first, second = node("out/1"), node("out/2")
        graph.build(first)
        graph.build(second)
        assert graph.nodes() == [first, second]
        assert graph.node_for(Path("out/2")) is second
        assert graph.node_for(Path("out/3")) is None
        assert len(graph) == 2

    def test_output_owned_by_one_node(self, graph):
        """Test that a second producer of an output is rejected."""
        graph.build(node("out/1"))
        with pytest.raises(GraphError) as exc_info:
            graph.build(node("out/1", description="again"))
        assert exc_info.value.output == "out/1"
        assert len(graph) == 1

    def test_unknown_argument(self, graph):
        """Test that arguments must be declared by the rule."""
        with pytest.raises(ValidationError):
            graph.build(node(args={"libs": "x"}))
        assert graph.nodes() == []


class TestNinja:
    """Tests for ninja serialization."""

    def test_write_ninja(self):
        """Test rule and build statements.

        The rule block is written once even when several nodes share it,
        and implicit inputs follow the '|' separator.
        """
        graph = InMemoryBuildGraph()
        graph.build(node("out/1", description="copy one", implicits=(Path("dep.txt"),), args={"flags": "-p"}))
        graph.build(node("out/2", description="copy two"))

        stream = io.StringIO()
        assert write_ninja(graph, stream) == 2
        text = stream.getvalue()

        assert text.count("rule copy\n") == 1
        assert "  command = cp $flags $in $out\n" in text
        assert "build out/1: copy a.txt | dep.txt cp\n  description = copy one\n  flags = -p\n" in text
        assert "build out/2: copy a.txt | cp\n  description = copy two\n  flags = \n" in text

    def test_escape_path(self):
        """Test escaping of ninja special characters in paths."""
        assert escape_path("a b:c$d") == "a$ b$:c$$d"


def test_escape():
    """Test that escaped values render back to the original text."""
    assert escape("a$b$$c") == "a$$b$$$$c"
    assert node(args={"flags": escape("-D$HOME")}).command() == "cp -D$HOME a.txt out/a.txt"


def test_join_with_prefix():
    """Test prefix joining used for --libs."""
    assert join_with_prefix(["a", "b"], "--libs ") == "--libs a --libs b"
    assert join_with_prefix([], "--libs ") == ""
