"""
Build graph interface.

Defines the rule and node types handed to the build graph and the abstract
registration interface, enabling pluggable graph backends (in-memory, ninja).
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from pathlib import Path

from pydantic import BaseModel, Field

from ..core.exceptions import GraphError, ValidationError

_VARIABLE = re.compile(r"\$(\$|\{[A-Za-z_][A-Za-z0-9_]*\}|[A-Za-z_][A-Za-z0-9_]*)")


def escape(value: str) -> str:
    """Escape a literal value for use as a ninja variable."""
    return value.replace("$", "$$")


def unescape(value: str) -> str:
    """Undo ninja ``$$`` escaping."""
    return value.replace("$$", "$")


def join_with_prefix(items: list[str], prefix: str) -> str:
    """Join items with a space, prefixing each one.

    >>> join_with_prefix(["a.xml", "b.xml"], "--libs ")
    '--libs a.xml --libs b.xml'
    """
    return " ".join(prefix + item for item in items)


class Rule(BaseModel):
    """A command template shared by many build nodes.

    The command references ``$in``, ``$out`` and the node arguments listed in
    ``arg_names`` as ``$name``. A literal dollar sign is written ``$$``.
    """

    name: str = Field(description="Rule identifier")
    command: str = Field(description="Command template")
    command_deps: tuple[str, ...] = Field(default=(), description="Tools the command runs")
    arg_names: tuple[str, ...] = Field(default=(), description="Per-node variables")

    model_config = {"frozen": True}


class BuildParams(BaseModel):
    """One file-producing step in the build graph."""

    rule: Rule
    description: str = ""
    input: Path
    implicits: tuple[Path, ...] = ()
    output: Path
    args: dict[str, str] = Field(default_factory=dict)

    model_config = {"frozen": True}

    def command(self) -> str:
        """Render the rule template for this node as a shell command."""
        values = {"in": str(self.input), "out": str(self.output)}
        values.update({name: unescape(self.args.get(name, "")) for name in self.rule.arg_names})

        def substitute(match: re.Match[str]) -> str:
            token = match.group(1)
            if token == "$":
                return "$"
            return values.get(token.strip("{}"), "")

        return " ".join(_VARIABLE.sub(substitute, self.rule.command).split())


class BuildGraph(ABC):
    """Abstract build graph backend."""

    def validate(self, params: BuildParams) -> None:
        """Check a node before registration.

        Raises:
            ValidationError: If the node passes arguments its rule does not declare.
            GraphError: If another node already produces the same output.
        """
        unknown = sorted(set(params.args) - set(params.rule.arg_names))
        if unknown:
            raise ValidationError(
                message=f"rule {params.rule.name!r} has no arguments named {', '.join(unknown)}",
                field_name="args",
                actual_value=unknown,
            )
        existing = self.node_for(params.output)
        if existing is not None:
            raise GraphError(
                message=f"output already produced by a {existing.rule.name!r} node",
                output=str(params.output),
            )

    @abstractmethod
    def build(self, params: BuildParams) -> None:
        """Register a node.

        Args:
            params: The node to add. It owns ``params.output`` exclusively.
        """
        ...

    @abstractmethod
    def nodes(self) -> list[BuildParams]:
        """All registered nodes in registration order."""
        ...

    @abstractmethod
    def node_for(self, output: Path) -> BuildParams | None:
        """Get the node producing an output.

        Args:
            output: Output path to look up.

        Returns:
            The producing node if registered, None otherwise.
        """
        ...
