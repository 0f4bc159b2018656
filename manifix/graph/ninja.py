"""
Ninja serialization of registered build nodes.

Writes one ``rule`` block per distinct rule followed by one ``build`` statement
per node, e.g.::

    rule manifestFixer
      command = manifest_fixer $args $in $out
      description = ${description}

    build out/Foo/manifest_fixer/AndroidManifest.xml: manifestFixer Foo/AndroidManifest.xml | manifest_fixer
      description = fix manifest
      args = --library
"""

from __future__ import annotations

from pathlib import Path
from typing import TextIO

from .interface import BuildGraph, Rule


def escape_path(path: Path | str) -> str:
    """Escape a path for use in a ninja build statement."""
    return str(path).replace("$", "$$").replace(" ", "$ ").replace(":", "$:")


def _write_rule(rule: Rule, stream: TextIO) -> None:
    stream.write(f"rule {rule.name}\n")
    stream.write(f"  command = {rule.command}\n")
    stream.write("  description = ${description}\n\n")


def write_ninja(graph: BuildGraph, stream: TextIO) -> int:
    """Write every node of a graph in ninja syntax.

    Args:
        graph: Graph whose nodes to serialize.
        stream: Destination text stream.

    Returns:
        Number of build statements written.
    """
    written_rules: set[str] = set()
    count = 0
    for node in graph.nodes():
        if node.rule.name not in written_rules:
            _write_rule(node.rule, stream)
            written_rules.add(node.rule.name)

        implicit = [escape_path(p) for p in node.implicits]
        implicit += [escape_path(dep) for dep in node.rule.command_deps]
        line = f"build {escape_path(node.output)}: {node.rule.name} {escape_path(node.input)}"
        if implicit:
            line += " | " + " ".join(implicit)
        stream.write(line + "\n")
        stream.write(f"  description = {node.description}\n")
        for name in node.rule.arg_names:
            # Services store argument values with $ already escaped as $$.
            stream.write(f"  {name} = {node.args.get(name, '')}\n")
        stream.write("\n")
        count += 1
    return count
