"""Build graph abstraction for manifix."""

from .interface import BuildGraph, BuildParams, Rule, escape, join_with_prefix, unescape
from .memory import InMemoryBuildGraph
from .ninja import escape_path, write_ninja

__all__ = [
    "BuildGraph",
    "BuildParams",
    "Rule",
    "escape",
    "join_with_prefix",
    "unescape",
    "InMemoryBuildGraph",
    "escape_path",
    "write_ninja",
]
