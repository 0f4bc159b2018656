"""
In-memory build graph backend.

Keeps registered nodes in a dict keyed by output path. Used by tests and by the
CLI, which renders the collected nodes afterwards.
"""

from __future__ import annotations

from pathlib import Path

from ..core.logging import get_logger
from .interface import BuildGraph, BuildParams

logger = get_logger(__name__)


class InMemoryBuildGraph(BuildGraph):
    """Build graph that records nodes without executing them."""

    def __init__(self) -> None:
        self._nodes: dict[Path, BuildParams] = {}

    def build(self, params: BuildParams) -> None:
        self.validate(params)
        self._nodes[params.output] = params
        logger.debug(
            "node_registered",
            rule=params.rule.name,
            output=str(params.output),
            implicits=len(params.implicits),
        )

    def nodes(self) -> list[BuildParams]:
        return list(self._nodes.values())

    def node_for(self, output: Path) -> BuildParams | None:
        return self._nodes.get(output)

    def __len__(self) -> int:
        return len(self._nodes)
