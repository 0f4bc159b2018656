"""
Manifest Merger Service.

Schedules manifest_merger runs that merge the manifests of static library
dependencies into a module's own (already fixed) manifest.
"""

from __future__ import annotations

from pathlib import Path

from ...core.config import Config
from ...core.logging import get_logger
from ...graph import BuildGraph, BuildParams, Rule, escape, join_with_prefix
from ...models.module import ModuleContext

logger = get_logger(__name__)


def manifest_merger_rule(config: Config) -> Rule:
    """Rule running the merger as ``<merger> $args --main $in $libs --out $out``."""
    cmd = config.tools.manifest_merger_cmd
    return Rule(
        name="manifestMerger",
        command=f"{cmd} $args --main $in $libs --out $out",
        command_deps=(cmd,),
        arg_names=("args", "libs"),
    )


def merger_args(static_lib_manifests: list[Path], is_library: bool) -> dict[str, str]:
    """Rule arguments for a merge.

    Follows Gradle: tools:* declarations are only removed when merging app manifests.
    """
    return {
        "args": "" if is_library else "--remove-tools-declarations",
        "libs": join_with_prefix([escape(str(p)) for p in static_lib_manifests], "--libs "),
    }


class ManifestMergerService:
    """Service scheduling manifest_merger runs in the build graph."""

    def __init__(self, graph: BuildGraph) -> None:
        """Initialize the merger service.

        Args:
            graph: Build graph receiving the merger nodes
        """
        self.graph = graph

    def merge(
        self,
        ctx: ModuleContext,
        manifest: Path,
        static_lib_manifests: list[Path],
        is_library: bool,
    ) -> Path:
        """Register a node merging library manifests into a module's manifest.

        Args:
            ctx: The module being built.
            manifest: The module's own manifest, normally the fixer output.
            static_lib_manifests: Manifests of static library dependencies, in
                dependency order.
            is_library: Whether the module is itself a library.

        Returns:
            Path of the merged manifest, produced when the graph runs.
        """
        merged_manifest = ctx.path_for_module_out("manifest_merger", "AndroidManifest.xml")

        self.graph.build(BuildParams(
            rule=manifest_merger_rule(ctx.config),
            description="merge manifest",
            input=manifest,
            implicits=tuple(static_lib_manifests),
            output=merged_manifest,
            args=merger_args(static_lib_manifests, is_library),
        ))
        logger.debug(
            "manifest_merger_scheduled",
            module=ctx.name,
            libs=len(static_lib_manifests),
            is_library=is_library,
        )
        return merged_manifest
