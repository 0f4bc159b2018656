"""
Manifest preparation pipeline.

Runs the fixer stage and, when the module has static library dependencies,
the merger stage for one module, returning the manifest the rest of the
module's build should consume.
"""

from __future__ import annotations

from pathlib import Path

from ..core.exceptions import ManifixError
from ..core.logging import bind_context, clear_context, get_logger
from ..core.types import ServiceResult
from ..graph import BuildGraph
from ..models.module import ModuleContext
from ..models.params import ManifestFixerParams
from ..services.fixer import ManifestFixerService
from ..services.merger import ManifestMergerService

logger = get_logger(__name__)


class ManifestPipeline:
    """Fix-then-merge manifest preparation for programmatic use."""

    def __init__(self, graph: BuildGraph) -> None:
        """Initialize the pipeline.

        Args:
            graph: Build graph receiving both stages' nodes
        """
        self.graph = graph
        self.fixer = ManifestFixerService(graph)
        self.merger = ManifestMergerService(graph)

    def prepare(
        self,
        ctx: ModuleContext,
        manifest: Path,
        params: ManifestFixerParams,
        static_lib_manifests: list[Path] | None = None,
    ) -> ServiceResult[Path]:
        """Schedule manifest preparation for one module.

        Errors are not retried: a failed result means the module cannot be built.

        Args:
            ctx: The module being built
            manifest: The module's unprocessed manifest
            params: The module's manifest-related properties
            static_lib_manifests: Manifests of static library dependencies

        Returns:
            ServiceResult holding the path of the final manifest
        """
        bind_context(module=ctx.name)
        try:
            fixed = self.fixer.fix(ctx, manifest, params)
            if not static_lib_manifests:
                logger.info("manifest_prepared", manifest=str(fixed), merged=False)
                return ServiceResult.ok(fixed, stages=["fix"])

            merged = self.merger.merge(ctx, fixed, static_lib_manifests, params.is_library)
            logger.info("manifest_prepared", manifest=str(merged), merged=True)
            return ServiceResult.ok(merged, stages=["fix", "merge"])

        except ManifixError as e:
            logger.error("manifest_preparation_failed", error=str(e))
            return ServiceResult.fail(str(e), error_type=type(e).__name__)
        finally:
            clear_context()
