"""
Manifest Fixer Service.

Turns a module's SDK constraints, shared library dependencies and packaging
flags into a manifest_fixer invocation, and registers that invocation with the
build graph. The fixer injects minSdkVersion, targetSdkVersion, <uses-library>
tags and similar attributes into an AndroidManifest.xml.
"""

from __future__ import annotations

from pathlib import Path

from ...core.config import Config
from ...core.exceptions import SdkVersionError
from ...core.logging import get_logger
from ...graph import BuildGraph, BuildParams, Rule, escape
from ...models.module import FRAMEWORK_RES_MODULE, ModuleContext
from ...models.params import FixerArgs, ManifestFixerParams
from ...models.sdk import FUTURE_API_LEVEL, MIN_EMBEDDED_NATIVE_LIBS_API, SdkContext

logger = get_logger(__name__)

MTS_SUITE = "mts"


def manifest_fixer_rule(config: Config) -> Rule:
    """Rule running the fixer as ``<fixer> $args $in $out``."""
    cmd = config.tools.manifest_fixer_cmd
    return Rule(
        name="manifestFixer",
        command=f"{cmd} $args $in $out",
        command_deps=(cmd,),
        arg_names=("args",),
    )


def included_in_mts(ctx: ModuleContext) -> bool:
    """Whether the module is a test app packaged into the MTS suite.

    Modules without test suite membership are never included.
    """
    if ctx.test_suites is None:
        return False
    return ctx.test_suites.included_in_test_suite(MTS_SUITE)


def target_sdk_version_for_fixer(ctx: ModuleContext, sdk_context: SdkContext) -> str:
    """Target SDK version to write into the manifest.

    Modules targeting an unreleased SDK get the future API level instead of the
    preview codename when the build is unbundled or the module is an MTS test
    that must run on stable branches. This lets release builds target APIs that
    have not been finalized yet.

    Raises:
        ConfigurationError: If the target SDK version cannot be resolved.
    """
    spec = sdk_context.target_sdk_version(ctx)
    if spec.api_level.is_preview and (
        ctx.config.build.unbundled_build_apps or included_in_mts(ctx)
    ):
        return str(FUTURE_API_LEVEL.final_or_future_int())
    try:
        return spec.effective_version_string(ctx)
    except SdkVersionError as e:
        ctx.module_error(f"invalid targetSdkVersion: {e}", "target_sdk_version", cause=e)


def _fingerprinted_version(ctx: ModuleContext) -> str | None:
    """Version expression read from the API fingerprint file at build time.

    Returns None when fingerprinting does not apply to the module.
    """
    build = ctx.config.build
    if not build.use_api_fingerprint or ctx.name == FRAMEWORK_RES_MODULE:
        return None
    # $$ survives ninja variable expansion as a literal $ for the shell.
    return f"{build.platform_sdk_codename}.$$(cat {build.api_fingerprint_path})"


def derive_fixer_args(ctx: ModuleContext, params: ManifestFixerParams) -> FixerArgs:
    """Derive the ordered manifest_fixer arguments for a module.

    The order of the arguments is part of the fixer's command line contract.

    Args:
        ctx: The module being built.
        params: The module's manifest-related properties.

    Returns:
        The argument tokens and the extra files the command reads.

    Raises:
        ConfigurationError: On an unresolvable SDK version, or when embedded
            native libraries are requested below the supported API level.
    """
    args: list[str] = []
    deps: list[Path] = []
    sdk_context = params.sdk_context

    target_sdk_version: str | None = None
    min_sdk_version: str | None = None
    if sdk_context is not None:
        target_sdk_version = target_sdk_version_for_fixer(ctx, sdk_context)
        min_spec = sdk_context.min_sdk_version(ctx)
        try:
            min_level = min_spec.effective_version(ctx)
            min_sdk_version = min_spec.effective_version_string(ctx)
        except SdkVersionError as e:
            ctx.module_error(f"invalid minSdkVersion: {e}", "min_sdk_version", cause=e)

    if params.is_library:
        args.append("--library")
    elif sdk_context is not None:
        if min_level.final_or_future_int() >= MIN_EMBEDDED_NATIVE_LIBS_API:
            extract = "false" if params.use_embedded_native_libs else "true"
            args.append(f"--extract-native-libs={extract}")
        elif params.use_embedded_native_libs:
            ctx.module_error(
                "module attempted to store uncompressed native libraries, "
                f"but minSdkVersion={min_level} doesn't support it",
                "use_embedded_native_libs",
            )

    if params.uses_non_sdk_apis:
        args.append("--uses-non-sdk-api")

    if params.use_embedded_dex:
        args.append("--use-embedded-dex")

    if params.class_loader_contexts is not None:
        # Only libraries inferred by the build system; the ones the module
        # declares itself are already in its manifest.
        required, optional = params.class_loader_contexts.implicit_uses_libs()
        for lib in required:
            args.extend(["--uses-library", escape(lib)])
        for lib in optional:
            args.extend(["--optional-uses-library", escape(lib)])

    if params.has_no_code:
        args.append("--has-no-code")

    if params.test_only:
        args.append("--test-only")

    if params.logging_parent:
        args.extend(["--logging-parent", escape(params.logging_parent)])

    if sdk_context is not None:
        fingerprinted = _fingerprinted_version(ctx)
        if fingerprinted is not None:
            target_sdk_version = min_sdk_version = fingerprinted
            deps.append(ctx.config.build.api_fingerprint_path)

        args.extend(["--targetSdkVersion", target_sdk_version])
        args.extend(["--minSdkVersion", min_sdk_version])
        args.append("--raise-min-sdk-version")

    return FixerArgs(args=tuple(args), deps=tuple(deps))


class ManifestFixerService:
    """Service scheduling manifest_fixer runs in the build graph."""

    def __init__(self, graph: BuildGraph) -> None:
        """Initialize the fixer service.

        Args:
            graph: Build graph receiving the fixer nodes
        """
        self.graph = graph

    def fix(self, ctx: ModuleContext, manifest: Path, params: ManifestFixerParams) -> Path:
        """Register a node fixing up a module's manifest.

        Args:
            ctx: The module being built.
            manifest: The module's unprocessed AndroidManifest.xml.
            params: The module's manifest-related properties.

        Returns:
            Path of the fixed manifest, produced when the graph runs.

        Raises:
            ConfigurationError: If the arguments cannot be derived. No node is
                registered in that case.
        """
        fixer_args = derive_fixer_args(ctx, params)
        fixed_manifest = ctx.path_for_module_out("manifest_fixer", "AndroidManifest.xml")

        self.graph.build(BuildParams(
            rule=manifest_fixer_rule(ctx.config),
            description="fix manifest",
            input=manifest,
            implicits=fixer_args.deps,
            output=fixed_manifest,
            args={"args": fixer_args.joined()},
        ))
        logger.debug("manifest_fixer_scheduled", module=ctx.name, args=list(fixer_args.args))
        return fixed_manifest
