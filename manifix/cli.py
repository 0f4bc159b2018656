"""
manifix CLI.

Command-line interface for deriving manifest fixer/merger steps from a JSON
module description.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import pydantic
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .core.config import get_config
from .core.exceptions import ManifixError
from .core.logging import setup_logging
from .models.description import ModuleDescription

app = typer.Typer(
    name="manifix",
    help="Derive manifest fixer and merger build steps for Android modules",
    add_completion=False,
)

console = Console()

_DEFAULT_OUT_DIR = Path("out/soong/.intermediates")


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        from . import __version__
        console.print(f"manifix v{__version__}")
        raise typer.Exit()


def _load_module(path: Path) -> ModuleDescription:
    try:
        return ModuleDescription.model_validate_json(path.read_text(encoding="utf-8"))
    except pydantic.ValidationError as e:
        console.print(
            f"[red]Invalid module description {escape(str(path))}:[/red]\n{escape(str(e))}",
            soft_wrap=True,
        )
        raise typer.Exit(1)


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """manifix: manifest preparation for Android build graphs."""
    pass


@app.command()
def prepare(
    module_json: Path = typer.Argument(
        ...,
        help="Path to the JSON module description",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
    out_dir: Path = typer.Option(
        _DEFAULT_OUT_DIR,
        "--out-dir",
        "-o",
        help="Root of module output directories",
    ),
    ninja: Optional[Path] = typer.Option(
        None,
        "--ninja",
        help="Write the registered build steps to this ninja file",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Enable verbose logging",
    ),
) -> None:
    """Schedule the fixer (and merger) steps for a module and show them."""
    from .graph import InMemoryBuildGraph, write_ninja
    from .orchestration import ManifestPipeline

    config = get_config()
    if verbose:
        config = config.model_copy(update={"log_level": "DEBUG"})
    setup_logging(config)

    module = _load_module(module_json)
    ctx = module.to_context(config, out_dir)
    try:
        params = module.to_params()
    except ManifixError as e:
        console.print(f"[bold red]✗ {escape(str(e))}[/bold red]", soft_wrap=True)
        raise typer.Exit(1)

    graph = InMemoryBuildGraph()
    result = ManifestPipeline(graph).prepare(ctx, module.manifest, params, module.static_lib_manifests)
    if not result.success:
        console.print(f"[bold red]✗ {escape(result.error or '')}[/bold red]", soft_wrap=True)
        raise typer.Exit(1)

    table = Table(title=f"Build steps for {module.name}")
    table.add_column("Rule", style="cyan")
    table.add_column("Output")
    table.add_column("Command")
    for node in graph.nodes():
        table.add_row(node.rule.name, escape(str(node.output)), escape(node.command()))
    console.print(table)
    console.print(f"\n[bold]Manifest:[/bold] {result.data}", soft_wrap=True)

    if ninja is not None:
        with ninja.open("w", encoding="utf-8") as f:
            count = write_ninja(graph, f)
        console.print(f"[dim]Wrote {count} build statements to {ninja}[/dim]")


@app.command()
def args(
    module_json: Path = typer.Argument(
        ...,
        help="Path to the JSON module description",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
) -> None:
    """Print the manifest fixer arguments for a module, one per line."""
    from .services.fixer import derive_fixer_args

    config = get_config()
    module = _load_module(module_json)
    try:
        fixer_args = derive_fixer_args(module.to_context(config, _DEFAULT_OUT_DIR), module.to_params())
    except ManifixError as e:
        console.print(f"[bold red]✗ {escape(str(e))}[/bold red]", soft_wrap=True)
        raise typer.Exit(1)

    for token in fixer_args.args:
        sys.stdout.write(token + "\n")
    for dep in fixer_args.deps:
        console.print(f"[dim]implicit dependency: {dep}[/dim]")


@app.command()
def config() -> None:
    """Show the build configuration in effect."""
    cfg = get_config()
    build = cfg.build

    table = Table(title="Current Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("Log Level", cfg.log_level)
    table.add_row("Unbundled Apps", " ".join(build.unbundled_build_apps) or "-")
    table.add_row("Unbundled Build", str(build.unbundled_build))
    table.add_row("Platform SDK", f"{build.platform_sdk_version} ({build.platform_sdk_codename})")
    table.add_row("Platform SDK Final", str(build.platform_sdk_final))
    table.add_row("Active Codenames", ", ".join(build.platform_version_active_codenames))
    table.add_row("API Fingerprint", str(build.api_fingerprint_path) if build.use_api_fingerprint else "off")
    table.add_row("Manifest Fixer", cfg.tools.manifest_fixer_cmd)
    table.add_row("Manifest Merger", cfg.tools.manifest_merger_cmd)

    console.print(table)

    console.print("\n[dim]Configure via environment variables:[/dim]")
    console.print("  TARGET_BUILD_APPS, PLATFORM_SDK_CODENAME, PLATFORM_SDK_VERSION, PLATFORM_SDK_FINAL")
    console.print("  UNBUNDLED_BUILD_TARGET_SDK_WITH_API_FINGERPRINT, MANIFEST_FIXER_CMD, MANIFEST_MERGER_CMD")


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
