"""pluginlist CLI entry point."""

import sys
from pathlib import Path
from typing import Annotated

import typer

from pluginlist import __version__, cli_logger, exit_codes
from pluginlist.config import get_fetch_timeout, get_manifest_path, get_registry_path
from pluginlist.errors import ManifestSyncError, RegistryLoadError, handle_cli_error
from pluginlist.registry import load_registry
from pluginlist.registry_schema import PluginRecord, RepositoryInfo
from pluginlist.remote import Fetcher, UrllibFetcher
from pluginlist.sync import sync_manifest
from pluginlist.validation import ValidationFailed, ValidationPassed
from pluginlist.validator import validate_registry

app = typer.Typer(
    name="pluginlist",
    help="Community plugin registry - validate plugins.json and sync it into package.json.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        cli_logger.info(f"pluginlist {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show pluginlist version and exit.",
    ),
) -> None:
    """Community plugin registry - validate plugins.json and sync it into package.json."""


def _load_plugins(registry: Path) -> list:
    """Load raw plugin entries, exiting with REGISTRY_NOT_FOUND or GENERAL_ERROR."""
    if not registry.is_file():
        cli_logger.error(f"Registry file not found at {registry}")
        raise typer.Exit(exit_codes.REGISTRY_NOT_FOUND)

    try:
        return load_registry(registry)
    except RegistryLoadError as e:
        cli_logger.error(str(e))
        raise typer.Exit(exit_codes.GENERAL_ERROR) from e


def _print_plugin(name: str) -> None:
    cli_logger.dim(f"  • {name}")


def _print_fetch(plugin: PluginRecord, repo: RepositoryInfo) -> None:
    cli_logger.dim(f"  • fetching {repo.url} for {plugin.name}")


@app.command()
def validate(
    registry: Annotated[
        Path | None,
        typer.Option(
            "--registry",
            "-r",
            help="Registry file to validate. Defaults to PLUGINLIST_REGISTRY or ./plugins.json",
        ),
    ] = None,
    remote: Annotated[
        bool,
        typer.Option(
            "--remote/--offline",
            help="Check that each repository serves a package.json with name and version.",
        ),
    ] = True,
    timeout: Annotated[
        float | None,
        typer.Option(
            "--timeout",
            min=0.1,
            help="Seconds before a remote fetch is abandoned. Defaults to PLUGINLIST_FETCH_TIMEOUT or 10.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="List each plugin and remote fetch as it is checked."),
    ] = False,
) -> None:
    """Validate every plugin entry in the registry.

    Stops at the first violated rule and reports it.
    """
    registry_path = registry if registry else get_registry_path()
    plugins = _load_plugins(registry_path)

    fetcher: Fetcher | None = None
    if remote:
        fetcher = UrllibFetcher(timeout=timeout if timeout else get_fetch_timeout())

    result = validate_registry(
        plugins,
        fetcher=fetcher,
        on_plugin=_print_plugin if verbose else None,
        on_repository=_print_fetch if verbose else None,
    )

    match result:
        case ValidationPassed(plugins=records):
            cli_logger.success(f"Validated {len(records)} plugins in {registry_path}")
            raise typer.Exit(exit_codes.SUCCESS)

        case ValidationFailed(error=error):
            cli_logger.error(f"Validation failed: {error}")
            cli_logger.dim(f"  • rule: {error.kind.value}")
            if error.kind.is_remote:
                raise typer.Exit(exit_codes.REMOTE_CHECK_FAILED)
            raise typer.Exit(exit_codes.REGISTRY_INVALID)


@app.command()
def sync(
    registry: Annotated[
        Path | None,
        typer.Option(
            "--registry",
            "-r",
            help="Registry file to copy from. Defaults to PLUGINLIST_REGISTRY or ./plugins.json",
        ),
    ] = None,
    manifest: Annotated[
        Path | None,
        typer.Option(
            "--manifest",
            "-m",
            help="Manifest to update. Defaults to PLUGINLIST_MANIFEST or ./package.json",
        ),
    ] = None,
) -> None:
    """Copy the registry's plugin list into the package manifest.

    Does not validate; run 'pluginlist validate' first.
    """
    registry_path = registry if registry else get_registry_path()
    manifest_path = manifest if manifest else get_manifest_path()

    try:
        count = sync_manifest(registry_path, manifest_path)
    except ManifestSyncError as e:
        cli_logger.error(f"Sync failed: {e}")
        raise typer.Exit(exit_codes.GENERAL_ERROR) from e

    cli_logger.success(f"Synced {count} plugins into {manifest_path}")


def main_cli() -> None:
    """CLI entry point with top-level exception handling.

    Wraps the Typer app to catch any unhandled exceptions and format them
    as clean error messages instead of raw tracebacks.
    """
    try:
        app()
    except Exception as e:
        sys.exit(handle_cli_error(e))


if __name__ == "__main__":
    main_cli()
