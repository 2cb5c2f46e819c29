"""CLI interface for themesync."""

import logging
from pathlib import Path
from typing import Any, Optional

import click

from .api import ThemeClient, get_api
from .config import config
from .exceptions import ThemeSyncAPIError, ThemeSyncError
from .models import Theme
from .output import OutputFormatter
from .sync import SyncEngine, create_engine, scan_directory, watch_directory

logger = logging.getLogger(__name__)


@click.group()
@click.option(
    "--api-key", "-k", envvar="THEMESYNC_API_KEY", help="Private app API key"
)
@click.option(
    "--password", "-p", envvar="THEMESYNC_PASSWORD", help="Private app password"
)
@click.option(
    "--host",
    "-H",
    envvar="THEMESYNC_HOST",
    help="Shop host, e.g. example.myshopify.com",
)
@click.option(
    "--theme-id",
    "-t",
    envvar="THEMESYNC_THEME_ID",
    help="Target theme id, or BACKDOOR to pick one interactively",
)
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose/debug logging output",
)
@click.version_option(package_name="themesync")
@click.pass_context
def main(
    ctx: Any,
    api_key: Optional[str],
    password: Optional[str],
    host: Optional[str],
    theme_id: Optional[str],
    quiet: bool,
    verbose: bool,
) -> None:
    """themesync - Upload theme files to a shop as they change."""
    ctx.ensure_object(dict)
    ctx.obj["api_key"] = api_key or config.api_key
    ctx.obj["password"] = password or config.password
    ctx.obj["host"] = host or config.host
    ctx.obj["theme_id"] = theme_id or config.theme_id
    ctx.obj["out"] = OutputFormatter(quiet=quiet)

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        )
        logging.getLogger("themesync").setLevel(logging.DEBUG)
    else:
        logging.basicConfig(level=logging.WARNING)


def _get_client(ctx: Any) -> ThemeClient:
    """Return the shared client, exiting if credentials are missing."""
    out: OutputFormatter = ctx.obj["out"]
    missing = [
        name
        for name, key in (
            ("API key", "api_key"),
            ("password", "password"),
            ("host", "host"),
        )
        if not ctx.obj.get(key)
    ]
    if missing:
        out.error(f"Missing {', '.join(missing)}.")
        out.info("Run 'themesync init' or set the THEMESYNC_* environment variables")
        ctx.exit(1)
    return get_api(ctx.obj["api_key"], ctx.obj["password"], ctx.obj["host"])


def _build_engine(ctx: Any, base_path: Path) -> SyncEngine:
    """Create and start an engine, exiting on configuration errors."""
    out: OutputFormatter = ctx.obj["out"]
    client = _get_client(ctx)
    try:
        engine = create_engine(
            ctx.obj["api_key"],
            ctx.obj["password"],
            ctx.obj["host"],
            ctx.obj["theme_id"],
            options={"basePath": str(base_path)},
            output=out,
            client=client,
        )
        engine.start()
    except ThemeSyncError as e:
        out.error(str(e))
        ctx.exit(1)

    if engine.passthrough:
        out.warning("No theme id configured, changes will not be uploaded")
    return engine


@main.command()
@click.option("--api-key", "-k", prompt="Private app API key", help="API key")
@click.option(
    "--password",
    "-p",
    prompt="Private app password",
    hide_input=True,
    help="Private app password",
)
@click.option("--host", "-H", prompt="Shop host", help="Shop host name")
@click.option("--theme-id", "-t", default=None, help="Default theme id")
@click.pass_context
def init(
    ctx: Any, api_key: str, password: str, host: str, theme_id: Optional[str]
) -> None:
    """Store credentials in ~/.config/themesync/config."""
    out: OutputFormatter = ctx.obj["out"]

    out.info("Validating credentials...")
    try:
        with ThemeClient(api_key, password, host) as client:
            client.list_themes()
        out.success("Credentials are valid")
    except ThemeSyncAPIError as e:
        out.error(f"Credential validation failed: {e}")
        if not click.confirm("Save credentials anyway?", default=False):
            out.warning("Configuration cancelled.")
            ctx.exit(1)

    config.save_credentials(api_key, password, host, theme_id)
    out.print_summary(
        "Initialization Complete",
        [
            ("Status", "Configuration saved successfully"),
            ("Config file", str(config.get_config_path())),
        ],
    )


@main.command()
@click.pass_context
def themes(ctx: Any) -> None:
    """List the themes installed on the shop."""
    out: OutputFormatter = ctx.obj["out"]
    client = _get_client(ctx)

    try:
        response = client.list_themes()
    except ThemeSyncAPIError as e:
        out.error(str(e))
        ctx.exit(1)

    for data in response.get("themes", []):
        click.echo(Theme.from_dict(data).display_name)


def _print_stats(out: OutputFormatter, engine: SyncEngine) -> None:
    out.print_summary(
        "Sync Summary",
        [
            ("Uploaded", str(engine.stats["uploaded"])),
            ("Removed", str(engine.stats["removed"])),
            ("Failed", str(engine.stats["failed"])),
            ("Skipped", str(engine.stats["skipped"])),
        ],
    )


@main.command()
@click.argument(
    "path",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
)
@click.pass_context
def deploy(ctx: Any, path: Path) -> None:
    """Upload every file below PATH (default: current directory).

    PATH is the theme root: a file at PATH/assets/site.css becomes the
    asset assets/site.css.
    """
    out: OutputFormatter = ctx.obj["out"]
    engine = _build_engine(ctx, path)

    for event in engine.process(scan_directory(path)):
        logger.debug("Deployed %s", event.relative)

    _print_stats(out, engine)
    if engine.stats["failed"]:
        ctx.exit(1)


@main.command()
@click.argument(
    "path",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
)
@click.pass_context
def watch(ctx: Any, path: Path) -> None:
    """Watch PATH and upload or delete assets as files change.

    Stop with Ctrl+C.
    """
    out: OutputFormatter = ctx.obj["out"]
    engine = _build_engine(ctx, path)

    out.info(f"Watching {path.absolute()} for changes...")
    try:
        for event in engine.process(watch_directory(path)):
            logger.debug("Synced %s", event.relative)
    except KeyboardInterrupt:
        out.info("Stopped watching.")

    _print_stats(out, engine)


if __name__ == "__main__":
    main()
