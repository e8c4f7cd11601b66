# Path: plugin_downloader/cli/download_cli.py
"""
Plugin Downloader CLI

Installs one plugin from GitHub releases or the Hub registry.

Usage:
    python -m plugin_downloader github loki hackernews v1.1.4 --kind source
    python -m plugin_downloader hub loki aws v22.18.0 --token $LOKI_TOKEN
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from plugin_downloader.constants import LOG_INPUT
from plugin_downloader.core.config_loader import ConfigLoader, get_config
from plugin_downloader.core.logger import configure_logging, get_logger
from plugin_downloader.engine.coordinator import PluginDownloadCoordinator
from plugin_downloader.engine.errors import PluginDownloadError
from plugin_downloader.engine.models import HubDownloadOptions
from plugin_downloader.engine.redaction import redact_url
from plugin_downloader.engine.platform_target import PlatformTarget
from plugin_downloader.engine.result import InstallResult
from plugin_downloader.specs.plugin_kind import PluginKind

logger = get_logger(__name__, 'cli')

console = Console()


def default_plugin_path(
    download_dir: Path,
    kind: PluginKind,
    org: str,
    name: str,
    version: str,
    target: PlatformTarget
) -> Path:
    """Conventional install location: <dir>/plugins/<kind>/<org>/<name>/<version>/plugin."""
    path = download_dir / 'plugins' / str(kind) / org / name / version / 'plugin'
    return Path(target.with_binary_suffix(str(path)))


def display_result(result: InstallResult) -> None:
    """Display install outcome with rich formatting."""
    if result.skipped:
        console.print(f"[cyan]Already installed:[/cyan] {result.local_path}")
        return

    table = Table(show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")

    table.add_row("Binary", str(result.local_path))
    table.add_row("Source", redact_url(result.url) if result.url else "N/A")

    if result.download_result:
        download = result.download_result
        table.add_row("Size", f"{download.file_size:,} bytes")
        table.add_row("Attempts", str(download.attempts))
        table.add_row("SHA-256", download.checksum)

    if result.validation_result is not None:
        verified = "[green]yes[/green]" if result.checksum_verified else "[yellow]not verified[/yellow]"
        table.add_row("Checksum", verified)

    table.add_row("Duration", f"{result.total_duration:.2f}s")

    console.print(Panel(table, title="Plugin Installed", border_style="green"))


def render_json(result: InstallResult) -> str:
    """Install outcome as JSON, signed URLs redacted."""
    return json.dumps(result.to_dict(), indent=2)


async def install_from_github(args: argparse.Namespace, config: ConfigLoader) -> InstallResult:
    target = PlatformTarget.current()
    kind = PluginKind.from_string(args.kind)
    local_path = args.path or default_plugin_path(
        config.get('download_dir'), kind, args.org, args.name, args.version, target
    )

    logger.info(f"{LOG_INPUT} github {args.org}/{args.name}@{args.version} -> {local_path}")

    async with PluginDownloadCoordinator(config=config, platform_target=target) as coordinator:
        return await coordinator.download_from_github(
            local_path, args.org, args.name, args.version, kind, timeout=args.timeout
        )


async def install_from_hub(args: argparse.Namespace, config: ConfigLoader) -> InstallResult:
    target = PlatformTarget.current()
    kind = PluginKind.from_string(args.kind)
    local_path = args.path or default_plugin_path(
        config.get('download_dir'), kind, args.team, args.name, args.version, target
    )

    options = HubDownloadOptions(
        local_path=Path(local_path),
        plugin_team=args.team,
        plugin_kind=kind,
        plugin_name=args.name,
        plugin_version=args.version,
        auth_token=args.token or '',
        team_name=args.team_name or '',
    )

    logger.info(f"{LOG_INPUT} hub {options.identity} -> {local_path}")

    async with PluginDownloadCoordinator(config=config, platform_target=target) as coordinator:
        return await coordinator.download_from_hub(options, timeout=args.timeout)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog='loki-plugin-download',
        description="Loki Plugin Downloader - install plugin binaries from GitHub or the Hub",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # GitHub release of a community plugin
  loki-plugin-download github loki hackernews v1.1.4 --kind source

  # Hub registry, authenticated
  loki-plugin-download hub loki aws v22.18.0 --token "$LOKI_TOKEN"

  # Explicit destination
  loki-plugin-download github loki hackernews v1.1.4 --path ./bin/hackernews

  # Machine-readable result
  loki-plugin-download hub loki aws v22.18.0 --json
        """
    )

    subparsers = parser.add_subparsers(dest='command', help='Plugin origin')

    github_parser = subparsers.add_parser('github', help='Install from a GitHub release')
    github_parser.add_argument('org', help='GitHub organization')
    github_parser.add_argument('name', help='Plugin name')
    github_parser.add_argument('version', help='Version tag (e.g. v1.1.4)')

    hub_parser = subparsers.add_parser('hub', help='Install through the Hub registry')
    hub_parser.add_argument('team', help='Publishing team')
    hub_parser.add_argument('name', help='Plugin name')
    hub_parser.add_argument('version', help='Version tag (e.g. v22.18.0)')
    hub_parser.add_argument('--token', help='Bearer token for private plugins')
    hub_parser.add_argument('--team-name', help='Act as this team (team-scoped endpoint)')

    for sub in (github_parser, hub_parser):
        sub.add_argument(
            '-k', '--kind',
            choices=[kind.value for kind in PluginKind],
            default=PluginKind.SOURCE.value,
            help='Plugin kind (default: source)'
        )
        sub.add_argument('-p', '--path', type=Path, help='Destination binary path')
        sub.add_argument('-t', '--timeout', type=float, help='Deadline in seconds')
        sub.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')
        sub.add_argument('--json', action='store_true', help='Print the result as JSON')

    return parser


async def main(argv: Optional[list[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Process exit code
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    overrides = {'log_level': 'DEBUG'} if args.verbose else None
    config = ConfigLoader(env_file=Path.cwd() / '.env', overrides=overrides) if overrides else get_config()
    configure_logging(
        config,
        console_handler=RichHandler(rich_tracebacks=True, console=console, show_path=False)
    )

    try:
        if args.command == 'github':
            result = await install_from_github(args, config)
        else:
            result = await install_from_hub(args, config)

    except (PluginDownloadError, ValueError) as e:
        console.print(f"\n[red bold]Error:[/red bold] {e}")
        if args.verbose:
            console.print_exception()
        return 1

    except asyncio.TimeoutError:
        console.print(f"\n[red bold]Error:[/red bold] install did not finish within {args.timeout}s")
        return 1

    if args.json:
        console.print_json(render_json(result))
    else:
        display_result(result)
    return 0


def run() -> None:
    """Synchronous wrapper used by the console script."""
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        console.print("\n[yellow]Download cancelled by user[/yellow]")
        sys.exit(130)


__all__ = ['main', 'run', 'build_parser', 'default_plugin_path', 'display_result', 'render_json']
