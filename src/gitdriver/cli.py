"""gitdriver CLI — Typer application for inspecting repositories through the engine."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.table import Table

from gitdriver import __version__

app = typer.Typer(
    name="gitdriver",
    help="Typed, structured git operations for automated agents.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _load(config: Optional[str]):
    """Load config and configure logging, exit 2 on failure."""
    from gitdriver.config.loader import ConfigError, load_config
    from gitdriver.log import configure_logging

    try:
        cfg = load_config(Path.cwd(), config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc
    configure_logging(cfg.logging.level, cfg.logging.format)
    return cfg


def _run(operation: str, options: Any, path: str, config: Optional[str]) -> None:
    """Run one operation against *path* and print its JSON rendering."""
    from gitdriver.git.errors import StructuredError
    from gitdriver.output import json_report
    from gitdriver.provider.factory import ProviderFactory, ProviderUnavailableError

    cfg = _load(config)

    async def _go() -> Any:
        provider = ProviderFactory(cfg).get()
        ctx = await provider.context_for(path)  # type: ignore[attr-defined]
        return await provider.execute(operation, options, ctx)

    try:
        result = asyncio.run(_go())
    except StructuredError as exc:
        console.print(f"[bold red]{exc.kind.value}:[/bold red] {exc.message}")
        print(json_report.render(exc, operation=operation))
        raise typer.Exit(code=2) from exc
    except ProviderUnavailableError as exc:
        console.print(f"[bold red]Provider unavailable:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc
    print(json_report.render(result, operation=operation))


# ── doctor ────────────────────────────────────────────────────────────────────


@app.command()
def doctor(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to gitdriver.toml"),
) -> None:
    """Check that git runs and list the provider's capabilities."""
    from gitdriver.provider.factory import ProviderFactory, ProviderUnavailableError

    cfg = _load(config)
    try:
        provider = ProviderFactory(cfg).get()
    except ProviderUnavailableError as exc:
        console.print(f"[bold red]Provider unavailable:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    healthy = asyncio.run(provider.health_check())

    table = Table(title=f"gitdriver {provider.version} ({provider.name})", border_style="dim")
    table.add_column("Capability", style="cyan")
    table.add_column("Available", justify="center")
    caps = provider.capabilities
    for name in ("init", "clone", "commit", "branch", "merge", "rebase", "remote", "fetch", "push",
                 "pull", "tag", "stash", "worktree", "blame", "reflog", "sign_commits", "ssh_auth", "http_auth"):
        table.add_row(name, "[green]yes[/green]" if caps.supports(name) else "[dim]no[/dim]")
    Console().print(table)

    if not healthy:
        console.print(f"[bold red]✗[/bold red] {cfg.git.binary} could not be run")
        raise typer.Exit(code=1)
    console.print(f"[green]✓[/green] {cfg.git.binary} is available")


# ── init-config ───────────────────────────────────────────────────────────────


@app.command("init-config")
def init_config() -> None:
    """Generate a starter gitdriver.toml in the current directory."""
    from gitdriver.config.defaults import DEFAULT_TOML
    from gitdriver.config.loader import CONFIG_FILENAME

    config_path = Path.cwd() / CONFIG_FILENAME
    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── inspection ────────────────────────────────────────────────────────────────


@app.command()
def status(
    path: str = typer.Argument(".", help="Repository directory"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to gitdriver.toml"),
) -> None:
    """Print the working-tree status as JSON."""
    from gitdriver.models.options import StatusOptions

    _run("status", StatusOptions(), _absolute(path), config)


@app.command()
def log(
    path: str = typer.Argument(".", help="Repository directory"),
    max_count: int = typer.Option(20, "--max-count", "-n", help="Number of commits"),
    branch: Optional[str] = typer.Option(None, "--branch", "-b", help="Branch or revision"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to gitdriver.toml"),
) -> None:
    """Print recent commits as JSON."""
    from gitdriver.models.options import LogOptions

    _run("log", LogOptions(max_count=max_count, branch=branch), _absolute(path), config)


@app.command()
def branches(
    path: str = typer.Argument(".", help="Repository directory"),
    all_branches: bool = typer.Option(False, "--all", "-a", help="Include remote-tracking branches"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to gitdriver.toml"),
) -> None:
    """Print branches as JSON."""
    from gitdriver.models.options import BranchOptions

    _run("branch", BranchOptions(mode="list", all=all_branches), _absolute(path), config)


def _absolute(path: str) -> str:
    # "." would mean the session directory to the resolver; the CLI has no session.
    return str(Path(path).resolve())


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"gitdriver {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """gitdriver — structured git operations for automated agents."""
