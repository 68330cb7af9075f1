"""
Command-line interface for repodiffmatch.

Provides the `repodm compare` and `repodm check` commands.
"""

import sys
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import Config
from .core.errors import ConfigError, RepoDiffError
from .core.reporting import Reporter
from .github.client import GitHubClient
from .github.repository import parse_repository
from .pipeline import compare_repositories
from .utils.logging_setup import setup_logging, log_operation


logger = logging.getLogger(__name__)

console = Console()
error_console = Console(stderr=True)


def load_config(config_path, overrides) -> Config:
    """Build the effective configuration: file, then environment, then CLI flags."""
    if config_path:
        config = Config.from_file(Path(config_path))
    else:
        config = Config.find_and_load(Path.cwd())

    config.apply_environment_overrides()

    for key, value in overrides.items():
        if value is not None:
            config.set(key, value)

    return config


def configure_logging(config: Config, verbose: bool) -> None:
    level = "DEBUG" if verbose else str(config.get("logging.level", "WARNING"))
    if not isinstance(logging.getLevelName(level.upper()), int):
        raise ConfigError(f"Unknown logging level: {level}", key="logging.level")
    setup_logging(
        "repodiffmatch",
        level=level,
        file=bool(config.get("logging.file", False)),
        log_dir=Path(config.get("logging.log_dir", "logs"))
    )


@click.group(name="repodm")
@click.version_option(__version__, prog_name="repodm")
def cli():
    """Compare GitHub repositories for plagiarism detection."""
    pass


@cli.command(name="compare")
@click.argument("repo1")
@click.argument("repo2")
@click.option(
    "--config", "-c", "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to configuration file"
)
@click.option("--branch", help="Branch to compare (default: main)")
@click.option("--max-files", type=click.IntRange(min=1), help="Maximum files analyzed per repository")
@click.option("--batch-size", type=click.IntRange(min=1), help="Source files per batch")
@click.option("--json", "as_json", is_flag=True, help="Output results as JSON")
@click.option("--no-progress", is_flag=True, help="Hide the progress bar")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def compare_command(repo1, repo2, config_path, branch, max_files, batch_size,
                    as_json, no_progress, verbose):
    """Compare two GitHub repositories (format: owner/repo or full GitHub URL)."""
    try:
        config = load_config(config_path, {
            "github.branch": branch,
            "comparison.max_files": max_files,
            "comparison.batch_size": batch_size,
            "report.format": "json" if as_json else None,
        })
        configure_logging(config, verbose)
        log_operation(logger, "compare", repo1=repo1, repo2=repo2)

        json_output = config.get("report.format") == "json"
        if not json_output:
            console.print("\n[blue]Comparing repositories:[/blue]")
            console.print(f"[bright_black]  Source: {escape(repo1)}[/bright_black]")
            console.print(f"[bright_black]  Target: {escape(repo2)}[/bright_black]\n")

        report = compare_repositories(
            repo1,
            repo2,
            config=config,
            show_progress=not (no_progress or json_output),
            console=error_console
        )
    except RepoDiffError as e:
        logger.error(e.message)
        error_console.print(Reporter.render_error(e), highlight=False)
        sys.exit(1)

    reporter = Reporter(config.to_dict())

    if json_output:
        click.echo(reporter.render_json(report))
        return

    if report.stats.truncated:
        console.print(
            f"[yellow]WARNING: Large repositories detected. Analyzing first "
            f"{config.get('comparison.max_files')} files from each repo.[/yellow]"
        )

    console.print("[green]Analysis complete[/green]\n")
    reporter.print_report(report, console)


@cli.command(name="check")
@click.argument("repo")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def check_command(repo, verbose):
    """Check that a repository exists and is public."""
    try:
        config = load_config(None, {})
        configure_logging(config, verbose)
        ref = parse_repository(repo)
    except RepoDiffError as e:
        error_console.print(Reporter.render_error(e), highlight=False)
        sys.exit(1)

    info = GitHubClient.from_config(config).validate_repository(ref)
    if not info.exists:
        error_console.print(f"[red]Repository {escape(ref.full_name)} {escape(info.error or 'unavailable')}[/red]")
        sys.exit(1)

    visibility = "private" if info.private else "public"
    console.print(f"[green]Repository {escape(info.full_name)} exists ({visibility})[/green]")
    if info.default_branch:
        console.print(f"[bright_black]  Default branch: {escape(info.default_branch)}[/bright_black]")


def main():
    """Main CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
