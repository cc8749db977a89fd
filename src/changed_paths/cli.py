"""Click entry point for changed-paths.

Inside a GitHub Actions step every option can be left out: inputs come from
``INPUT_*`` variables and the workflow context from ``GITHUB_*`` variables.
Options given on the command line win over the environment.
"""

import logging
import sys
from importlib.metadata import PackageNotFoundError, version

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from changed_paths.config import Settings, get_settings
from changed_paths.errors import ChangedPathsError, ConfigurationError
from changed_paths.event import TriggerEvent
from changed_paths.github import GitHubClient
from changed_paths.outputs import OutputWriter
from changed_paths.runner import run

console = Console(stderr=True)
logger = logging.getLogger(__name__)


def _get_cli_version() -> str:
    try:
        return version("changed-paths")
    except PackageNotFoundError:
        return "unknown"


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@click.command()
@click.version_option(version=_get_cli_version())
@click.option("--paths", default=None, help="Pattern spec (list or JSON object of labels)")
@click.option("--github-token", default=None, help="GitHub API token")
@click.option(
    "--match-mode",
    type=click.Choice(["regex", "literal"]),
    default=None,
    help="Compile tokens as regexes (default) or match them literally",
)
@click.option("--event-path", default=None, help="Path to the event payload JSON")
@click.option("--repository", default=None, help="Repository as owner/name")
@click.option("--ref", default=None, help="Current ref, used for single-commit lookups")
@click.option("--output", "output_path", default=None, help="File that receives outputs")
def main(
    paths: str | None,
    github_token: str | None,
    match_mode: str | None,
    event_path: str | None,
    repository: str | None,
    ref: str | None,
    output_path: str | None,
):
    """changed-paths - check whether a push or pull request touched given paths."""
    overrides = {
        "paths": paths,
        "github_token": github_token,
        "match_mode": match_mode,
        "event_path": event_path,
        "repository": repository,
        "ref": ref,
        "output_path": output_path,
    }

    try:
        settings = _load_settings({k: v for k, v in overrides.items() if v is not None})
        _configure_logging(settings.log_level)
        event = TriggerEvent.from_settings(settings).with_overrides(
            ref=ref, repository=repository
        )
        with GitHubClient.from_settings(settings) as client:
            results = run(settings, event, client, OutputWriter(settings.output_path))
    except ChangedPathsError as exc:
        logger.error("%s failed: %s", exc.phase, exc)
        console.print(f"[red]Error during {exc.phase}: {escape(str(exc))}[/red]")
        sys.exit(1)

    for name, value in results.items():
        style = "green" if value else "dim"
        console.print(f"[{style}]{escape(name)}: {str(value).lower()}[/{style}]")


def _load_settings(overrides: dict[str, str]) -> Settings:
    """Environment settings with command-line overrides applied."""
    try:
        return get_settings().model_copy(update=overrides)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid settings: {exc}") from exc


if __name__ == "__main__":
    main()
