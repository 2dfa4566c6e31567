"""status command: classify the user's open PRs and print them by priority."""

from __future__ import annotations

import click
from github import GithubException
from rich.console import Console
from rich.markup import escape

from prstatus_core.classifier import classify_all
from prstatus_core.gh.pull_request import get_client, get_current_user, get_open_pull_requests, load_pull_requests
from prstatus_core.models import PRStatusInfo, PullRequest
from prstatus_core.report import STATUS_LABELS, STATUS_STYLES, group_by_status, truncate_title

console = Console()


def _fetch(config: dict, user: str | None, limit: int) -> tuple[str, list[PullRequest]]:
    token = config.get("github_token")
    if not token:
        raise click.UsageError(
            "No GitHub token found. Set GITHUB_TOKEN or run `gh auth login` first.\n"
            "Alternatively pass --input with saved `gh pr list --json` output."
        )

    client = get_client(token)
    try:
        login = user or get_current_user(client)
        console.print(f"[dim]Checking PRs for: {escape(login)}[/dim]\n")
        return login, get_open_pull_requests(client, login, limit=limit)
    except (GithubException, OSError) as e:
        raise click.ClickException(f"Failed to fetch pull requests from GitHub: {e}") from e


def _load(input_path: str, user: str | None) -> tuple[str, list[PullRequest]]:
    if not user:
        raise click.UsageError("--user is required together with --input.")
    console.print(f"[dim]Checking PRs for: {escape(user)}[/dim]\n")
    try:
        return user, load_pull_requests(input_path)
    except (OSError, ValueError) as e:
        raise click.ClickException(f"Could not read pull requests from {input_path}: {e}") from e


def _print_entry(pr: PullRequest, info: PRStatusInfo) -> None:
    console.print(f"  [dim]#{pr.number}[/dim] {escape(truncate_title(pr.title))}")
    console.print(f"    [dim]→[/dim] [underline cyan]{escape(pr.url)}[/underline cyan]")
    if info.reviewer:
        console.print(f"    [dim]→[/dim] Reviewer: [bold]{escape(info.reviewer)}[/bold]")
    if info.details:
        console.print(f"    [dim]→[/dim] {escape(info.details)}")
    console.print()


@click.command("status")
@click.option(
    "--input",
    "input_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Classify a saved `gh pr list --json ...` document instead of querying GitHub.",
)
@click.option("--user", default=None, help="Login to classify for. Required with --input.")
@click.option("--limit", type=int, default=None, help="Maximum number of PRs to fetch. Overrides config file.")
@click.option("--width", type=int, default=None, help="Presentation width for comment previews.")
@click.pass_context
def status_cmd(ctx, input_path: str | None, user: str | None, limit: int | None, width: int | None):
    """List your open pull requests grouped by what they are waiting on.

    \b
    Categories, most urgent first:
      CHECKS FAILING  a CI check run failed
      OPEN COMMENT    a reviewer is waiting on your reply
      RE-REQUEST      you replied but the reviewer was not re-requested
      MERGE           approved and nothing is outstanding
      PROD            requested reviewers silent for over 48 business hours
      REQUEST         nobody has been asked to review
      WAITING         review requested recently
    """
    from prstatus_core.config import load_config

    config = ctx.obj.get("config") if ctx.obj else None
    if config is None:
        config = load_config()
    if limit is not None:
        config["limit"] = limit
    if width is not None:
        config["width"] = width

    console.print("\n[bold]📋 PR Status Summary[/bold]\n")

    if input_path:
        current_user, prs = _load(input_path, user)
    else:
        current_user, prs = _fetch(config, user, config["limit"])

    if not prs:
        console.print("[yellow]No open PRs found.[/yellow]")
        return

    infos = classify_all(
        prs,
        current_user,
        width=config.get("width") or console.width,
        prod_threshold_hours=config["prod_threshold_hours"],
        bot_patterns=config["bot_patterns"],
    )

    for status, group in group_by_status(prs, infos).items():
        style = STATUS_STYLES[status]
        console.print(f"[{style}]{STATUS_LABELS[status]}:[/{style}]")
        for pr, info in group:
            _print_entry(pr, info)

    console.print(f"[dim]\nTotal: {len(prs)} open PR(s)\n[/dim]")
