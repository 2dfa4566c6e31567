"""Grouping of classified PRs for display."""

from __future__ import annotations

from typing import Sequence

from prstatus_core.models import PRStatus, PRStatusInfo, PullRequest

# Display priority, not the classification cascade order: merge-ready
# PRs are listed before ones that need prodding.
STATUS_ORDER = (
    PRStatus.CHECKS_FAILING,
    PRStatus.OPEN_COMMENT,
    PRStatus.RE_REQUEST,
    PRStatus.MERGE,
    PRStatus.PROD,
    PRStatus.REQUEST,
    PRStatus.APPROVED,
)

STATUS_LABELS = {
    PRStatus.CHECKS_FAILING: "❌ CHECKS FAILING",
    PRStatus.OPEN_COMMENT: "💬 OPEN COMMENT",
    PRStatus.RE_REQUEST: "🔄 RE-REQUEST",
    PRStatus.PROD: "⏰ PROD",
    PRStatus.MERGE: "✅ MERGE",
    PRStatus.REQUEST: "👀 REQUEST",
    PRStatus.APPROVED: "⏳ WAITING",
}

STATUS_STYLES = {
    PRStatus.CHECKS_FAILING: "bold red",
    PRStatus.OPEN_COMMENT: "bold red",
    PRStatus.RE_REQUEST: "bold yellow",
    PRStatus.PROD: "bold magenta",
    PRStatus.MERGE: "bold green",
    PRStatus.REQUEST: "bold cyan",
    PRStatus.APPROVED: "blue",
}

MAX_TITLE_LENGTH = 60


def group_by_status(
    prs: Sequence[PullRequest],
    infos: Sequence[PRStatusInfo],
) -> dict[PRStatus, list[tuple[PullRequest, PRStatusInfo]]]:
    """Group PRs by status in display order, omitting empty groups.

    PRs keep their input order within a group.
    """
    if len(prs) != len(infos):
        raise ValueError(f"Got {len(infos)} classification(s) for {len(prs)} pull request(s).")

    groups: dict[PRStatus, list[tuple[PullRequest, PRStatusInfo]]] = {status: [] for status in STATUS_ORDER}
    for pr, info in zip(prs, infos):
        groups[info.status].append((pr, info))
    return {status: group for status, group in groups.items() if group}


def truncate_title(title: str, max_length: int = MAX_TITLE_LENGTH) -> str:
    if len(title) > max_length:
        return title[: max_length - 3] + "..."
    return title
