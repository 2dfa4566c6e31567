"""Pull request classification.

Each open PR is mapped to exactly one PRStatus by an ordered cascade:

  1. failing CI checks
  2. nobody asked to review
  3. change requests the author has not had the last word on
  4. review comments the author has not answered
  5. reviewers that were answered but not re-requested
  6. pending review requests (prod once they age past the threshold)
  7. approvals
  8. fallback

Bot accounts are dropped before any review or comment comparison. All
"after" comparisons are strict.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Sequence

from prstatus_core.bots import BOT_PATTERNS, is_bot
from prstatus_core.business_hours import business_hours_between, to_wall_clock
from prstatus_core.models import Comment, PRStatus, PRStatusInfo, PullRequest, Review
from prstatus_core.reviewers import display_name

logger = logging.getLogger(__name__)

PROD_THRESHOLD_HOURS = 48
DEFAULT_WIDTH = 80

# Columns reserved for the label and indentation around a preview.
_CHANGES_PREVIEW_MARGIN = 35
_COMMENT_PREVIEW_MARGIN = 40

APPROVED = "APPROVED"
CHANGES_REQUESTED = "CHANGES_REQUESTED"
COMMENTED = "COMMENTED"


def _unique(logins: Iterable[str]) -> list[str]:
    """Deduplicate logins, keeping first-occurrence order."""
    return list(dict.fromkeys(logins))


def _preview(body: str, max_width: int) -> str:
    """Return ``' - "<first line>"'`` cut to max_width, or "" for an empty body."""
    body = body.strip()
    if not body:
        return ""
    first_line = body.split("\n")[0].rstrip("\r")
    max_width = max(max_width, 0)
    ellipsis = "..." if len(first_line) > max_width else ""
    return f' - "{first_line[:max_width]}{ellipsis}"'


def _latest_activity(
    login: str,
    after: datetime,
    reviews: Sequence[Review],
    comments: Sequence[Comment],
) -> datetime | None:
    """Return the latest comment or review by login strictly after ``after``."""
    times = [c.created_at for c in comments if c.author == login and c.created_at > after]
    times += [r.submitted_at for r in reviews if r.author == login and r.submitted_at > after]
    return max(times, default=None)


def _is_change_request_unreplied(
    review: Review,
    current_user: str,
    reviews: Sequence[Review],
    comments: Sequence[Comment],
) -> bool:
    my_last = _latest_activity(current_user, review.submitted_at, reviews, comments)
    if my_last is None:
        return True

    # An approval after my reply closes the loop; anything else re-raises it.
    reviewer = review.author
    return any(c.author == reviewer and c.created_at > my_last for c in comments) or any(
        r.author == reviewer and r.state != APPROVED and r.submitted_at > my_last for r in reviews
    )


def _unreplied_change_requests(current_user, reviews, comments) -> list[Review]:
    return [
        r
        for r in reviews
        if r.state == CHANGES_REQUESTED
        and r.author != current_user
        and _is_change_request_unreplied(r, current_user, reviews, comments)
    ]


def _unreplied_comments(current_user, reviews, comments) -> list[Review]:
    return [
        r
        for r in reviews
        if r.state == COMMENTED
        and r.author != current_user
        and _latest_activity(current_user, r.submitted_at, reviews, comments) is None
    ]


def _reviewers_needing_re_request(current_user, reviews, comments, requested: list[str]) -> list[str]:
    approved = {r.author for r in reviews if r.state == APPROVED}
    return _unique(
        r.author
        for r in reviews
        if r.state in (CHANGES_REQUESTED, COMMENTED)
        and r.author != current_user
        and r.author not in approved
        and _latest_activity(current_user, r.submitted_at, reviews, comments) is not None
        and r.author not in requested
    )


def classify(
    pr: PullRequest,
    current_user: str,
    width: int = DEFAULT_WIDTH,
    now: datetime | None = None,
    prod_threshold_hours: float = PROD_THRESHOLD_HOURS,
    bot_patterns: Sequence[str] = BOT_PATTERNS,
) -> PRStatusInfo:
    """Return the single action category that applies to ``pr``.

    ``width`` is the presentation width used to size comment previews.
    ``now`` defaults to the current local time, read once per call.
    """
    failing = [c for c in pr.status_check_rollup if c.status == "COMPLETED" and c.conclusion == "FAILURE"]
    if failing:
        return _result(pr, PRStatus.CHECKS_FAILING, details=f"{len(failing)} check(s) failing")

    reviews = [r for r in pr.reviews if not is_bot(r.author, bot_patterns)]
    comments = [c for c in pr.comments if not is_bot(c.author, bot_patterns)]

    if not pr.review_requests and not reviews:
        return _result(pr, PRStatus.REQUEST, details="No reviewers requested")

    change_requests = _unreplied_change_requests(current_user, reviews, comments)
    if change_requests:
        latest = max(change_requests, key=lambda r: r.submitted_at)
        preview = _preview(latest.body, width - _CHANGES_PREVIEW_MARGIN)
        return _result(
            pr,
            PRStatus.OPEN_COMMENT,
            reviewer=", ".join(_unique(r.author for r in change_requests)),
            details=f"Changes requested{preview}",
        )

    open_comments = _unreplied_comments(current_user, reviews, comments)
    if open_comments:
        with_body = [r for r in open_comments if r.body]
        preview = ""
        if with_body:
            latest = max(with_body, key=lambda r: r.submitted_at)
            preview = _preview(latest.body, width - _COMMENT_PREVIEW_MARGIN)
        return _result(
            pr,
            PRStatus.OPEN_COMMENT,
            reviewer=", ".join(_unique(r.author for r in open_comments)),
            details=f"Comments but no approval{preview}",
        )

    requested = [display_name(rr) for rr in pr.review_requests]

    re_request = _reviewers_needing_re_request(current_user, reviews, comments, requested)
    if re_request:
        return _result(
            pr,
            PRStatus.RE_REQUEST,
            reviewer=", ".join(re_request),
            details="Replied to comments, need to re-request review",
        )

    if requested:
        if now is None:
            now = datetime.now()
        hours = business_hours_between(to_wall_clock(pr.updated_at), to_wall_clock(now))
        logger.debug("PR #%d: %.1f business hours since last update", pr.number, hours)
        if hours > prod_threshold_hours:
            return _result(
                pr,
                PRStatus.PROD,
                reviewer=", ".join(requested),
                details=f"No response for {int(hours // 24)} business day(s)",
            )
        return _result(
            pr,
            PRStatus.APPROVED,
            reviewer=", ".join(requested),
            details=f"Waiting for review (< {prod_threshold_hours:g} business hours)",
        )

    approvers = _unique(r.author for r in reviews if r.state == APPROVED and r.author != current_user)
    if approvers:
        return _result(pr, PRStatus.MERGE, details=f"Approved by {', '.join(approvers)}")

    return _result(pr, PRStatus.APPROVED, details="Unknown state")


def classify_all(prs: Iterable[PullRequest], current_user: str, **kwargs) -> list[PRStatusInfo]:
    """Classify each PR in order; keyword arguments are passed to classify()."""
    return [classify(pr, current_user, **kwargs) for pr in prs]


def _result(pr: PullRequest, status: PRStatus, reviewer: str | None = None, details: str | None = None) -> PRStatusInfo:
    logger.debug("PR #%d classified as %s", pr.number, status.value)
    return PRStatusInfo(status=status, reviewer=reviewer, details=details)
