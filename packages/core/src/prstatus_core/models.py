"""Pull request snapshot models consumed by the classifier.

The shapes mirror the JSON emitted by ``gh pr list --json ...`` so a saved
document and a live PyGithub fetch both end up as the same frozen records.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Union


class PRStatus(str, Enum):
    CHECKS_FAILING = "checks-failing"
    OPEN_COMMENT = "open-comment"
    RE_REQUEST = "re-request"
    PROD = "prod"
    MERGE = "merge"
    REQUEST = "request"
    APPROVED = "approved"


@dataclass(frozen=True)
class Review:
    author: str
    state: str  # "APPROVED" | "CHANGES_REQUESTED" | "COMMENTED" | ...
    submitted_at: datetime
    body: str = ""
    author_association: str = ""


@dataclass(frozen=True)
class Comment:
    author: str
    created_at: datetime


@dataclass(frozen=True)
class UserReviewRequest:
    login: str


@dataclass(frozen=True)
class TeamReviewRequest:
    slug: str = ""
    name: str = ""


@dataclass(frozen=True)
class UnknownReviewRequest:
    """A review request whose ``__typename`` is neither User nor Team."""

    typename: str = ""


ReviewRequest = Union[UserReviewRequest, TeamReviewRequest, UnknownReviewRequest]


@dataclass(frozen=True)
class StatusCheck:
    status: str  # "COMPLETED" | "IN_PROGRESS" | "QUEUED" | "" for commit statuses
    conclusion: str  # "SUCCESS" | "FAILURE" | ...


@dataclass(frozen=True)
class PullRequest:
    number: int
    title: str
    url: str
    updated_at: datetime
    created_at: datetime
    reviews: tuple[Review, ...] = ()
    review_requests: tuple[ReviewRequest, ...] = ()
    comments: tuple[Comment, ...] = ()
    review_decision: str = ""
    status_check_rollup: tuple[StatusCheck, ...] = ()

    @classmethod
    def from_dict(cls, data: dict) -> PullRequest:
        """Build a PullRequest from one element of ``gh pr list --json`` output.

        Missing arrays become empty tuples, a missing review body becomes an
        empty string and reviews that were never submitted are dropped.
        Raises ValueError when a timestamp is unparseable and KeyError when
        ``number`` or ``updatedAt`` is absent.
        """
        return cls(
            number=int(data["number"]),
            title=data.get("title") or "",
            url=data.get("url") or "",
            updated_at=parse_timestamp(data["updatedAt"]),
            created_at=parse_timestamp(data.get("createdAt") or data["updatedAt"]),
            reviews=tuple(
                Review(
                    author=_login(r.get("author")),
                    state=r.get("state") or "",
                    submitted_at=parse_timestamp(r["submittedAt"]),
                    body=r.get("body") or "",
                    author_association=r.get("authorAssociation") or "",
                )
                for r in data.get("reviews") or []
                if r.get("submittedAt")
            ),
            review_requests=tuple(_review_request(rr) for rr in data.get("reviewRequests") or []),
            comments=tuple(
                Comment(author=_login(c.get("author")), created_at=parse_timestamp(c["createdAt"]))
                for c in data.get("comments") or []
            ),
            review_decision=data.get("reviewDecision") or "",
            status_check_rollup=tuple(
                StatusCheck(status=s.get("status") or "", conclusion=s.get("conclusion") or "")
                for s in data.get("statusCheckRollup") or []
            ),
        )


@dataclass(frozen=True)
class PRStatusInfo:
    """Classification result for a single pull request."""

    status: PRStatus
    reviewer: str | None = None
    details: str | None = None


def parse_timestamp(value: str | datetime) -> datetime:
    """Convert a GitHub timestamp to a local wall-clock aware datetime.

    Naive values are taken as UTC, which is what the GitHub API reports.
    """
    if isinstance(value, datetime):
        dt = value
    else:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone()


def _login(author: dict | None) -> str:
    if not author:
        return ""
    return author.get("login") or ""


def _review_request(data: dict) -> ReviewRequest:
    typename = data.get("__typename", "")
    if typename == "User":
        return UserReviewRequest(login=data.get("login") or "")
    if typename == "Team":
        return TeamReviewRequest(slug=data.get("slug") or "", name=data.get("name") or "")
    return UnknownReviewRequest(typename=typename)
