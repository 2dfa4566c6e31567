"""Fetching the authenticated user's open pull requests.

Two sources produce the same PullRequest snapshots:
- the GitHub REST API via PyGithub (the default)
- a saved ``gh pr list --json ...`` document (``load_pull_requests``)

Errors are not caught here. A GithubException or a malformed document must
stop the run before anything is classified.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from github import Github

from prstatus_core.models import (
    Comment,
    PullRequest,
    Review,
    StatusCheck,
    TeamReviewRequest,
    UserReviewRequest,
    parse_timestamp,
)

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 100


def get_client(token: str) -> Github:
    return Github(token)


def get_current_user(client: Github) -> str:
    return client.get_user().login


def get_open_pull_requests(client: Github, login: str, limit: int = DEFAULT_LIMIT) -> list[PullRequest]:
    """Return up to ``limit`` open PRs authored by ``login`` across all repositories."""
    results = client.search_issues(f"is:pr is:open author:{login}", sort="updated", order="desc")

    prs: list[PullRequest] = []
    for issue in results:
        if len(prs) >= limit:
            break
        pull = issue.as_pull_request()
        logger.debug("Fetching review data for %s#%d", issue.repository.full_name, pull.number)
        prs.append(_to_pull_request(issue.repository, pull))
    return prs


def load_pull_requests(path: str) -> list[PullRequest]:
    """Read PRs from a file holding ``gh pr list --json ...`` output.

    Raises ValueError if the document is not a JSON list of PR objects.
    """
    data = json.loads(Path(path).read_text())
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON list of pull requests in {path}, got {type(data).__name__}.")
    try:
        return [PullRequest.from_dict(item) for item in data]
    except (KeyError, TypeError, AttributeError) as e:
        raise ValueError(f"Malformed pull request record in {path}: {e!r}") from e


def _to_pull_request(repo, pull) -> PullRequest:
    users, teams = pull.get_review_requests()
    requests = [UserReviewRequest(login=u.login) for u in users]
    requests += [TeamReviewRequest(slug=t.slug or "", name=t.name or "") for t in teams]

    return PullRequest(
        number=pull.number,
        title=pull.title or "",
        url=pull.html_url,
        updated_at=parse_timestamp(pull.updated_at),
        created_at=parse_timestamp(pull.created_at),
        reviews=tuple(
            Review(
                author=_login(r.user),
                state=r.state or "",
                submitted_at=parse_timestamp(r.submitted_at),
                body=r.body or "",
                author_association=r.raw_data.get("author_association") or "",
            )
            for r in pull.get_reviews()
            if r.submitted_at is not None
        ),
        review_requests=tuple(requests),
        comments=tuple(
            Comment(author=_login(c.user), created_at=parse_timestamp(c.created_at))
            for c in pull.get_issue_comments()
        ),
        status_check_rollup=tuple(_check_runs(repo, pull.head.sha)),
    )


def _check_runs(repo, sha: str) -> list[StatusCheck]:
    # REST reports check runs in lower case; the classifier speaks GraphQL's upper case.
    return [
        StatusCheck(status=(run.status or "").upper(), conclusion=(run.conclusion or "").upper())
        for run in repo.get_commit(sha).get_check_runs()
    ]


def _login(user) -> str:
    if user is None:
        return ""
    return user.login or ""
