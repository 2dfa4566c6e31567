from __future__ import annotations

from prstatus_core.models import ReviewRequest, TeamReviewRequest, UserReviewRequest


def display_name(request: ReviewRequest) -> str:
    """Return the name a pending review request is shown under.

    Users show as their login, teams as ``@slug`` (falling back to the team
    name). Anything else resolves to ``"unknown"``.
    """
    if isinstance(request, UserReviewRequest):
        return request.login or "unknown"
    if isinstance(request, TeamReviewRequest):
        return f"@{request.slug or request.name or 'team'}"
    return "unknown"
