"""Detection of automated GitHub accounts by login."""

from __future__ import annotations

from typing import Sequence

BOT_PATTERNS = (
    "bot",
    "github-actions",
    "codex",
    "dependabot",
)


def is_bot(login: str, patterns: Sequence[str] = BOT_PATTERNS) -> bool:
    login = login.lower()
    return any(pattern in login for pattern in patterns)
