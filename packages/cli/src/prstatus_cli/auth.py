"""GitHub token resolution for prstatus.

Anyone who can run ``gh pr list`` already has a usable token, so the gh CLI
session is tried after the environment.

Resolution order (stops at first success):
  1. GITHUB_TOKEN, then GH_TOKEN environment variables
  2. `gh auth token`
"""

from __future__ import annotations

import logging
import os
import subprocess

logger = logging.getLogger(__name__)

_TOKEN_ENV_VARS = ("GITHUB_TOKEN", "GH_TOKEN")
_GH_TIMEOUT_SECONDS = 5


def _gh_auth_token() -> str | None:
    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            timeout=_GH_TIMEOUT_SECONDS,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired) as e:
        logger.debug("gh auth token unavailable: %s", e)
        return None

    if result.returncode != 0:
        return None
    return result.stdout.strip() or None


def resolve_github_token() -> str | None:
    """Return a GitHub token, or None when no source provides one.

    Never raises. The caller decides whether a missing token is fatal.
    """
    for name in _TOKEN_ENV_VARS:
        token = os.environ.get(name)
        if token:
            logger.debug("Using GitHub token from %s.", name)
            return token

    token = _gh_auth_token()
    if token:
        logger.debug("Resolved GitHub token via gh CLI session.")
    return token
