"""Tests for bot account detection."""

import pytest

from prstatus_core.bots import is_bot


@pytest.mark.parametrize(
    "login",
    ["dependabot[bot]", "github-actions", "renovate-bot", "chatgpt-codex-connector", "CodeRabbitAI-Bot"],
)
def test_detects_bot_logins(login):
    assert is_bot(login) is True


@pytest.mark.parametrize("login", ["alice", "octocat", "robert", ""])
def test_human_logins_pass(login):
    assert is_bot(login) is False


def test_custom_patterns_replace_defaults():
    assert is_bot("ci-runner", patterns=["runner"]) is True
    assert is_bot("dependabot", patterns=["runner"]) is False


def test_substring_match_catches_lookalike_names():
    # Substring match, so "jabbott" counts.
    assert is_bot("jabbott") is True


def test_patterns_accept_any_sequence():
    assert is_bot("Renovate", patterns=("renovate",)) is True
    assert is_bot("alice", patterns=()) is False
