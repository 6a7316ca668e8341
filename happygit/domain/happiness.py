"""Happiness score extraction from commit messages.

A commit carries a score when its message contains the marker ``h:``
followed by a single digit, e.g. ``"fix flaky test h:7"``. Only one
character is read after the marker, so ``h:12`` scores 1. The first line
holding a marker decides, and on that line the last marker wins, so
``"fix auth: token h:8"`` scores 8.
"""
import logging
import re
from typing import AsyncIterator, Optional


logger = logging.getLogger(__name__)

HAPPINESS_PATTERN = re.compile(r"^.*h:(.)", re.MULTILINE)


def commit_message(commit: dict) -> Optional[str]:
    """Return the nested commit message, or None when it is missing."""
    if not isinstance(commit, dict):
        return None
    details = commit.get("commit")
    if not isinstance(details, dict):
        return None
    message = details.get("message")
    return message if isinstance(message, str) else None


def happiness(commit: dict) -> Optional[int]:
    """Pluck a happiness score out of a GitHub commit record.

    Args:
        commit: Commit record as returned by the commits endpoint

    Returns:
        The score, or None when the commit has no usable score
    """
    message = commit_message(commit)
    if not message:
        return None

    match = HAPPINESS_PATTERN.search(message)
    if match is None:
        return None

    captured = match.group(1)
    if not captured.isdecimal():
        logger.debug(f"Ignoring malformed happiness marker 'h:{captured}' in {commit.get('sha')}")
        return None

    return int(captured)


async def happy_scores(commits: AsyncIterator[dict]) -> AsyncIterator[int]:
    """Yield the scores of the commits that have one, in stream order."""
    async for commit in commits:
        score = happiness(commit)
        if score is not None:
            yield score
