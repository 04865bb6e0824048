"""Utility functions for rate limit and response formatting."""

from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any, Dict, Iterable, Optional


def format_status(status: Optional[int]) -> str:
    """
    Render an HTTP status code the way GitHub reports it, e.g. "404 Not Found".

    Args:
        status: HTTP status code (may be None when the library has none)

    Returns:
        Status line string
    """
    if status is None:
        return "unknown status"
    try:
        return f"{status} {HTTPStatus(status).phrase}"
    except ValueError:
        return str(status)


def _as_utc(reset_at: datetime) -> datetime:
    # Older PyGithub releases hand back naive UTC datetimes
    if reset_at.tzinfo is None:
        return reset_at.replace(tzinfo=timezone.utc)
    return reset_at.astimezone(timezone.utc)


def seconds_until_reset(reset_at: Optional[datetime]) -> float:
    """
    Calculate seconds left until the rate limit window resets.

    Args:
        reset_at: Reset time as reported by the rate limit endpoint

    Returns:
        Seconds to wait (minimum 0)
    """
    if not isinstance(reset_at, datetime):
        return 0
    now = datetime.now(timezone.utc)
    return max(0, (_as_utc(reset_at) - now).total_seconds())


def format_rate_limit_info(rate_limit: Dict[str, Any]) -> str:
    """Format rate limit info for display."""
    remaining = rate_limit.get('remaining', '?')
    limit = rate_limit.get('limit', '?')
    reset_at = rate_limit.get('reset')

    if isinstance(reset_at, datetime):
        reset_str = _as_utc(reset_at).strftime('%H:%M:%S')
    elif reset_at:
        reset_str = str(reset_at)
    else:
        reset_str = '?'

    return f"Rate limit: {remaining}/{limit} (resets at {reset_str})"


def format_user_list(org: str, logins: Iterable[str]) -> str:
    """Build the chat message listing every username of an organization."""
    lines = [f"*Here's a list of all {org} Github usernames:*"]
    lines.extend(logins)
    return "\n".join(lines)


def format_issue_created(number: int, html_url: str) -> str:
    """Build the chat message announcing a newly created issue."""
    return f"*Issue # {number} has been created successfully*\n{html_url}"
