"""Year-detection rules shared by the watchdog probes.

Each rule returns a ``Detection`` when it applies and ``None`` otherwise.
Probes list their rules in precedence order and take the first that
applies; rules are never merged.
"""

import re
from collections.abc import Iterable
from datetime import datetime

from factgrid.domain.watchdog.model.value import Detection

_YEAR = re.compile(r"20\d{2}")


def mentioned_year(message: str) -> int | None:
    """First 4-digit year from 2000 on that appears in a commit message."""
    match = _YEAR.search(message)
    return int(match.group(0)) if match else None


def version_control_signal(mentioned: int | None, previous: int | None) -> Detection | None:
    """The commit message names a year newer than the one we hold."""
    if mentioned is None or previous is None or mentioned <= previous:
        return None
    return Detection(changed=True, detected_year=mentioned, method=f"commit mentions {mentioned}")


def unknown_year_signal(mentioned: int | None, previous: int | None) -> Detection | None:
    """No year on record yet, and the commit message names one."""
    if previous is not None or mentioned is None:
        return None
    return Detection(changed=True, detected_year=mentioned, method=f"commit mentions {mentioned}")


def temporal_window_signal(
    committed_at: datetime,
    previous: int | None,
    *,
    window_opens: int = 10,
    release_month: int = 11,
) -> Detection | None:
    """A commit landed inside the publisher's annual release window.

    Applies from ``window_opens`` onwards in any year at or after
    ``previous``. Reports a change when the commit year is newer, or when
    the commit month has reached ``release_month``, even if the year is
    the same as the one we hold.
    """
    if previous is None:
        return None
    if committed_at.year < previous or committed_at.month < window_opens:
        return None
    changed = committed_at.year > previous or committed_at.month >= release_month
    return Detection(
        changed=changed,
        detected_year=committed_at.year,
        method=f"commit in release window ({committed_at:%Y-%m})",
    )


def latest_non_null_year(entries: Iterable[tuple[int, object | None]]) -> int | None:
    """Maximum year among (year, value) pairs with a non-null value."""
    years = [year for year, value in entries if value is not None]
    return max(years) if years else None


def newer_year_signal(latest: int | None, previous: int | None) -> Detection:
    """An API scan found data for a year past the one we hold."""
    changed = latest is not None and previous is not None and latest > previous
    return Detection(changed=changed, detected_year=latest)


def first_applicable(*candidates: Detection | None, previous: int | None) -> Detection:
    """First non-None detection, or "unchanged at ``previous``"."""
    for candidate in candidates:
        if candidate is not None:
            return candidate
    return Detection(changed=False, detected_year=previous)
