"""Summary status state machine."""

from __future__ import annotations

from enum import Enum

from studyscribe.errors import InvalidTransitionError


class SummaryStatus(str, Enum):
    NOT_AVAILABLE = "not_available"
    PENDING = "pending"
    COMPLETED = "completed"


def advance(current: SummaryStatus | None, target: SummaryStatus) -> SummaryStatus:
    """Validate a status change and return the new status.

    Any state may move to ``pending`` (a new submission supersedes the current
    summary). Only ``pending`` may move to ``completed``.
    """
    if target is SummaryStatus.PENDING:
        return target
    if target is SummaryStatus.COMPLETED and current is SummaryStatus.PENDING:
        return target
    shown = current.value if current is not None else "unset"
    raise InvalidTransitionError(f"Cannot move summary status from {shown} to {target.value}")


def effective_status(stored: SummaryStatus | None, summary: str | None) -> SummaryStatus:
    """Status reported to readers.

    Records written before status tracking existed have a summary but no
    status; those read as completed.
    """
    if stored is not None:
        return stored
    if summary:
        return SummaryStatus.COMPLETED
    return SummaryStatus.NOT_AVAILABLE
