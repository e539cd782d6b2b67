"""Accumulation of submitted transcript fragments."""

from __future__ import annotations

_SEPARATOR = "\n"


def merge_transcript(existing: str | None, incoming: str) -> str:
    """Append a fragment to a session's accumulated transcript.

    Neither side is trimmed or deduplicated, so submitting the same fragment
    twice stores it twice.
    """
    if not existing:
        return incoming
    return existing + _SEPARATOR + incoming
