"""Markdown output formatter for session summaries."""

from __future__ import annotations

from studyscribe.pipeline import SummaryView
from studyscribe.status import SummaryStatus

_STATUS_LABELS = {
    SummaryStatus.NOT_AVAILABLE: "not available",
    SummaryStatus.PENDING: "pending",
    SummaryStatus.COMPLETED: "completed",
}


def format_summary(summary_text: str) -> str:
    """Format a summary as markdown."""
    lines = ["# Session Summary\n", summary_text.strip(), ""]
    return "\n".join(lines) + "\n"


def format_transcript(transcript: str, lang: str | None = None) -> str:
    """Format an accumulated transcript, one submitted fragment per line."""
    lines = ["# Transcript\n"]
    if lang:
        lines.append(f"**Language:** {lang}  ")
        lines.append("")
    lines.extend(line.strip() for line in transcript.splitlines() if line.strip())
    return "\n".join(lines) + "\n"


def format_session(view: SummaryView) -> str:
    """Format the full summary view of a session."""
    parts = [f"**Status:** {_STATUS_LABELS[view.status]}\n"]
    if view.summary:
        parts.append(format_summary(view.summary))
    if view.transcript:
        parts.append(format_transcript(view.transcript, view.lang))
    return "\n".join(parts)
