"""Data models for the single-shot audio path."""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass
class AudioSummary:
    transcript: str
    summary: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)
