"""Abstract base class for transcribers."""

from __future__ import annotations

import abc


class Transcriber(abc.ABC):
    """Base class for speech-to-text backends."""

    @abc.abstractmethod
    def transcribe(self, audio: bytes, mime_type: str | None = None) -> str:
        """Transcribe encoded audio and return the transcript text."""

    @abc.abstractmethod
    def has_credentials(self) -> bool:
        """Whether the backend is configured well enough to be called."""
