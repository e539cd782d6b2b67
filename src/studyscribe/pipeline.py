"""Pipeline orchestration: merge -> mark pending -> summarize -> persist."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum

from studyscribe.config import Config
from studyscribe.errors import UpstreamUnavailable, ValidationError
from studyscribe.status import SummaryStatus, advance, effective_status
from studyscribe.store import SessionStore
from studyscribe.summarization import Ok, RemoteSummarizer, create_summarizer, summarize_extractive
from studyscribe.transcript import merge_transcript
from studyscribe.transcription.base import Transcriber
from studyscribe.transcription.models import AudioSummary

logger = logging.getLogger(__name__)


class SummaryOrigin(str, Enum):
    REMOTE = "remote"
    LOCAL = "local"


@dataclass(frozen=True)
class SummaryResult:
    text: str
    origin: SummaryOrigin


@dataclass(frozen=True)
class SummaryView:
    transcript: str | None
    summary: str | None
    status: SummaryStatus
    lang: str | None

    def to_dict(self) -> dict[str, str | None]:
        return {
            "transcript": self.transcript,
            "summary": self.summary,
            "status": self.status.value,
            "lang": self.lang,
        }


class SessionLocks:
    """One lock per session id, dropped again once no thread holds or waits on it."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, tuple[threading.Lock, int]] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    @contextmanager
    def hold(self, session_id: str) -> Iterator[None]:
        with self._guard:
            lock, users = self._locks.get(session_id, (threading.Lock(), 0))
            self._locks[session_id] = (lock, users + 1)
        try:
            with lock:
                yield
        finally:
            with self._guard:
                lock, users = self._locks[session_id]
                if users == 1:
                    del self._locks[session_id]
                else:
                    self._locks[session_id] = (lock, users - 1)


class SummaryOrchestrator:
    """Applies transcript submissions to sessions and keeps their summaries current.

    Submissions for the same session are serialized; each one re-summarizes the
    whole merged transcript. The remote summarizer is tried first and the local
    extractive summary is used whenever it comes back unavailable.
    """

    def __init__(
        self,
        store: SessionStore,
        remote: RemoteSummarizer,
        fallback_sentences: int = 5,
        locks: SessionLocks | None = None,
    ) -> None:
        if fallback_sentences < 1:
            raise ValueError(f"fallback_sentences must be at least 1, got {fallback_sentences}")
        self._store = store
        self._remote = remote
        self._fallback_sentences = fallback_sentences
        self._locks = locks or SessionLocks()

    @classmethod
    def from_config(cls, config: Config, store: SessionStore) -> SummaryOrchestrator:
        return cls(store, create_summarizer(config), config.summarization.fallback_sentences)

    def submit_transcript(self, session_id: str, text: str, lang: str | None = None) -> SummaryResult:
        """Append a fragment to the session transcript and return the refreshed summary."""
        if not isinstance(text, str) or not text.strip():
            raise ValidationError("Transcript fragment must be a non-empty string")
        if lang is not None and not isinstance(lang, str):
            raise ValidationError("Transcript language must be a string")

        with self._locks.hold(session_id):
            record = self._store.load(session_id)
            merged = merge_transcript(record.transcript, text)

            pending = advance(record.summary_status, SummaryStatus.PENDING)
            # Readers polling the session must see pending before the slow remote call starts
            self._store.update(
                session_id,
                transcript=merged,
                summary_status=pending,
                transcript_lang=lang,
            )

            result = self._summarize(merged)

            self._store.update(
                session_id,
                summary=result.text,
                summary_status=advance(pending, SummaryStatus.COMPLETED),
            )

        logger.info("Session %s summarized (%s, %d chars)", session_id, result.origin.value, len(result.text))
        return result

    def _summarize(self, transcript: str) -> SummaryResult:
        remote = self._remote.summarize(transcript)
        if isinstance(remote, Ok):
            return SummaryResult(remote.text, SummaryOrigin.REMOTE)

        logger.info("Remote summary unavailable (%s), using extractive fallback", remote.reason)
        return SummaryResult(summarize_extractive(transcript, self._fallback_sentences), SummaryOrigin.LOCAL)

    def get_summary(self, session_id: str) -> SummaryView:
        record = self._store.load(session_id)
        return SummaryView(
            transcript=record.transcript or None,
            summary=record.summary or None,
            status=effective_status(record.summary_status, record.summary),
            lang=record.transcript_lang or None,
        )


def transcribe_and_summarize_audio(
    config: Config,
    audio: bytes,
    mime_type: str | None = None,
    transcriber: Transcriber | None = None,
    remote: RemoteSummarizer | None = None,
) -> AudioSummary:
    """Transcribe an audio upload and summarize it remotely.

    There is no local fallback on this path: any upstream failure raises
    UpstreamUnavailable.
    """
    if transcriber is None:
        from studyscribe.transcription.deepgram_transcriber import DeepgramTranscriber

        transcriber = DeepgramTranscriber(config.transcription)
    remote = remote or create_summarizer(config)

    if not transcriber.has_credentials():
        raise UpstreamUnavailable("Missing DEEPGRAM_API_KEY")
    if not remote.has_credentials():
        raise UpstreamUnavailable("Missing GEMINI_API_KEY")
    if not audio:
        raise ValidationError("No audio uploaded")
    max_bytes = config.transcription.max_upload_mb * 1024 * 1024
    if len(audio) > max_bytes:
        raise ValidationError(f"Audio exceeds the {config.transcription.max_upload_mb} MB upload limit")

    transcript = transcriber.transcribe(audio, mime_type)

    # Single-shot uploads are summarized whole
    result = remote.summarize(transcript, template="study", max_chars=0)
    if not isinstance(result, Ok):
        raise UpstreamUnavailable("Summarization failed", details=result.reason)

    return AudioSummary(transcript=transcript, summary=result.text)
