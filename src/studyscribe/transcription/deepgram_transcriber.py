"""Deepgram speech-to-text over its REST API."""

from __future__ import annotations

import logging

import httpx

from studyscribe.config import TranscriptionConfig
from studyscribe.errors import UpstreamUnavailable
from studyscribe.transcription.base import Transcriber

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "audio/webm"


def _extract_transcript(payload: object) -> str | None:
    """Pull ``results.channels[0].alternatives[0].transcript`` out of a response body."""
    try:
        alternative = payload["results"]["channels"][0]["alternatives"][0]
    except (KeyError, IndexError, TypeError):
        return None
    transcript = alternative.get("transcript") if isinstance(alternative, dict) else None
    return transcript if isinstance(transcript, str) else None


class DeepgramTranscriber(Transcriber):
    """Sends a whole audio upload to Deepgram's pre-recorded endpoint."""

    def __init__(self, config: TranscriptionConfig) -> None:
        self._config = config

    def has_credentials(self) -> bool:
        return bool(self._config.api_key)

    def transcribe(self, audio: bytes, mime_type: str | None = None) -> str:
        if not self.has_credentials():
            raise UpstreamUnavailable("Missing DEEPGRAM_API_KEY")

        url = self._config.host.rstrip("/") + "/v1/listen"
        params = {"model": self._config.model, "smart_format": "true", "punctuate": "true"}
        headers = {
            "Authorization": f"Token {self._config.api_key}",
            "Content-Type": mime_type or DEFAULT_MIME_TYPE,
        }

        try:
            with httpx.Client(timeout=self._config.timeout) as client:
                response = client.post(url, params=params, headers=headers, content=audio)
        except httpx.HTTPError as exc:
            raise UpstreamUnavailable("Deepgram request failed", details=str(exc)) from exc

        if response.is_error:
            logger.warning("Deepgram returned HTTP %s", response.status_code)
            raise UpstreamUnavailable("Deepgram error", details=response.text)

        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamUnavailable("Deepgram returned invalid JSON", details=response.text) from exc

        transcript = _extract_transcript(payload)
        if not transcript or not transcript.strip():
            raise UpstreamUnavailable("Deepgram returned no transcript")
        return transcript.strip()
