"""Remote summarizer base class and its result type."""

from __future__ import annotations

import abc
import logging
from dataclasses import dataclass

from studyscribe.config import SummarizationConfig, TemplateConfig
from studyscribe.summarization.prompts import clean_response, resolve_template, truncate_tail

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Ok:
    text: str


@dataclass(frozen=True)
class Unavailable:
    reason: str


RemoteResult = Ok | Unavailable


class RemoteSummarizer(abc.ABC):
    """Base class for remote summarization backends.

    ``summarize`` never raises: a missing credential, a transport error, an
    error status or a response of the wrong shape all come back as
    ``Unavailable`` so the caller can fall back to a local summary.
    """

    requires_api_key = False

    def __init__(self, config: SummarizationConfig, templates: dict[str, TemplateConfig] | None = None) -> None:
        self._config = config
        self._templates = templates or {}

    @property
    def name(self) -> str:
        return self._config.backend

    def has_credentials(self) -> bool:
        return not self.requires_api_key or bool(self._config.api_key)

    def summarize(self, transcript: str, template: str | None = None, max_chars: int | None = None) -> RemoteResult:
        """Summarize ``transcript``; ``max_chars`` overrides the configured tail limit, 0 sends it whole."""
        if not self.has_credentials():
            return Unavailable(f"no API key configured for {self.name}")

        system, prompt = resolve_template(template or self._config.template, self._templates)
        limit = self._config.max_chars if max_chars is None else max_chars

        try:
            user = prompt.format(transcript=truncate_tail(transcript, limit))
            content = self._complete(system, user)
        except Exception as exc:
            logger.warning("Remote summarization via %s failed", self.name, exc_info=True)
            return Unavailable(f"{type(exc).__name__}: {exc}")

        if not isinstance(content, str):
            logger.warning("Remote summarization via %s returned no text", self.name)
            return Unavailable("response did not contain text")

        text = clean_response(content)
        if not text:
            return Unavailable("response text was empty")
        return Ok(text)

    @abc.abstractmethod
    def _complete(self, system_prompt: str, user_prompt: str) -> str | None:
        """Send one generation request and return the raw answer text, if any."""

    @abc.abstractmethod
    def is_available(self) -> bool:
        """Check if the summarization backend is reachable."""
