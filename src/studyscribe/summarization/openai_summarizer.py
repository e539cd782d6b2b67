"""OpenAI-compatible API summarization (Gemini, OpenAI, LM Studio, llama.cpp server, etc.)."""

from __future__ import annotations

from urllib.parse import urlparse

import openai

from studyscribe.config import SummarizationConfig, TemplateConfig
from studyscribe.summarization.base import RemoteSummarizer
from studyscribe.summarization.prompts import build_messages


def _base_url(host: str) -> str:
    """Hosts given without a path get the conventional ``/v1`` prefix."""
    if urlparse(host).path.strip("/"):
        return host.rstrip("/")
    return host.rstrip("/") + "/v1"


class OpenAISummarizer(RemoteSummarizer):
    """Summarizes transcripts using an OpenAI-compatible chat completions API."""

    requires_api_key = True

    def __init__(self, config: SummarizationConfig, templates: dict[str, TemplateConfig] | None = None) -> None:
        super().__init__(config, templates)
        self._client = openai.OpenAI(
            base_url=_base_url(config.host),
            # The client refuses to start without a key; has_credentials() gates real calls.
            api_key=config.api_key or "missing",
            timeout=config.timeout,
            max_retries=0,
        )

    def _complete(self, system_prompt: str, user_prompt: str) -> str | None:
        response = self._client.chat.completions.create(
            model=self._config.model,
            messages=build_messages(system_prompt, user_prompt),
            temperature=self._config.temperature,
        )
        if not response.choices:
            return None
        return response.choices[0].message.content

    def is_available(self) -> bool:
        if not self.has_credentials():
            return False
        try:
            self._client.models.list()
            return True
        except Exception:
            return False
