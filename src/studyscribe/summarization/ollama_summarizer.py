"""Ollama-based summarization."""

from __future__ import annotations

import ollama

from studyscribe.config import SummarizationConfig, TemplateConfig
from studyscribe.summarization.base import RemoteSummarizer
from studyscribe.summarization.prompts import build_messages


class OllamaSummarizer(RemoteSummarizer):
    """Summarizes transcripts using a local Ollama model. No API key is needed."""

    def __init__(self, config: SummarizationConfig, templates: dict[str, TemplateConfig] | None = None) -> None:
        super().__init__(config, templates)
        self._client = ollama.Client(host=config.host, timeout=config.timeout)

    def _complete(self, system_prompt: str, user_prompt: str) -> str | None:
        response = self._client.chat(
            model=self._config.model,
            messages=build_messages(system_prompt, user_prompt),
            options={"temperature": self._config.temperature},
        )
        message = response["message"]
        return message["content"] if message else None

    def is_available(self) -> bool:
        try:
            self._client.list()
            return True
        except Exception:
            return False
