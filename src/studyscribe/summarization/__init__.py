from __future__ import annotations

from typing import TYPE_CHECKING

from studyscribe.summarization.base import Ok, RemoteResult, RemoteSummarizer, Unavailable
from studyscribe.summarization.extractive import ExtractiveSummarizer, summarize_extractive

if TYPE_CHECKING:
    from studyscribe.config import Config

__all__ = [
    "ExtractiveSummarizer",
    "Ok",
    "RemoteResult",
    "RemoteSummarizer",
    "Unavailable",
    "create_summarizer",
    "summarize_extractive",
]


def create_summarizer(config: Config) -> RemoteSummarizer:
    """Create the appropriate remote summarizer based on config."""
    if config.summarization.backend == "ollama":
        from studyscribe.summarization.ollama_summarizer import OllamaSummarizer

        return OllamaSummarizer(config.summarization, config.templates)
    else:
        from studyscribe.summarization.openai_summarizer import OpenAISummarizer

        return OpenAISummarizer(config.summarization, config.templates)
