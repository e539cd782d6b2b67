"""Shared fixtures for studyscribe tests."""

from __future__ import annotations

import pytest

from studyscribe.config import SummarizationConfig
from studyscribe.store import MemorySessionStore
from studyscribe.summarization.base import RemoteSummarizer

PETS_TRANSCRIPT = (
    "The cat sat on the mat. The dog ran in the park. Cats and dogs are great pets. "
    "The weather was nice today. Everyone enjoyed the sunny afternoon."
)


class FakeRemote(RemoteSummarizer):
    """Remote summarizer that answers from a queue instead of the network."""

    requires_api_key = False

    def __init__(self, *answers: str | Exception | None) -> None:
        super().__init__(SummarizationConfig(backend="fake"))
        self.answers: list[str | Exception | None] = list(answers)
        self.calls: list[str] = []
        self.on_call = None

    def _complete(self, system_prompt: str, user_prompt: str) -> str | None:
        self.calls.append(user_prompt)
        if self.on_call is not None:
            self.on_call()
        answer = self.answers.pop(0) if self.answers else None
        if isinstance(answer, Exception):
            raise answer
        return answer

    def is_available(self) -> bool:
        return True


@pytest.fixture
def pets_transcript() -> str:
    return PETS_TRANSCRIPT


@pytest.fixture
def store() -> MemorySessionStore:
    """An in-memory store holding one empty session, ``s1``."""
    store = MemorySessionStore()
    store.create("s1")
    return store


@pytest.fixture
def openai_config(httpserver) -> SummarizationConfig:
    return SummarizationConfig(
        host=httpserver.url_for(""),
        backend="openai",
        model="test-model",
        api_key="test-key",
        timeout=5.0,
    )


def chat_completion(content: str | None) -> dict:
    """An OpenAI chat completion body with a single choice."""
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 0,
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
        "model": "test-model",
    }
