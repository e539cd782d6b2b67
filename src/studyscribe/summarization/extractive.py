"""Deterministic frequency-based extractive summarization.

Used when no remote model is reachable. Sentences are scored by the global
frequency of their content words, normalized by sentence length, and the top
scorers are returned in document order.
"""

from __future__ import annotations

import re
from collections import Counter

_WHITESPACE_RE = re.compile(r"\s+")
_SENTENCE_RE = re.compile(r"[^.!?]+[.!?]+")
_TOKEN_RE = re.compile(r"[a-z0-9']+")

# Sentences shorter than this are scored as if they had this many tokens.
_MIN_SCORING_LENGTH = 5

STOPWORDS = frozenset({
    "the", "is", "in", "at", "of", "a", "an", "and", "or", "to", "for", "on", "with",
    "as", "by", "it", "this", "that", "from", "are", "be", "was", "were", "will",
    "can", "could",
})


def split_sentences(text: str) -> list[str]:
    """Split text into sentences ending in ``.``, ``!`` or ``?``.

    Text without any terminator is returned whole as a single sentence.
    Anything after the last terminator is dropped.
    """
    collapsed = _WHITESPACE_RE.sub(" ", text)
    return _SENTENCE_RE.findall(collapsed) or [text]


def tokenize(text: str) -> list[str]:
    return _TOKEN_RE.findall(text.lower())


def word_frequencies(text: str) -> Counter[str]:
    return Counter(token for token in tokenize(text) if token not in STOPWORDS)


def score_sentence(sentence: str, frequencies: Counter[str]) -> float:
    tokens = tokenize(sentence)
    total = sum(frequencies.get(token, 0) for token in tokens)
    return total / max(_MIN_SCORING_LENGTH, len(tokens))


class ExtractiveSummarizer:
    """Picks the highest-scoring sentences of a text."""

    def __init__(self, max_sentences: int = 5) -> None:
        self.max_sentences = max_sentences

    def summarize(self, text: str, max_sentences: int | None = None) -> str:
        limit = self.max_sentences if max_sentences is None else max_sentences
        if not text or limit <= 0:
            return ""

        sentences = split_sentences(text)
        frequencies = word_frequencies(text)
        scored = [(score_sentence(s, frequencies), i, s) for i, s in enumerate(sentences)]

        # sorted() is stable: among equal scores the earlier sentence stays first
        ranked = sorted(scored, key=lambda item: item[0], reverse=True)
        selected = sorted(ranked[:limit], key=lambda item: item[1])
        return " ".join(sentence.strip() for _, _, sentence in selected)


def summarize_extractive(text: str, max_sentences: int = 5) -> str:
    """Return up to ``max_sentences`` key sentences of ``text`` in original order."""
    return ExtractiveSummarizer(max_sentences).summarize(text)
