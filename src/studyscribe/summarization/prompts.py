"""Prompt templates for study-session summarization."""

from __future__ import annotations

import re

_THINK_RE = re.compile(r"<think>[\s\S]*?</think>\s*", re.IGNORECASE)
_ORPHAN_THINK_CLOSE_RE = re.compile(r"^[\s\S]*?</think>\s*", re.IGNORECASE)


def clean_response(text: str) -> str:
    """Strip reasoning/thinking tags from LLM responses."""
    text = _THINK_RE.sub("", text).strip()
    if "</think>" in text.lower():
        text = _ORPHAN_THINK_CLOSE_RE.sub("", text).strip()
    return text


def truncate_tail(text: str, max_chars: int) -> str:
    """Keep only the last ``max_chars`` characters so the latest discussion survives."""
    if max_chars <= 0 or len(text) <= max_chars:
        return text
    return text[-max_chars:]


NOTES_PROMPT = (
    "You are an expert note-taker for student study sessions. Summarize the discussion "
    "into clear, concise bullet points with headings, action items, and key takeaways. "
    "Keep it objective and avoid fabrications. Transcript begins:\n\n{transcript}"
)

STUDY_PROMPT = """You are a study assistant. Summarize the following study discussion into:
- Key takeaways
- Concepts explained
- Action items/homework
- Questions raised

Keep it concise and structured with bullet points.

Transcript:
{transcript}"""


# Built-ins carry the whole instruction in the user message; user templates may add a system prompt.
TEMPLATES: dict[str, dict[str, str]] = {
    "notes": {"system": "", "prompt": NOTES_PROMPT},
    "study": {"system": "", "prompt": STUDY_PROMPT},
}

DEFAULT_TEMPLATE = "notes"


def resolve_template(
    template_name: str, user_templates: dict | None = None,
) -> tuple[str, str]:
    """Resolve a template name to (system_prompt, user_prompt).

    Looks up user-defined templates first, then built-ins. Falls back to "notes".
    A user template inherits missing fields from the built-in of the same name.
    """
    name = template_name or DEFAULT_TEMPLATE
    user_templates = user_templates or {}
    builtin = TEMPLATES.get(name, TEMPLATES[DEFAULT_TEMPLATE])

    if name in user_templates:
        t = user_templates[name]
        return (
            t.system_prompt or builtin["system"],
            t.prompt or builtin["prompt"],
        )
    return builtin["system"], builtin["prompt"]


def build_messages(system_prompt: str, user_prompt: str) -> list[dict[str, str]]:
    """Chat messages for one request; the system message is omitted when empty."""
    messages = []
    if system_prompt:
        messages.append({"role": "system", "content": system_prompt})
    messages.append({"role": "user", "content": user_prompt})
    return messages


def list_templates() -> list[str]:
    """Return the names of all built-in templates."""
    return list(TEMPLATES.keys())
