"""Configuration management with TOML loading and defaults."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

CONFIG_DIR = Path("~/.config/studyscribe").expanduser()
CONFIG_PATH = CONFIG_DIR / "config.toml"

GEMINI_OPENAI_HOST = "https://generativelanguage.googleapis.com/v1beta/openai"
OLLAMA_DEFAULT_HOST = "http://localhost:11434"

DEFAULT_CONFIG_TOML = """\
[summarization]
backend = "openai"        # "openai" (any OpenAI-compatible API) or "ollama"
model = "gemini-1.5-flash"
host = "https://generativelanguage.googleapis.com/v1beta/openai"  # ollama: http://localhost:11434
api_key = ""              # or set GEMINI_API_KEY; empty = remote summaries disabled
temperature = 0.3
max_chars = 16000         # only the most recent characters are sent
timeout = 60.0            # seconds
fallback_sentences = 5    # sentences kept by the local fallback summary
# template = "notes"      # built-in: "notes" or "study"

# Custom templates (optional):
# [templates.my-notes]
# system_prompt = "You are a helpful assistant."
# prompt = "Summarize:\\n{transcript}"

[transcription]
host = "https://api.deepgram.com"
model = "nova-2"
api_key = ""              # or set DEEPGRAM_API_KEY
max_upload_mb = 25
timeout = 120.0

[storage]
dir = "~/.local/share/studyscribe/sessions"
"""


@dataclass
class SummarizationConfig:
    backend: str = "openai"
    model: str = "gemini-1.5-flash"
    host: str = GEMINI_OPENAI_HOST
    api_key: str = ""
    temperature: float = 0.3
    max_chars: int = 16000
    timeout: float = 60.0
    fallback_sentences: int = 5
    template: str = ""


@dataclass
class TranscriptionConfig:
    host: str = "https://api.deepgram.com"
    model: str = "nova-2"
    api_key: str = ""
    max_upload_mb: int = 25
    timeout: float = 120.0


@dataclass
class StorageConfig:
    dir: str = "~/.local/share/studyscribe/sessions"

    @property
    def resolved_dir(self) -> Path:
        return Path(self.dir).expanduser()


@dataclass
class TemplateConfig:
    system_prompt: str = ""
    prompt: str = ""


@dataclass
class Config:
    summarization: SummarizationConfig = field(default_factory=SummarizationConfig)
    transcription: TranscriptionConfig = field(default_factory=TranscriptionConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    templates: dict[str, TemplateConfig] = field(default_factory=dict)

    @classmethod
    def load(cls) -> Config:
        """Load config from TOML file, falling back to defaults."""
        config = cls()

        if CONFIG_PATH.exists():
            with open(CONFIG_PATH, "rb") as f:
                data = tomllib.load(f)
            config = _merge_toml(config, data)

        # Env var overrides
        if gemini_key := os.environ.get("GEMINI_API_KEY"):
            config.summarization.api_key = gemini_key
        if deepgram_key := os.environ.get("DEEPGRAM_API_KEY"):
            config.transcription.api_key = deepgram_key
        if ollama_host := os.environ.get("OLLAMA_HOST"):
            if config.summarization.backend == "ollama":
                config.summarization.host = ollama_host
        if store_dir := os.environ.get("STUDYSCRIBE_STORE_DIR"):
            config.storage.dir = store_dir

        return config


def _merge_section(section: object, values: dict) -> None:
    for k, v in values.items():
        if hasattr(section, k):
            setattr(section, k, v)


def _merge_toml(config: Config, data: dict) -> Config:
    """Merge TOML data into config dataclass."""
    if "summarization" in data:
        _merge_section(config.summarization, data["summarization"])

    if "transcription" in data:
        _merge_section(config.transcription, data["transcription"])

    if "storage" in data:
        _merge_section(config.storage, data["storage"])

    if "templates" in data:
        for name, t_data in data["templates"].items():
            config.templates[name] = TemplateConfig(
                system_prompt=t_data.get("system_prompt", ""),
                prompt=t_data.get("prompt", ""),
            )

    return config


def ensure_config_file() -> Path:
    """Create default config file if it doesn't exist. Returns the path."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    if not CONFIG_PATH.exists():
        CONFIG_PATH.write_text(DEFAULT_CONFIG_TOML)
    return CONFIG_PATH
