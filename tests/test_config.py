"""Tests for configuration loading."""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from unittest import mock

from studyscribe.config import (
    DEFAULT_CONFIG_TOML,
    GEMINI_OPENAI_HOST,
    Config,
    StorageConfig,
    _merge_toml,
    ensure_config_file,
)


class TestDefaults:
    def test_default_backend_is_gemini(self):
        cfg = Config()
        assert cfg.summarization.backend == "openai"
        assert cfg.summarization.host == GEMINI_OPENAI_HOST
        assert cfg.summarization.model == "gemini-1.5-flash"

    def test_default_summarization_limits(self):
        cfg = Config()
        assert cfg.summarization.max_chars == 16000
        assert cfg.summarization.temperature == 0.3
        assert cfg.summarization.fallback_sentences == 5

    def test_no_credentials_by_default(self):
        cfg = Config()
        assert cfg.summarization.api_key == ""
        assert cfg.transcription.api_key == ""

    def test_default_toml_matches_dataclass_defaults(self):
        data = tomllib.loads(DEFAULT_CONFIG_TOML)
        merged = _merge_toml(Config(), data)
        assert merged == Config()


class TestMergeToml:
    def test_full_override(self):
        data = {
            "summarization": {"backend": "ollama", "model": "mistral", "max_chars": 8000},
            "transcription": {"model": "nova-3"},
            "storage": {"dir": "/tmp/sessions"},
        }
        merged = _merge_toml(Config(), data)
        assert merged.summarization.backend == "ollama"
        assert merged.summarization.model == "mistral"
        assert merged.summarization.max_chars == 8000
        assert merged.transcription.model == "nova-3"
        assert merged.storage.dir == "/tmp/sessions"

    def test_partial_toml_keeps_defaults(self):
        merged = _merge_toml(Config(), {"summarization": {"model": "gemini-2.0-flash"}})
        assert merged.summarization.model == "gemini-2.0-flash"
        assert merged.summarization.host == GEMINI_OPENAI_HOST
        assert merged.transcription.host == "https://api.deepgram.com"

    def test_unknown_keys_ignored(self):
        merged = _merge_toml(Config(), {"summarization": {"nonexistent_key": 42}})
        assert not hasattr(merged.summarization, "nonexistent_key")

    def test_templates(self):
        data = {"templates": {"exam-prep": {"prompt": "List exam topics:\n{transcript}"}}}
        merged = _merge_toml(Config(), data)
        assert merged.templates["exam-prep"].prompt == "List exam topics:\n{transcript}"
        assert merged.templates["exam-prep"].system_prompt == ""


class TestLoad:
    def test_reads_config_file(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('[summarization]\nmodel = "custom"\n\n[storage]\ndir = "/tmp/x"\n')
        with mock.patch("studyscribe.config.CONFIG_PATH", path), mock.patch.dict(os.environ, {}, clear=True):
            cfg = Config.load()
        assert cfg.summarization.model == "custom"
        assert cfg.storage.dir == "/tmp/x"


class TestEnvOverrides:
    def _load(self, env: dict[str, str]) -> Config:
        with mock.patch.dict(os.environ, env, clear=True):
            with mock.patch("studyscribe.config.CONFIG_PATH") as mock_path:
                mock_path.exists.return_value = False
                return Config.load()

    def test_gemini_key_from_env(self):
        assert self._load({"GEMINI_API_KEY": "g-123"}).summarization.api_key == "g-123"

    def test_deepgram_key_from_env(self):
        assert self._load({"DEEPGRAM_API_KEY": "d-123"}).transcription.api_key == "d-123"

    def test_store_dir_from_env(self):
        assert self._load({"STUDYSCRIBE_STORE_DIR": "/srv/sessions"}).storage.dir == "/srv/sessions"

    def test_ollama_host_ignored_for_openai_backend(self):
        cfg = self._load({"OLLAMA_HOST": "http://remote:11434"})
        assert cfg.summarization.host == GEMINI_OPENAI_HOST

    def test_ollama_host_for_ollama_backend(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('[summarization]\nbackend = "ollama"\n')
        with mock.patch("studyscribe.config.CONFIG_PATH", path):
            with mock.patch.dict(os.environ, {"OLLAMA_HOST": "http://remote:11434"}, clear=True):
                cfg = Config.load()
        assert cfg.summarization.host == "http://remote:11434"


class TestEnsureConfigFile:
    def test_creates_file_when_missing(self, tmp_path):
        config_dir = tmp_path / "studyscribe"
        config_path = config_dir / "config.toml"
        with mock.patch("studyscribe.config.CONFIG_DIR", config_dir), \
             mock.patch("studyscribe.config.CONFIG_PATH", config_path):
            result = ensure_config_file()
        assert result.exists()
        assert "[summarization]" in result.read_text()

    def test_does_not_overwrite_existing(self, tmp_path):
        config_dir = tmp_path / "studyscribe"
        config_dir.mkdir()
        config_path = config_dir / "config.toml"
        config_path.write_text("# custom config\n")
        with mock.patch("studyscribe.config.CONFIG_DIR", config_dir), \
             mock.patch("studyscribe.config.CONFIG_PATH", config_path):
            ensure_config_file()
        assert config_path.read_text() == "# custom config\n"


class TestResolvedDir:
    def test_expands_tilde(self):
        resolved = StorageConfig(dir="~/sessions").resolved_dir
        assert "~" not in str(resolved)
        assert str(resolved).endswith("sessions")

    def test_absolute_path_unchanged(self):
        assert StorageConfig(dir="/tmp/sessions").resolved_dir == Path("/tmp/sessions")
