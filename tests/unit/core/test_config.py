"""Unit tests for settings loading."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from pydantic import ValidationError

from healthymeal.core.config import Settings, get_settings
from healthymeal.core.config.settings import ModificationSettings, OpenRouterSettings
from healthymeal.core.config.yaml_source import deep_merge


if TYPE_CHECKING:
    from pathlib import Path


pytestmark = pytest.mark.unit


class TestDeepMerge:
    """Tests for deep_merge."""

    def test_nested_override(self) -> None:
        """Should override leaves and keep untouched siblings."""
        base = {"llm": {"openrouter": {"url": "a", "timeout": 60.0}}, "x": 1}
        override = {"llm": {"openrouter": {"timeout": 5.0}}}

        assert deep_merge(base, override) == {
            "llm": {"openrouter": {"url": "a", "timeout": 5.0}},
            "x": 1,
        }

    def test_does_not_mutate_base(self) -> None:
        """Should return a new dict."""
        base = {"a": {"b": 1}}

        deep_merge(base, {"a": {"b": 2}})

        assert base == {"a": {"b": 1}}


class TestSettings:
    """Tests for Settings."""

    def test_base_yaml_values(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should load defaults from the base configuration files."""
        monkeypatch.setenv("APP_ENV", "development")

        settings = Settings()

        assert settings.llm.openrouter.url == "https://openrouter.ai/api/v1"
        assert settings.llm.openrouter.model == "google/gemini-2.0-flash-exp:free"
        assert settings.llm.openrouter.timeout == 60.0
        assert settings.modification.temperature == 0.7
        assert settings.modification.max_tokens == 2000
        assert settings.modification.structured_output is True
        assert settings.auth.user_id_header == "X-User-ID"
        assert settings.api.v1_prefix == "/api/v1"
        assert settings.is_development

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should merge the environment directory on top of the base files."""
        monkeypatch.setenv("APP_ENV", "test")

        settings = Settings()

        assert settings.llm.openrouter.url == "https://openrouter.test/api/v1"
        assert settings.llm.openrouter.timeout == 5.0
        assert settings.llm.openrouter.model == "google/gemini-2.0-flash-exp:free"
        assert settings.logging.level == "DEBUG"
        assert settings.is_testing

    def test_env_var_beats_yaml(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should let nested environment variables override YAML."""
        monkeypatch.setenv("APP_ENV", "test")
        monkeypatch.setenv("LLM__OPENROUTER__MODEL", "meta-llama/llama-3.1-8b-instruct")
        monkeypatch.setenv("OPENROUTER_API_KEY", "sk-or-test")

        settings = Settings()

        assert settings.llm.openrouter.model == "meta-llama/llama-3.1-8b-instruct"
        assert settings.OPENROUTER_API_KEY == "sk-or-test"

    def test_custom_config_dir(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        """Should read YAML from HEALTHYMEAL_CONFIG_DIR when set."""
        (tmp_path / "base").mkdir()
        (tmp_path / "base" / "app.yaml").write_text('app:\n  name: "Custom"\n')
        monkeypatch.setenv("HEALTHYMEAL_CONFIG_DIR", str(tmp_path))
        monkeypatch.setenv("APP_ENV", "nowhere")

        settings = Settings()

        assert settings.app.name == "Custom"
        assert settings.llm.openrouter.timeout == 60.0

    def test_database_url_omits_password(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should build the URL without the secret."""
        monkeypatch.setenv("DATABASE_PASSWORD", "hunter2")

        settings = Settings()

        assert "hunter2" not in settings.database_url
        assert settings.database_url.startswith("postgresql://")

    def test_get_settings_is_cached(self) -> None:
        """Should return the same instance until the cache is cleared."""
        assert get_settings() is get_settings()

    def test_timeout_must_be_positive(self) -> None:
        """Should reject a non-positive timeout."""
        with pytest.raises(ValidationError):
            OpenRouterSettings(timeout=0)

    def test_audit_drain_timeout_from_yaml(self) -> None:
        """Should load the shutdown drain timeout from the base config."""
        assert Settings().modification.audit_drain_timeout == 10.0

    def test_audit_drain_timeout_must_be_positive(self) -> None:
        """Should reject a non-positive drain timeout."""
        with pytest.raises(ValidationError):
            ModificationSettings(audit_drain_timeout=0)
