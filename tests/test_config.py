"""Tests for settings loading."""

import pytest
from pydantic import ValidationError

from changed_paths.config import DEFAULT_API_URL, Settings, get_settings, reset_settings


class TestDefaults:
    def test_defaults(self):
        settings = Settings()
        assert settings.paths == ""
        assert settings.github_token == ""
        assert settings.match_mode == "regex"
        assert settings.api_url == DEFAULT_API_URL
        assert settings.per_page == 100
        assert settings.max_pages == 30
        assert settings.request_timeout == 30.0


class TestActionInputs:
    def test_inputs_from_environment(self, monkeypatch):
        monkeypatch.setenv("INPUT_PATHS", "docs/, src/")
        monkeypatch.setenv("INPUT_GITHUB-TOKEN", "tok-hyphen")
        monkeypatch.setenv("INPUT_MATCH-MODE", "literal")
        settings = Settings()
        assert settings.paths == "docs/, src/"
        assert settings.github_token == "tok-hyphen"
        assert settings.match_mode == "literal"

    def test_underscore_token_spelling(self, monkeypatch):
        monkeypatch.setenv("INPUT_GITHUB_TOKEN", "tok-underscore")
        assert Settings().github_token == "tok-underscore"

    def test_github_token_fallback(self, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "tok-env")
        assert Settings().github_token == "tok-env"

    def test_invalid_match_mode(self, monkeypatch):
        monkeypatch.setenv("INPUT_MATCH-MODE", "glob")
        with pytest.raises(ValidationError):
            Settings()


class TestWorkflowContext:
    def test_context_from_environment(self, monkeypatch):
        monkeypatch.setenv("GITHUB_EVENT_PATH", "/tmp/event.json")
        monkeypatch.setenv("GITHUB_REPOSITORY", "octo/cat")
        monkeypatch.setenv("GITHUB_REF", "refs/heads/main")
        monkeypatch.setenv("GITHUB_SHA", "abc123")
        monkeypatch.setenv("GITHUB_OUTPUT", "/tmp/out")
        monkeypatch.setenv("GITHUB_API_URL", "https://ghe.example.com/api/v3")
        settings = Settings()
        assert settings.event_path == "/tmp/event.json"
        assert settings.repository == "octo/cat"
        assert settings.ref == "refs/heads/main"
        assert settings.sha == "abc123"
        assert settings.output_path == "/tmp/out"
        assert settings.api_url == "https://ghe.example.com/api/v3"

    def test_transport_tuning(self, monkeypatch):
        monkeypatch.setenv("CHANGED_PATHS_MAX_PAGES", "5")
        monkeypatch.setenv("CHANGED_PATHS_REQUEST_TIMEOUT", "2.5")
        settings = Settings()
        assert settings.max_pages == 5
        assert settings.request_timeout == 2.5

    def test_per_page_bounded(self, monkeypatch):
        monkeypatch.setenv("CHANGED_PATHS_PER_PAGE", "500")
        with pytest.raises(ValidationError):
            Settings()


class TestCache:
    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_reset_settings(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("INPUT_PATHS", "changed")
        reset_settings()
        second = get_settings()
        assert second is not first
        assert second.paths == "changed"


class TestLogLevel:
    def test_lowercase_is_normalized(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert Settings().log_level == "DEBUG"

    def test_unknown_level_rejected(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "verbose")
        with pytest.raises(ValidationError):
            Settings()
