"""Unit tests for settings and credentials management."""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest
from keyring.errors import KeyringError

from github_release.config.credentials import CredentialManager
from github_release.config.settings import ConfigError, PublishOptions, Settings


class TestSettingsFromEnv:
    """Tests for Settings.from_env."""

    def test_default_values(self):
        settings = Settings.from_env({})
        assert settings.token == ""
        assert settings.user == ""
        assert settings.repo == ""
        assert settings.api_endpoint == "https://api.github.com"
        assert settings.debug is False
        assert settings.timeout is None
        assert settings.log_file is None

    def test_reads_variables(self, tmp_path):
        settings = Settings.from_env({
            "GITHUB_TOKEN": " secret ",
            "GITHUB_USER": "octocat",
            "GITHUB_REPO": "hello-world",
            "GITHUB_API": "https://ghe.example.com/api/v3/",
            "DEBUG": "true",
            "GITHUB_RELEASE_TIMEOUT": "30",
            "GITHUB_RELEASE_LOG_FILE": str(tmp_path / "release.log"),
        })
        assert settings.token == "secret"
        assert settings.user == "octocat"
        assert settings.repo == "hello-world"
        assert settings.api_endpoint == "https://ghe.example.com/api/v3"
        assert settings.debug is True
        assert settings.timeout == 30.0
        assert settings.log_file == tmp_path / "release.log"

    @pytest.mark.parametrize("value,expected", [("1", True), ("TRUE", True), ("0", False), ("false", False)])
    def test_debug_values(self, value, expected):
        assert Settings.from_env({"DEBUG": value}).debug is expected

    @pytest.mark.parametrize("value", ["maybe", "*", "express:*"])
    def test_unparseable_debug_is_off(self, value, caplog):
        with caplog.at_level(logging.WARNING, logger="github_release"):
            settings = Settings.from_env({"DEBUG": value})

        assert settings.debug is False
        assert "Ignoring DEBUG" in caplog.text

    def test_invalid_timeout(self):
        with pytest.raises(ConfigError, match="GITHUB_RELEASE_TIMEOUT"):
            Settings.from_env({"GITHUB_RELEASE_TIMEOUT": "soon"})

    def test_token_not_in_repr(self):
        settings = Settings(token="ghp_secret")
        assert "ghp_secret" not in repr(settings)
        assert "token" not in settings.to_dict()


class TestRepository:
    """Tests for repository selection."""

    def test_with_repository(self):
        settings = Settings().with_repository("octocat/hello-world")
        assert settings.user == "octocat"
        assert settings.repo == "hello-world"
        assert settings.repo_endpoint == "https://api.github.com/repos/octocat/hello-world"

    def test_argument_overrides_env_defaults(self):
        settings = Settings(user="env-user", repo="env-repo").with_repository("octocat/hello-world")
        assert (settings.user, settings.repo) == ("octocat", "hello-world")

    def test_empty_side_uses_defaults(self):
        settings = Settings(user="env-user", repo="env-repo")
        assert settings.with_repository("/other").user == "env-user"
        assert settings.with_repository("someone/").repo == "env-repo"

    @pytest.mark.parametrize("value", ["octocat", "a/b/c", "/", "octo cat/repo", ""])
    def test_invalid_repository(self, value):
        with pytest.raises(ConfigError):
            Settings().with_repository(value)

    def test_custom_endpoint(self):
        settings = Settings(api_endpoint="https://ghe.example.com/api/v3").with_repository("o/r")
        assert settings.repo_endpoint == "https://ghe.example.com/api/v3/repos/o/r"

    def test_repo_endpoint_requires_repository(self):
        with pytest.raises(ConfigError):
            Settings().repo_endpoint


class TestToken:

    def test_require_token_missing(self):
        with pytest.raises(ConfigError, match="GITHUB_TOKEN"):
            Settings().require_token()

    def test_require_token_present(self):
        Settings(token="t").require_token()

    def test_with_token(self):
        assert Settings().with_token("abc").token == "abc"


class TestPublishOptions:

    def test_defaults(self):
        assert PublishOptions().recreate_draft is False


class TestCredentialManager:
    """Tests for CredentialManager class."""

    @pytest.fixture
    def manager(self):
        return CredentialManager()

    def test_get_token(self, manager):
        with patch("keyring.get_password", return_value="ghp_x") as mock_get:
            assert manager.get_token("octocat") == "ghp_x"
            mock_get.assert_called_once_with("github-release", "octocat")

    def test_get_token_falls_back_to_default_entry(self, manager):
        with patch("keyring.get_password", side_effect=[None, "ghp_default"]) as mock_get:
            assert manager.get_token("octocat") == "ghp_default"
            assert mock_get.call_args_list[1].args == ("github-release", "default")

    def test_get_token_without_user(self, manager):
        with patch("keyring.get_password", return_value=None) as mock_get:
            assert manager.get_token("") is None
            mock_get.assert_called_once_with("github-release", "default")

    def test_get_token_failure(self, manager):
        with patch("keyring.get_password", side_effect=KeyringError("locked")):
            assert manager.get_token("octocat") is None
