"""Runtime settings for github-release.

Provides the Settings dataclass, built once from the environment at
startup and handed to every component that needs it.
"""

import logging
import os
from dataclasses import dataclass, field, asdict, replace
from pathlib import Path
from typing import Mapping, Optional

from github_release.api.client import GITHUB_API_BASE
from github_release.utils.validators import parse_bool, parse_timeout, split_user_repo

logger = logging.getLogger("github_release.settings")


# Environment variable names
ENV_TOKEN = "GITHUB_TOKEN"
ENV_USER = "GITHUB_USER"
ENV_REPO = "GITHUB_REPO"
ENV_API = "GITHUB_API"
ENV_DEBUG = "DEBUG"
ENV_TIMEOUT = "GITHUB_RELEASE_TIMEOUT"
ENV_LOG_FILE = "GITHUB_RELEASE_LOG_FILE"

TOKEN_HELP_URL = "https://help.github.com/articles/creating-an-access-token-for-command-line-use/"


class ConfigError(Exception):
    """Raised for invalid or incomplete configuration."""
    pass


@dataclass(frozen=True)
class Settings:
    """Connection and diagnostic settings for one run."""

    token: str = field(default="", repr=False)
    user: str = ""
    repo: str = ""
    api_endpoint: str = GITHUB_API_BASE
    debug: bool = False
    timeout: Optional[float] = None
    log_file: Optional[Path] = None

    @property
    def repo_endpoint(self) -> str:
        """Repository API root, e.g. https://api.github.com/repos/user/repo."""
        if not self.user or not self.repo:
            raise ConfigError("GitHub user and repository must be set")
        return f"{self.api_endpoint.rstrip('/')}/repos/{self.user}/{self.repo}"

    def with_repository(self, user_repo: str) -> "Settings":
        """
        Apply a "user/repo" argument.

        Args:
            user_repo: Repository slug; an empty side falls back to the
                GITHUB_USER / GITHUB_REPO defaults

        Returns:
            New Settings targeting that repository

        Raises:
            ConfigError: If the slug is malformed
        """
        parsed, error = split_user_repo(user_repo, self.user, self.repo)
        if error:
            raise ConfigError(error)
        user, repo = parsed
        return replace(self, user=user, repo=repo)

    def with_token(self, token: str) -> "Settings":
        """Return a copy carrying the given credential."""
        return replace(self, token=token)

    def require_token(self) -> None:
        """
        Ensure a credential is present.

        Raises:
            ConfigError: If no token is configured
        """
        if not self.token:
            raise ConfigError(
                f"{ENV_TOKEN} environment variable is not set.\n"
                f"Please refer to {TOKEN_HELP_URL} for more help"
            )

    def to_dict(self) -> dict:
        """Convert settings to dictionary, without the credential."""
        data = asdict(self)
        data.pop("token")
        return data

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            Settings instance

        An unparseable DEBUG value is treated as off.

        Raises:
            ConfigError: If the timeout cannot be parsed
        """
        env = os.environ if environ is None else environ

        debug, error = parse_bool(env.get(ENV_DEBUG))
        if error:
            logger.warning(f"Ignoring {ENV_DEBUG}: {error}")
            debug = False

        timeout, error = parse_timeout(env.get(ENV_TIMEOUT))
        if error:
            raise ConfigError(f"{ENV_TIMEOUT}: {error}")

        log_file = env.get(ENV_LOG_FILE) or None

        return cls(
            token=env.get(ENV_TOKEN, "").strip(),
            user=env.get(ENV_USER, "").strip(),
            repo=env.get(ENV_REPO, "").strip(),
            api_endpoint=(env.get(ENV_API) or GITHUB_API_BASE).rstrip("/"),
            debug=bool(debug),
            timeout=timeout,
            log_file=Path(log_file) if log_file else None,
        )


@dataclass(frozen=True)
class PublishOptions:
    """Per-run publishing behaviour."""

    recreate_draft: bool = False
