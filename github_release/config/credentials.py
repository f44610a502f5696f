"""Keyring credential lookup for github-release.

Uses the system keyring (Windows Credential Manager, macOS Keychain,
Linux Secret Service) as a fallback source for the GitHub token when
GITHUB_TOKEN is not set.
"""

from typing import Optional

import keyring
from keyring.errors import KeyringError


class CredentialManager:
    """Token lookup in the system keyring."""

    SERVICE_NAME = "github-release"

    # Entry used when no GitHub user is known
    DEFAULT_ACCOUNT = "default"

    def _make_key(self, user: Optional[str]) -> str:
        """
        Create the keyring account name for a user.

        Args:
            user: GitHub user, may be empty

        Returns:
            Account key string
        """
        return user or self.DEFAULT_ACCOUNT

    def get_token(self, user: Optional[str]) -> Optional[str]:
        """
        Retrieve a saved token.

        Looks up the user's entry first, then the default entry.

        Args:
            user: GitHub user

        Returns:
            Token string or None if not found
        """
        try:
            token = keyring.get_password(self.SERVICE_NAME, self._make_key(user))
            if token is None and user:
                token = keyring.get_password(self.SERVICE_NAME, self.DEFAULT_ACCOUNT)
            return token
        except KeyringError:
            return None
