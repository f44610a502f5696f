"""GitHub API module.

This module handles the wire side of release publishing:
- GitHubClient: authenticated requests against a repository's release endpoints
- Release: release entity and JSON (de)serialization
- Exceptions: GitHubError hierarchy carrying status and body of failures
"""

from .client import (
    GitHubClient,
    GitHubError,
    GitHubConnectionError,
    GitHubAPIError,
    GITHUB_API_BASE,
    RELEASES_PAGE_SIZE,
)
from .release import Release, truncate_upload_url

__all__ = [
    "GitHubClient",
    "GitHubError",
    "GitHubConnectionError",
    "GitHubAPIError",
    "GITHUB_API_BASE",
    "RELEASES_PAGE_SIZE",
    "Release",
    "truncate_upload_url",
]
