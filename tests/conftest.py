"""Pytest configuration and shared fixtures for github-release tests."""

import json
import logging
from pathlib import Path
from typing import List
from unittest.mock import MagicMock

import pytest

from github_release.api.client import GitHubClient


# Test constants
TEST_TOKEN = "ghp_" + "a" * 36
TEST_REPO_ENDPOINT = "https://api.example.com/repos/octocat/hello-world"
TEST_UPLOAD_TEMPLATE = "https://uploads.example.com/releases/1/assets{?name}"
TEST_UPLOAD_URL = "https://uploads.example.com/releases/1/assets"


def make_release_data(**overrides) -> dict:
    """Build a release object as returned by the API."""
    data = {
        "id": 1,
        "upload_url": TEST_UPLOAD_TEMPLATE,
        "tag_name": "v1.0",
        "target_commitish": "main",
        "name": "v1.0",
        "body": "Release notes here",
        "draft": False,
        "prerelease": False,
        "make_latest": "true",
    }
    data.update(overrides)
    return data


def make_response(status_code: int = 200, body=b"", reason: str = "OK") -> MagicMock:
    """Create a mock requests.Response."""
    if not isinstance(body, bytes):
        body = json.dumps(body).encode("utf-8")
    response = MagicMock()
    response.status_code = status_code
    response.reason = reason
    response.content = body
    response.text = body.decode("utf-8")
    response.headers = {"Content-Type": "application/json"}
    return response


@pytest.fixture(autouse=True)
def reset_app_logger():
    """Drop handlers installed by setup_logging between tests."""
    yield
    logger = logging.getLogger("github_release")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def client() -> GitHubClient:
    """Provide a GitHubClient bound to the test repository."""
    with GitHubClient(TEST_TOKEN, TEST_REPO_ENDPOINT) as c:
        yield c


@pytest.fixture
def mock_client() -> MagicMock:
    """Provide a mock GitHubClient with working URL builders."""
    real = GitHubClient(TEST_TOKEN, TEST_REPO_ENDPOINT)
    client = MagicMock(spec=GitHubClient)
    client.debug = False
    client.repo_endpoint = TEST_REPO_ENDPOINT
    client.releases_url.side_effect = real.releases_url
    client.release_by_tag_url.side_effect = real.release_by_tag_url
    client.release_url.side_effect = real.release_url
    client.releases_page_url.side_effect = real.releases_page_url
    real.close()
    return client


@pytest.fixture
def asset_files(tmp_path: Path) -> List[Path]:
    """Create a few local files to upload."""
    files = []
    for name, content in [
        ("app.tar.gz", b"\x1f\x8b" + b"\x00" * 64),
        ("app.zip", b"PK\x03\x04" + b"\x00" * 32),
        ("checksums.txt", b"deadbeef  app.tar.gz\n"),
    ]:
        path = tmp_path / name
        path.write_bytes(content)
        files.append(path)
    return files


@pytest.fixture
def description_file(tmp_path: Path) -> Path:
    """Create a release description file."""
    path = tmp_path / "notes.md"
    path.write_text("## Changes\n\n- First release\n", encoding="utf-8")
    return path
