"""GitHub REST API client for release publishing.

Issues authenticated requests against a repository's release endpoints
and turns non-success responses into exceptions carrying the status line
and body returned by the server.
"""

import logging
from typing import BinaryIO, Optional, Union

import requests

logger = logging.getLogger("github_release.client")


# GitHub API constants
GITHUB_API_BASE = "https://api.github.com"
ACCEPT_HEADER = "application/vnd.github.v3+json"
USER_AGENT = "github-release"
JSON_CONTENT_TYPE = "application/json"

# Fixed page size used when listing releases
RELEASES_PAGE_SIZE = 100

# Statuses treated as success; everything else is an error
SUCCESS_STATUSES = (200, 201, 204)


RequestBody = Union[bytes, BinaryIO]


class GitHubError(Exception):
    """Base exception for GitHub API errors."""
    pass


class GitHubConnectionError(GitHubError):
    """Raised when unable to reach the API endpoint."""
    pass


class GitHubAPIError(GitHubError):
    """Raised when the API answers with a non-success status."""

    def __init__(self, status_code: int, status_line: str, body: bytes = b""):
        self.status_code = status_code
        self.status_line = status_line
        self.body = body
        message = (
            f"GitHub returned an error:\n"
            f" Code: {status_line}.\n"
            f" Body: {self.body_text}"
        )
        super().__init__(message)

    @property
    def body_text(self) -> str:
        """Response body decoded for display."""
        return self.body.decode("utf-8", errors="replace")


class GitHubClient:
    """Client for the release endpoints of a single repository."""

    def __init__(
        self,
        token: str,
        repo_endpoint: str,
        debug: bool = False,
        timeout: Optional[float] = None,
    ):
        """
        Initialize GitHub client.

        Args:
            token: Credential sent as a bearer token on every request
            repo_endpoint: Repository API root, e.g.
                https://api.github.com/repos/octocat/Hello-World
            debug: Dump every request and response to the log
            timeout: Request timeout in seconds (None blocks indefinitely)
        """
        self._token = token
        self._repo_endpoint = repo_endpoint.rstrip("/")
        self._debug = debug
        self._timeout = timeout
        self._session = requests.Session()
        self._session.headers.update({
            "Accept": ACCEPT_HEADER,
            "User-Agent": USER_AGENT,
        })

    @property
    def repo_endpoint(self) -> str:
        """Repository API root all release URLs are built from."""
        return self._repo_endpoint

    @property
    def debug(self) -> bool:
        """True if requests and responses are dumped to the log."""
        return self._debug

    def releases_url(self) -> str:
        """URL of the releases collection."""
        return f"{self._repo_endpoint}/releases"

    def release_by_tag_url(self, tag: str) -> str:
        """URL of the release attached to a tag."""
        return f"{self._repo_endpoint}/releases/tags/{tag}"

    def release_url(self, release_id: int) -> str:
        """URL of a single release."""
        return f"{self._repo_endpoint}/releases/{release_id}"

    def releases_page_url(self, page: int, per_page: int = RELEASES_PAGE_SIZE) -> str:
        """URL of one page of the releases listing."""
        return f"{self._repo_endpoint}/releases?per_page={per_page}&page={page}"

    def _headers(self, content_type: str, size: int, has_body: bool) -> dict:
        headers = {
            "Authorization": f"Bearer {self._token}",
            "Content-Type": content_type,
        }
        if has_body:
            headers["Content-Length"] = str(size)
        return headers

    def request(
        self,
        method: str,
        url: str,
        content_type: str = JSON_CONTENT_TYPE,
        body: Optional[RequestBody] = None,
        size: int = 0,
    ) -> bytes:
        """
        Send a request and return the raw response body.

        Args:
            method: HTTP method
            url: Full URL to request
            content_type: Value of the Content-Type header
            body: Optional request body, bytes or a binary stream
            size: Body length in bytes, sent as Content-Length

        Returns:
            Response body bytes

        Raises:
            GitHubAPIError: If the status is not 200, 201 or 204
            GitHubConnectionError: If unable to connect
            GitHubError: For other request failures
        """
        headers = self._headers(content_type, size, body is not None)
        request = requests.Request(method, url, headers=headers, data=body)
        prepared = self._session.prepare_request(request)
        # requests drops the explicit length for some stream types
        if body is not None:
            prepared.headers["Content-Length"] = str(size)
            prepared.headers.pop("Transfer-Encoding", None)

        if self._debug:
            self._dump_request(prepared, body)

        try:
            logger.debug(f"{method} {url}")
            response = self._session.send(prepared, timeout=self._timeout)
        except requests.exceptions.Timeout:
            logger.error(f"Request timed out: {method} {url}")
            raise GitHubConnectionError(f"Request timed out: {method} {url}")
        except requests.exceptions.ConnectionError as e:
            logger.error(f"Connection error: {e}")
            raise GitHubConnectionError(f"Unable to connect to {url}: {e}")
        except requests.exceptions.RequestException as e:
            logger.error(f"Request error: {e}")
            raise GitHubError(f"Request failed: {e}")

        if self._debug:
            self._dump_response(response)

        content = response.content or b""
        if response.status_code not in SUCCESS_STATUSES:
            status_line = f"{response.status_code} {response.reason or ''}".strip()
            raise GitHubAPIError(response.status_code, status_line, content)

        return content

    def get_json(self, url: str) -> bytes:
        """GET a JSON resource."""
        return self.request("GET", url)

    def post_json(self, url: str, payload: bytes) -> bytes:
        """POST an already serialized JSON document."""
        return self.request("POST", url, JSON_CONTENT_TYPE, payload, len(payload))

    def delete(self, url: str) -> bytes:
        """DELETE a resource."""
        return self.request("DELETE", url)

    def _dump_request(self, prepared: requests.PreparedRequest, body: Optional[RequestBody]) -> None:
        lines = [f"{prepared.method} {prepared.url}"]
        for name, value in prepared.headers.items():
            if name.lower() == "authorization":
                value = "[REDACTED]"
            lines.append(f"{name}: {value}")
        lines.append("")
        if isinstance(body, bytes):
            lines.append(body.decode("utf-8", errors="replace"))
        elif body is not None:
            lines.append(f"<streamed body, {prepared.headers.get('Content-Length')} bytes>")
        logger.debug("================ REQUEST DUMP ==================")
        logger.debug("\n".join(lines))

    def _dump_response(self, response: requests.Response) -> None:
        lines = [f"{response.status_code} {response.reason or ''}".strip()]
        for name, value in response.headers.items():
            lines.append(f"{name}: {value}")
        lines.append("")
        lines.append(response.text)
        logger.debug("================ RESPONSE DUMP ==================")
        logger.debug("\n".join(lines))

    def close(self) -> None:
        """Close the HTTP session."""
        self._session.close()

    def __enter__(self) -> "GitHubClient":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()
