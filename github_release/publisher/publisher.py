"""Release publisher.

Creates a release (or picks up the one already attached to the tag) and
uploads the given files to it.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Union

from github_release.api.client import GitHubAPIError, GitHubClient, GitHubError
from github_release.api.release import Release
from github_release.config.settings import PublishOptions
from github_release.publisher.drafts import DraftCleaner
from github_release.publisher.uploader import AssetUploader, UploadResult, get_batch_summary

logger = logging.getLogger("github_release.publisher")


class PublishError(Exception):
    """Raised when the release can be neither created nor fetched."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error

    def __str__(self) -> str:
        if self.original_error:
            return f"{self.message}: {self.original_error}"
        return self.message


@dataclass
class PublishResult:
    """Outcome of a publish run."""
    release: Release
    uploads: List[UploadResult] = field(default_factory=list)

    @property
    def succeeded(self) -> List[UploadResult]:
        """Uploads that completed."""
        return [u for u in self.uploads if u.success]

    @property
    def failed(self) -> List[UploadResult]:
        """Uploads that failed."""
        return [u for u in self.uploads if not u.success]

    @property
    def ok(self) -> bool:
        """True if every upload succeeded."""
        return not self.failed

    def summary(self) -> dict:
        """Summary statistics of the uploads."""
        return get_batch_summary(self.uploads)


class ReleasePublisher:
    """Publishes a release and attaches assets to it."""

    def __init__(
        self,
        client: GitHubClient,
        options: Optional[PublishOptions] = None,
        uploader: Optional[AssetUploader] = None,
        draft_cleaner: Optional[DraftCleaner] = None,
    ):
        """
        Initialize the publisher.

        Args:
            client: Client bound to the target repository
            options: Publishing behaviour (defaults to PublishOptions())
            uploader: Asset uploader (defaults to one using client)
            draft_cleaner: Draft cleaner (defaults to one using client)
        """
        self._client = client
        self._options = options or PublishOptions()
        self._uploader = uploader or AssetUploader(client)
        self._draft_cleaner = draft_cleaner or DraftCleaner(client)

    def publish(self, release: Release, filepaths: Sequence[Union[str, Path]]) -> PublishResult:
        """
        Create or reuse the release for `release.tag_name` and upload files to it.

        A failed create is taken to mean the release already exists, and
        the release is then fetched by tag instead.

        Args:
            release: Locally built release
            filepaths: Files to upload as assets

        Returns:
            PublishResult with the server's release and one UploadResult per file

        Raises:
            PublishError: If neither the create nor the fetch succeeds, or
                the server's answer cannot be decoded
        """
        payload = release.to_json()

        if self._options.recreate_draft:
            self._draft_cleaner.delete_drafts(release.tag_name)

        data = self._create_or_fetch(release, payload)
        published = self._decode(release, data)

        filepaths = list(filepaths)
        if not filepaths:
            return PublishResult(release=published)

        upload_url = published.asset_upload_url
        if not upload_url:
            logger.error(f"Release {published.tag_name} has no upload URL, skipping asset uploads")
            uploads = [
                UploadResult(path=str(p), success=False, error_message="release has no upload URL")
                for p in filepaths
            ]
        else:
            uploads = self._uploader.upload_all(upload_url, filepaths)
        for result in uploads:
            if not result.success:
                logger.error(f"Failed to upload {result.name}: {result.error_message}")
        return PublishResult(release=published, uploads=uploads)

    def _create_or_fetch(self, release: Release, payload: bytes) -> bytes:
        try:
            return self._client.post_json(self._client.releases_url(), payload)
        except GitHubAPIError as e:
            logger.warning(str(e))
            logger.warning("Trying again assuming release already exists.")
        except GitHubError as e:
            raise PublishError("Failed to create release", e)

        try:
            return self._client.get_json(self._client.release_by_tag_url(release.tag_name))
        except GitHubError as e:
            raise PublishError(f"Failed to fetch release for tag {release.tag_name}", e)

    @staticmethod
    def _decode(release: Release, data: bytes) -> Release:
        try:
            decoded = json.loads(data.decode("utf-8"))
        except ValueError as e:
            raise PublishError("Unable to decode release JSON", e)
        if not isinstance(decoded, dict):
            raise PublishError(f"Unexpected release JSON: {type(decoded).__name__}")
        return release.merge_response(decoded)
