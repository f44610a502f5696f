"""Draft release cleanup.

Deletes existing draft releases for a tag before a new release is
created. Every step is best effort: failures are logged and the
publishing flow carries on.
"""

import json
import logging
from typing import List

from github_release.api.client import GitHubClient, GitHubError, RELEASES_PAGE_SIZE
from github_release.api.release import Release

logger = logging.getLogger("github_release.drafts")


class DraftCleaner:
    """Removes draft releases matching a tag."""

    def __init__(self, client: GitHubClient, page_size: int = RELEASES_PAGE_SIZE):
        self._client = client
        self._page_size = page_size

    def delete_drafts(self, tag: str) -> List[int]:
        """
        Delete every draft release whose tag is exactly `tag`.

        Pages through the releases listing starting at page 1 and moves
        on to the next page only while a page comes back full.

        Args:
            tag: Tag the drafts must carry

        Returns:
            Ids of the drafts that were deleted
        """
        logger.info("Deleting old draft releases, if they exist")
        deleted: List[int] = []
        page = 1
        while True:
            releases = self._list_page(page)
            if releases is None:
                break

            for release in releases:
                if release.draft and release.tag_name == tag:
                    if release.id is None:
                        logger.warning(f"Skipping release draft with tag {release.tag_name}: no id")
                        continue
                    if self._delete(release):
                        deleted.append(release.id)

            if len(releases) != self._page_size:
                break
            page += 1

        return deleted

    def _list_page(self, page: int):
        try:
            data = self._client.get_json(self._client.releases_page_url(page, self._page_size))
        except GitHubError as e:
            logger.error(str(e))
            logger.error("Failed to get old release drafts to delete, creating new release")
            return None

        try:
            items = json.loads(data.decode("utf-8"))
            if not isinstance(items, list):
                raise ValueError(f"expected a list of releases, got {type(items).__name__}")
            return [Release.from_api_response(item) for item in items]
        except (ValueError, AttributeError) as e:
            logger.error(str(e))
            logger.error("Failed to decode old release drafts to delete, creating new release")
            return None

    def _delete(self, release: Release) -> bool:
        logger.info(f"Deleting release draft with tag {release.tag_name} and id {release.id}")
        try:
            self._client.delete(self._client.release_url(release.id))
            return True
        except GitHubError as e:
            logger.error(str(e))
            logger.error(f"Failed to delete old release draft with id {release.id}")
            return False
