"""Asset uploader for github-release.

Streams local files to a release's upload endpoint, one thread per file.
Individual failures are recorded and never stop sibling uploads.
"""

import logging
import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Union
from urllib.parse import quote

from github_release.api.client import GitHubClient, GitHubError
from github_release.utils.threading import TaskStatus, ThreadedTask, run_all

logger = logging.getLogger("github_release.uploader")


ASSET_CONTENT_TYPE = "application/octet-stream"


@dataclass
class UploadResult:
    """Result of uploading a single asset."""
    path: str
    success: bool
    error_message: Optional[str] = None
    bytes_transferred: int = 0
    duration_seconds: float = 0.0
    response_body: bytes = b""

    @property
    def name(self) -> str:
        """Asset name as sent to the server."""
        return os.path.basename(self.path)


def asset_url(upload_url: str, file_name: str) -> str:
    """Upload target for one file: the upload URL with ?name= appended."""
    return f"{upload_url}?name={quote(file_name, safe='')}"


class AssetUploader:
    """Uploads local files as release assets."""

    def __init__(self, client: GitHubClient):
        """
        Initialize the uploader.

        Args:
            client: Client used for the upload requests
        """
        self._client = client

    def upload(self, upload_url: str, path: Union[str, Path]) -> UploadResult:
        """
        Upload one file.

        Args:
            upload_url: Release upload URL without its URI template
            path: Local file path

        Returns:
            UploadResult with success/failure status
        """
        path = str(path)
        file_name = os.path.basename(path)
        start_time = time.time()

        try:
            f = open(path, "rb")
        except OSError as e:
            logger.error(f"Error: {e}")
            return UploadResult(path=path, success=False, error_message=str(e))

        with f:
            try:
                size = os.fstat(f.fileno()).st_size
            except OSError as e:
                logger.error(f"Error: {e}")
                return UploadResult(path=path, success=False, error_message=str(e))

            logger.info(f"Uploading {file_name}...")
            try:
                body = self._client.request(
                    "POST",
                    asset_url(upload_url, file_name),
                    ASSET_CONTENT_TYPE,
                    f,
                    size,
                )
            except GitHubError as e:
                logger.error(f"Error: {e}")
                return UploadResult(
                    path=path,
                    success=False,
                    error_message=str(e),
                    duration_seconds=time.time() - start_time,
                )

        if self._client.debug:
            logger.debug("========= UPLOAD RESPONSE ===========")
            logger.debug(body.decode("utf-8", errors="replace"))

        return UploadResult(
            path=path,
            success=True,
            bytes_transferred=size,
            duration_seconds=time.time() - start_time,
            response_body=body,
        )

    def upload_all(self, upload_url: str, paths: Sequence[Union[str, Path]]) -> List[UploadResult]:
        """
        Upload every file concurrently and wait for all of them.

        One thread is started per file with no limit on how many run at
        once. Continues on individual failures, collects all results.

        Args:
            upload_url: Release upload URL without its URI template
            paths: Local file paths

        Returns:
            List of UploadResult, in the order of paths
        """
        tasks = [
            ThreadedTask(self.upload, args=(upload_url, p), name=f"upload-{os.path.basename(str(p))}")
            for p in paths
        ]
        results: List[UploadResult] = []
        for p, outcome in zip(paths, run_all(tasks)):
            if outcome.status == TaskStatus.COMPLETED and outcome.result is not None:
                results.append(outcome.result)
            else:
                logger.error(f"Error: upload of {p} failed: {outcome.error}")
                results.append(UploadResult(
                    path=str(p),
                    success=False,
                    error_message=str(outcome.error),
                ))
        return results


def get_batch_summary(results: List[UploadResult]) -> dict:
    """
    Get summary statistics for a batch upload.

    Args:
        results: List of upload results

    Returns:
        Dictionary with summary statistics
    """
    successful = [r for r in results if r.success]
    failed = [r for r in results if not r.success]
    total_bytes = sum(r.bytes_transferred for r in results)
    total_time = sum(r.duration_seconds for r in results)

    return {
        "total": len(results),
        "successful": len(successful),
        "failed": len(failed),
        "bytes_transferred": total_bytes,
        "duration_seconds": total_time,
        "failures": [(r.path, r.error_message) for r in failed]
    }
