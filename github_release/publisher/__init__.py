"""Release publishing module.

This module handles the release workflow:
- ReleasePublisher: create-or-fetch of the release, then asset upload
- DraftCleaner: best-effort removal of stale drafts for a tag
- AssetUploader: concurrent asset uploads with per-file results
"""

from .drafts import DraftCleaner
from .uploader import AssetUploader, UploadResult, get_batch_summary
from .publisher import PublishError, PublishResult, ReleasePublisher

__all__ = [
    "DraftCleaner",
    "AssetUploader",
    "UploadResult",
    "get_batch_summary",
    "PublishError",
    "PublishResult",
    "ReleasePublisher",
]
