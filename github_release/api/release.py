"""Release entity and its JSON wire format.

A Release is built locally from command-line inputs, serialized for the
create request, and then refreshed from the server's answer to pick up
the fields only the server assigns (id and upload_url).
"""

import json
from dataclasses import dataclass, replace
from typing import Optional


@dataclass
class Release:
    """Represents a GitHub release as sent to and returned by the API."""
    tag_name: str
    target_commitish: str = ""
    name: str = ""
    body: str = ""
    draft: bool = False
    prerelease: bool = False
    make_latest: str = "true"
    id: Optional[int] = None
    upload_url: str = ""

    @classmethod
    def for_tag(
        cls,
        tag: str,
        branch: str,
        body: str = "",
        draft: bool = False,
        prerelease: bool = False,
        latest: bool = True,
    ) -> "Release":
        """
        Build the local release for a tag.

        The release name always mirrors the tag.

        Args:
            tag: Tag to create or attach to
            branch: Branch or commit the tag is created from if missing
            body: Release description
            draft: Save as draft instead of publishing
            prerelease: Flag the release as a prerelease
            latest: Mark the release as the repository's latest

        Returns:
            Release without server-assigned fields
        """
        return cls(
            tag_name=tag,
            target_commitish=branch,
            name=tag,
            body=body,
            draft=draft,
            prerelease=prerelease,
            make_latest="true" if latest else "false",
        )

    def to_payload(self) -> dict:
        """Wire representation; id and upload_url are left out while unset."""
        payload = {}
        if self.id:
            payload["id"] = self.id
        if self.upload_url:
            payload["upload_url"] = self.upload_url
        payload.update({
            "tag_name": self.tag_name,
            "target_commitish": self.target_commitish,
            "name": self.name,
            "body": self.body,
            "draft": self.draft,
            "prerelease": self.prerelease,
            "make_latest": self.make_latest,
        })
        return payload

    def to_json(self) -> bytes:
        """Serialize to the UTF-8 JSON body of a create request."""
        return json.dumps(self.to_payload()).encode("utf-8")

    @classmethod
    def from_api_response(cls, data: dict) -> "Release":
        """Create Release from GitHub API response."""
        return cls(
            tag_name=data.get("tag_name") or "",
            target_commitish=data.get("target_commitish") or "",
            name=data.get("name") or "",
            body=data.get("body") or "",
            draft=bool(data.get("draft", False)),
            prerelease=bool(data.get("prerelease", False)),
            make_latest=str(data.get("make_latest") or "true"),
            id=data.get("id"),
            upload_url=data.get("upload_url") or "",
        )

    def merge_response(self, data: dict) -> "Release":
        """
        Refresh this release with the fields present in a server response.

        Keys missing from the response keep their local value.

        Args:
            data: Decoded JSON object returned by the API

        Returns:
            New Release with the server's values applied
        """
        known = {k: v for k, v in data.items() if k in self.__dataclass_fields__}
        if "make_latest" in known and known["make_latest"] is not None:
            known["make_latest"] = str(known["make_latest"])
        known = {k: v for k, v in known.items() if v is not None}
        return replace(self, **known)

    @property
    def asset_upload_url(self) -> str:
        """Upload URL with its URI-template suffix removed."""
        return truncate_upload_url(self.upload_url)


def truncate_upload_url(template: str) -> str:
    """
    Strip the URI-template placeholder from an upload URL.

    GitHub returns e.g.
    https://uploads.github.com/repos/octocat/Hello-World/releases/1/assets{?name,label}

    Args:
        template: Upload URL template as returned by the API

    Returns:
        Everything before the first "{"
    """
    return template.split("{", 1)[0]
