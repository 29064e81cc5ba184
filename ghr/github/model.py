from __future__ import annotations

from dataclasses import dataclass

from ghr.core.structured import StrDict, get_bool, get_int, get_str, get_table, get_text


@dataclass(frozen=True, slots=True)
class TagRef:
    """A ``refs/tags/<tag>`` reference and the object it points at."""

    ref: str
    sha: str

    @staticmethod
    def from_payload(data: StrDict) -> TagRef | None:
        ref = get_str(data, "ref")
        obj = get_table(data, "object")
        sha = get_str(obj, "sha") if obj is not None else None
        if ref is None or sha is None:
            return None
        return TagRef(ref=ref, sha=sha)


@dataclass(frozen=True, slots=True)
class Release:
    id: int
    tag_name: str
    name: str
    body: str
    draft: bool
    prerelease: bool
    html_url: str
    upload_url: str

    @staticmethod
    def from_payload(data: StrDict) -> Release | None:
        release_id = get_int(data, "id")
        tag_name = get_str(data, "tag_name")
        if release_id is None or tag_name is None:
            return None
        return Release(
            id=release_id,
            tag_name=tag_name,
            # GitHub returns null name/body for releases created without them.
            name=get_text(data, "name"),
            body=get_text(data, "body"),
            draft=get_bool(data, "draft"),
            prerelease=get_bool(data, "prerelease"),
            html_url=get_text(data, "html_url"),
            upload_url=get_text(data, "upload_url"),
        )


@dataclass(frozen=True, slots=True)
class ReleaseDraft:
    """Fields of a release to be created."""

    tag_name: str
    name: str
    body: str = ""
    draft: bool = False
    prerelease: bool = False

    def to_payload(self) -> dict[str, object]:
        return {
            "tag_name": self.tag_name,
            "name": self.name,
            "body": self.body,
            "draft": self.draft,
            "prerelease": self.prerelease,
        }
