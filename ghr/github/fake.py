"""In-memory stand-in for the GitHub release and ref endpoints.

Implements ``ReleaseApi`` with the behaviour the reconciler relies on:
one release per tag, published releases create their tag at ``head_sha``,
drafts carry no tag, missing resources answer ``not_found``.

Usage:
    gh = FakeGitHub()
    gh.add_ref("v1.0.0", "a" * 40)
    gh.add_release(tag_name="v1.0.0", name="Version 1", body="notes")
    gh.fail("delete_release", status=403, message="Forbidden")
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field, replace

from ghr.core.result import Err, Ok, Result
from ghr.github.errors import ApiError
from ghr.github.model import Release, ReleaseDraft, TagRef

__all__ = ["FakeGitHub"]


@dataclass
class _State:
    refs: dict[str, str] = field(default_factory=dict)
    releases: dict[int, Release] = field(default_factory=dict)


def _not_found(what: str) -> ApiError:
    return ApiError(kind="not_found", message=f"HTTP 404: Not Found ({what})", status=404)


class FakeGitHub:
    def __init__(
        self,
        *,
        repository: str = "octo/project",
        head_sha: str = "f" * 40,
    ) -> None:
        self.repository = repository
        self.head_sha = head_sha
        self.calls: list[tuple[str, object]] = []
        self._state = _State()
        self._next_id = 1000
        self._failures: dict[tuple[str, object], ApiError] = {}
        # Reads answered from the pre-mutation snapshot after each mutation.
        self._lag = 0
        self._stale_reads = 0
        self._snapshot: _State | None = None

    # -- scenario setup ----------------------------------------------------

    @property
    def refs(self) -> dict[str, str]:
        return self._state.refs

    @property
    def releases(self) -> list[Release]:
        return list(self._state.releases.values())

    def add_ref(self, tag: str, sha: str) -> None:
        self._state.refs[tag] = sha

    def add_release(
        self,
        *,
        tag_name: str,
        name: str = "",
        body: str = "",
        draft: bool = False,
        prerelease: bool = False,
    ) -> Release:
        release = self._new_release(
            ReleaseDraft(tag_name=tag_name, name=name, body=body, draft=draft, prerelease=prerelease)
        )
        self._state.releases[release.id] = release
        return release

    def release_at(self, tag: str) -> Release | None:
        for release in self._state.releases.values():
            if release.tag_name == tag:
                return release
        return None

    def fail(self, op: str, *, status: int, message: str, arg: object = None) -> None:
        """Make ``op`` (optionally only for ``arg``) answer with an HTTP error."""
        kind = "not_found" if status == 404 else "other"
        self._failures[(op, arg)] = ApiError(
            kind=kind, message=f"HTTP {status}: {message}", status=status
        )

    def lag_reads(self, count: int) -> None:
        """After every mutation, serve ``count`` reads from the old state."""
        self._lag = count

    def ops(self) -> list[str]:
        return [op for op, _ in self.calls]

    # -- internals ---------------------------------------------------------

    def _enter(self, op: str, arg: object) -> ApiError | None:
        self.calls.append((op, arg))
        return self._failures.get((op, arg)) or self._failures.get((op, None))

    def _read_state(self) -> _State:
        if self._stale_reads > 0 and self._snapshot is not None:
            self._stale_reads -= 1
            return self._snapshot
        return self._state

    def _mutating(self) -> None:
        if self._lag:
            self._snapshot = copy.deepcopy(self._state)
            self._stale_reads = self._lag

    def _new_release(self, draft: ReleaseDraft) -> Release:
        self._next_id += 1
        release_id = self._next_id
        if not draft.draft and draft.tag_name not in self._state.refs:
            self._state.refs[draft.tag_name] = self.head_sha
        return Release(
            id=release_id,
            tag_name=draft.tag_name,
            name=draft.name,
            body=draft.body,
            draft=draft.draft,
            prerelease=draft.prerelease,
            html_url=f"https://github.com/{self.repository}/releases/tag/{draft.tag_name}",
            upload_url=(
                f"https://uploads.github.com/repos/{self.repository}"
                f"/releases/{release_id}/assets{{?name,label}}"
            ),
        )

    def _occupied(self, tag: str, *, other_than: int | None = None) -> bool:
        return any(
            r.tag_name == tag and r.id != other_than for r in self._state.releases.values()
        )

    # -- ReleaseApi ----------------------------------------------------------

    def get_tag_ref(self, tag: str) -> Result[TagRef, ApiError]:
        if failure := self._enter("get_tag_ref", tag):
            return Err(failure)
        sha = self._read_state().refs.get(tag)
        if sha is None:
            return Err(_not_found(f"GET git/ref/tags/{tag}"))
        return Ok(TagRef(ref=f"refs/tags/{tag}", sha=sha))

    def get_release_by_tag(self, tag: str) -> Result[Release, ApiError]:
        if failure := self._enter("get_release_by_tag", tag):
            return Err(failure)
        for release in self._read_state().releases.values():
            if release.tag_name == tag:
                return Ok(release)
        return Err(_not_found(f"GET releases/tags/{tag}"))

    def delete_release(self, release_id: int) -> Result[None, ApiError]:
        if failure := self._enter("delete_release", release_id):
            return Err(failure)
        if release_id not in self._state.releases:
            return Err(_not_found(f"DELETE releases/{release_id}"))
        self._mutating()
        del self._state.releases[release_id]
        return Ok(None)

    def update_release(
        self,
        release_id: int,
        *,
        tag_name: str,
        name: str,
        body: str,
    ) -> Result[Release, ApiError]:
        if failure := self._enter("update_release", release_id):
            return Err(failure)
        current = self._state.releases.get(release_id)
        if current is None:
            return Err(_not_found(f"PATCH releases/{release_id}"))
        if self._occupied(tag_name, other_than=release_id):
            return Err(ApiError(kind="other", message="HTTP 422: already_exists", status=422))
        self._mutating()
        if not current.draft and tag_name not in self._state.refs:
            self._state.refs[tag_name] = self.head_sha
        updated = replace(current, tag_name=tag_name, name=name, body=body)
        self._state.releases[release_id] = updated
        return Ok(updated)

    def update_tag_ref(self, tag: str, sha: str, *, force: bool = True) -> Result[TagRef, ApiError]:
        if failure := self._enter("update_tag_ref", tag):
            return Err(failure)
        if tag not in self._state.refs:
            return Err(
                ApiError(kind="not_found", message="HTTP 422: Reference does not exist", status=422)
            )
        self._mutating()
        self._state.refs[tag] = sha
        return Ok(TagRef(ref=f"refs/tags/{tag}", sha=sha))

    def delete_tag_ref(self, tag: str) -> Result[None, ApiError]:
        if failure := self._enter("delete_tag_ref", tag):
            return Err(failure)
        if tag not in self._state.refs:
            return Err(
                ApiError(kind="not_found", message="HTTP 422: Reference does not exist", status=422)
            )
        self._mutating()
        del self._state.refs[tag]
        return Ok(None)

    def create_release(self, draft: ReleaseDraft) -> Result[Release, ApiError]:
        if failure := self._enter("create_release", draft.tag_name):
            return Err(failure)
        if self._occupied(draft.tag_name):
            return Err(ApiError(kind="other", message="HTTP 422: already_exists", status=422))
        self._mutating()
        release = self._new_release(draft)
        self._state.releases[release.id] = release
        return Ok(release)
