"""GitHub REST operations used to reconcile a release.

``ReleaseApi`` is the seam the reconciler depends on; ``GitHubApi`` implements
it over an ``HttpClient``. Every operation returns ``Result[..., ApiError]``
with HTTP 404 classified as ``not_found``.
"""

from __future__ import annotations

from typing import Protocol
from urllib.parse import quote

from ghr.core.result import Err, Ok, Result
from ghr.core.structured import as_str_dict
from ghr.github.errors import ApiError
from ghr.github.http import HttpClient, HttpMethod, HttpResponse
from ghr.github.model import Release, ReleaseDraft, TagRef

__all__ = ["GitHubApi", "ReleaseApi"]


class ReleaseApi(Protocol):
    def get_tag_ref(self, tag: str) -> Result[TagRef, ApiError]: ...

    def get_release_by_tag(self, tag: str) -> Result[Release, ApiError]: ...

    def delete_release(self, release_id: int) -> Result[None, ApiError]: ...

    def update_release(
        self,
        release_id: int,
        *,
        tag_name: str,
        name: str,
        body: str,
    ) -> Result[Release, ApiError]: ...

    def update_tag_ref(
        self, tag: str, sha: str, *, force: bool = True
    ) -> Result[TagRef, ApiError]: ...

    def delete_tag_ref(self, tag: str) -> Result[None, ApiError]: ...

    def create_release(self, draft: ReleaseDraft) -> Result[Release, ApiError]: ...


def _quote_tag(tag: str) -> str:
    # Tags may contain slashes (release/1.0); they stay literal in ref paths.
    return quote(tag, safe="/")


class GitHubApi:
    """Release and tag-ref endpoints for one repository."""

    def __init__(self, http: HttpClient, *, api_url: str, repository: str) -> None:
        self._http = http
        self._base = f"{api_url.rstrip('/')}/repos/{repository}"

    def _call(
        self,
        method: HttpMethod,
        path: str,
        body: dict[str, object] | None = None,
    ) -> Result[HttpResponse, ApiError]:
        result = self._http.request(method, f"{self._base}/{path}", json_body=body)
        if isinstance(result, Err):
            return Err(ApiError.from_http(result.error))
        return result

    def _release(self, response: HttpResponse, what: str) -> Result[Release, ApiError]:
        data = as_str_dict(response.data)
        release = Release.from_payload(data) if data is not None else None
        if release is None:
            return Err(ApiError(kind="other", message=f"unexpected release payload: {what}"))
        return Ok(release)

    def _tag_ref(self, response: HttpResponse, tag: str) -> Result[TagRef, ApiError]:
        data = as_str_dict(response.data)
        ref = TagRef.from_payload(data) if data is not None else None
        if ref is None:
            return Err(ApiError(kind="other", message=f"unexpected ref payload: tags/{tag}"))
        return Ok(ref)

    def get_tag_ref(self, tag: str) -> Result[TagRef, ApiError]:
        result = self._call("GET", f"git/ref/tags/{_quote_tag(tag)}")
        if isinstance(result, Err):
            return result
        return self._tag_ref(result.value, tag)

    def get_release_by_tag(self, tag: str) -> Result[Release, ApiError]:
        result = self._call("GET", f"releases/tags/{_quote_tag(tag)}")
        if isinstance(result, Err):
            return result
        return self._release(result.value, f"tag {tag}")

    def delete_release(self, release_id: int) -> Result[None, ApiError]:
        result = self._call("DELETE", f"releases/{release_id}")
        if isinstance(result, Err):
            return result
        return Ok(None)

    def update_release(
        self,
        release_id: int,
        *,
        tag_name: str,
        name: str,
        body: str,
    ) -> Result[Release, ApiError]:
        result = self._call(
            "PATCH",
            f"releases/{release_id}",
            {"tag_name": tag_name, "name": name, "body": body},
        )
        if isinstance(result, Err):
            return result
        return self._release(result.value, f"release {release_id}")

    def update_tag_ref(self, tag: str, sha: str, *, force: bool = True) -> Result[TagRef, ApiError]:
        result = self._call(
            "PATCH",
            f"git/refs/tags/{_quote_tag(tag)}",
            {"sha": sha, "force": force},
        )
        if isinstance(result, Err):
            return result
        return self._tag_ref(result.value, tag)

    def delete_tag_ref(self, tag: str) -> Result[None, ApiError]:
        result = self._call("DELETE", f"git/refs/tags/{_quote_tag(tag)}")
        if isinstance(result, Err):
            return result
        return Ok(None)

    def create_release(self, draft: ReleaseDraft) -> Result[Release, ApiError]:
        result = self._call("POST", "releases", draft.to_payload())
        if isinstance(result, Err):
            return result
        return self._release(result.value, f"new release {draft.tag_name}")
