"""Tests for github/api.py - REST mapping and error classification."""

from __future__ import annotations

from ghr.core.result import Err, Ok
from ghr.github.api import GitHubApi
from ghr.github.errors import ApiError
from ghr.github.http import HttpError, MockHttpClient
from ghr.github.model import Release, ReleaseDraft, TagRef

BASE = "https://api.github.com/repos/octo/project"
SHA = "0123456789abcdef0123456789abcdef01234567"


def _release_payload(**overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "id": 42,
        "tag_name": "v1.0.0",
        "name": "Version 1.0.0",
        "body": "notes",
        "draft": False,
        "prerelease": False,
        "html_url": "https://github.com/octo/project/releases/tag/v1.0.0",
        "upload_url": "https://uploads.github.com/repos/octo/project/releases/42/assets{?name,label}",
    }
    payload.update(overrides)
    return payload


def _api(http: MockHttpClient) -> GitHubApi:
    return GitHubApi(http, api_url="https://api.github.com/", repository="octo/project")


def test_get_tag_ref() -> None:
    http = MockHttpClient()
    http.set(
        "GET",
        f"{BASE}/git/ref/tags/v1.0.0",
        {"ref": "refs/tags/v1.0.0", "object": {"sha": SHA, "type": "commit"}},
    )
    assert _api(http).get_tag_ref("v1.0.0") == Ok(TagRef(ref="refs/tags/v1.0.0", sha=SHA))


def test_get_tag_ref_missing_is_not_found() -> None:
    result = _api(MockHttpClient()).get_tag_ref("v9")
    assert isinstance(result, Err)
    assert result.error.is_not_found


def test_tag_with_slash_and_special_chars_is_quoted() -> None:
    http = MockHttpClient()
    _api(http).get_release_by_tag("release/1.0 rc")
    assert http.calls[0][1] == f"{BASE}/releases/tags/release/1.0%20rc"


def test_get_release_by_tag() -> None:
    http = MockHttpClient()
    http.set("GET", f"{BASE}/releases/tags/v1.0.0", _release_payload())
    result = _api(http).get_release_by_tag("v1.0.0")
    assert isinstance(result, Ok)
    assert result.value.id == 42
    assert result.value.name == "Version 1.0.0"


def test_null_name_and_body_read_as_empty() -> None:
    http = MockHttpClient()
    http.set("GET", f"{BASE}/releases/tags/v1.0.0", _release_payload(name=None, body=None))
    result = _api(http).get_release_by_tag("v1.0.0")
    assert isinstance(result, Ok)
    assert result.value.name == ""
    assert result.value.body == ""


def test_malformed_release_payload_is_other() -> None:
    http = MockHttpClient()
    http.set("GET", f"{BASE}/releases/tags/v1.0.0", {"id": "nope"})
    result = _api(http).get_release_by_tag("v1.0.0")
    assert isinstance(result, Err)
    assert result.error.kind == "other"


def test_update_release_sends_fields() -> None:
    http = MockHttpClient()
    http.set("PATCH", f"{BASE}/releases/42", _release_payload(tag_name="backup"))
    result = _api(http).update_release(42, tag_name="backup", name="n BACKUP", body="b")
    assert isinstance(result, Ok)
    assert http.calls == [
        ("PATCH", f"{BASE}/releases/42", {"tag_name": "backup", "name": "n BACKUP", "body": "b"})
    ]


def test_update_tag_ref_forces() -> None:
    http = MockHttpClient()
    http.set(
        "PATCH",
        f"{BASE}/git/refs/tags/backup",
        {"ref": "refs/tags/backup", "object": {"sha": SHA}},
    )
    result = _api(http).update_tag_ref("backup", SHA)
    assert isinstance(result, Ok)
    assert http.calls[0][2] == {"sha": SHA, "force": True}


def test_deletes() -> None:
    http = MockHttpClient()
    http.set("DELETE", f"{BASE}/releases/42", status=204)
    http.set("DELETE", f"{BASE}/git/refs/tags/v1.0.0", status=204)
    api = _api(http)
    assert api.delete_release(42) == Ok(None)
    assert api.delete_tag_ref("v1.0.0") == Ok(None)


def test_delete_missing_ref_is_not_found() -> None:
    http = MockHttpClient()
    http.set_error(
        "DELETE", f"{BASE}/git/refs/tags/v1", status=422, message="Reference does not exist"
    )
    result = _api(http).delete_tag_ref("v1")
    assert isinstance(result, Err)
    assert result.error.is_not_found


def test_create_release() -> None:
    http = MockHttpClient()
    http.set("POST", f"{BASE}/releases", _release_payload(), status=201)
    draft = ReleaseDraft(tag_name="v1.0.0", name="v1.0.0", body="", prerelease=True)
    result = _api(http).create_release(draft)
    assert isinstance(result, Ok)
    assert isinstance(result.value, Release)
    assert http.calls[0][2] == {
        "tag_name": "v1.0.0",
        "name": "v1.0.0",
        "body": "",
        "draft": False,
        "prerelease": True,
    }


def test_create_release_error_is_other() -> None:
    http = MockHttpClient()
    http.set_error("POST", f"{BASE}/releases", status=422, message="Validation Failed")
    result = _api(http).create_release(ReleaseDraft(tag_name="v1", name="v1"))
    assert isinstance(result, Err)
    assert result.error.kind == "other"
    assert "Validation Failed" in result.error.message


class TestApiErrorClassification:
    def test_404(self) -> None:
        error = ApiError.from_http(HttpError(method="GET", url="u", status=404, message="Not Found"))
        assert error.is_not_found

    def test_missing_ref_422(self) -> None:
        error = ApiError.from_http(
            HttpError(method="PATCH", url="u", status=422, message="Reference does not exist")
        )
        assert error.is_not_found

    def test_other_422(self) -> None:
        error = ApiError.from_http(
            HttpError(method="POST", url="u", status=422, message="Validation Failed")
        )
        assert not error.is_not_found

    def test_network_and_permission(self) -> None:
        for status in (0, 401, 403, 500):
            error = ApiError.from_http(HttpError(method="GET", url="u", status=status, message="x"))
            assert error.kind == "other"
