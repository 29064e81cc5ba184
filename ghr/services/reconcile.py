"""Release reconciler.

Clears whatever release and tag currently occupy the target tag, archiving
the old release under a backup tag when one is configured, then creates the
new release. Phases run strictly in order:

1. Capture the commit the target tag points at (if the tag exists).
2. Archive or delete the release at the target tag, then delete the tag ref.
3. Create the new release at the target tag.
4. Hand back id / html_url / upload_url for the step outputs.

Only "not found" answers are expected during phases 1-2 (first release for a
tag, no previous backup). Any other failure stops the cleanup; under
``CleanupPolicy.STRICT`` the run fails before creating anything, under
``CleanupPolicy.BEST_EFFORT`` it warns and still attempts the creation.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Literal

from ghr.core.config import ReconcileInputs
from ghr.core.result import Err, Ok, Result
from ghr.github.api import ReleaseApi
from ghr.github.errors import ApiError
from ghr.github.model import Release, ReleaseDraft
from ghr.output.console import ConsoleProtocol
from ghr.services.consistency import Sleeper, wait_until
from ghr.services.timeouts import CONSISTENCY_POLL_ATTEMPTS, CONSISTENCY_POLL_DELAY_SECONDS

__all__ = [
    "BACKUP_BODY_MARKER",
    "BACKUP_NAME_SUFFIX",
    "CleanupPolicy",
    "ReconcileError",
    "Reconciler",
    "ReleaseOutputs",
    "backup_body",
    "backup_name",
]

BACKUP_NAME_SUFFIX = " BACKUP"
BACKUP_BODY_MARKER = "THIS IS A BACKUP"


class CleanupPolicy(Enum):
    STRICT = "strict"
    BEST_EFFORT = "best-effort"


@dataclass(frozen=True, slots=True)
class ReconcileError:
    phase: Literal["cleanup", "create"]
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class ReleaseOutputs:
    id: int
    html_url: str
    upload_url: str

    @staticmethod
    def from_release(release: Release) -> ReleaseOutputs:
        return ReleaseOutputs(
            id=release.id,
            html_url=release.html_url,
            upload_url=release.upload_url,
        )

    def as_dict(self) -> dict[str, str]:
        return {
            "id": str(self.id),
            "html_url": self.html_url,
            "upload_url": self.upload_url,
        }


@dataclass(frozen=True, slots=True)
class _CleanupFailure:
    step: str
    error: ApiError


def backup_name(name: str) -> str:
    return f"{name}{BACKUP_NAME_SUFFIX}"


def backup_body(body: str) -> str:
    return f"{BACKUP_BODY_MARKER}\n{body}"


class Reconciler:
    def __init__(
        self,
        api: ReleaseApi,
        *,
        console: ConsoleProtocol,
        policy: CleanupPolicy = CleanupPolicy.STRICT,
        poll_attempts: int = CONSISTENCY_POLL_ATTEMPTS,
        poll_delay: float = CONSISTENCY_POLL_DELAY_SECONDS,
        sleep: Sleeper | None = None,
    ) -> None:
        self._api = api
        self._console = console
        self._policy = policy
        self._poll_attempts = poll_attempts
        self._poll_delay = poll_delay
        self._sleep = sleep if sleep is not None else time.sleep

    def run(self, inputs: ReconcileInputs) -> Result[ReleaseOutputs, ReconcileError]:
        self._console.header(f"Release {inputs.tag}")

        # A failed tag read still lets best-effort cleanup run, without a sha.
        sha, failure = self._capture_sha(inputs.tag)
        if failure is None:
            failure = self._clear_target(inputs, sha)
        else:
            aborted = self._apply_policy(failure)
            if aborted is not None:
                return Err(aborted)
            failure = self._clear_target(inputs, None)
        if failure is not None:
            aborted = self._apply_policy(failure)
            if aborted is not None:
                return Err(aborted)

        return self._create(inputs)

    # -- phase 1 ---------------------------------------------------------

    def _capture_sha(self, tag: str) -> tuple[str | None, _CleanupFailure | None]:
        result = self._api.get_tag_ref(tag)
        if isinstance(result, Ok):
            self._console.info(f"tag {tag} points at {result.value.sha}")
            return result.value.sha, None
        if result.error.is_not_found:
            self._console.info(f"tag {tag} does not exist yet")
            return None, None
        return None, _CleanupFailure(f"read tag {tag}", result.error)

    # -- phase 2 ---------------------------------------------------------

    def _clear_target(self, inputs: ReconcileInputs, sha: str | None) -> _CleanupFailure | None:
        found = self._api.get_release_by_tag(inputs.tag)
        if isinstance(found, Err):
            if found.error.is_not_found:
                self._console.info(f"no release at {inputs.tag}; nothing to clean up")
                return None
            return _CleanupFailure(f"look up release at {inputs.tag}", found.error)

        old = found.value
        self._console.info(f"found release {old.id} ({old.name!r}) at {inputs.tag}")

        if inputs.backup_tag is not None:
            failure = self._archive(old, tag=inputs.tag, backup_tag=inputs.backup_tag, sha=sha)
        else:
            failure = self._delete_release(old.id, tag=inputs.tag)
        if failure is not None:
            return failure

        return self._delete_tag_ref(inputs.tag)

    def _archive(
        self,
        old: Release,
        *,
        tag: str,
        backup_tag: str,
        sha: str | None,
    ) -> _CleanupFailure | None:
        previous = self._api.get_release_by_tag(backup_tag)
        if isinstance(previous, Ok):
            self._console.info(f"removing previous backup release {previous.value.id}")
            failure = self._delete_release(previous.value.id, tag=backup_tag)
            if failure is not None:
                return failure
        elif not previous.error.is_not_found:
            return _CleanupFailure(f"look up backup release at {backup_tag}", previous.error)

        self._console.info(f"moving release {old.id} to {backup_tag}")
        moved = self._api.update_release(
            old.id,
            tag_name=backup_tag,
            name=backup_name(old.name),
            body=backup_body(old.body),
        )
        if isinstance(moved, Err):
            if not moved.error.is_not_found:
                return _CleanupFailure(f"move release {old.id} to {backup_tag}", moved.error)
            self._console.warning(f"release {old.id} disappeared before it could be archived")
            return None
        self._await(
            lambda: self._release_at(backup_tag, old.id),
            f"release {old.id} at {backup_tag}",
        )

        if sha is None:
            self._console.warning(
                f"no commit recorded for {tag}; {backup_tag} keeps the commit GitHub assigned"
            )
            return None

        self._console.info(f"pointing {backup_tag} at {sha}")
        updated = self._api.update_tag_ref(backup_tag, sha, force=True)
        if isinstance(updated, Err):
            if not updated.error.is_not_found:
                return _CleanupFailure(f"move tag {backup_tag} to {sha}", updated.error)
            # Draft releases carry no git tag, so there is no ref to move.
            self._console.warning(f"tag {backup_tag} does not exist; not moved")
            return None
        self._await(lambda: self._ref_at(backup_tag, sha), f"tag {backup_tag} at {sha}")
        return None

    def _delete_release(self, release_id: int, *, tag: str) -> _CleanupFailure | None:
        self._console.info(f"deleting release {release_id}")
        result = self._api.delete_release(release_id)
        if isinstance(result, Err) and not result.error.is_not_found:
            return _CleanupFailure(f"delete release {release_id}", result.error)
        self._await(lambda: self._release_absent(tag), f"deletion of the release at {tag}")
        return None

    def _delete_tag_ref(self, tag: str) -> _CleanupFailure | None:
        self._console.info(f"deleting tag {tag}")
        result = self._api.delete_tag_ref(tag)
        if isinstance(result, Err) and not result.error.is_not_found:
            return _CleanupFailure(f"delete tag {tag}", result.error)
        self._await(lambda: self._ref_absent(tag), f"deletion of tag {tag}")
        return None

    def _apply_policy(self, failure: _CleanupFailure) -> ReconcileError | None:
        message = f"{failure.step} failed: {failure.error.message}"
        self._console.warning(message)
        if self._policy is CleanupPolicy.STRICT:
            return ReconcileError(
                phase="cleanup",
                message=message,
                hint="Re-run with --best-effort to create the release anyway",
            )
        self._console.warning("best effort: continuing despite the failure")
        return None

    # -- phase 3 ---------------------------------------------------------

    def _create(self, inputs: ReconcileInputs) -> Result[ReleaseOutputs, ReconcileError]:
        self._console.info(f"creating release {inputs.release_name!r} at {inputs.tag}")
        created = self._api.create_release(
            ReleaseDraft(
                tag_name=inputs.tag,
                name=inputs.release_name,
                body=inputs.body,
                draft=inputs.draft,
                prerelease=inputs.prerelease,
            )
        )
        if isinstance(created, Err):
            return Err(ReconcileError(phase="create", message=created.error.message))

        release = created.value
        self._console.success(f"release {release.id} created: {release.html_url}")
        return Ok(ReleaseOutputs.from_release(release))

    # -- read-after-write checks -------------------------------------------

    def _await(self, check: Callable[[], bool], what: str) -> None:
        ok = wait_until(
            check,
            attempts=self._poll_attempts,
            delay=self._poll_delay,
            sleep=self._sleep,
        )
        if ok:
            self._console.debug(f"observed {what}")
        else:
            self._console.warning(f"GitHub has not reflected {what} yet; continuing")

    def _release_absent(self, tag: str) -> bool:
        result = self._api.get_release_by_tag(tag)
        return isinstance(result, Err) and result.error.is_not_found

    def _release_at(self, tag: str, release_id: int) -> bool:
        result = self._api.get_release_by_tag(tag)
        return isinstance(result, Ok) and result.value.id == release_id

    def _ref_absent(self, tag: str) -> bool:
        result = self._api.get_tag_ref(tag)
        return isinstance(result, Err) and result.error.is_not_found

    def _ref_at(self, tag: str, sha: str) -> bool:
        result = self._api.get_tag_ref(tag)
        return isinstance(result, Ok) and result.value.sha == sha

