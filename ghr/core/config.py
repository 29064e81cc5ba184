"""Typed action inputs and runtime settings.

Action inputs arrive as raw strings (from ``INPUT_*`` variables or CLI flags)
and are normalized here once, before any remote call is made.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .result import Err, Ok, Result

__all__ = [
    "DEFAULT_API_URL",
    "REF_TAGS_PREFIX",
    "ConfigError",
    "ReconcileInputs",
    "Settings",
    "build_inputs",
    "load_settings",
    "parse_flag",
    "strip_ref_prefix",
]

REF_TAGS_PREFIX = "refs/tags/"
DEFAULT_API_URL = "https://api.github.com"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when inputs or environment are unusable."""

    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class ReconcileInputs:
    """Normalized inputs for one reconcile run.

    Attributes:
        tag: Bare tag the new release is created at.
        backup_tag: Bare tag the previous release is archived under, or None
            to delete the previous release instead.
        release_name: Display name of the new release.
        body: Release notes of the new release.
        draft: Create the release as a draft.
        prerelease: Mark the release as a prerelease.
    """

    tag: str
    backup_tag: str | None
    release_name: str
    body: str = ""
    draft: bool = False
    prerelease: bool = False


@dataclass(frozen=True, slots=True)
class Settings:
    """Environment the reconciler talks to."""

    token: str
    repository: str
    api_url: str = DEFAULT_API_URL
    output_path: Path | None = None


def strip_ref_prefix(value: str) -> str:
    """Drop the first ``refs/tags/`` occurrence, as ``github.ref`` carries it."""
    return value.replace(REF_TAGS_PREFIX, "", 1)


def parse_flag(value: str | None) -> bool:
    """Action booleans are strings; only the exact literal ``true`` counts."""
    return value == "true"


def build_inputs(
    *,
    tag_name: str | None,
    release_name: str | None,
    backup_tag_name: str | None = None,
    body: str | None = None,
    draft: str | None = None,
    prerelease: str | None = None,
) -> Result[ReconcileInputs, ConfigError]:
    """Validate and normalize raw action inputs.

    Returns:
        Ok(ReconcileInputs), or Err(ConfigError) when a required input is
        missing or blank.
    """
    if not tag_name or not tag_name.strip():
        return Err(ConfigError("Input required and not supplied: tag_name"))
    if not release_name or not release_name.strip():
        return Err(ConfigError("Input required and not supplied: release_name"))

    tag = strip_ref_prefix(tag_name.strip())
    if not tag:
        return Err(ConfigError(f"tag_name has no tag after the ref prefix: {tag_name!r}"))

    backup_tag: str | None = None
    if backup_tag_name and backup_tag_name.strip():
        backup_tag = strip_ref_prefix(backup_tag_name.strip()) or None

    if backup_tag is not None and backup_tag == tag:
        return Err(
            ConfigError(
                f"backup_tag_name must differ from tag_name: {tag}",
                hint="Leave backup_tag_name empty to delete the previous release instead",
            )
        )

    return Ok(
        ReconcileInputs(
            tag=tag,
            backup_tag=backup_tag,
            release_name=strip_ref_prefix(release_name.strip()),
            body=(body or "").strip(),
            draft=parse_flag(draft),
            prerelease=parse_flag(prerelease),
        )
    )


def load_settings(
    env: Mapping[str, str],
    *,
    repository: str | None = None,
) -> Result[Settings, ConfigError]:
    """Read token, repository and API location from the process environment.

    Args:
        env: Environment mapping (usually ``os.environ``).
        repository: ``owner/repo`` override; falls back to GITHUB_REPOSITORY.
    """
    token = env.get("GITHUB_TOKEN", "").strip()
    if not token:
        return Err(
            ConfigError(
                "GITHUB_TOKEN is not set",
                hint="Pass it with: env: GITHUB_TOKEN: ${{ secrets.GITHUB_TOKEN }}",
            )
        )

    repo = (repository or env.get("GITHUB_REPOSITORY", "")).strip()
    if not repo:
        return Err(
            ConfigError("GITHUB_REPOSITORY is not set", hint="Use --repo owner/name")
        )
    owner, sep, name = repo.partition("/")
    if not sep or not owner or not name or "/" in name:
        return Err(ConfigError(f"invalid repository (expected owner/name): {repo}"))

    api_url = env.get("GITHUB_API_URL", "").strip().rstrip("/") or DEFAULT_API_URL

    output = env.get("GITHUB_OUTPUT", "").strip()
    return Ok(
        Settings(
            token=token,
            repository=repo,
            api_url=api_url,
            output_path=Path(output) if output else None,
        )
    )
