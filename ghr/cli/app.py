from __future__ import annotations

from typing import NoReturn

import typer

from ghr import __version__
from ghr.cli.context import build_context
from ghr.core.config import build_inputs
from ghr.core.errors import ErrorCode
from ghr.core.result import Err
from ghr.output.console import Style
from ghr.output.outputs import write_outputs
from ghr.services.reconcile import CleanupPolicy, Reconciler

app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    rich_markup_mode="rich",
)


def _exit(err: str, *, code: ErrorCode, hint: str | None = None) -> NoReturn:
    typer.echo(f"error: {err}", err=True)
    if hint:
        typer.echo(f"hint: {hint}", err=True)
    raise typer.Exit(code=int(code))


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.command()
def release(
    tag_name: str | None = typer.Option(
        None,
        "--tag-name",
        envvar="INPUT_TAG_NAME",
        help="Tag to create the release at (refs/tags/ prefix is stripped).",
    ),
    release_name: str | None = typer.Option(
        None,
        "--release-name",
        envvar="INPUT_RELEASE_NAME",
        help="Display name of the new release (refs/tags/ prefix is stripped).",
    ),
    backup_tag_name: str | None = typer.Option(
        None,
        "--backup-tag-name",
        envvar="INPUT_BACKUP_TAG_NAME",
        help="Archive the previous release under this tag instead of deleting it.",
    ),
    body: str | None = typer.Option(
        None, "--body", envvar="INPUT_BODY", help="Release notes."
    ),
    draft: str | None = typer.Option(
        None, "--draft", envvar="INPUT_DRAFT", help="'true' to create a draft release."
    ),
    prerelease: str | None = typer.Option(
        None, "--prerelease", envvar="INPUT_PRERELEASE", help="'true' to mark a prerelease."
    ),
    repo: str | None = typer.Option(
        None, "--repo", help="owner/name (default: $GITHUB_REPOSITORY)."
    ),
    best_effort: bool = typer.Option(
        False,
        "--best-effort",
        help="Create the release even if cleaning up the previous one failed.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug output."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Replace the release at a tag, archiving the previous one if asked."""
    del version

    inputs = build_inputs(
        tag_name=tag_name,
        release_name=release_name,
        backup_tag_name=backup_tag_name,
        body=body,
        draft=draft,
        prerelease=prerelease,
    )
    if isinstance(inputs, Err):
        _exit(inputs.error.message, code=ErrorCode.USER_ERROR, hint=inputs.error.hint)

    ctx = build_context(repository=repo, verbose=verbose)
    policy = CleanupPolicy.BEST_EFFORT if best_effort else CleanupPolicy.STRICT
    ctx.console.print(f"repository: {ctx.settings.repository}", Style.DIM)

    result = Reconciler(ctx.api, console=ctx.console, policy=policy).run(inputs.value)
    if isinstance(result, Err):
        ctx.console.error(result.error.message)
        if result.error.hint:
            ctx.console.print(f"hint: {result.error.hint}", Style.DIM)
        raise typer.Exit(code=int(ErrorCode.API_ERROR))

    written = write_outputs(
        result.value.as_dict(),
        output_path=ctx.settings.output_path,
        console=ctx.console,
    )
    if isinstance(written, Err):
        ctx.console.error(written.error.message)
        raise typer.Exit(code=int(ErrorCode.IO_ERROR))


def main() -> None:
    app()
