from __future__ import annotations

import os
from dataclasses import dataclass

import typer

from ghr import __version__
from ghr.core.config import Settings, load_settings
from ghr.core.errors import ErrorCode
from ghr.core.result import Err
from ghr.github.api import GitHubApi, ReleaseApi
from ghr.github.http import RealHttpClient
from ghr.output.console import ConsoleProtocol, RichConsole, Style
from ghr.services.timeouts import HTTP_TIMEOUT_SECONDS


@dataclass(frozen=True, slots=True)
class CLIContext:
    settings: Settings
    console: ConsoleProtocol
    api: ReleaseApi


def build_context(*, repository: str | None = None, verbose: bool = False) -> CLIContext:
    console = RichConsole(verbose=verbose)

    settings_result = load_settings(os.environ, repository=repository)
    if isinstance(settings_result, Err):
        console.error(settings_result.error.message)
        if settings_result.error.hint:
            console.print(f"hint: {settings_result.error.hint}", Style.DIM)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    settings = settings_result.value
    http = RealHttpClient(
        settings.token,
        timeout=HTTP_TIMEOUT_SECONDS,
        user_agent=f"ghr/{__version__}",
    )
    return CLIContext(
        settings=settings,
        console=console,
        api=GitHubApi(http, api_url=settings.api_url, repository=settings.repository),
    )
