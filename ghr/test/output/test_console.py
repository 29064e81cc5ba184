from __future__ import annotations

import pytest

from ghr.output.console import MockConsole, RichConsole, Style


def test_mock_console_records_styles() -> None:
    console = MockConsole()
    console.info("phase 1")
    console.warning("careful")
    console.error("broken")
    console.success("done")
    console.debug("detail")

    assert console.messages == [
        "info: phase 1",
        "warning: careful",
        "error: broken",
        "OK done",
        "debug: detail",
    ]
    assert console.has_error() and console.has_warning()
    assert console.count(Style.INFO) == 1
    assert len(console.find("care")) == 1


def test_rich_console_escapes_markup(capsys: pytest.CaptureFixture[str]) -> None:
    console = RichConsole()
    console.info("release [bold]x[/bold]")
    console.error("bad [tag]")

    captured = capsys.readouterr()
    assert "release [bold]x[/bold]" in captured.out
    assert "bad [tag]" in captured.err


def test_rich_console_debug_needs_verbose(capsys: pytest.CaptureFixture[str]) -> None:
    RichConsole().debug("hidden")
    RichConsole(verbose=True).debug("shown")
    out = capsys.readouterr().out
    assert "hidden" not in out
    assert "shown" in out
