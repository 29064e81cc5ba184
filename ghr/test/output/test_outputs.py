from __future__ import annotations

from pathlib import Path

import pytest

from ghr.core.result import Err, Ok
from ghr.output import outputs as outputs_mod
from ghr.output.console import MockConsole
from ghr.output.outputs import format_output, write_outputs


def test_single_line_output() -> None:
    assert format_output("id", "42") == "id=42\n"


def test_multiline_output_uses_delimiter(monkeypatch: pytest.MonkeyPatch) -> None:
    class _Uuid:
        hex = "deadbeef"

    monkeypatch.setattr(outputs_mod.uuid, "uuid4", lambda: _Uuid())
    assert format_output("body", "a\nb") == "body<<ghr_deadbeef\na\nb\nghr_deadbeef\n"


def test_appends_to_output_file(tmp_path: Path) -> None:
    out = tmp_path / "github_output"
    out.write_text("previous=1\n", encoding="utf-8")

    result = write_outputs(
        {"id": "42", "html_url": "https://h", "upload_url": "https://u{?name,label}"},
        output_path=out,
        console=MockConsole(),
    )

    assert result == Ok(None)
    assert out.read_text(encoding="utf-8") == (
        "previous=1\nid=42\nhtml_url=https://h\nupload_url=https://u{?name,label}\n"
    )


def test_prints_without_output_file() -> None:
    console = MockConsole()
    result = write_outputs({"id": "42"}, output_path=None, console=console)
    assert result == Ok(None)
    assert console.messages == ["id=42"]


def test_unwritable_output_file(tmp_path: Path) -> None:
    result = write_outputs(
        {"id": "42"},
        output_path=tmp_path / "missing-dir" / "out",
        console=MockConsole(),
    )
    assert isinstance(result, Err)
    assert "cannot write step outputs" in result.error.message
