"""Step outputs for GitHub Actions.

Outputs are appended to the file named by ``GITHUB_OUTPUT``. Outside a runner
(no output file) they are printed as ``name=value`` lines instead.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from ghr.core.result import Err, Ok, Result
from ghr.output.console import ConsoleProtocol

__all__ = ["OutputError", "format_output", "write_outputs"]


@dataclass(frozen=True, slots=True)
class OutputError:
    message: str
    path: Path | None = None


def format_output(name: str, value: str) -> str:
    """Render one output in the runner's file format.

    Multi-line values use the ``name<<DELIMITER`` form with a random
    delimiter that cannot collide with the value.
    """
    if "\n" not in value and "\r" not in value:
        return f"{name}={value}\n"

    delimiter = f"ghr_{uuid.uuid4().hex}"
    while delimiter in value:
        delimiter = f"ghr_{uuid.uuid4().hex}"
    return f"{name}<<{delimiter}\n{value}\n{delimiter}\n"


def write_outputs(
    outputs: Mapping[str, str],
    *,
    output_path: Path | None,
    console: ConsoleProtocol,
) -> Result[None, OutputError]:
    if output_path is None:
        for name, value in outputs.items():
            console.print(f"{name}={value}")
        return Ok(None)

    text = "".join(format_output(name, value) for name, value in outputs.items())
    try:
        with output_path.open("a", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        return Err(OutputError(f"cannot write step outputs: {e}", path=output_path))

    for name in outputs:
        console.debug(f"output {name} written to {output_path}")
    return Ok(None)
