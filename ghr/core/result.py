"""Result type used across ghr instead of raising.

Remote calls, input parsing and file writes all return ``Ok(value)`` or
``Err(error)``. Callers branch with ``isinstance`` or ``match``:

    match api.get_release_by_tag("v1.0.0"):
        case Ok(release):
            console.info(f"found release {release.id}")
        case Err(error) if error.is_not_found:
            console.info("no release yet")
        case Err(error):
            console.warning(error.message)
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Successful result holding ``value``."""

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """Failed result holding ``error``."""

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]
