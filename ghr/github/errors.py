from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from ghr.github.http import HttpError

ApiErrorKind = Literal["not_found", "other"]

# PATCH/DELETE on a missing git ref answer 422 rather than 404.
_MISSING_REF_MESSAGE = "reference does not exist"


@dataclass(frozen=True, slots=True)
class ApiError:
    """A failed GitHub call, classified so callers can tolerate absence only."""

    kind: ApiErrorKind
    message: str
    status: int = 0

    @property
    def is_not_found(self) -> bool:
        return self.kind == "not_found"

    @classmethod
    def from_http(cls, error: HttpError) -> ApiError:
        missing_ref = error.status == 422 and _MISSING_REF_MESSAGE in error.message.lower()
        kind: ApiErrorKind = "not_found" if error.status == 404 or missing_ref else "other"
        return cls(kind=kind, message=str(error), status=error.status)

    def __str__(self) -> str:
        return self.message
