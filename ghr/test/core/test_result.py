"""Tests for ghr.core.result module."""

import pytest

from ghr.core.result import Err, Ok, Result


def _lookup(found: bool) -> Result[int, str]:
    return Ok(7) if found else Err("missing")


def test_ok_holds_value() -> None:
    result = _lookup(True)
    assert isinstance(result, Ok)
    assert result.value == 7


def test_err_holds_error() -> None:
    result = _lookup(False)
    assert isinstance(result, Err)
    assert result.error == "missing"


def test_is_frozen() -> None:
    with pytest.raises(AttributeError):
        Ok(1).value = 2  # type: ignore[misc]


def test_match_patterns() -> None:
    match _lookup(False):
        case Ok(value):
            pytest.fail(f"unexpected {value}")
        case Err(error):
            assert error == "missing"


def test_repr() -> None:
    assert repr(Ok("v1")) == "Ok('v1')"
    assert repr(Err(404)) == "Err(404)"
