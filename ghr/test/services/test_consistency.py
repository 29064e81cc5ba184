from __future__ import annotations

from ghr.services.consistency import wait_until


def test_returns_immediately_when_consistent() -> None:
    sleeps: list[float] = []
    assert wait_until(lambda: True, attempts=3, delay=1.0, sleep=sleeps.append) is True
    assert sleeps == []


def test_backs_off_linearly_until_observed() -> None:
    sleeps: list[float] = []
    answers = iter([False, False, True])
    assert wait_until(lambda: next(answers), attempts=5, delay=0.5, sleep=sleeps.append) is True
    assert sleeps == [0.5, 1.0]


def test_gives_up_after_attempts() -> None:
    sleeps: list[float] = []
    calls: list[int] = []

    def check() -> bool:
        calls.append(1)
        return False

    assert wait_until(check, attempts=3, delay=2.0, sleep=sleeps.append) is False
    assert len(calls) == 3
    assert sleeps == [2.0, 4.0]


def test_at_least_one_check() -> None:
    assert wait_until(lambda: True, attempts=0, delay=1.0, sleep=lambda s: None) is True
