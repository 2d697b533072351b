"""Tests for dn.core.result module."""

from __future__ import annotations

import pytest

from dn.core.result import Err, Ok, Result, is_err, is_ok


class TestOk:
    """Test Ok variant."""

    def test_value(self) -> None:
        result = Ok(42)
        assert result.value == 42
        assert result.is_ok()
        assert not result.is_err()

    def test_unwrap(self) -> None:
        assert Ok("x").unwrap() == "x"
        assert Ok("x").unwrap_or("y") == "x"

    def test_map(self) -> None:
        assert Ok(2).map(lambda v: v * 3) == Ok(6)

    def test_repr(self) -> None:
        assert repr(Ok("a")) == "Ok('a')"

    def test_frozen(self) -> None:
        result = Ok(1)
        with pytest.raises(AttributeError):
            result.value = 2  # type: ignore[misc]


class TestErr:
    """Test Err variant."""

    def test_error(self) -> None:
        result = Err("boom")
        assert result.error == "boom"
        assert result.is_err()
        assert not result.is_ok()

    def test_unwrap_raises(self) -> None:
        with pytest.raises(ValueError, match="boom"):
            Err("boom").unwrap()

    def test_unwrap_or_returns_default(self) -> None:
        assert Err("boom").unwrap_or(7) == 7

    def test_map_is_noop(self) -> None:
        err: Err[str] = Err("boom")
        assert err.map(lambda v: v) is err


class TestPatternMatching:
    """Results are consumed with match statements across the code base."""

    @staticmethod
    def describe(result: Result[int, str]) -> str:
        match result:
            case Ok(value):
                return f"ok {value}"
            case Err(error):
                return f"err {error}"

    def test_match_ok(self) -> None:
        assert self.describe(Ok(1)) == "ok 1"

    def test_match_err(self) -> None:
        assert self.describe(Err("x")) == "err x"

    def test_type_guards(self) -> None:
        assert is_ok(Ok(1))
        assert not is_ok(Err(1))
        assert is_err(Err(1))
        assert not is_err(Ok(1))
