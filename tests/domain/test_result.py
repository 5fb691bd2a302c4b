"""Tests for Result and Error."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from ccasync.domain.result import Error, Result, ResultAccessError


class TestError:
    def test_str(self) -> None:
        err = Error(code="Customer.NotFound", message="No such customer.")
        assert str(err) == "Customer.NotFound: No such customer."

    def test_equal_by_value(self) -> None:
        assert Error(code="A.B", message="m") == Error(code="A.B", message="m")
        assert Error(code="A.B", message="m") != Error(code="A.C", message="m")

    def test_frozen(self) -> None:
        err = Error(code="A.B", message="m")
        with pytest.raises(ValidationError):
            err.code = "X.Y"  # type: ignore[misc]

    def test_detail_defaults_empty(self) -> None:
        assert Error(code="A.B", message="m").detail == {}


class TestResult:
    def test_success_with_value(self) -> None:
        result = Result.success(42)
        assert result.ok is True
        assert result.is_failure is False
        assert result.value == 42

    def test_reading_error_of_success_raises(self) -> None:
        result = Result.success(42)
        with pytest.raises(ResultAccessError, match="successful"):
            _ = result.error

    def test_success_without_value(self) -> None:
        result = Result.success()
        assert result.ok is True
        assert result.value is None

    def test_failure(self) -> None:
        result = Result.fail("EmailAddress.Invalid", "bad", field="email")
        assert result.ok is False
        assert result.is_failure is True
        assert result.error is not None
        assert result.error.code == "EmailAddress.Invalid"
        assert result.error.detail == {"field": "email"}

    def test_reading_value_of_failure_raises(self) -> None:
        result = Result.fail("A.B", "nope")
        with pytest.raises(ResultAccessError, match="A.B"):
            _ = result.value

    def test_failure_requires_error(self) -> None:
        with pytest.raises(TypeError):
            Result.failure(None)  # type: ignore[arg-type]

    def test_inconsistent_success_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Result(ok=True, error=Error(code="A.B", message="m"))

    def test_inconsistent_failure_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Result(ok=False)
        with pytest.raises(ValidationError):
            Result(ok=False, payload=1, error=Error(code="A.B", message="m"))

    def test_payload_is_not_copied(self) -> None:
        items = [1, 2]
        assert Result.success(items).value is items

    def test_str(self) -> None:
        assert str(Result.success(1)) == "Success(1)"
        assert str(Result.fail("A.B", "m")) == "Failure(A.B: m)"


class TestComposition:
    def test_map(self) -> None:
        assert Result.success(2).map(lambda v: v * 10).value == 20

    def test_map_passes_failure_through(self) -> None:
        failed = Result.fail("A.B", "m")
        mapped = failed.map(lambda v: v * 10)
        assert mapped.ok is False
        assert mapped.error == failed.error

    def test_bind_short_circuits(self) -> None:
        calls: list[int] = []

        def step(v: int) -> Result[int]:
            calls.append(v)
            return Result.success(v + 1)

        assert Result.success(1).bind(step).value == 2
        assert Result.fail("A.B", "m").bind(step).ok is False
        assert calls == [1]

    def test_match(self) -> None:
        assert Result.success(3).match(lambda v: f"ok {v}", lambda e: e.code) == "ok 3"
        assert Result.fail("A.B", "m").match(lambda v: "ok", lambda e: e.code) == "A.B"
