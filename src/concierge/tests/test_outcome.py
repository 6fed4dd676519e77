"""Tests for the safe_step decorator and turn results."""

import asyncio
import pytest
from unittest.mock import Mock

from concierge.outcome import Delivery, StepResult, TurnResult, safe_step


class Worker:
    def __init__(self):
        self.logger = Mock()

    @safe_step()
    async def succeed(self, value: str) -> str:
        return f"Success: {value}"

    @safe_step(fallback=list)
    async def fail(self, value: str) -> list:
        """Always fails."""
        raise ValueError("Something went wrong")

    @safe_step()
    async def cancelled(self) -> None:
        raise asyncio.CancelledError()


class TestSafeStep:
    @pytest.mark.asyncio
    async def test_wraps_return_value(self):
        result = await Worker().succeed("test")

        assert result == StepResult("Success: test")
        assert result.ok

    @pytest.mark.asyncio
    async def test_catches_exception_and_returns_fallback(self):
        worker = Worker()

        result = await worker.fail("test")

        assert not result.ok
        assert result.value == []
        assert isinstance(result.error, ValueError)

        worker.logger.error.assert_called_once()
        logged = worker.logger.error.call_args[0][0]
        assert "Step 'fail' failed:" in logged
        assert "ValueError: Something went wrong" in logged
        assert "Traceback" in logged

    @pytest.mark.asyncio
    async def test_fallback_is_fresh_each_call(self):
        worker = Worker()

        first = await worker.fail("a")
        second = await worker.fail("b")

        assert first.value is not second.value

    @pytest.mark.asyncio
    async def test_cancellation_passes_through(self):
        with pytest.raises(asyncio.CancelledError):
            await Worker().cancelled()

    def test_preserves_function_metadata(self):
        assert Worker.fail.__name__ == "fail"
        assert Worker.fail.__doc__ == "Always fails."


class TestTurnResult:
    def test_degrade_keeps_worst_delivery(self):
        result = TurnResult()
        result.drop("complete")
        result.degrade("send")

        assert result.delivery == Delivery.DROPPED
        assert result.failed_steps == ["complete", "send"]

    def test_degrade_from_delivered(self):
        result = TurnResult()
        result.degrade("recent")

        assert result.delivery == Delivery.DEGRADED

    def test_reject(self):
        result = TurnResult.reject("Invalid request")

        assert not result.accepted
        assert result.action is None
