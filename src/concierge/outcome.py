"""Explicit results for fallible steps and whole conversation turns."""

import functools
import traceback
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar


T = TypeVar("T")


@dataclass(frozen=True)
class StepResult(Generic[T]):
    """Outcome of a single store, completion or send step."""

    value: T
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def safe_step(
    fallback: Callable[[], Any] = lambda: None,
) -> Callable[[Callable[..., Awaitable[Any]]], Callable[..., Awaitable[StepResult[Any]]]]:
    """
    Decorator for async methods whose failures must not escape the turn.

    The wrapped method's return value is placed in a successful StepResult. Any
    exception is logged with its traceback through ``self.logger`` and turned
    into a failed StepResult holding ``fallback()`` as its value.
    """

    def decorator(func: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[StepResult[Any]]]:
        @functools.wraps(func)
        async def wrapper(self: Any, *args: Any, **kwargs: Any) -> StepResult[Any]:
            try:
                return StepResult(await func(self, *args, **kwargs))
            except Exception as e:
                self.logger.error(
                    f"Step '{func.__name__}' failed: {traceback.format_exc()}"
                )
                return StepResult(fallback(), error=e)

        return wrapper

    return decorator


class TurnAction(str, Enum):
    OPT_IN = "opt_in"
    OPT_OUT = "opt_out"
    ONBOARD = "onboard"
    ASSIST = "assist"


class Delivery(str, Enum):
    DELIVERED = "delivered"
    # Partial failure, e.g. a reply was generated but could not be sent
    DEGRADED = "degraded"
    DROPPED = "dropped"


@dataclass
class TurnResult:
    """What happened while handling one inbound message."""

    action: Optional[TurnAction] = None
    delivery: Delivery = Delivery.DELIVERED
    reply: Optional[str] = None
    failed_steps: list[str] = field(default_factory=list)
    rejected: Optional[str] = None

    @property
    def accepted(self) -> bool:
        return self.rejected is None

    @classmethod
    def reject(cls, reason: str) -> "TurnResult":
        return cls(delivery=Delivery.DROPPED, rejected=reason)

    def degrade(self, step: str) -> None:
        self.failed_steps.append(step)
        if self.delivery == Delivery.DELIVERED:
            self.delivery = Delivery.DEGRADED

    def drop(self, step: str) -> None:
        self.failed_steps.append(step)
        self.delivery = Delivery.DROPPED
