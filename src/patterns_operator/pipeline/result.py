"""Outcomes of pipeline steps and of whole reconcile invocations."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StepOutcome:
    """A step that took an action (or failed trying); ends the invocation.

    Steps that had nothing to do return None instead.
    """

    step: str
    error: BaseException | None = None


@dataclass(frozen=True)
class ReconcileResult:
    """What the scheduler should do after one invocation."""

    requeue: bool = False
    requeue_after: float = 0.0
    error: BaseException | None = None
    step: str = ""

    @classmethod
    def done(cls) -> ReconcileResult:
        return cls()

    @classmethod
    def after(cls, delay: float, error: BaseException | None = None, step: str = "") -> ReconcileResult:
        return cls(requeue=True, requeue_after=delay, error=error, step=step)
