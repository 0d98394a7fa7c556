"""Compensating saga for workflows spanning the database and remote systems.

An object store upload cannot join a database transaction, so every remote
side effect is registered together with the action that undoes it. When a
later step fails, recorded compensations run in reverse order and the first
error is returned. Once the database unit is durable, complete() discards
the compensations so nothing is undone afterwards.

Usage:
    saga = Saga(logger=logger, name="attach_images")
    upload = await saga.execute(
        SagaStep(
            name="upload",
            action=lambda: store.upload(folder, content, content_type, name),
            compensation=lambda stored: store.delete(stored.object_id),
        )
    )
    if isinstance(upload, Failure):
        return upload  # already unwound

    ...
    await uow.commit()
    saga.complete()

Compensation failures are logged and never replace the original error.
"""

from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from src.core.enums import ErrorCode
from src.core.errors import DomainError, InternalError
from src.core.result import Failure, Result, Success
from src.domain.protocols.logger_protocol import LoggerProtocol

T = TypeVar("T")

Compensation = Callable[[Any], Awaitable[Any]]


@dataclass(frozen=True, slots=True)
class SagaStep(Generic[T]):
    """One forward action and its undo.

    Attributes:
        name: Step name used in logs.
        action: Coroutine factory returning a Result (or raising).
        compensation: Called with the action's success value to undo it.
            None for steps that have nothing to undo.
    """

    name: str
    action: Callable[[], Awaitable[Result[T, DomainError]]]
    compensation: Callable[[T], Awaitable[Any]] | None = None


@dataclass(slots=True)
class _Recorded:
    step_name: str
    compensation: Compensation
    value: Any


class Saga:
    """Ordered record of completed steps with reverse-order unwinding.

    Attributes:
        name: Saga name bound into every log record.
    """

    def __init__(self, logger: LoggerProtocol, name: str) -> None:
        self.name = name
        self._logger = logger.bind(saga=name)
        self._recorded: list[_Recorded] = []
        self._completed = False

    @property
    def pending_compensations(self) -> int:
        return len(self._recorded)

    async def execute(self, step: SagaStep[T]) -> Result[T, DomainError]:
        """Run one step.

        On Success the compensation (if any) is recorded. On Failure, or if
        the action raises, every recorded compensation is unwound and the
        failure is returned.
        """
        if self._completed:
            raise RuntimeError(f"Saga '{self.name}' already completed")

        try:
            result = await step.action()
        except Exception as e:
            self._logger.error("saga_step_raised", step=step.name, error=e)
            await self.unwind()
            return Failure(
                error=InternalError(
                    code=ErrorCode.INTERNAL_ERROR,
                    message=f"Step '{step.name}' failed unexpectedly",
                    details={"step": step.name, "error_type": type(e).__name__},
                )
            )

        if isinstance(result, Failure):
            self._logger.warning(
                "saga_step_failed",
                step=step.name,
                error_code=result.error.code.value,
            )
            await self.unwind()
            return result

        if step.compensation is not None:
            self._recorded.append(
                _Recorded(
                    step_name=step.name,
                    compensation=step.compensation,
                    value=result.value,
                )
            )
        return result

    async def run(self, steps: Sequence[SagaStep[Any]]) -> Result[list[Any], DomainError]:
        """Execute steps in order, stopping (and unwinding) at the first failure.

        Returns:
            Success with each step's value in order, or the first Failure.
        """
        values: list[Any] = []
        for step in steps:
            result = await self.execute(step)
            if isinstance(result, Failure):
                return result
            values.append(result.value)
        return Success(value=values)

    async def unwind(self) -> None:
        """Run recorded compensations in reverse order.

        Each compensation is attempted even if an earlier one fails. A
        compensation returning Failure or raising is logged at warning level.
        """
        while self._recorded:
            recorded = self._recorded.pop()
            try:
                outcome = await recorded.compensation(recorded.value)
            except Exception as e:
                self._logger.warning(
                    "saga_compensation_failed",
                    step=recorded.step_name,
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                continue
            if isinstance(outcome, Failure):
                self._logger.warning(
                    "saga_compensation_failed",
                    step=recorded.step_name,
                    error_code=outcome.error.code.value,
                    error_message=outcome.error.message,
                )
            else:
                self._logger.debug("saga_compensated", step=recorded.step_name)

    def complete(self) -> None:
        """Mark the saga durable; recorded compensations are discarded."""
        self._recorded.clear()
        self._completed = True
