from __future__ import annotations

from typing import Callable, Iterable, Optional

from core.errors import TransportError
from core.gateways.types import ComposedResult, OperationResult, SurfacePolicy
from core.logging import get_logger

logger = get_logger(__name__)

Step = Callable[[Optional[ComposedResult]], OperationResult]


class Orchestrator:
    """Runs dependent gateway calls one after another.

    Each step receives the composed result built so far (``None`` for the
    first step) and reads ``running.authorization`` to chain onto earlier
    calls. The run stops at the first declined step. A ``TransportError``
    aborts the run and propagates; nothing already done is reversed.
    """

    def __init__(self, *, operation: str, surface: SurfacePolicy = SurfacePolicy.LAST_STEP) -> None:
        self._operation = operation
        self._surface = surface

    def run(self, steps: Iterable[Step]) -> ComposedResult:
        steps = tuple(steps)
        if not steps:
            raise ValueError(f"Composed operation '{self._operation}' has no steps")

        logger.info("composed_operation_started", operation=self._operation, step_count=len(steps))

        running: ComposedResult | None = None
        for index, step in enumerate(steps):
            try:
                response = step(running)
            except TransportError as err:
                logger.error(
                    "composed_operation_aborted",
                    operation=self._operation,
                    step_index=index,
                    completed_steps=index,
                    error_code=err.code.value,
                )
                raise

            if running is None:
                running = ComposedResult(responses=(response,), surface=self._surface)
            else:
                running = running.with_response(response)

            if not response.success:
                logger.info(
                    "composed_step_declined",
                    operation=self._operation,
                    step_index=index,
                    skipped_steps=len(steps) - index - 1,
                    message=response.message,
                )
                break

        for failure in running.unsurfaced_failures:
            logger.warning(
                "composed_step_failure_unsurfaced",
                operation=self._operation,
                action=failure.action.value if failure.action else None,
                authorization=running.authorization,
                message=failure.message,
            )

        logger.info(
            "composed_operation_finished",
            operation=self._operation,
            success=running.success,
            executed_steps=len(running.responses),
        )
        return running


def run_steps(
    steps: Iterable[Step],
    *,
    operation: str = "composed",
    surface: SurfacePolicy = SurfacePolicy.LAST_STEP,
) -> ComposedResult:
    return Orchestrator(operation=operation, surface=surface).run(steps)
