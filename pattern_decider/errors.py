# ==============================================
# Errors
# ==============================================
#
# PURPOSE:
#   The engine's error taxonomy.
#
# CLASSES:
# --------
# - DeciderError          → Base class for everything raised by the package
# - InvalidFacts          → Input facts rejected before any analysis runs.
#                           Not retryable as-is: the caller must fix the input.
# - AmbiguousStrategy     → No row of the strategy decision table matched.
#                           Only reachable through an implementation defect.
# - PartialSagaFailure    → Describes a saga plan that failed part-way when
#                           a downstream executor applied it. The engine
#                           itself never raises it (it never executes plans).
#
# ==============================================

from typing import Iterable, List, Optional, Tuple


class DeciderError(Exception):
    """Base class for all pattern decider errors."""


class InvalidFacts(DeciderError, ValueError):
    """
    Raised when endpoint facts are structurally invalid.

    Attributes:
        problems: Every problem found, so callers can fix them in one go.
    """

    def __init__(self, problems: Iterable[str]):
        self.problems: List[str] = list(problems)
        super().__init__("Invalid endpoint facts: " + "; ".join(self.problems))


class AmbiguousStrategy(DeciderError, RuntimeError):
    """Raised when the strategy decision table fails to pick exactly one row."""


class PartialSagaFailure(DeciderError):
    """
    A saga plan that failed part-way through execution.

    Attributes:
        completed_steps: Services whose steps finished before the failure, in order.
        failed_step: Service whose step failed.
        compensations_owed: Compensations to run, most recent step first.
            Empty when the failure happened after the pivot step, in which
            case only forward retry applies.
    """

    def __init__(
        self,
        completed_steps: Iterable[str],
        failed_step: str,
        compensations_owed: Iterable[str],
    ):
        self.completed_steps: Tuple[str, ...] = tuple(completed_steps)
        self.failed_step = failed_step
        self.compensations_owed: Tuple[str, ...] = tuple(compensations_owed)
        super().__init__(
            f"Saga failed at step '{failed_step}' after "
            f"{len(self.completed_steps)} completed step(s); "
            f"{len(self.compensations_owed)} compensation(s) owed"
        )

    @property
    def forward_recovery_only(self) -> bool:
        """True when nothing can be compensated and the executor must retry forward."""
        return not self.compensations_owed

    @classmethod
    def from_plan(cls, steps, failed_index: int) -> "PartialSagaFailure":
        """
        Derive the failure report for a plan whose step at ``failed_index`` failed.

        Args:
            steps: Ordered saga steps (``SagaStep`` instances).
            failed_index: 0-based index of the failing step.

        Returns:
            The matching PartialSagaFailure.
        """
        steps = list(steps)
        if not 0 <= failed_index < len(steps):
            raise IndexError(f"failed_index {failed_index} outside plan of {len(steps)} steps")

        completed = steps[:failed_index]
        pivot_passed = any(step.is_pivot for step in completed)

        owed: List[str] = []
        if not pivot_passed:
            for step in reversed(completed):
                compensation: Optional[str] = step.compensation
                if compensation:
                    owed.append(compensation)

        return cls(
            completed_steps=[step.service for step in completed],
            failed_step=steps[failed_index].service,
            compensations_owed=owed,
        )
