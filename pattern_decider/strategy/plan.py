# ==============================================
# Plan (Data Classes)
# ==============================================
#
# PURPOSE:
#   Output of the transaction strategy selector, and the cut-offs that
#   control it.
#
# ENUMS:
# ------
# - TransactionStrategy(Enum): ACID, SIMPLE_CQRS, CHOREOGRAPHED_SAGA,
#                              ORCHESTRATED_SAGA
#
# CLASSES:
# --------
# - SagaStep (frozen dataclass)
#     - service: str                  → service that runs the step
#     - action: str                   → forward action ("reserve Inventory")
#     - compensation: str | None      → undo action; None for the final
#                                       step, the pivot and anything after it
#     - timeout_seconds: float        → data for the executor, not awaited here
#     - is_pivot: bool                → irreversible point of the saga
#
# - StrategyResult (frozen dataclass)
#     - chosen: TransactionStrategy
#     - saga_steps: tuple[SagaStep]   → empty unless a saga is chosen
#     - matched_rule: int             → 1-based row of the decision table
#     - rationale: str
#
# - StrategyThresholds (frozen dataclass)
#     - acid_max_score: int           (default 3)
#     - choreography_max_score: int   (default 6)
#
# - SagaTimeouts (frozen dataclass)
#     - read_seconds: float           (default 5.0)
#     - external_seconds: float       (default 30.0)
#
# ==============================================

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class TransactionStrategy(Enum):
    """Consistency pattern recommended for an operation."""
    ACID = "ACID"
    SIMPLE_CQRS = "SimpleCQRS"
    CHOREOGRAPHED_SAGA = "ChoreographedSaga"
    ORCHESTRATED_SAGA = "OrchestratedSaga"

    @property
    def is_saga(self) -> bool:
        return self in (TransactionStrategy.CHOREOGRAPHED_SAGA, TransactionStrategy.ORCHESTRATED_SAGA)


@dataclass(frozen=True)
class SagaStep:
    """One step of a saga plan."""

    service: str
    action: str
    compensation: Optional[str] = None
    timeout_seconds: float = 5.0
    is_pivot: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "service": self.service,
            "action": self.action,
            "compensation": self.compensation,
            "timeout_seconds": self.timeout_seconds,
            "is_pivot": self.is_pivot,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SagaStep":
        return cls(
            service=data["service"],
            action=data["action"],
            compensation=data.get("compensation"),
            timeout_seconds=float(data.get("timeout_seconds", 5.0)),
            is_pivot=bool(data.get("is_pivot", False)),
        )


@dataclass(frozen=True)
class StrategyResult:
    """The chosen strategy and, for sagas, the step plan."""

    chosen: TransactionStrategy
    saga_steps: Tuple[SagaStep, ...] = field(default_factory=tuple)
    matched_rule: int = 0
    rationale: str = ""

    @property
    def pivot_step(self) -> Optional[SagaStep]:
        for step in self.saga_steps:
            if step.is_pivot:
                return step
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "chosen": self.chosen.value,
            "matched_rule": self.matched_rule,
            "rationale": self.rationale,
            "saga_steps": [step.to_dict() for step in self.saga_steps],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StrategyResult":
        return cls(
            chosen=TransactionStrategy(data["chosen"]),
            saga_steps=tuple(SagaStep.from_dict(item) for item in data.get("saga_steps", [])),
            matched_rule=int(data.get("matched_rule", 0)),
            rationale=data.get("rationale", ""),
        )


@dataclass(frozen=True)
class StrategyThresholds:
    """
    Score cut-offs of the strategy decision table.
    """

    acid_max_score: int = 3
    """Highest score still eligible for a plain ACID transaction."""

    choreography_max_score: int = 6
    """Highest score handled by CQRS or a choreographed saga; above it sagas are orchestrated."""


@dataclass(frozen=True)
class SagaTimeouts:
    """Default per-step timeouts written into saga plans."""

    read_seconds: float = 5.0
    """Reads, validation and simple writes."""

    external_seconds: float = 30.0
    """External systems and payment-like (ComplexInvariants) steps."""
