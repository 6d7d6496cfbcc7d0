# ==============================================
# STRATEGY
# ==============================================
#
# This package picks the consistency pattern for an operation and,
# for sagas, plans the steps a downstream executor would run.
#
# Modules:
# --------
# - plan.py      → TransactionStrategy, SagaStep, StrategyResult, thresholds, timeouts
# - selector.py  → Decision table + saga plan generation
#
# ==============================================

from .plan import (
    SagaStep,
    SagaTimeouts,
    StrategyResult,
    StrategyThresholds,
    TransactionStrategy,
)
from .selector import TransactionStrategySelector

__all__ = [
    "SagaStep",
    "SagaTimeouts",
    "StrategyResult",
    "StrategyThresholds",
    "TransactionStrategy",
    "TransactionStrategySelector",
]
