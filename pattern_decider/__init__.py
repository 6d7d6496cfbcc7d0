# ==============================================
# Design Pattern Decider
# ==============================================
#
# Classifies an API endpoint from descriptive facts and recommends a
# consistency pattern: ACID, Simple CQRS, Choreographed Saga or
# Orchestrated Saga.
#
# Package Structure:
#
# pattern_decider/
# ├── facts/        # Fact model, normalization, validation
# ├── analysis/     # Intent, complexity, aggregate boundary, read/write asymmetry
# ├── strategy/     # Transaction strategy selection + saga plans
# ├── report/       # Recommendation + formatter
# ├── persistence/  # Saved reports
# ├── config.py     # Configuration management
# ├── errors.py     # InvalidFacts, AmbiguousStrategy, PartialSagaFailure
# ├── engine.py     # RecommendationEngine orchestrator
# └── cli.py        # Command line entry point
#
# ==============================================

__version__ = "0.1.0"

from pattern_decider.engine import RecommendationEngine, recommend
from pattern_decider.errors import AmbiguousStrategy, DeciderError, InvalidFacts, PartialSagaFailure
from pattern_decider.facts import EndpointFacts, EntityRef, QueryShape, WriteShape
from pattern_decider.report import Recommendation

__all__ = [
    "RecommendationEngine",
    "recommend",
    "AmbiguousStrategy",
    "DeciderError",
    "InvalidFacts",
    "PartialSagaFailure",
    "EndpointFacts",
    "EntityRef",
    "QueryShape",
    "WriteShape",
    "Recommendation",
]
