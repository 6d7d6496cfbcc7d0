# ==============================================
# RecommendationFormatter
# ==============================================
#
# PURPOSE:
#   Merges the outputs of the intent classifier, complexity scorer,
#   boundary analyzer and strategy selector into one Recommendation,
#   writing the summary rationale and advisory notes.
#
#   Pure aggregation: no clock, no randomness, no I/O.
#
# ==============================================

from typing import List, Optional

from pattern_decider.analysis.decision import (
    AsymmetryResult,
    BoundaryResult,
    ComplexityScore,
    IntentResult,
)
from pattern_decider.facts.endpoint_facts import EndpointFacts
from pattern_decider.report.recommendation import Recommendation
from pattern_decider.strategy.plan import StrategyResult, TransactionStrategy

# Below this confidence the intent should be confirmed by a person
LOW_CONFIDENCE = 0.7

STRATEGY_SUMMARIES = {
    TransactionStrategy.ACID: "keep the change in one local ACID transaction",
    TransactionStrategy.SIMPLE_CQRS: "separate the write model from a read model inside the service",
    TransactionStrategy.CHOREOGRAPHED_SAGA: "coordinate services through events, each reacting on its own",
    TransactionStrategy.ORCHESTRATED_SAGA: "drive the services from a central saga orchestrator",
}


class RecommendationFormatter:
    """Builds the final Recommendation."""

    def format(
        self,
        intent: IntentResult,
        score: ComplexityScore,
        boundary: BoundaryResult,
        strategy: StrategyResult,
        asymmetry: Optional[AsymmetryResult] = None,
        facts: Optional[EndpointFacts] = None,
    ) -> Recommendation:
        """
        Assemble a Recommendation.

        Args:
            intent: Intent classification
            score: Complexity score
            boundary: Aggregate boundary verdict
            strategy: Chosen strategy (and saga plan)
            asymmetry: Optional read/write advisory
            facts: Optional facts, echoed into the report

        Returns:
            The Recommendation
        """
        return Recommendation(
            intent=intent,
            complexity=score,
            boundary=boundary,
            strategy=strategy,
            rationale=self._rationale(intent, score, boundary, strategy),
            asymmetry=asymmetry,
            notes=tuple(self._notes(intent, boundary, strategy, asymmetry, facts)),
            facts=facts,
        )

    def _rationale(self, intent, score, boundary, strategy) -> str:
        if boundary.fits_single_aggregate:
            scope = "fits a single aggregate"
        else:
            scope = "crosses aggregate boundaries"
        return (
            f"{intent.label or intent.category.value} endpoint "
            f"(confidence {intent.confidence:.2f}) with complexity {score.value}/10 "
            f"{scope}: {strategy.chosen.value}, {STRATEGY_SUMMARIES[strategy.chosen]}."
        )

    def _notes(self, intent, boundary, strategy, asymmetry, facts) -> List[str]:
        notes = []

        if intent.confidence < LOW_CONFIDENCE:
            notes.append(
                f"Intent confidence is {intent.confidence:.2f}; confirm the {intent.category.value} "
                f"classification before acting on it."
            )

        if boundary.cross_aggregate_references:
            names = ", ".join(boundary.cross_aggregate_references)
            notes.append(f"Reference {names} by ID only; never embed their state in the root aggregate.")

        if strategy.chosen.is_saga:
            pivot = strategy.pivot_step
            if pivot is not None:
                notes.append(
                    f"'{pivot.action}' on {pivot.service} is the pivot: from it onward "
                    f"failures are retried forward, never compensated."
                )
            else:
                notes.append("No irreversible step detected; every step but the last can be compensated.")

        if asymmetry is not None and asymmetry.suggests_read_model:
            notes.append(asymmetry.rationale)

        if facts is not None and facts.audit_critical:
            if strategy.chosen.is_saga:
                notes.append("Audit-critical: record an audit entry for every saga step and compensation.")
            else:
                notes.append("Audit-critical: write the audit entry in the same transaction as the change.")

        return notes
