# ==============================================
# ComplexityScorer
# ==============================================
#
# PURPOSE:
#   Turns EndpointFacts into a 1..10 complexity score plus the named
#   factors that explain it.
#
# CLASS: ComplexityScorer
# -----------------------
#   Stateless apart from its (immutable) ScoringWeights.
#
#   Methods:
#   --------
#   - score(facts: EndpointFacts) -> ComplexityScore
#       value = clamp(1 + sum(points), 1, 10)
#
#       | Factor            | Condition               | Default points |
#       |-------------------|-------------------------|----------------|
#       | entities_affected | 0-1 / 2-3 / >=4         | 0 / 2 / 4      |
#       | services_involved | 1 / 2-3 / >=4           | 0 / 3 / 5      |
#       | write_shape       | SimpleCrud or absent    | 0              |
#       |                   | ValidationRules         | 1              |
#       |                   | ComplexInvariants       | 2              |
#       |                   | AuditTrail/EventSourced | 3              |
#       | long_running      | true                    | 2              |
#
#       Only non-zero factors are reported, highest points first,
#       ties kept in table order.
#
# ==============================================

import logging
from typing import List, Optional

from pattern_decider.analysis.decision import ComplexityScore, ScoreFactor, ScoringWeights
from pattern_decider.facts.endpoint_facts import EndpointFacts, WriteShape

logger = logging.getLogger(__name__)

MIN_SCORE = 1
MAX_SCORE = 10


class ComplexityScorer:
    """Additive, deterministic complexity scoring."""

    def __init__(self, weights: Optional[ScoringWeights] = None):
        """
        Args:
            weights: Optional point table. Defaults to ScoringWeights().
        """
        self.weights = weights or ScoringWeights()

    def score(self, facts: EndpointFacts) -> ComplexityScore:
        """
        Score one endpoint.

        Args:
            facts: Validated endpoint facts

        Returns:
            ComplexityScore with value in [1, 10]
        """
        factors = [
            self._entities_factor(facts.entities_affected),
            self._services_factor(facts.services_involved),
            self._write_factor(facts.write_shape),
            self._long_running_factor(facts.long_running),
        ]

        # Table order is kept for ties because sorted() is stable
        contributing = sorted(
            (factor for factor in factors if factor.points != 0),
            key=lambda factor: -factor.points,
        )

        total = 1 + sum(factor.points for factor in contributing)
        value = max(MIN_SCORE, min(MAX_SCORE, total))

        logger.debug("Complexity for %r: raw=%d clamped=%d", facts.endpoint, total, value)
        return ComplexityScore(value=value, factors=tuple(contributing))

    def _entities_factor(self, entities: int) -> ScoreFactor:
        if entities >= 4:
            points = self.weights.entities_many
        elif entities >= 2:
            points = self.weights.entities_few
        else:
            points = 0
        return ScoreFactor("entities_affected", points, f"{entities} entities")

    def _services_factor(self, services: int) -> ScoreFactor:
        if services >= 4:
            points = self.weights.services_many
        elif services >= 2:
            points = self.weights.services_few
        else:
            points = 0
        return ScoreFactor("services_involved", points, f"{services} services")

    def _write_factor(self, write_shape: Optional[WriteShape]) -> ScoreFactor:
        points_by_shape = {
            WriteShape.SIMPLE_CRUD: 0,
            WriteShape.VALIDATION_RULES: self.weights.write_validation_rules,
            WriteShape.COMPLEX_INVARIANTS: self.weights.write_complex_invariants,
            WriteShape.AUDIT_TRAIL: self.weights.write_audit_trail,
            WriteShape.EVENT_SOURCED: self.weights.write_event_sourced,
        }
        if write_shape is None:
            return ScoreFactor("write_shape", 0, "no writes")
        return ScoreFactor("write_shape", points_by_shape[write_shape], write_shape.value)

    def _long_running_factor(self, long_running: bool) -> ScoreFactor:
        points = self.weights.long_running if long_running else 0
        return ScoreFactor("long_running", points, "spans multiple requests" if long_running else "")

    def explain(self, score: ComplexityScore) -> str:
        """One-line explanation, e.g. "7 = 1 + services_involved(3) + write_shape(3)"."""
        if not score.factors:
            return f"{score.value} = base 1"
        parts = " + ".join(f"{factor.name}({factor.points})" for factor in score.factors)
        clamped = "" if score.raw_total == score.value else f" (clamped from {score.raw_total})"
        return f"{score.value} = 1 + {parts}{clamped}"
