# ==============================================
# AggregateBoundaryAnalyzer
# ==============================================
#
# PURPOSE:
#   Decides whether an operation fits inside one aggregate's consistency
#   boundary, or whether some entities must be treated as separate
#   aggregates referenced by ID.
#
# RULE:
#   fits iff services_involved == 1
#        AND entities_affected <= 2
#        AND write_shape != EventSourced
#
#   When it does not fit, every entity beyond the root becomes a
#   cross-aggregate reference, in the order the facts list them.
#   Another aggregate's state is never embedded in the root: it is
#   referenced by identity so the transactional boundary stays small.
#
# ==============================================

import logging

from pattern_decider.analysis.decision import BoundaryResult, IntentCategory, IntentResult
from pattern_decider.facts.endpoint_facts import EndpointFacts, WriteShape

logger = logging.getLogger(__name__)


class AggregateBoundaryAnalyzer:
    """Checks the single-aggregate rule and records ID-only references."""

    MAX_ENTITIES_PER_AGGREGATE = 2

    def analyze_boundary(self, facts: EndpointFacts, intent: IntentResult) -> BoundaryResult:
        """
        Analyze the consistency boundary of an operation.

        Args:
            facts: Validated endpoint facts
            intent: Result of the intent classifier, used for the rationale

        Returns:
            A BoundaryResult
        """
        entities = facts.resolved_entities()
        root = entities[0].name if entities else None

        fits = (
            facts.services_involved == 1
            and facts.entities_affected <= self.MAX_ENTITIES_PER_AGGREGATE
            and facts.write_shape != WriteShape.EVENT_SOURCED
        )

        if fits:
            result = BoundaryResult(
                fits_single_aggregate=True,
                cross_aggregate_references=(),
                root_entity=root,
                rationale=self._fits_rationale(facts, root),
            )
        else:
            references = tuple(ref.name for ref in entities[1:])
            result = BoundaryResult(
                fits_single_aggregate=False,
                cross_aggregate_references=references,
                root_entity=root,
                rationale=self._split_rationale(facts, intent, references),
            )

        logger.debug(
            "Boundary for %r: fits=%s refs=%s",
            facts.endpoint, result.fits_single_aggregate, list(result.cross_aggregate_references),
        )
        return result

    def _fits_rationale(self, facts: EndpointFacts, root) -> str:
        if root is None:
            return "No entities affected; nothing to keep consistent."
        return (
            f"{facts.entities_affected} entit{'y' if facts.entities_affected == 1 else 'ies'} "
            f"within one service can share the '{root}' aggregate boundary."
        )

    def _split_rationale(self, facts: EndpointFacts, intent: IntentResult, references) -> str:
        reasons = []
        if facts.services_involved > 1:
            reasons.append(f"{facts.services_involved} services own the data")
        if facts.entities_affected > self.MAX_ENTITIES_PER_AGGREGATE:
            reasons.append(f"{facts.entities_affected} entities exceed one aggregate")
        if facts.write_shape == WriteShape.EVENT_SOURCED:
            reasons.append("event-sourced streams are their own aggregates")

        if references:
            tail = "reference " + ", ".join(references) + " by ID only"
        else:
            tail = "no further entities are named"

        if intent.category == IntentCategory.QUERY:
            tail += "; compose the read from separate lookups"
        return "; ".join(reasons) + "; " + tail + "."
