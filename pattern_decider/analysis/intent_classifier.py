# ==============================================
# IntentClassifier
# ==============================================
#
# PURPOSE:
#   Maps EndpointFacts to one of CRUD / Command / Query / Workflow / Saga.
#
# CLASS: IntentClassifier
# -----------------------
#   Stateless. Never raises for valid facts: every input gets a
#   best-effort category with a confidence.
#
#   Methods:
#   --------
#   - classify(facts: EndpointFacts) -> IntentResult
#       Applies rules in order, first match wins:
#
#       RULE 1: MULTIPLE SERVICES → SAGA (0.9)
#         services_involved > 1
#
#       RULE 2: LONG-RUNNING OR HEAVY WRITES → WORKFLOW (0.8)
#         long_running, or >= 3 entities with ComplexInvariants/EventSourced
#
#       RULE 3: READ-ONLY → QUERY
#         query shape set, no write shape.
#         0.85 for MultiJoin/Aggregation/FullTextSearch/RealtimeDashboard,
#         0.6 otherwise (labelled CRUD-read)
#
#       RULE 4: RICH WRITES OR SEVERAL ENTITIES → COMMAND (0.75)
#         write shape ComplexInvariants/AuditTrail/EventSourced, or >= 2 entities
#
#       RULE 5: EVERYTHING ELSE → CRUD (0.9)
#
#   An endpoint that both reads with a complex query and writes is
#   decided by its write side: rule 3 only applies without a write shape.
#
# ==============================================

import logging

from pattern_decider.analysis.decision import IntentCategory, IntentResult
from pattern_decider.facts.endpoint_facts import COMPLEX_QUERY_SHAPES, EndpointFacts, WriteShape

logger = logging.getLogger(__name__)


class IntentClassifier:
    """
    Applies ordered rules to EndpointFacts to produce an IntentResult.
    """

    SAGA_CONFIDENCE = 0.9
    WORKFLOW_CONFIDENCE = 0.8
    COMPLEX_QUERY_CONFIDENCE = 0.85
    SIMPLE_QUERY_CONFIDENCE = 0.6
    COMMAND_CONFIDENCE = 0.75
    CRUD_CONFIDENCE = 0.9

    WORKFLOW_MIN_ENTITIES = 3
    COMMAND_MIN_ENTITIES = 2

    WORKFLOW_WRITE_SHAPES = frozenset({WriteShape.COMPLEX_INVARIANTS, WriteShape.EVENT_SOURCED})
    COMMAND_WRITE_SHAPES = frozenset({
        WriteShape.COMPLEX_INVARIANTS,
        WriteShape.AUDIT_TRAIL,
        WriteShape.EVENT_SOURCED,
    })

    def classify(self, facts: EndpointFacts) -> IntentResult:
        """
        Classify the intent of one endpoint.

        Args:
            facts: Validated endpoint facts

        Returns:
            An IntentResult with category, confidence and rationale
        """
        result = self._apply_rules(facts)
        logger.debug(
            "Intent for %r: %s (%.2f)", facts.endpoint, result.category.value, result.confidence
        )
        return result

    def _apply_rules(self, facts: EndpointFacts) -> IntentResult:
        # RULE 1: crossing service boundaries makes it a saga
        if facts.services_involved > 1:
            return IntentResult(
                category=IntentCategory.SAGA,
                confidence=self.SAGA_CONFIDENCE,
                rationale=(
                    f"Spans {facts.services_involved} services; no single transaction "
                    f"can cover every bounded context."
                ),
                label=IntentCategory.SAGA.value,
            )

        # RULE 2: long-running, or many entities under heavy write rules
        heavy_writes = (
            facts.entities_affected >= self.WORKFLOW_MIN_ENTITIES
            and facts.write_shape in self.WORKFLOW_WRITE_SHAPES
        )
        if facts.long_running or heavy_writes:
            if facts.long_running:
                reason = "Operation may outlive a single request or transaction."
            else:
                reason = (
                    f"{facts.entities_affected} entities change under "
                    f"{facts.write_shape.value} rules."
                )
            return IntentResult(
                category=IntentCategory.WORKFLOW,
                confidence=self.WORKFLOW_CONFIDENCE,
                rationale=reason,
                label=IntentCategory.WORKFLOW.value,
            )

        # RULE 3: read-only endpoints are queries
        if facts.is_read_only:
            if facts.query_shape in COMPLEX_QUERY_SHAPES:
                return IntentResult(
                    category=IntentCategory.QUERY,
                    confidence=self.COMPLEX_QUERY_CONFIDENCE,
                    rationale=f"Read-only {facts.query_shape.value} query.",
                    label=IntentCategory.QUERY.value,
                )
            return IntentResult(
                category=IntentCategory.QUERY,
                confidence=self.SIMPLE_QUERY_CONFIDENCE,
                rationale=f"Read-only {facts.query_shape.value} lookup (CRUD-read).",
                label="CRUD-read",
            )

        # RULE 4: mutation with rules beyond plain CRUD
        if (
            facts.write_shape in self.COMMAND_WRITE_SHAPES
            or facts.entities_affected >= self.COMMAND_MIN_ENTITIES
        ):
            if facts.write_shape in self.COMMAND_WRITE_SHAPES:
                reason = f"{facts.write_shape.value} write carries business rules beyond CRUD."
            else:
                reason = f"Write touches {facts.entities_affected} entities."
            return IntentResult(
                category=IntentCategory.COMMAND,
                confidence=self.COMMAND_CONFIDENCE,
                rationale=reason,
                label=IntentCategory.COMMAND.value,
            )

        # RULE 5: plain CRUD
        return IntentResult(
            category=IntentCategory.CRUD,
            confidence=self.CRUD_CONFIDENCE,
            rationale="Single-entity operation without extra business rules.",
            label=IntentCategory.CRUD.value,
        )
