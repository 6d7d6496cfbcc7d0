# ==============================================
# TransactionStrategySelector
# ==============================================
#
# PURPOSE:
#   Chooses exactly one consistency strategy from the complexity score,
#   the boundary verdict and the number of services, and lays out the
#   saga plan when a saga is chosen. It only plans: nothing is executed.
#
# DECISION TABLE (top-down, first match wins):
#
#   | # | Condition                                    | Strategy          |
#   |---|----------------------------------------------|-------------------|
#   | 1 | fits AND score <= acid_max                   | ACID              |
#   | 2 | NOT fits AND services == 1 AND score <= cm   | SimpleCQRS        |
#   | 3 | services > 1 AND score <= cm                 | ChoreographedSaga |
#   | 4 | services > 1 AND score > cm                  | OrchestratedSaga  |
#   | 5 | else                                         | SimpleCQRS        |
#
#   acid_max = 3, cm (choreography max) = 6 by default.
#
# SAGA PLAN:
#   - origin service first, then one step per distinct service of the
#     cross-aggregate references, in recorded order
#   - the first ComplexInvariants step is the pivot
#   - steps before the pivot get a default compensation, except the
#     final step; the pivot and later steps only retry forward
#   - timeout: external / payment-like steps get the long timeout,
#     everything else the short one, unless the entity overrides it
#
# ==============================================

import logging
from typing import Callable, List, NamedTuple, Optional, Tuple

from pattern_decider.analysis.decision import BoundaryResult, ComplexityScore
from pattern_decider.errors import AmbiguousStrategy
from pattern_decider.facts.endpoint_facts import EndpointFacts, EntityRef, WriteShape
from pattern_decider.strategy.plan import (
    SagaStep,
    SagaTimeouts,
    StrategyResult,
    StrategyThresholds,
    TransactionStrategy,
)

logger = logging.getLogger(__name__)


class DecisionRow(NamedTuple):
    number: int
    description: str
    matches: Callable[[int, bool, int], bool]
    strategy: TransactionStrategy


# Verb used for a step's forward action, by the write shape of its entity
STEP_VERBS = {
    None: "reserve",
    WriteShape.SIMPLE_CRUD: "update",
    WriteShape.VALIDATION_RULES: "validate",
    WriteShape.COMPLEX_INVARIANTS: "commit",
    WriteShape.AUDIT_TRAIL: "record",
    WriteShape.EVENT_SOURCED: "append",
}

# Steps that only hold or check something are released; real writes are reversed
RELEASABLE_SHAPES = {None, WriteShape.VALIDATION_RULES}


class TransactionStrategySelector:
    """
    Evaluates the strategy decision table and builds saga plans.
    """

    def __init__(
        self,
        thresholds: Optional[StrategyThresholds] = None,
        timeouts: Optional[SagaTimeouts] = None,
    ):
        """
        Args:
            thresholds: Score cut-offs. Defaults to StrategyThresholds().
            timeouts: Default step timeouts. Defaults to SagaTimeouts().
        """
        self.thresholds = thresholds or StrategyThresholds()
        self.timeouts = timeouts or SagaTimeouts()
        self._rows = self._build_table()

    def _build_table(self) -> Tuple[DecisionRow, ...]:
        acid_max = self.thresholds.acid_max_score
        choreo_max = self.thresholds.choreography_max_score
        return (
            DecisionRow(
                1, f"single aggregate and score <= {acid_max}",
                lambda score, fits, services: fits and score <= acid_max,
                TransactionStrategy.ACID,
            ),
            DecisionRow(
                2, f"crosses aggregates in one service and score <= {choreo_max}",
                lambda score, fits, services: not fits and services == 1 and score <= choreo_max,
                TransactionStrategy.SIMPLE_CQRS,
            ),
            DecisionRow(
                3, f"several services and score <= {choreo_max}",
                lambda score, fits, services: services > 1 and score <= choreo_max,
                TransactionStrategy.CHOREOGRAPHED_SAGA,
            ),
            DecisionRow(
                4, f"several services and score > {choreo_max}",
                lambda score, fits, services: services > 1 and score > choreo_max,
                TransactionStrategy.ORCHESTRATED_SAGA,
            ),
            DecisionRow(
                5, "single service above the ACID cut-off",
                lambda score, fits, services: True,
                TransactionStrategy.SIMPLE_CQRS,
            ),
        )

    # ======================================
    # Decision table
    # ======================================
    def matching_rules(self, score: int, fits: bool, services: int) -> List[int]:
        """
        Numbers of every explicit row (1-4) that matches, or [5] when none does.

        Useful to check that the table has no gaps or overlaps.
        """
        explicit = [row.number for row in self._rows[:-1] if row.matches(score, fits, services)]
        return explicit or [self._rows[-1].number]

    def decide(self, score: int, fits: bool, services: int) -> DecisionRow:
        """
        Return the first row of the decision table that matches.

        Raises:
            AmbiguousStrategy: If no row matches (a defect in the table)
        """
        for row in self._rows:
            if row.matches(score, fits, services):
                return row
        raise AmbiguousStrategy(
            f"No strategy row matched score={score}, fits={fits}, services={services}"
        )

    def select_strategy(
        self,
        score: ComplexityScore,
        boundary: BoundaryResult,
        facts: EndpointFacts,
    ) -> StrategyResult:
        """
        Choose the transaction strategy for one operation.

        Args:
            score: Output of the ComplexityScorer
            boundary: Output of the AggregateBoundaryAnalyzer
            facts: The validated facts

        Returns:
            StrategyResult, with saga steps when a saga is chosen
        """
        row = self.decide(score.value, boundary.fits_single_aggregate, facts.services_involved)

        steps: Tuple[SagaStep, ...] = ()
        if row.strategy.is_saga:
            steps = self.build_saga_steps(boundary, facts)

        rationale = f"Rule {row.number}: {row.description} (score {score.value})."
        logger.debug("Strategy for %r: %s via rule %d", facts.endpoint, row.strategy.value, row.number)

        return StrategyResult(
            chosen=row.strategy,
            saga_steps=steps,
            matched_rule=row.number,
            rationale=rationale,
        )

    # ======================================
    # Saga plan
    # ======================================
    def build_saga_steps(self, boundary: BoundaryResult, facts: EndpointFacts) -> Tuple[SagaStep, ...]:
        """
        Lay out saga steps: origin first, then each distinct referenced service.

        Args:
            boundary: Supplies the ordered cross-aggregate references
            facts: Supplies entity services, write shapes and overrides

        Returns:
            Ordered tuple of SagaStep
        """
        participants = self._participants(boundary, facts)

        pivot_index = None
        for index, ref in enumerate(participants):
            if ref.write_shape == WriteShape.COMPLEX_INVARIANTS:
                pivot_index = index
                break

        last_index = len(participants) - 1
        steps = []
        for index, ref in enumerate(participants):
            forward_only = index == last_index or (pivot_index is not None and index >= pivot_index)
            steps.append(SagaStep(
                service=ref.service,
                action=f"{STEP_VERBS[ref.write_shape]} {ref.name}",
                compensation=None if forward_only else self._compensation(ref),
                timeout_seconds=self._timeout(ref),
                is_pivot=index == pivot_index,
            ))
        return tuple(steps)

    def _participants(self, boundary: BoundaryResult, facts: EndpointFacts) -> List[EntityRef]:
        entities = facts.resolved_entities()
        if entities:
            origin = entities[0]
        else:
            origin = EntityRef(
                name=facts.endpoint or "request",
                service=facts.origin_service,
                write_shape=facts.write_shape,
            )

        participants = [origin]
        seen_services = {origin.service}
        for position, name in enumerate(boundary.cross_aggregate_references, start=1):
            # References follow the resolved entities after the root
            if position < len(entities) and entities[position].name == name:
                ref = entities[position]
            else:
                ref = facts.entity(name) or EntityRef(name=name, service=name)
            if ref.service in seen_services:
                continue
            seen_services.add(ref.service)
            participants.append(ref)
        return participants

    def _compensation(self, ref: EntityRef) -> str:
        if ref.write_shape in RELEASABLE_SHAPES:
            return f"release {ref.name}"
        return f"reverse {ref.name}"

    def _timeout(self, ref: EntityRef) -> float:
        if ref.timeout_seconds is not None:
            return ref.timeout_seconds
        if ref.external or ref.write_shape == WriteShape.COMPLEX_INVARIANTS:
            return self.timeouts.external_seconds
        return self.timeouts.read_seconds
