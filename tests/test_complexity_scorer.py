# ==============================================
# Tests for ComplexityScorer
# ==============================================

import pytest

from pattern_decider.analysis import ComplexityScorer, ScoringWeights
from pattern_decider.facts import EndpointFacts, WriteShape


@pytest.fixture
def scorer():
    return ComplexityScorer()


class TestScoreTable:
    """Point table and clamping."""

    def test_minimal_endpoint_scores_one(self, scorer):
        score = scorer.score(EndpointFacts(entities_affected=1, write_shape=WriteShape.SIMPLE_CRUD))
        assert score.value == 1
        assert score.factors == ()

    @pytest.mark.parametrize("entities, points", [(0, 0), (1, 0), (2, 2), (3, 2), (4, 4), (9, 4)])
    def test_entity_tiers(self, scorer, entities, points):
        assert scorer.score(EndpointFacts(entities_affected=entities)).value == 1 + points

    @pytest.mark.parametrize("services, points", [(1, 0), (2, 3), (3, 3), (4, 5), (7, 5)])
    def test_service_tiers(self, scorer, services, points):
        facts = EndpointFacts(entities_affected=1, services_involved=services)
        assert scorer.score(facts).value == 1 + points

    @pytest.mark.parametrize("shape, points", [
        (None, 0),
        (WriteShape.SIMPLE_CRUD, 0),
        (WriteShape.VALIDATION_RULES, 1),
        (WriteShape.COMPLEX_INVARIANTS, 2),
        (WriteShape.AUDIT_TRAIL, 3),
        (WriteShape.EVENT_SOURCED, 3),
    ])
    def test_write_shapes(self, scorer, shape, points):
        facts = EndpointFacts(entities_affected=1, write_shape=shape)
        assert scorer.score(facts).value == 1 + points

    def test_long_running(self, scorer):
        assert scorer.score(EndpointFacts(entities_affected=1, long_running=True)).value == 3

    def test_clamped_to_ten(self, scorer):
        facts = EndpointFacts(
            entities_affected=4,
            services_involved=4,
            write_shape=WriteShape.COMPLEX_INVARIANTS,
            long_running=True,
        )
        score = scorer.score(facts)
        assert score.value == 10
        assert score.raw_total == 14

    def test_score_always_in_range(self, scorer):
        """Every combination lands in [1, 10]."""
        for entities in range(0, 7):
            for services in range(1, 7):
                for shape in [None] + list(WriteShape):
                    for long_running in (False, True):
                        facts = EndpointFacts(
                            entities_affected=entities,
                            services_involved=services,
                            write_shape=shape,
                            long_running=long_running,
                        )
                        assert 1 <= scorer.score(facts).value <= 10


class TestScoreFactors:
    """Reported factors explain the score."""

    def test_factors_ordered_by_points_then_table(self, scorer):
        facts = EndpointFacts(
            entities_affected=4,
            services_involved=2,
            write_shape=WriteShape.AUDIT_TRAIL,
            long_running=True,
        )
        names = [factor.name for factor in scorer.score(facts).factors]
        # services (3) and write_shape (3) tie; table order puts services first
        assert names == ["entities_affected", "services_involved", "write_shape", "long_running"]

    def test_zero_factors_omitted(self, scorer):
        facts = EndpointFacts(entities_affected=1, write_shape=WriteShape.VALIDATION_RULES)
        factors = scorer.score(facts).factors
        assert [(f.name, f.points) for f in factors] == [("write_shape", 1)]

    def test_explain(self, scorer):
        facts = EndpointFacts(entities_affected=2, write_shape=WriteShape.AUDIT_TRAIL)
        assert scorer.explain(scorer.score(facts)) == "6 = 1 + write_shape(3) + entities_affected(2)"

    def test_explain_clamped(self, scorer):
        facts = EndpointFacts(
            entities_affected=4,
            services_involved=4,
            write_shape=WriteShape.COMPLEX_INVARIANTS,
            long_running=True,
        )
        assert scorer.explain(scorer.score(facts)).endswith("(clamped from 14)")

    def test_deterministic(self, scorer, order_facts):
        assert scorer.score(order_facts) == scorer.score(order_facts)


class TestCustomWeights:

    def test_weights_are_a_policy_knob(self):
        scorer = ComplexityScorer(ScoringWeights(long_running=5))
        assert scorer.score(EndpointFacts(entities_affected=1, long_running=True)).value == 6

    def test_custom_weights_still_clamped(self):
        scorer = ComplexityScorer(ScoringWeights(services_many=50))
        assert scorer.score(EndpointFacts(entities_affected=1, services_involved=4)).value == 10
