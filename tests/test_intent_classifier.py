# ==============================================
# Tests for IntentClassifier
# ==============================================

import pytest

from pattern_decider.analysis import IntentCategory, IntentClassifier
from pattern_decider.facts import EndpointFacts, QueryShape, WriteShape


@pytest.fixture
def classifier():
    return IntentClassifier()


class TestIntentRules:
    """Each rule, in priority order."""

    def test_multiple_services_is_saga(self, classifier):
        result = classifier.classify(EndpointFacts(entities_affected=1, services_involved=2))
        assert result.category == IntentCategory.SAGA
        assert result.confidence == 0.9

    def test_saga_beats_long_running(self, classifier):
        """Rule 1 wins over rule 2."""
        facts = EndpointFacts(entities_affected=1, services_involved=3, long_running=True)
        assert classifier.classify(facts).category == IntentCategory.SAGA

    def test_long_running_is_workflow(self, classifier):
        facts = EndpointFacts(entities_affected=1, write_shape=WriteShape.SIMPLE_CRUD, long_running=True)
        result = classifier.classify(facts)
        assert result.category == IntentCategory.WORKFLOW
        assert result.confidence == 0.8

    @pytest.mark.parametrize("shape", [WriteShape.COMPLEX_INVARIANTS, WriteShape.EVENT_SOURCED])
    def test_many_entities_with_heavy_writes_is_workflow(self, classifier, shape):
        facts = EndpointFacts(entities_affected=3, write_shape=shape)
        assert classifier.classify(facts).category == IntentCategory.WORKFLOW

    def test_many_entities_with_audit_trail_is_command(self, classifier):
        """AuditTrail is not a workflow write shape."""
        facts = EndpointFacts(entities_affected=3, write_shape=WriteShape.AUDIT_TRAIL)
        assert classifier.classify(facts).category == IntentCategory.COMMAND

    @pytest.mark.parametrize("shape", [
        QueryShape.MULTI_JOIN,
        QueryShape.AGGREGATION,
        QueryShape.FULL_TEXT_SEARCH,
        QueryShape.REALTIME_DASHBOARD,
    ])
    def test_complex_read_is_confident_query(self, classifier, shape):
        result = classifier.classify(EndpointFacts(entities_affected=1, query_shape=shape))
        assert result.category == IntentCategory.QUERY
        assert result.confidence == 0.85
        assert result.label == "Query"

    @pytest.mark.parametrize("shape", [QueryShape.SINGLE_BY_ID, QueryShape.FILTERED_LIST])
    def test_simple_read_is_crud_read(self, classifier, shape):
        result = classifier.classify(EndpointFacts(entities_affected=1, query_shape=shape))
        assert result.category == IntentCategory.QUERY
        assert result.confidence == 0.6
        assert result.label == "CRUD-read"
        assert "CRUD-read" in result.rationale

    def test_write_shape_dominates_complex_query(self, classifier):
        """Submit-order-with-computed-total: mutation decides the intent."""
        facts = EndpointFacts(
            entities_affected=1,
            query_shape=QueryShape.AGGREGATION,
            write_shape=WriteShape.COMPLEX_INVARIANTS,
        )
        result = classifier.classify(facts)
        assert result.category == IntentCategory.COMMAND
        assert result.confidence == 0.75

    def test_two_entities_is_command(self, classifier):
        facts = EndpointFacts(entities_affected=2, write_shape=WriteShape.SIMPLE_CRUD)
        assert classifier.classify(facts).category == IntentCategory.COMMAND

    def test_simple_write_is_crud(self, classifier):
        facts = EndpointFacts(entities_affected=1, write_shape=WriteShape.SIMPLE_CRUD)
        result = classifier.classify(facts)
        assert result.category == IntentCategory.CRUD
        assert result.confidence == 0.9

    def test_no_shapes_at_all_is_crud(self, classifier):
        """Best effort: nothing to go on still classifies."""
        result = classifier.classify(EndpointFacts(entities_affected=0))
        assert result.category == IntentCategory.CRUD


class TestIntentDeterminism:

    def test_identical_facts_identical_result(self, classifier, order_facts):
        assert classifier.classify(order_facts) == classifier.classify(order_facts)

    def test_confidence_in_unit_interval(self, classifier):
        for entities in range(0, 5):
            for services in (1, 2, 5):
                for write_shape in [None] + list(WriteShape):
                    for long_running in (False, True):
                        facts = EndpointFacts(
                            entities_affected=entities,
                            services_involved=services,
                            query_shape=QueryShape.FILTERED_LIST,
                            write_shape=write_shape,
                            long_running=long_running,
                        )
                        assert 0.0 <= classifier.classify(facts).confidence <= 1.0
