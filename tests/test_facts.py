# ==============================================
# Tests for the Fact Model
# ==============================================

import json
import math

import pytest

from pattern_decider.errors import InvalidFacts
from pattern_decider.facts import (
    EndpointFacts,
    EntityRef,
    FactNormalizer,
    FactValidator,
    QueryShape,
    WriteShape,
)


class TestFactNormalizer:
    """Tests for key and value normalization."""

    def test_camel_case_key(self):
        """entitiesAffected -> entities_affected"""
        assert FactNormalizer().normalize_key("entitiesAffected") == "entities_affected"

    def test_kebab_case_key(self):
        """read-write-ratio -> read_write_ratio"""
        assert FactNormalizer().normalize_key("read-write-ratio") == "read_write_ratio"

    def test_already_snake_case(self):
        assert FactNormalizer().normalize_key("services_involved") == "services_involved"

    def test_enum_any_case_style(self):
        normalizer = FactNormalizer()
        assert normalizer.parse_enum(QueryShape, "SingleById") == QueryShape.SINGLE_BY_ID
        assert normalizer.parse_enum(QueryShape, "single_by_id") == QueryShape.SINGLE_BY_ID
        assert normalizer.parse_enum(QueryShape, "single-by-id") == QueryShape.SINGLE_BY_ID
        assert normalizer.parse_enum(WriteShape, "EVENT_SOURCED") == WriteShape.EVENT_SOURCED

    def test_enum_null_variants(self):
        assert FactNormalizer().parse_enum(WriteShape, "none") is None
        assert FactNormalizer().parse_enum(WriteShape, None) is None

    def test_unknown_enum_rejected(self):
        with pytest.raises(ValueError, match="WriteShape"):
            FactNormalizer().parse_enum(WriteShape, "Upsert")

    def test_ratio_forms(self):
        normalizer = FactNormalizer()
        assert normalizer.coerce_ratio("10:1") == 10.0
        assert normalizer.coerce_ratio("3/2") == 1.5
        assert normalizer.coerce_ratio(4) == 4.0
        assert normalizer.coerce_ratio("inf") == math.inf
        assert normalizer.coerce_ratio("Unbounded") == math.inf
        assert normalizer.coerce_ratio(math.inf) == math.inf
        assert normalizer.coerce_ratio("5:0") == math.inf
        assert normalizer.coerce_ratio("0:0") is None
        assert normalizer.coerce_ratio("none") is None

    def test_bool_strings(self):
        normalizer = FactNormalizer()
        assert normalizer.coerce_bool("yes") is True
        assert normalizer.coerce_bool("false") is False
        with pytest.raises(ValueError):
            normalizer.coerce_bool("maybe")

    def test_int_rejects_bool_and_fraction(self):
        normalizer = FactNormalizer()
        assert normalizer.coerce_int("3") == 3
        with pytest.raises(ValueError):
            normalizer.coerce_int(True)
        with pytest.raises(ValueError):
            normalizer.coerce_int(2.5)


class TestEndpointFacts:
    """Tests for EndpointFacts construction and derived views."""

    def test_from_dict_camel_case_document(self):
        facts = EndpointFacts.from_dict({
            "entitiesAffected": 2,
            "servicesInvolved": "1",
            "queryShape": "multi-join",
            "writeShape": "SIMPLE_CRUD",
            "auditCritical": "yes",
            "longRunning": False,
        })
        assert facts.entities_affected == 2
        assert facts.services_involved == 1
        assert facts.query_shape == QueryShape.MULTI_JOIN
        assert facts.write_shape == WriteShape.SIMPLE_CRUD
        assert facts.audit_critical is True
        assert facts.long_running is False

    def test_from_dict_requires_entities_affected(self):
        with pytest.raises(InvalidFacts) as excinfo:
            EndpointFacts.from_dict({"servicesInvolved": 1})
        assert "entities_affected: required" in excinfo.value.problems

    def test_from_dict_collects_every_problem(self):
        with pytest.raises(InvalidFacts) as excinfo:
            EndpointFacts.from_dict({
                "entitiesAffected": "two",
                "queryShape": "Graph",
            })
        problems = " ".join(excinfo.value.problems)
        assert "entities_affected" in problems
        assert "query_shape" in problems

    def test_entities_from_names_and_dicts(self):
        facts = EndpointFacts.from_dict({
            "entities_affected": 2,
            "entities": ["Order", {"name": "Payment", "writeShape": "ComplexInvariants", "external": "yes"}],
        })
        assert facts.entities[0] == EntityRef("Order")
        assert facts.entities[1].write_shape == WriteShape.COMPLEX_INVARIANTS
        assert facts.entities[1].external is True

    def test_constructor_accepts_entity_names(self):
        facts = EndpointFacts(entities_affected=2, entities=["Order", "Line"])
        assert facts.entities == (EntityRef("Order"), EntityRef("Line"))

    def test_read_only_ratio_is_unbounded(self):
        """A query with no write shape ignores any supplied ratio."""
        facts = EndpointFacts(
            entities_affected=1,
            read_write_ratio=3.0,
            query_shape=QueryShape.FILTERED_LIST,
        )
        assert facts.is_read_only
        assert math.isinf(facts.effective_read_write_ratio)

    def test_write_endpoint_keeps_ratio(self):
        facts = EndpointFacts(
            entities_affected=1,
            read_write_ratio=3.0,
            query_shape=QueryShape.FILTERED_LIST,
            write_shape=WriteShape.SIMPLE_CRUD,
        )
        assert not facts.is_read_only
        assert facts.effective_read_write_ratio == 3.0

    def test_resolved_entities_fill_placeholders(self):
        facts = EndpointFacts(
            entities_affected=3,
            write_shape=WriteShape.SIMPLE_CRUD,
            origin_service="orders",
            entities=("Order",),
        )
        resolved = facts.resolved_entities()
        assert [ref.name for ref in resolved] == ["Order", "Entity2", "Entity3"]
        assert resolved[0].service == "orders"
        assert resolved[0].write_shape == WriteShape.SIMPLE_CRUD
        assert resolved[1].service == "Entity2"
        assert resolved[1].write_shape is None

    def test_no_entities_resolves_empty(self):
        assert EndpointFacts(entities_affected=0).resolved_entities() == ()

    def test_round_trip(self, order_facts):
        assert EndpointFacts.from_dict(order_facts.to_dict()) == order_facts

    def test_unbounded_ratio_round_trip(self):
        """An explicit infinity survives to_dict/from_dict and stays valid JSON."""
        facts = EndpointFacts(
            entities_affected=1,
            write_shape=WriteShape.SIMPLE_CRUD,
            read_write_ratio=math.inf,
        )
        data = facts.to_dict()
        assert data["read_write_ratio"] == "inf"
        json.dumps(data, allow_nan=False)
        assert EndpointFacts.from_dict(data) == facts

    def test_undefined_ratio_stays_none(self):
        facts = EndpointFacts(entities_affected=1, write_shape=WriteShape.SIMPLE_CRUD)
        assert facts.to_dict()["read_write_ratio"] is None
        assert EndpointFacts.from_dict(facts.to_dict()).read_write_ratio is None

    @pytest.mark.parametrize("spelling", ["inf", "Infinity", "unbounded", "7:0"])
    def test_document_infinity_spellings(self, spelling):
        facts = EndpointFacts.from_dict({"entitiesAffected": 1, "readWriteRatio": spelling})
        assert facts.read_write_ratio == math.inf

    def test_null_entities_affected_is_required(self):
        with pytest.raises(InvalidFacts) as excinfo:
            EndpointFacts.from_dict({"entitiesAffected": None})
        assert "entities_affected: required" in excinfo.value.problems

    @pytest.mark.parametrize("document", ["not a mapping", ["entities_affected", 1], 3, None])
    def test_non_mapping_document_rejected(self, document):
        with pytest.raises(InvalidFacts, match="must be a mapping"):
            EndpointFacts.from_dict(document)

    def test_entity_without_name_rejected(self):
        with pytest.raises(InvalidFacts) as excinfo:
            EndpointFacts.from_dict({"entities_affected": 2, "entities": [{"name": None}, {"service": "x"}]})
        assert excinfo.value.problems == [
            "entities[0]: name is required",
            "entities[1]: name is required",
        ]

    def test_entities_must_be_a_list(self):
        with pytest.raises(InvalidFacts, match="entities: expected a list"):
            EndpointFacts.from_dict({"entities_affected": 5, "entities": "Order"})

    def test_placeholders_skip_names_in_use(self):
        facts = EndpointFacts(entities_affected=3, entities=("Entity2",))
        names = [ref.name for ref in facts.resolved_entities()]
        assert names == ["Entity2", "Entity3", "Entity4"]
        assert len(set(names)) == 3

    def test_facts_are_immutable(self, order_facts):
        with pytest.raises(AttributeError):
            order_facts.entities_affected = 5


class TestFactValidator:
    """Tests for boundary validation."""

    def test_valid_facts_pass(self, order_facts):
        assert FactValidator().validate(order_facts) is order_facts

    def test_negative_entities_and_zero_services(self):
        with pytest.raises(InvalidFacts) as excinfo:
            FactValidator().validate(EndpointFacts(entities_affected=-1, services_involved=0))
        assert len(excinfo.value.problems) == 2

    def test_zero_entities_is_valid(self):
        FactValidator().validate(EndpointFacts(entities_affected=0, query_shape=QueryShape.AGGREGATION))

    def test_negative_and_nan_ratio(self):
        validator = FactValidator()
        assert validator.find_problems(EndpointFacts(entities_affected=1, read_write_ratio=-2.0))
        assert validator.find_problems(EndpointFacts(entities_affected=1, read_write_ratio=float("nan")))

    def test_more_names_than_entities(self):
        facts = EndpointFacts(entities_affected=1, entities=("Order", "Line"))
        with pytest.raises(InvalidFacts, match="2 entity names"):
            FactValidator().validate(facts)

    def test_duplicate_entity_names(self):
        facts = EndpointFacts(entities_affected=2, entities=("Order", "Order"))
        with pytest.raises(InvalidFacts, match="more than once"):
            FactValidator().validate(facts)

    def test_bool_is_not_an_entity_count(self):
        with pytest.raises(InvalidFacts):
            FactValidator().validate(EndpointFacts(entities_affected=True))

    def test_invalid_facts_is_a_value_error(self):
        with pytest.raises(ValueError):
            FactValidator().validate(EndpointFacts(entities_affected=-3))
