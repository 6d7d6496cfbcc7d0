# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# Shared fixtures for all tests.
#
# - config         → default AppConfig, independent of the environment
# - engine         → RecommendationEngine built from that config
# - clean_env      → (autouse) no DECIDER_* variables, no cached config
# - order_facts    → 3-service order placement with Inventory and Payment
#
# ==============================================

import os

import pytest

from pattern_decider import config as config_module
from pattern_decider.config import AppConfig
from pattern_decider.engine import RecommendationEngine
from pattern_decider.facts.endpoint_facts import EndpointFacts, EntityRef, WriteShape


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate every test from the developer's environment and .env file."""
    for name in list(os.environ):
        if name.startswith("DECIDER_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config_module, "_config_instance", None)


@pytest.fixture
def config() -> AppConfig:
    return AppConfig()


@pytest.fixture
def engine(config) -> RecommendationEngine:
    return RecommendationEngine(config)


@pytest.fixture
def order_facts() -> EndpointFacts:
    """Order placement spanning the order, inventory and payment services."""
    return EndpointFacts(
        endpoint="POST /orders",
        entities_affected=3,
        services_involved=3,
        write_shape=WriteShape.VALIDATION_RULES,
        origin_service="orders",
        entities=(
            EntityRef("Order"),
            EntityRef("Inventory"),
            EntityRef("Payment", write_shape=WriteShape.COMPLEX_INVARIANTS),
        ),
    )
