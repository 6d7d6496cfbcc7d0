# ==============================================
# RecommendationEngine: Orchestrator
# ==============================================
#
# PURPOSE:
#   The MAIN CLASS that ties the analyzers together into one pipeline.
#   Callers interact with this class (or the module-level recommend())
#   only. Everything else is internal.
#
# HOW IT CONNECTS THE PIECES:
#
#   ┌──────────────────────────────────────────────────────────┐
#   │                  RecommendationEngine                    │
#   │                                                          │
#   │   EndpointFacts ──► FactValidator (InvalidFacts?)        │
#   │          │                                               │
#   │          ├──────────────┬──────────────┐                 │
#   │          ▼              ▼              ▼                 │
#   │   IntentClassifier ComplexityScorer AsymmetryAnalyzer    │
#   │          │              │              │                 │
#   │          ▼              │              │                 │
#   │   AggregateBoundaryAnalyzer            │                 │
#   │          │              │              │                 │
#   │          ▼              ▼              │                 │
#   │   TransactionStrategySelector          │                 │
#   │          │                             │                 │
#   │          ▼                             ▼                 │
#   │   RecommendationFormatter ◄────────────┘                 │
#   │          │                                               │
#   │          ▼                                               │
#   │     Recommendation                                       │
#   └──────────────────────────────────────────────────────────┘
#
#   Stateless between calls: the engine holds only immutable config,
#   so one instance can be shared freely, including across threads.
#
# CLASS: RecommendationEngine
# ---------------------------
#   - __init__(config: AppConfig | None = None)
#   - recommend(facts) -> Recommendation
#   - recommend_batch(facts_list) -> list[Recommendation]
#
# FUNCTION:
# ---------
#   - recommend(facts) -> Recommendation    (uses get_config())
#
# ==============================================

import logging
from typing import Any, Dict, Iterable, List, Optional, Union

from pattern_decider.analysis.asymmetry_analyzer import ReadWriteAsymmetryAnalyzer
from pattern_decider.analysis.boundary_analyzer import AggregateBoundaryAnalyzer
from pattern_decider.analysis.complexity_scorer import ComplexityScorer
from pattern_decider.analysis.intent_classifier import IntentClassifier
from pattern_decider.config import AppConfig, get_config
from pattern_decider.errors import InvalidFacts
from pattern_decider.facts.endpoint_facts import EndpointFacts
from pattern_decider.facts.validator import FactValidator
from pattern_decider.report.formatter import RecommendationFormatter
from pattern_decider.report.recommendation import Recommendation
from pattern_decider.strategy.selector import TransactionStrategySelector

logger = logging.getLogger(__name__)

FactsInput = Union[EndpointFacts, Dict[str, Any]]


class RecommendationEngine:
    """
    Runs classify → score → analyze boundary → select strategy → format.
    """

    def __init__(self, config: Optional[AppConfig] = None):
        """
        Initialize every stage from configuration.

        Args:
            config: Application configuration. If None, loads from environment.
        """
        self._config = config or get_config()

        self._validator = FactValidator()
        self._intent_classifier = IntentClassifier()
        self._complexity_scorer = ComplexityScorer(self._config.weights)
        self._boundary_analyzer = AggregateBoundaryAnalyzer()
        self._asymmetry_analyzer = ReadWriteAsymmetryAnalyzer(self._config.asymmetry)
        self._strategy_selector = TransactionStrategySelector(
            self._config.thresholds,
            self._config.timeouts,
        )
        self._formatter = RecommendationFormatter()

    @property
    def config(self) -> AppConfig:
        return self._config

    def recommend(self, facts: FactsInput) -> Recommendation:
        """
        Produce the recommendation for one endpoint.

        Args:
            facts: EndpointFacts, or a facts document accepted by EndpointFacts.from_dict

        Returns:
            A complete Recommendation

        Raises:
            InvalidFacts: If the facts are rejected; nothing else runs
        """
        if not isinstance(facts, EndpointFacts):
            facts = EndpointFacts.from_dict(facts)
        self._validator.validate(facts)

        intent = self._intent_classifier.classify(facts)
        score = self._complexity_scorer.score(facts)
        boundary = self._boundary_analyzer.analyze_boundary(facts, intent)
        strategy = self._strategy_selector.select_strategy(score, boundary, facts)
        asymmetry = self._asymmetry_analyzer.analyze(facts)

        recommendation = self._formatter.format(
            intent, score, boundary, strategy,
            asymmetry=asymmetry,
            facts=facts,
        )
        logger.info(
            "Recommended %s for %r (intent=%s, score=%d)",
            strategy.chosen.value, facts.endpoint, intent.category.value, score.value,
        )
        return recommendation

    def recommend_batch(self, facts_list: Iterable[FactsInput]) -> List[Recommendation]:
        """
        Recommend for several endpoints.

        Every item is validated before any is analyzed, so an invalid item
        rejects the whole batch and no partial results are returned.

        Args:
            facts_list: EndpointFacts or facts documents

        Returns:
            One Recommendation per item, in input order
        """
        prepared = []
        for index, item in enumerate(facts_list):
            try:
                if not isinstance(item, EndpointFacts):
                    item = EndpointFacts.from_dict(item)
                self._validator.validate(item)
            except InvalidFacts as e:
                raise InvalidFacts(f"item {index}: {problem}" for problem in e.problems) from e
            prepared.append(item)
        return [self.recommend(item) for item in prepared]

    def explain_score(self, recommendation: Recommendation) -> str:
        """One-line arithmetic behind a recommendation's complexity score."""
        return self._complexity_scorer.explain(recommendation.complexity)


def recommend(facts: FactsInput) -> Recommendation:
    """
    Recommend a consistency pattern for one endpoint using the default configuration.

    Args:
        facts: EndpointFacts or a facts document

    Returns:
        The Recommendation
    """
    return RecommendationEngine().recommend(facts)
