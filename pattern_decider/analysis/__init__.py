# ==============================================
# ANALYSIS
# ==============================================
#
# This package turns EndpointFacts into the per-concern verdicts the
# strategy selector and the report are built from.
#
# Modules:
# --------
# - decision.py            → Result value types, ScoringWeights, AsymmetryThresholds
# - intent_classifier.py   → CRUD / Command / Query / Workflow / Saga
# - complexity_scorer.py   → 1..10 score with contributing factors
# - boundary_analyzer.py   → Single aggregate or ID-only cross references
# - asymmetry_analyzer.py  → Read/write balance advisory
#
# ==============================================

from .decision import (
    AsymmetryCategory,
    AsymmetryResult,
    AsymmetryThresholds,
    BoundaryResult,
    ComplexityScore,
    IntentCategory,
    IntentResult,
    ScoreFactor,
    ScoringWeights,
)
from .intent_classifier import IntentClassifier
from .complexity_scorer import ComplexityScorer
from .boundary_analyzer import AggregateBoundaryAnalyzer
from .asymmetry_analyzer import ReadWriteAsymmetryAnalyzer

__all__ = [
    "AsymmetryCategory",
    "AsymmetryResult",
    "AsymmetryThresholds",
    "BoundaryResult",
    "ComplexityScore",
    "IntentCategory",
    "IntentResult",
    "ScoreFactor",
    "ScoringWeights",
    "IntentClassifier",
    "ComplexityScorer",
    "AggregateBoundaryAnalyzer",
    "ReadWriteAsymmetryAnalyzer",
]
