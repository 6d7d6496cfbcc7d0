# ==============================================
# ReadWriteAsymmetryAnalyzer
# ==============================================
#
# PURPOSE:
#   Looks at how many reads an endpoint serves per write and flags
#   endpoints that would benefit from a separate read model. This is
#   advisory only: it never changes the chosen transaction strategy.
#
# RULES (first match wins):
#   1. read-only endpoint                    → READ_ONLY
#   2. no ratio given                        → BALANCED (assumed)
#   3. ratio >= read_heavy_ratio (10)        → READ_HEAVY (including infinity)
#   4. ratio <  write_heavy_ratio (1)        → WRITE_HEAVY
#   5. otherwise                             → BALANCED
#
#   suggests_read_model = READ_ONLY/READ_HEAVY with a complex query shape
#
# ==============================================

import math
from typing import Optional

from pattern_decider.analysis.decision import AsymmetryCategory, AsymmetryResult, AsymmetryThresholds
from pattern_decider.facts.endpoint_facts import COMPLEX_QUERY_SHAPES, EndpointFacts


class ReadWriteAsymmetryAnalyzer:
    """Categorises read/write balance from the reads-per-write ratio."""

    def __init__(self, thresholds: Optional[AsymmetryThresholds] = None):
        self.thresholds = thresholds or AsymmetryThresholds()

    def analyze(self, facts: EndpointFacts) -> AsymmetryResult:
        ratio = facts.effective_read_write_ratio
        complex_query = facts.query_shape in COMPLEX_QUERY_SHAPES

        if facts.is_read_only:
            category = AsymmetryCategory.READ_ONLY
            rationale = "Read-only endpoint."
        elif facts.read_write_ratio is None:
            category = AsymmetryCategory.BALANCED
            rationale = "No reads-per-write ratio given; assuming balanced traffic."
        elif math.isinf(ratio):
            category = AsymmetryCategory.READ_HEAVY
            rationale = "Unbounded reads per write."
        elif ratio >= self.thresholds.read_heavy_ratio:
            category = AsymmetryCategory.READ_HEAVY
            rationale = f"{ratio:g} reads per write."
        elif ratio < self.thresholds.write_heavy_ratio:
            category = AsymmetryCategory.WRITE_HEAVY
            rationale = f"Only {ratio:g} reads per write."
        else:
            category = AsymmetryCategory.BALANCED
            rationale = f"{ratio:g} reads per write."

        suggests = complex_query and category in (
            AsymmetryCategory.READ_ONLY,
            AsymmetryCategory.READ_HEAVY,
        )
        if suggests:
            rationale += f" A dedicated read model would serve the {facts.query_shape.value} query."

        return AsymmetryResult(
            category=category,
            reads_per_write=ratio,
            suggests_read_model=suggests,
            rationale=rationale,
        )
