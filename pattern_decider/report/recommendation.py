# ==============================================
# Recommendation
# ==============================================
#
# PURPOSE:
#   The single externally visible output of the engine: every analysis
#   result for one endpoint plus a free-text rationale.
#
#   Produced fresh on every call and never mutated. to_json() is
#   deterministic: identical recommendations render byte-identically.
#
# ==============================================

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

import yaml

from pattern_decider.analysis.decision import (
    AsymmetryResult,
    BoundaryResult,
    ComplexityScore,
    IntentResult,
)
from pattern_decider.facts.endpoint_facts import EndpointFacts
from pattern_decider.strategy.plan import StrategyResult


@dataclass(frozen=True)
class Recommendation:
    """Aggregated verdict for one endpoint."""

    intent: IntentResult
    complexity: ComplexityScore
    boundary: BoundaryResult
    strategy: StrategyResult
    rationale: str = ""

    # --- Supplementary context ---
    asymmetry: Optional[AsymmetryResult] = None
    notes: Tuple[str, ...] = field(default_factory=tuple)
    facts: Optional[EndpointFacts] = None

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to a JSON-serializable dictionary.

        Key order is fixed so renderings are reproducible.
        """
        return {
            "endpoint": self.facts.endpoint if self.facts else "",
            "intent": self.intent.to_dict(),
            "complexity": self.complexity.to_dict(),
            "boundary": self.boundary.to_dict(),
            "strategy": self.strategy.to_dict(),
            "asymmetry": self.asymmetry.to_dict() if self.asymmetry else None,
            "rationale": self.rationale,
            "notes": list(self.notes),
            "facts": self.facts.to_dict() if self.facts else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Recommendation":
        """
        Rebuild a Recommendation from to_dict() output.

        Args:
            data: Dictionary as produced by to_dict() (or loaded from JSON/YAML)

        Returns:
            An equal Recommendation
        """
        asymmetry = data.get("asymmetry")
        facts = data.get("facts")
        return cls(
            intent=IntentResult.from_dict(data["intent"]),
            complexity=ComplexityScore.from_dict(data["complexity"]),
            boundary=BoundaryResult.from_dict(data["boundary"]),
            strategy=StrategyResult.from_dict(data["strategy"]),
            rationale=data.get("rationale", ""),
            asymmetry=AsymmetryResult.from_dict(asymmetry) if asymmetry else None,
            notes=tuple(data.get("notes", [])),
            facts=EndpointFacts.from_dict(facts) if facts else None,
        )

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, allow_nan=False)

    def to_yaml(self) -> str:
        """YAML rendering in the layout of the decision reports people read."""
        return yaml.safe_dump(self.to_dict(), sort_keys=False, default_flow_style=False)
