# ==============================================
# Decision (Data Classes)
# ==============================================
#
# PURPOSE:
#   Data classes that represent the OUTPUT of analysis, plus the
#   weights and cut-offs that control how the analysis decides.
#
# WHY THIS FILE EXISTS:
#   Separating value types from logic keeps the analyzers small. These
#   classes are also consumed by the strategy selector, the report
#   formatter and the report store.
#
# ENUMS:
# ------
# - IntentCategory(Enum): CRUD, COMMAND, QUERY, WORKFLOW, SAGA
# - AsymmetryCategory(Enum): READ_ONLY, READ_HEAVY, BALANCED, WRITE_HEAVY
#
# CLASSES:
# --------
# - IntentResult         → category + confidence + rationale
# - ScoreFactor          → one named contribution to the complexity score
# - ComplexityScore      → 1..10 value + contributing factors
# - BoundaryResult       → single aggregate verdict + cross references
# - AsymmetryResult      → read/write balance advisory
# - ScoringWeights       → point table used by the complexity scorer
# - AsymmetryThresholds  → ratio cut-offs used by the asymmetry analyzer
#
# All results are frozen and round-trip through to_dict()/from_dict().
#
# ==============================================

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class IntentCategory(Enum):
    """What an endpoint is fundamentally for."""
    CRUD = "CRUD"
    COMMAND = "Command"
    QUERY = "Query"
    WORKFLOW = "Workflow"
    SAGA = "Saga"


class AsymmetryCategory(Enum):
    """
    Balance between reads and writes on an endpoint.

    - READ_ONLY: never writes, or the ratio is undefined
    - READ_HEAVY: many reads per write
    - BALANCED: comparable traffic
    - WRITE_HEAVY: fewer reads than writes
    """
    READ_ONLY = "read_only"
    READ_HEAVY = "read_heavy"
    BALANCED = "balanced"
    WRITE_HEAVY = "write_heavy"


@dataclass(frozen=True)
class IntentResult:
    """Classification of an endpoint's intent."""

    category: IntentCategory
    confidence: float  # 0.0 to 1.0
    rationale: str = ""
    label: str = ""  # "CRUD-read" for simple reads, else the category value

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category.value,
            "confidence": self.confidence,
            "label": self.label or self.category.value,
            "rationale": self.rationale,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "IntentResult":
        return cls(
            category=IntentCategory(data["category"]),
            confidence=float(data["confidence"]),
            rationale=data.get("rationale", ""),
            label=data.get("label", ""),
        )


@dataclass(frozen=True)
class ScoreFactor:
    """One additive contribution to a complexity score."""

    name: str  # e.g., "services_involved"
    points: int
    detail: str = ""  # e.g., "4 services"

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "points": self.points, "detail": self.detail}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScoreFactor":
        return cls(name=data["name"], points=int(data["points"]), detail=data.get("detail", ""))


@dataclass(frozen=True)
class ComplexityScore:
    """
    A 1..10 complexity score with the factors that justify it.

    ``factors`` holds only non-zero contributions, highest first.
    """

    value: int
    factors: Tuple[ScoreFactor, ...] = field(default_factory=tuple)

    @property
    def raw_total(self) -> int:
        """1 + sum of points before clamping."""
        return 1 + sum(factor.points for factor in self.factors)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "value": self.value,
            "factors": [factor.to_dict() for factor in self.factors],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ComplexityScore":
        return cls(
            value=int(data["value"]),
            factors=tuple(ScoreFactor.from_dict(item) for item in data.get("factors", [])),
        )


@dataclass(frozen=True)
class BoundaryResult:
    """
    Whether an operation fits one aggregate's consistency boundary.

    Entities in ``cross_aggregate_references`` are referenced by identity
    only, never embedded in the root aggregate.
    """

    fits_single_aggregate: bool
    cross_aggregate_references: Tuple[str, ...] = field(default_factory=tuple)
    root_entity: Optional[str] = None
    rationale: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fits_single_aggregate": self.fits_single_aggregate,
            "cross_aggregate_references": list(self.cross_aggregate_references),
            "root_entity": self.root_entity,
            "rationale": self.rationale,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BoundaryResult":
        return cls(
            fits_single_aggregate=bool(data["fits_single_aggregate"]),
            cross_aggregate_references=tuple(data.get("cross_aggregate_references", [])),
            root_entity=data.get("root_entity"),
            rationale=data.get("rationale", ""),
        )


@dataclass(frozen=True)
class AsymmetryResult:
    """Read/write balance of an endpoint, advisory only."""

    category: AsymmetryCategory
    reads_per_write: float  # math.inf when read-only or undefined
    suggests_read_model: bool = False
    rationale: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category.value,
            # JSON has no infinity literal
            "reads_per_write": "inf" if math.isinf(self.reads_per_write) else self.reads_per_write,
            "suggests_read_model": self.suggests_read_model,
            "rationale": self.rationale,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AsymmetryResult":
        ratio = data.get("reads_per_write")
        return cls(
            category=AsymmetryCategory(data["category"]),
            reads_per_write=math.inf if ratio is None else float(ratio),
            suggests_read_model=bool(data.get("suggests_read_model", False)),
            rationale=data.get("rationale", ""),
        )


@dataclass(frozen=True)
class ScoringWeights:
    """
    Point table used by the ComplexityScorer.

    The values are a policy knob rather than fixed truth; override them
    through configuration (see pattern_decider.config).
    """

    # --- Entities affected: 0-1 → 0 points ---
    entities_few: int = 2
    """Points when 2-3 entities are affected."""

    entities_many: int = 4
    """Points when 4 or more entities are affected."""

    # --- Services involved: 1 → 0 points ---
    services_few: int = 3
    """Points when 2-3 services are involved."""

    services_many: int = 5
    """Points when 4 or more services are involved."""

    # --- Write shape: absent / SimpleCrud → 0 points ---
    write_validation_rules: int = 1
    write_complex_invariants: int = 2
    write_audit_trail: int = 3
    write_event_sourced: int = 3

    # --- Long-running operations ---
    long_running: int = 2


@dataclass(frozen=True)
class AsymmetryThresholds:
    """Cut-offs used by the ReadWriteAsymmetryAnalyzer."""

    read_heavy_ratio: float = 10.0
    """Reads per write at or above which an endpoint is read-heavy."""

    write_heavy_ratio: float = 1.0
    """Reads per write below which an endpoint is write-heavy."""
