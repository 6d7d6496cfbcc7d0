# ==============================================
# EndpointFacts (Data Classes)
# ==============================================
#
# PURPOSE:
#   The normalized description of one API endpoint. This is the INPUT
#   to every analyzer in the engine.
#
# ENUMS:
# ------
# - QueryShape(Enum): SingleById, FilteredList, MultiJoin, Aggregation,
#                     FullTextSearch, RealtimeDashboard
# - WriteShape(Enum): SimpleCrud, ValidationRules, ComplexInvariants,
#                     AuditTrail, EventSourced
#
# CLASSES:
# --------
# - EntityRef (frozen dataclass)
#     One entity touched by the endpoint. Only the name is required; the
#     service, per-entity write shape, external flag and timeout override
#     feed saga plan generation.
#
# - EndpointFacts (frozen dataclass)
#     Attributes:
#     -----------
#     - entities_affected: int        → 0 = pure read
#     - services_involved: int        → 1 = single bounded context
#     - read_write_ratio: float|None  → reads per write, None = undefined,
#                                       math.inf = reads without writes
#     - query_shape: QueryShape|None
#     - write_shape: WriteShape|None  → None on a read-only endpoint
#     - audit_critical: bool
#     - long_running: bool            → may span beyond one request
#     - endpoint: str                 → display name ("POST /orders")
#     - origin_service: str           → service that receives the request
#     - entities: tuple[EntityRef]    → named entities, root first
#
#     Methods:
#     --------
#     - resolved_entities() -> tuple[EntityRef, ...]
#     - to_dict() / from_dict(data)
#
# ==============================================

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pattern_decider.errors import InvalidFacts
from pattern_decider.facts.normalizer import FactNormalizer


class QueryShape(Enum):
    """How the endpoint reads data."""
    SINGLE_BY_ID = "SingleById"
    FILTERED_LIST = "FilteredList"
    MULTI_JOIN = "MultiJoin"
    AGGREGATION = "Aggregation"
    FULL_TEXT_SEARCH = "FullTextSearch"
    REALTIME_DASHBOARD = "RealtimeDashboard"


class WriteShape(Enum):
    """How the endpoint mutates data."""
    SIMPLE_CRUD = "SimpleCrud"
    VALIDATION_RULES = "ValidationRules"
    COMPLEX_INVARIANTS = "ComplexInvariants"
    AUDIT_TRAIL = "AuditTrail"
    EVENT_SOURCED = "EventSourced"


# Query shapes that need more than a key lookup or a simple filter
COMPLEX_QUERY_SHAPES = frozenset({
    QueryShape.MULTI_JOIN,
    QueryShape.AGGREGATION,
    QueryShape.FULL_TEXT_SEARCH,
    QueryShape.REALTIME_DASHBOARD,
})

ROOT_PLACEHOLDER = "Root"


@dataclass(frozen=True)
class EntityRef:
    """An entity touched by the endpoint, referenced by name."""

    name: str
    service: Optional[str] = None  # Owning service; defaults depend on position
    write_shape: Optional[WriteShape] = None  # How this entity is written, if known
    external: bool = False  # Lives in an external system (payment gateway, ERP, ...)
    timeout_seconds: Optional[float] = None  # Caller override for the saga step timeout

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "service": self.service,
            "write_shape": self.write_shape.value if self.write_shape else None,
            "external": self.external,
            "timeout_seconds": self.timeout_seconds,
        }

    @classmethod
    def from_dict(cls, data: Any, normalizer: Optional[FactNormalizer] = None) -> "EntityRef":
        """
        Build an EntityRef from a bare name or a dict.

        Args:
            data: "Inventory" or {"name": "Inventory", "service": "stock", ...}
            normalizer: Optional shared normalizer

        Returns:
            An EntityRef
        """
        if isinstance(data, EntityRef):
            return data
        if isinstance(data, str):
            return cls(name=data)

        normalizer = normalizer or FactNormalizer()
        data = normalizer.normalize_record(dict(data))
        name = data.get("name")
        if name is None or not str(name).strip():
            raise ValueError("name is required")
        timeout = data.get("timeout_seconds")
        return cls(
            name=str(name),
            service=data.get("service"),
            write_shape=normalizer.parse_enum(WriteShape, data.get("write_shape")),
            external=normalizer.coerce_bool(data.get("external", False)),
            timeout_seconds=float(timeout) if timeout is not None else None,
        )


@dataclass(frozen=True)
class EndpointFacts:
    """
    Immutable description of one endpoint.

    Validation is not done here: FactValidator rejects bad facts at the
    engine boundary so that callers can still build and inspect them.
    """

    entities_affected: int
    services_involved: int = 1
    read_write_ratio: Optional[float] = None
    query_shape: Optional[QueryShape] = None
    write_shape: Optional[WriteShape] = None
    audit_critical: bool = False
    long_running: bool = False

    # --- Naming, used for references and saga steps ---
    endpoint: str = ""
    origin_service: str = "origin"
    entities: Tuple[EntityRef, ...] = field(default_factory=tuple)

    def __post_init__(self):
        """Store entities as a tuple of EntityRef whatever the caller passed."""
        entities = tuple(EntityRef.from_dict(item) for item in (self.entities or ()))
        object.__setattr__(self, "entities", entities)

    # ======================================
    # Derived views
    # ======================================
    @property
    def is_read_only(self) -> bool:
        """A query shape with no write shape means the endpoint never writes."""
        return self.query_shape is not None and self.write_shape is None

    @property
    def effective_read_write_ratio(self) -> float:
        """
        Reads per write, with read-only endpoints treated as unbounded.

        Returns:
            math.inf for read-only endpoints or an undefined ratio
        """
        if self.is_read_only or self.read_write_ratio is None:
            return math.inf
        return self.read_write_ratio

    def resolved_entities(self) -> Tuple[EntityRef, ...]:
        """
        One EntityRef per affected entity, root first.

        Unnamed positions get placeholder names ("Root", "Entity2", ...),
        skipping any name the caller already used. The root belongs to the
        origin service and inherits the endpoint's write shape; every other
        entity defaults to a service of its own name.

        Returns:
            Tuple of exactly ``entities_affected`` refs
        """
        taken = {ref.name for ref in self.entities}
        resolved: List[EntityRef] = []
        next_number = 2
        for index in range(max(self.entities_affected, 0)):
            if index < len(self.entities):
                ref = self.entities[index]
            elif index == 0:
                ref = EntityRef(name=ROOT_PLACEHOLDER)
            else:
                next_number = max(next_number, index + 1)
                while f"Entity{next_number}" in taken:
                    next_number += 1
                ref = EntityRef(name=f"Entity{next_number}")
                taken.add(ref.name)

            if index == 0:
                resolved.append(EntityRef(
                    name=ref.name,
                    service=ref.service or self.origin_service,
                    write_shape=ref.write_shape or self.write_shape,
                    external=ref.external,
                    timeout_seconds=ref.timeout_seconds,
                ))
            else:
                resolved.append(EntityRef(
                    name=ref.name,
                    service=ref.service or ref.name,
                    write_shape=ref.write_shape,
                    external=ref.external,
                    timeout_seconds=ref.timeout_seconds,
                ))
        return tuple(resolved)

    def entity(self, name: str) -> Optional[EntityRef]:
        """Look up a resolved entity by name."""
        for ref in self.resolved_entities():
            if ref.name == name:
                return ref
        return None

    # ======================================
    # Serialization
    # ======================================
    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the facts to a JSON-serializable dictionary.

        An undefined ratio is written as None and an unbounded one as "inf",
        so the dict stays valid JSON and loads back unchanged.
        """
        ratio = self.read_write_ratio
        return {
            "endpoint": self.endpoint,
            "entities_affected": self.entities_affected,
            "services_involved": self.services_involved,
            "read_write_ratio": "inf" if ratio is not None and math.isinf(ratio) else ratio,
            "query_shape": self.query_shape.value if self.query_shape else None,
            "write_shape": self.write_shape.value if self.write_shape else None,
            "audit_critical": self.audit_critical,
            "long_running": self.long_running,
            "origin_service": self.origin_service,
            "entities": [ref.to_dict() for ref in self.entities],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EndpointFacts":
        """
        Build facts from a loosely-written document.

        Keys may be camelCase or snake_case, enums may be spelled in any
        case style, booleans may be strings.

        Args:
            data: Facts document

        Returns:
            An EndpointFacts instance (not yet validated for ranges)

        Raises:
            InvalidFacts: If a value cannot be coerced to its field type
        """
        if not isinstance(data, Mapping):
            raise InvalidFacts([f"facts must be a mapping, got {type(data).__name__}"])

        normalizer = FactNormalizer()
        record = normalizer.normalize_record(data)
        problems: List[str] = []
        values: Dict[str, Any] = {}

        def take(key: str, convert):
            if record.get(key) is None:
                return
            try:
                values[key] = convert(record[key])
            except (ValueError, TypeError) as e:
                problems.append(f"{key}: {e}")

        if record.get("entities_affected") is None:
            problems.append("entities_affected: required")
        take("entities_affected", normalizer.coerce_int)
        take("services_involved", normalizer.coerce_int)
        take("read_write_ratio", normalizer.coerce_ratio)
        take("query_shape", lambda v: normalizer.parse_enum(QueryShape, v))
        take("write_shape", lambda v: normalizer.parse_enum(WriteShape, v))
        take("audit_critical", normalizer.coerce_bool)
        take("long_running", normalizer.coerce_bool)
        take("endpoint", str)
        take("origin_service", str)

        entities = record.get("entities") or []
        if not isinstance(entities, (list, tuple)):
            problems.append(f"entities: expected a list, got {type(entities).__name__}")
            entities = []
        refs = []
        for position, item in enumerate(entities):
            try:
                refs.append(EntityRef.from_dict(item, normalizer))
            except (KeyError, ValueError, TypeError) as e:
                problems.append(f"entities[{position}]: {e}")
        values["entities"] = tuple(refs)

        if problems:
            raise InvalidFacts(problems)

        return cls(**values)
