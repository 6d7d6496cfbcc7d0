# ==============================================
# FACT MODEL
# ==============================================
#
# This package holds the normalized description of an endpoint and
# everything needed to build and check one BEFORE it enters analysis.
#
# Modules:
# --------
# - endpoint_facts.py → EndpointFacts, EntityRef, QueryShape, WriteShape
# - normalizer.py     → Canonical keys / enum names / scalar coercion
# - validator.py      → Reject invalid facts at the boundary
#
# ==============================================

from .endpoint_facts import (
    COMPLEX_QUERY_SHAPES,
    EndpointFacts,
    EntityRef,
    QueryShape,
    WriteShape,
)
from .normalizer import FactNormalizer
from .validator import FactValidator

__all__ = [
    "COMPLEX_QUERY_SHAPES",
    "EndpointFacts",
    "EntityRef",
    "QueryShape",
    "WriteShape",
    "FactNormalizer",
    "FactValidator",
]
