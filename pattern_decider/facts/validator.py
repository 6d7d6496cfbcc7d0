# ==============================================
# FactValidator
# ==============================================
#
# PURPOSE:
#   Reject structurally invalid EndpointFacts at the engine boundary,
#   before any analyzer runs. Every analyzer downstream can then assume
#   valid input and never fails.
#
# RULES:
# ------
#   1. entities_affected is an int >= 0
#   2. services_involved is an int >= 1
#   3. read_write_ratio, when given, is a finite or infinite number >= 0 (not NaN)
#   4. no more named entities than entities_affected
#   5. entity names are non-empty and unique
#   6. entity timeout overrides are > 0
#
# ==============================================

import logging
import math
from typing import List

from pattern_decider.errors import InvalidFacts
from pattern_decider.facts.endpoint_facts import EndpointFacts

logger = logging.getLogger(__name__)


class FactValidator:
    """Checks EndpointFacts invariants and raises InvalidFacts listing every problem."""

    def validate(self, facts: EndpointFacts) -> EndpointFacts:
        """
        Validate facts.

        Args:
            facts: The facts to check

        Returns:
            The same facts, for chaining

        Raises:
            InvalidFacts: If any invariant is violated
        """
        problems = self.find_problems(facts)
        if problems:
            logger.debug("Rejected facts for %r: %s", facts.endpoint, problems)
            raise InvalidFacts(problems)
        return facts

    def find_problems(self, facts: EndpointFacts) -> List[str]:
        problems: List[str] = []

        if not self._is_int(facts.entities_affected):
            problems.append(f"entities_affected must be an integer, got {facts.entities_affected!r}")
        elif facts.entities_affected < 0:
            problems.append(f"entities_affected must be >= 0, got {facts.entities_affected}")

        if not self._is_int(facts.services_involved):
            problems.append(f"services_involved must be an integer, got {facts.services_involved!r}")
        elif facts.services_involved < 1:
            problems.append(f"services_involved must be >= 1, got {facts.services_involved}")

        ratio = facts.read_write_ratio
        if ratio is not None:
            if isinstance(ratio, bool) or not isinstance(ratio, (int, float)):
                problems.append(f"read_write_ratio must be a number, got {ratio!r}")
            elif math.isnan(ratio) or ratio < 0:
                problems.append(f"read_write_ratio must be >= 0, got {ratio}")

        if self._is_int(facts.entities_affected) and len(facts.entities) > max(facts.entities_affected, 0):
            problems.append(
                f"{len(facts.entities)} entity names given but entities_affected is {facts.entities_affected}"
            )

        seen = set()
        for ref in facts.entities:
            if not ref.name or not ref.name.strip():
                problems.append("entity names must be non-empty")
            elif ref.name in seen:
                problems.append(f"entity '{ref.name}' named more than once")
            seen.add(ref.name)
            if ref.timeout_seconds is not None and ref.timeout_seconds <= 0:
                problems.append(f"entity '{ref.name}' timeout_seconds must be > 0")

        return problems

    @staticmethod
    def _is_int(value) -> bool:
        return isinstance(value, int) and not isinstance(value, bool)
