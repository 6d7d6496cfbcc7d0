# ==============================================
# FactNormalizer
# ==============================================
#
# PURPOSE:
#   Convert loosely-written endpoint fact documents (JSON/YAML written by
#   people or by other tools) into canonical keys and values before they
#   become an EndpointFacts instance.
#
# WHY THIS CLASS EXISTS:
#   The same fact arrives under different spellings:
#     - "entitiesAffected", "EntitiesAffected", "entities_affected"
#     - "SingleById", "single_by_id", "single-by-id", "SINGLE_BY_ID"
#     - true, "true", "yes"
#   Normalizing once up front keeps the fact model strict.
#
# CLASS: FactNormalizer
# ---------------------
#   Methods:
#   --------
#   - normalize_key(name: str) -> str
#       camelCase / PascalCase / kebab-case → snake_case
#
#   - normalize_record(raw: dict) -> dict
#       Canonicalise every key (one level deep, plus entity entries).
#
#   - parse_enum(enum_cls, value) -> Enum | None
#       Resolve an enum member from any case style; None for null variants.
#
#   - coerce_bool / coerce_int / coerce_ratio
#       Scalar coercion with null variants, as the type detector did.
#
# ==============================================

import math
import re
from enum import Enum
from typing import Any, Dict, Optional, Type, TypeVar

E = TypeVar("E", bound=Enum)


class FactNormalizer:
    """
    Canonicalises fact keys and scalar values.
    Keeps a cache of key mappings it has already resolved.
    """

    NULL_VARIANTS = {"null", "none", "nil", "", "absent"}
    INFINITY_VARIANTS = {"inf", "+inf", "infinity", "unbounded"}
    BOOL_TRUE_VARIANTS = {"true", "yes", "y", "1"}
    BOOL_FALSE_VARIANTS = {"false", "no", "n", "0"}

    def __init__(self):
        self._mappings: Dict[str, str] = {}

    def normalize_key(self, name: str) -> str:
        """
        Convert a key to snake_case.

        Args:
            name: Raw key (e.g., "entitiesAffected", "read-write-ratio")

        Returns:
            Canonical snake_case key (e.g., "entities_affected", "read_write_ratio")
        """
        if not name:
            return name

        if name in self._mappings:
            return self._mappings[name]

        normalized = self._camel_to_snake(name)
        self._mappings[name] = normalized
        return normalized

    def normalize_record(self, raw: Dict[str, Any]) -> Dict[str, Any]:
        """
        Canonicalise the keys of a facts document.

        Entity entries given as dicts get their keys canonicalised too.

        Args:
            raw: Facts document as parsed from JSON/YAML

        Returns:
            New dict with snake_case keys
        """
        record = {}
        for key, value in raw.items():
            canonical = self.normalize_key(str(key))
            if canonical == "entities" and isinstance(value, (list, tuple)):
                value = [
                    {self.normalize_key(str(k)): v for k, v in item.items()}
                    if isinstance(item, dict) else item
                    for item in value
                ]
            record[canonical] = value
        return record

    def parse_enum(self, enum_cls: Type[E], value: Any) -> Optional[E]:
        """
        Resolve an enum member from its value or name in any case style.

        Args:
            enum_cls: The enum class to resolve against
            value: An enum member, a string, or None

        Returns:
            The matching member, or None when the value is a null variant

        Raises:
            ValueError: If the string names no member of the enum
        """
        if value is None or isinstance(value, enum_cls):
            return value

        text = str(value).strip()
        if text.lower() in self.NULL_VARIANTS:
            return None

        wanted = self._squash(text)
        for member in enum_cls:
            if wanted in (self._squash(member.value), self._squash(member.name)):
                return member

        choices = ", ".join(member.value for member in enum_cls)
        raise ValueError(f"'{value}' is not a valid {enum_cls.__name__} (expected one of: {choices})")

    def coerce_bool(self, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if value is None:
            return False
        if isinstance(value, (int, float)):
            return bool(value)

        text = str(value).strip().lower()
        if text in self.BOOL_TRUE_VARIANTS:
            return True
        if text in self.BOOL_FALSE_VARIANTS or text in self.NULL_VARIANTS:
            return False
        raise ValueError(f"'{value}' is not a boolean")

    def coerce_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"'{value}' is not an integer")
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str) and re.fullmatch(r"\s*-?\d+\s*", value):
            return int(value)
        raise ValueError(f"'{value}' is not an integer")

    def coerce_ratio(self, value: Any) -> Optional[float]:
        """
        Coerce a reads-per-write ratio.

        Null variants map to None (undefined ratio). "inf", "unbounded"
        and "N:0" map to math.inf (reads without writes).
        Strings like "10:1" are read as reads:writes.
        """
        if value is None:
            return None
        if isinstance(value, bool):
            raise ValueError(f"'{value}' is not a ratio")
        if isinstance(value, (int, float)):
            return float(value)

        text = str(value).strip().lower()
        if text in self.NULL_VARIANTS:
            return None
        if text in self.INFINITY_VARIANTS:
            return math.inf

        match = re.fullmatch(r"(\d+(?:\.\d+)?)\s*[:/]\s*(\d+(?:\.\d+)?)", text)
        if match:
            reads, writes = float(match.group(1)), float(match.group(2))
            if writes == 0:
                return None if reads == 0 else math.inf
            return reads / writes

        try:
            return float(text)
        except ValueError:
            raise ValueError(f"'{value}' is not a ratio") from None

    def _camel_to_snake(self, name: str) -> str:
        # Non-alphanumerics (dashes, spaces, dots) become underscores
        name = re.sub(r"[^a-zA-Z0-9_]", "_", name)

        # "HTTPMethod" -> "HTTP_Method"
        name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)

        # "entitiesAffected" -> "entities_Affected"
        name = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", name)

        name = name.lower()
        name = re.sub(r"_+", "_", name)
        return name.strip("_")

    @staticmethod
    def _squash(text: str) -> str:
        return re.sub(r"[^a-z0-9]", "", text.lower())
