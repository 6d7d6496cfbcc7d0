import json
import logging
import re
from pathlib import Path
from typing import List

from pattern_decider.report.recommendation import Recommendation

logger = logging.getLogger(__name__)


# ==============================================
# ReportStore
# ==============================================
#
# PURPOSE:
#   Keep rendered recommendations on disk so that decisions made for an
#   API can be reviewed later, or compared after the policy knobs change.
#
# WHAT IS PERSISTED:
#   One JSON file per saved recommendation, named after the report:
#     reports/
#     ├── post-orders.json
#     └── get-orders-summary.json
#
#   Each file holds Recommendation.to_dict(), so it loads back into an
#   equal Recommendation.
#
# CLASS: ReportStore
# ------------------
#   Keeps only the storage directory; every call reads or writes disk.
#
#   Methods:
#   --------
#   - save(name, recommendation) -> Path
#   - load(name) -> Recommendation          (FileNotFoundError if missing)
#   - list_names() -> list[str]
#   - exists() -> bool
#   - clear() -> int
#
class ReportStore:
    """
    Handles persistence of recommendations to disk.
    """

    def __init__(self, storage_dir: str = "reports/"):
        """
        Initialize the report store.

        Args:
            storage_dir: Directory to store report files
        """
        self.storage_dir = Path(storage_dir)
        self.storage_dir.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def slugify(name: str) -> str:
        """
        Turn a report name into a safe file stem.

        "POST /orders/{id}" -> "post-orders-id"
        """
        slug = re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")
        if not slug:
            raise ValueError(f"Report name {name!r} has no usable characters")
        return slug

    def path_for(self, name: str) -> Path:
        return self.storage_dir / f"{self.slugify(name)}.json"

    def save(self, name: str, recommendation: Recommendation) -> Path:
        """
        Save a recommendation, replacing any report with the same name.

        Args:
            name: Report name (any text; slugified for the file name)
            recommendation: The recommendation to store

        Returns:
            Path of the written file
        """
        path = self.path_for(name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(recommendation.to_json())

        logger.info("Saved report '%s' to %s", name, path)
        return path

    def load(self, name: str) -> Recommendation:
        """
        Load a saved recommendation.

        Args:
            name: Report name used when saving

        Returns:
            The stored Recommendation

        Raises:
            FileNotFoundError: If no report with that name exists
        """
        path = self.path_for(name)
        if not path.exists():
            raise FileNotFoundError(f"No report named '{name}' in {self.storage_dir}")

        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)

        logger.info("Loaded report '%s' from %s", name, path)
        return Recommendation.from_dict(data)

    def list_names(self) -> List[str]:
        """Stems of every saved report, sorted."""
        return sorted(path.stem for path in self.storage_dir.glob("*.json"))

    def exists(self) -> bool:
        """True if at least one report has been saved."""
        return any(self.storage_dir.glob("*.json"))

    def clear(self) -> int:
        """
        Delete every saved report.

        Returns:
            Number of files deleted
        """
        deleted = 0
        for path in self.storage_dir.glob("*.json"):
            path.unlink()
            deleted += 1

        logger.info("Cleared %d report(s) from %s", deleted, self.storage_dir)
        return deleted
