# ==============================================
# REPORT
# ==============================================
#
# Modules:
# --------
# - recommendation.py → Recommendation value type, JSON / YAML renderings
# - formatter.py      → Assemble analysis results into a Recommendation
#
# ==============================================

from .recommendation import Recommendation
from .formatter import RecommendationFormatter

__all__ = ["Recommendation", "RecommendationFormatter"]
