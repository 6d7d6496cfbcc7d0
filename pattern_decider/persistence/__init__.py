# ==============================================
# PERSISTENCE (Saved reports)
# ==============================================
#
# This package saves and loads rendered recommendations so decisions
# can be reviewed after the process exits.
#
# Modules:
# --------
# - report_store.py  → Save/load/list/clear recommendation reports
#
# ==============================================

from .report_store import ReportStore

__all__ = ["ReportStore"]
