# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load all tunable policy from environment variables / .env file and
#   provide typed config objects to the engine.
#
# SECTIONS:
# ---------
# - ScoringWeights (analysis/decision.py)
#     DECIDER_WEIGHT_ENTITIES_FEW            (default 2)
#     DECIDER_WEIGHT_ENTITIES_MANY           (default 4)
#     DECIDER_WEIGHT_SERVICES_FEW            (default 3)
#     DECIDER_WEIGHT_SERVICES_MANY           (default 5)
#     DECIDER_WEIGHT_VALIDATION_RULES        (default 1)
#     DECIDER_WEIGHT_COMPLEX_INVARIANTS      (default 2)
#     DECIDER_WEIGHT_AUDIT_TRAIL             (default 3)
#     DECIDER_WEIGHT_EVENT_SOURCED           (default 3)
#     DECIDER_WEIGHT_LONG_RUNNING            (default 2)
#
# - StrategyThresholds (strategy/plan.py)
#     DECIDER_ACID_MAX_SCORE                 (default 3)
#     DECIDER_CHOREOGRAPHY_MAX_SCORE         (default 6)
#
# - SagaTimeouts (strategy/plan.py)
#     DECIDER_TIMEOUT_READ_SECONDS           (default 5.0)
#     DECIDER_TIMEOUT_EXTERNAL_SECONDS       (default 30.0)
#
# - AsymmetryThresholds (analysis/decision.py)
#     DECIDER_READ_HEAVY_RATIO               (default 10.0)
#     DECIDER_WRITE_HEAVY_RATIO              (default 1.0)
#
# - AppConfig
#     report_dir: str   DECIDER_REPORT_DIR   (default "reports/")
#     log_level: str    DECIDER_LOG_LEVEL    (default "WARNING")
#
# FUNCTIONS:
# ----------
# - load_config() -> AppConfig
#     Load .env using python-dotenv and build a fresh AppConfig.
# - get_config() -> AppConfig
#     Same, but returns the cached singleton on repeated calls.
#
# USAGE:
# ------
#   from pattern_decider.config import get_config
#   config = get_config()
#   print(config.weights.long_running)
#
# ==============================================

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from pattern_decider.analysis.decision import AsymmetryThresholds, ScoringWeights
from pattern_decider.strategy.plan import SagaTimeouts, StrategyThresholds

ENV_PREFIX = "DECIDER_"


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration."""
    weights: ScoringWeights = field(default_factory=ScoringWeights)
    thresholds: StrategyThresholds = field(default_factory=StrategyThresholds)
    timeouts: SagaTimeouts = field(default_factory=SagaTimeouts)
    asymmetry: AsymmetryThresholds = field(default_factory=AsymmetryThresholds)
    report_dir: str = "reports/"
    log_level: str = "WARNING"


# Singleton instance
_config_instance: Optional[AppConfig] = None


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from None


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be a number, got {raw!r}") from None


def load_config(env_file: Optional[str] = None) -> AppConfig:
    """
    Build configuration from environment variables / .env file.

    Variables already set in the environment win over the .env file.

    Args:
        env_file: Optional path to a .env file. Defaults to ./.env

    Returns:
        AppConfig: A fresh configuration
    """
    load_dotenv(dotenv_path=env_file or Path.cwd() / ".env")

    defaults = ScoringWeights()
    weights = ScoringWeights(
        entities_few=_env_int("WEIGHT_ENTITIES_FEW", defaults.entities_few),
        entities_many=_env_int("WEIGHT_ENTITIES_MANY", defaults.entities_many),
        services_few=_env_int("WEIGHT_SERVICES_FEW", defaults.services_few),
        services_many=_env_int("WEIGHT_SERVICES_MANY", defaults.services_many),
        write_validation_rules=_env_int("WEIGHT_VALIDATION_RULES", defaults.write_validation_rules),
        write_complex_invariants=_env_int("WEIGHT_COMPLEX_INVARIANTS", defaults.write_complex_invariants),
        write_audit_trail=_env_int("WEIGHT_AUDIT_TRAIL", defaults.write_audit_trail),
        write_event_sourced=_env_int("WEIGHT_EVENT_SOURCED", defaults.write_event_sourced),
        long_running=_env_int("WEIGHT_LONG_RUNNING", defaults.long_running),
    )

    thresholds = StrategyThresholds(
        acid_max_score=_env_int("ACID_MAX_SCORE", StrategyThresholds.acid_max_score),
        choreography_max_score=_env_int("CHOREOGRAPHY_MAX_SCORE", StrategyThresholds.choreography_max_score),
    )

    timeouts = SagaTimeouts(
        read_seconds=_env_float("TIMEOUT_READ_SECONDS", SagaTimeouts.read_seconds),
        external_seconds=_env_float("TIMEOUT_EXTERNAL_SECONDS", SagaTimeouts.external_seconds),
    )

    asymmetry = AsymmetryThresholds(
        read_heavy_ratio=_env_float("READ_HEAVY_RATIO", AsymmetryThresholds.read_heavy_ratio),
        write_heavy_ratio=_env_float("WRITE_HEAVY_RATIO", AsymmetryThresholds.write_heavy_ratio),
    )

    return AppConfig(
        weights=weights,
        thresholds=thresholds,
        timeouts=timeouts,
        asymmetry=asymmetry,
        report_dir=os.getenv(ENV_PREFIX + "REPORT_DIR", "reports/"),
        log_level=os.getenv(ENV_PREFIX + "LOG_LEVEL", "WARNING").upper(),
    )


def get_config() -> AppConfig:
    """
    Return the process-wide configuration, loading it on first use.

    Returns:
        AppConfig: Application configuration
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    _config_instance = load_config()
    return _config_instance
