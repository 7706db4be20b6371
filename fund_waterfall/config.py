# fund_waterfall/config.py
"""
Configuration and settings loaded from environment variables / .env file,
or from Streamlit Cloud secrets when deployed on Streamlit Community Cloud.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load .env from project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=_env_path, override=False)


def _get_secret(key: str, default: str = "") -> str:
    """
    Read a config value — checks in priority order:
      1. Environment variable (covers .env via load_dotenv above)
      2. Streamlit secrets (st.secrets) — available on Streamlit Community Cloud
      3. Provided default
    """
    val = os.environ.get(key)
    if val:
        return val
    try:
        import streamlit as st  # noqa: PLC0415
        return st.secrets.get(key, default)
    except Exception:
        return default


def _get_float(key: str, default: float, positive: bool = False) -> float:
    """
    Like _get_secret, but parsed as a float. Garbage falls back to default,
    as does zero or a negative number when ``positive`` is set.
    """
    raw = _get_secret(key, "")
    if raw in ("", None):
        return default
    try:
        value = float(raw)
    except (TypeError, ValueError):
        logger.warning("Ignoring non-numeric %s=%r, using %s", key, raw, default)
        return default
    if positive and not value > 0:
        logger.warning("Ignoring non-positive %s=%r, using %s", key, raw, default)
        return default
    return value


@dataclass
class Settings:
    # Tier parameter fallbacks, used when a tier omits the value.
    default_hurdle_rate: float = field(
        default_factory=lambda: _get_float("WATERFALL_DEFAULT_HURDLE_RATE", 8.0)
    )
    default_catch_up_percent: float = field(
        default_factory=lambda: _get_float("WATERFALL_DEFAULT_CATCH_UP_PERCENT", 20.0)
    )
    default_lp_split: float = field(
        default_factory=lambda: _get_float("WATERFALL_DEFAULT_LP_SPLIT", 80.0)
    )
    default_gp_split: float = field(
        default_factory=lambda: _get_float("WATERFALL_DEFAULT_GP_SPLIT", 20.0)
    )

    # Act/365.25 day count for preferred-return accrual
    days_per_year: float = field(
        default_factory=lambda: _get_float("WATERFALL_DAYS_PER_YEAR", 365.25, positive=True)
    )

    # Calculator UI defaults
    default_fund_start_date: str = field(
        default_factory=lambda: _get_secret("WATERFALL_DEFAULT_FUND_START_DATE", "2022-01-01")
    )
    default_distribution_amount: float = field(
        default_factory=lambda: _get_float("WATERFALL_DEFAULT_DISTRIBUTION_AMOUNT", 1_000_000.0)
    )

    log_level: str = field(
        default_factory=lambda: _get_secret("LOG_LEVEL", "INFO").upper()
    )

    def get_log_level(self) -> int:
        """Return the numeric logging level, INFO if the name is unknown."""
        level = logging.getLevelName(self.log_level)
        return level if isinstance(level, int) else logging.INFO


# Singleton — import this anywhere
settings = Settings()
