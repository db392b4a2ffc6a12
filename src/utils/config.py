"""Config for whole project"""

# pylint: disable=W1201

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from src.utils.ai_logger import sinaicaLogger


# -----------------------------------------------------------------------------
# Load .env from project root
# -----------------------------------------------------------------------------
ROOT = Path(__file__).resolve().parent.parent.parent
env_path = ROOT / ".env"
if env_path.exists():
    load_dotenv(dotenv_path=env_path, override=False)


# -----------------------------------------------------------------------------
# Helpers for parsing & validation
# -----------------------------------------------------------------------------
def _clean(raw: str) -> str:
    return raw.strip().strip("'").strip('"')

def _get_str(name: str, default: Optional[str] = None) -> str:
    raw = os.getenv(name)
    if raw is None or raw == "":
        if default is None:
            msg = f"Missing required env var: {name}"
            sinaicaLogger.error(msg)
            raise RuntimeError(msg)
        return default
    return _clean(raw)

def _get_float(name: str, default: Optional[float] = None) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        if default is None:
            msg = f"Missing required float env var: {name}"
            sinaicaLogger.error(msg)
            raise RuntimeError(msg)
        return default
    try:
        return float(_clean(raw))
    except ValueError as e:
        msg = f"Invalid float for {name}: {raw!r}"
        sinaicaLogger.error(msg)
        raise RuntimeError(msg) from e

def _get_int(name: str, default: Optional[int] = None) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        if default is None:
            msg = f"Missing required int env var: {name}"
            sinaicaLogger.error(msg)
            raise RuntimeError(msg)
        return default
    try:
        return int(_clean(raw))
    except ValueError as e:
        msg = f"Invalid int for {name}: {raw!r}"
        sinaicaLogger.error(msg)
        raise RuntimeError(msg) from e

def _log_level_to_std(name: str) -> str:
    # Accept things like DEBUG, Info, "warning", etc.
    lvl = _get_str(name, "INFO").upper()
    valid = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}
    if lvl not in valid:
        msg = f"Invalid {name} {lvl!r}. Choose one of {sorted(valid)}."
        sinaicaLogger.error(msg)
        raise RuntimeError(msg)
    return lvl

# -----------------------------------------------------------------------------
# Settings
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Config:
    """Config for whole project"""
    # System
    log_level: str

    # SINAICA portal
    base_url: str
    catalog_path: str
    series_path: str

    # HTTP behaviour
    timeout_sec: float
    max_retries: int                # 0 means retry forever
    backoff_sec: float
    min_interval_sec: float

    @property
    def catalog_url(self) -> str:
        """Page embedding the state/network/station tree (`var cump`)."""
        return self.base_url.rstrip("/") + self.catalog_path

    @property
    def series_url(self) -> str:
        """Endpoint answering pollutant series (`var dat`)."""
        return self.base_url.rstrip("/") + self.series_path

def load_config() -> Config:
    """Load config"""
    log_level = _log_level_to_std("SINAICA_LOG_LEVEL")

    base_url = _get_str("SINAICA_BASE_URL", "https://sinaica.inecc.gob.mx")
    catalog_path = _get_str("SINAICA_CATALOG_PATH", "/index.php")
    series_path = _get_str("SINAICA_SERIES_PATH", "/pags/datGrafs.php")

    timeout_sec = _get_float("SINAICA_TIMEOUT", 60.0)
    max_retries = _get_int("SINAICA_MAX_RETRIES", 10)
    backoff_sec = _get_float("SINAICA_BACKOFF", 1.0)
    min_interval_sec = _get_float("SINAICA_MIN_INTERVAL", 0.0)
    if max_retries < 0:
        msg = "SINAICA_MAX_RETRIES must be >= 0 (0 retries forever)"
        sinaicaLogger.error(msg)
        raise RuntimeError(msg)

    return Config(
        log_level=log_level,
        base_url=base_url,
        catalog_path=catalog_path,
        series_path=series_path,
        timeout_sec=timeout_sec,
        max_retries=max_retries,
        backoff_sec=max(0.0, backoff_sec),
        min_interval_sec=max(0.0, min_interval_sec),
    )


config = load_config()

sinaicaLogger.debug("SINAICA base url: " + config.base_url)
sinaicaLogger.debug("Timeout (s): " + str(config.timeout_sec))
sinaicaLogger.debug("Max retries: " + (str(config.max_retries) if config.max_retries else "unlimited"))
