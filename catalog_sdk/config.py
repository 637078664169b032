from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parents[1]
load_dotenv(dotenv_path=ROOT_DIR / ".env")

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://127.0.0.1:4000/api"
DEFAULT_RATE_URL = "https://api.exchangerate.host/latest?base=USD&symbols=INR"
DEFAULT_RATE = 83.0
DEFAULT_ESTIMATED_SALES = 12430.0


def _get_env(*keys: str, default: str | None = None) -> str | None:
    for k in keys:
        v = os.getenv(k)
        if v is not None and str(v).strip() != "":
            return v.strip()
    return default


def _get_float(*keys: str, default: float | None = None) -> float | None:
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    try:
        number = float(v)
    except ValueError:
        number = math.nan
    if not math.isfinite(number):
        logger.warning("Ignoring non-numeric %s=%r", keys[0], v)
        return default
    return number


def _get_bool(*keys: str, default: bool) -> bool:
    v = _get_env(*keys, default=None)
    if v is None:
        return default
    return v.lower() in ("1", "true", "yes", "on")


def _get_rate(*keys: str) -> float | None:
    """A positive rate from the env, or None when unset or unusable."""
    return _positive(_get_float(*keys))


def _positive(v: float | None) -> float | None:
    if v is None or not math.isfinite(v) or v <= 0:
        return None
    return v


@dataclass(frozen=True)
class Settings:
    api_url: str
    rate_url: str
    currency_code: str
    currency_symbol: str
    default_rate: float
    exchange_rate: float | None  # fixed rate; disables the live fetch
    timeout: float | None
    demo_fallback: bool
    estimated_sales: float
    log_level: str


def load_settings() -> Settings:
    return Settings(
        api_url=_get_env("CATALOG_API_URL", default=DEFAULT_API_URL) or DEFAULT_API_URL,
        rate_url=_get_env("CATALOG_RATE_URL", default=DEFAULT_RATE_URL) or DEFAULT_RATE_URL,
        currency_code=_get_env("CATALOG_CURRENCY_CODE", default="INR") or "INR",
        currency_symbol=_get_env("CATALOG_CURRENCY_SYMBOL", default="₹") or "₹",
        default_rate=_positive(_get_float("CATALOG_DEFAULT_RATE", default=DEFAULT_RATE)) or DEFAULT_RATE,
        exchange_rate=_get_rate("CATALOG_EXCHANGE_RATE"),
        timeout=_positive(_get_float("CATALOG_TIMEOUT")),
        demo_fallback=_get_bool("CATALOG_DEMO_FALLBACK", default=True),
        estimated_sales=_get_float("CATALOG_ESTIMATED_SALES", default=DEFAULT_ESTIMATED_SALES) or 0.0,
        log_level=(_get_env("CATALOG_LOG_LEVEL", "LOG_LEVEL", default="WARNING") or "WARNING").upper(),
    )


settings = load_settings()
