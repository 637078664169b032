from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from dotenv import load_dotenv

ROOT_DIR = Path(__file__).resolve().parents[1]
load_dotenv(dotenv_path=ROOT_DIR / ".env")


def _get_env(*keys: str, default: str | None = None) -> str | None:
    for k in keys:
        v = os.getenv(k)
        if v is not None and str(v).strip() != "":
            return v.strip()
    return default


def _get_list(*keys: str, default: str) -> List[str]:
    raw = _get_env(*keys, default=default) or default
    return [part.strip() for part in raw.split(",") if part.strip()]


@dataclass(frozen=True)
class Settings:
    host: str
    port: int
    log_level: str
    cors_origins: List[str] = field(default_factory=lambda: ["*"])


def load_settings() -> Settings:
    return Settings(
        host=_get_env("HOST", default="0.0.0.0") or "0.0.0.0",
        port=int(_get_env("PORT", default="4000") or 4000),
        log_level=(_get_env("CATALOG_LOG_LEVEL", "LOG_LEVEL", default="INFO") or "INFO").upper(),
        cors_origins=_get_list("CATALOG_CORS_ORIGINS", default="*"),
    )


settings = load_settings()
