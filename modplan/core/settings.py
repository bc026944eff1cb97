"""
Runtime configuration.

Environment variables:
    MODPLAN_ENV         : deployment environment (default: dev)
    MODPLAN_MODULES_DIR : directory of module descriptor files
                           (default: <project_root>/modules)
    MODPLAN_LOG_LEVEL   : root log level for the server entrypoint (default: INFO)
    MODPLAN_HOST / MODPLAN_PORT: server bind address (default: 0.0.0.0:8001)

Values are read when Settings.from_env() is called, not at import time.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

# modplan/core/settings.py -> parents[2] = repo root
PROJECT_ROOT = Path(__file__).resolve().parents[2]


@dataclass(frozen=True)
class Settings:
    env: str
    modules_dir: Path
    log_level: str
    host: str
    port: int

    @classmethod
    def from_env(cls) -> "Settings":
        env = (os.getenv("MODPLAN_ENV") or "dev").strip().lower()

        modules_raw = (os.getenv("MODPLAN_MODULES_DIR") or "").strip()
        modules_dir = Path(modules_raw) if modules_raw else PROJECT_ROOT / "modules"

        log_level = (os.getenv("MODPLAN_LOG_LEVEL") or "INFO").strip().upper()
        host = (os.getenv("MODPLAN_HOST") or "0.0.0.0").strip()
        port = int((os.getenv("MODPLAN_PORT") or "8001").strip())

        return cls(env=env, modules_dir=modules_dir, log_level=log_level, host=host, port=port)
