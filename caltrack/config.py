from __future__ import annotations

import os
from pathlib import Path
from typing import List


class Settings:
    """Centralized configuration for the CalTrack API."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        repo_root = base_dir.parent
        data_root_default = repo_root / "data"

        self.data_root: Path = Path(
            os.environ.get("CALTRACK_DATA_ROOT") or data_root_default
        ).expanduser()
        self.app_db_path: Path = Path(
            os.environ.get("CALTRACK_DB_PATH") or (self.data_root / "caltrack.db")
        ).expanduser()
        # In production you MUST set CALTRACK_JWT_SECRET.
        self.jwt_secret: str = os.environ.get("CALTRACK_JWT_SECRET") or "dev-secret-change-me"
        self.token_ttl_days: int = int(os.environ.get("CALTRACK_TOKEN_TTL_DAYS") or "7")
        self.cookie_secure: bool = (os.environ.get("CALTRACK_COOKIE_SECURE") or "").strip() in {"1", "true", "True"}
        self.default_calorie_goal: int = int(os.environ.get("CALTRACK_DEFAULT_CALORIE_GOAL") or "2000")
        self.log_level: str = (os.environ.get("CALTRACK_LOG_LEVEL") or "INFO").upper()
        self.host: str = os.environ.get("CALTRACK_HOST") or os.environ.get("HOST") or "127.0.0.1"
        self.port: int = int(os.environ.get("CALTRACK_PORT") or os.environ.get("PORT") or "3001")

        cors = os.environ.get("CALTRACK_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]


settings = Settings()
