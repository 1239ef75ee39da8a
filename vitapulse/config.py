from __future__ import annotations

import os
from pathlib import Path
from typing import List


class Settings:
    """Centralized configuration for the VitaPulse API."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        repo_root = base_dir.parent
        data_root_default = repo_root / "data"

        self.data_root: Path = Path(
            os.environ.get("VITAPULSE_DATA_ROOT") or data_root_default
        ).expanduser()
        self.db_path: Path = Path(
            os.environ.get("VITAPULSE_DB_PATH") or (self.data_root / "vitapulse.db")
        ).expanduser()
        # In production you MUST set VITAPULSE_JWT_SECRET. The dev secret only exists so
        # local runs work out of the box.
        self.jwt_secret: str = os.environ.get("VITAPULSE_JWT_SECRET") or "dev-secret-change-me"
        self.token_ttl_days: int = int(os.environ.get("VITAPULSE_TOKEN_TTL_DAYS") or "7")
        self.cookie_secure: bool = (os.environ.get("VITAPULSE_COOKIE_SECURE") or "").strip() in {"1", "true", "True"}
        self.admin_emails: List[str] = [
            e.strip().lower()
            for e in (os.environ.get("VITAPULSE_ADMIN_EMAILS") or "").split(",")
            if e.strip()
        ]
        self.default_language: str = os.environ.get("VITAPULSE_DEFAULT_LANGUAGE") or "en"
        self.log_level: str = (os.environ.get("VITAPULSE_LOG_LEVEL") or "INFO").upper()
        self.host: str = os.environ.get("VITAPULSE_HOST") or os.environ.get("HOST") or "127.0.0.1"
        self.port_raw: str = os.environ.get("VITAPULSE_PORT") or os.environ.get("PORT") or "8000"

        cors = os.environ.get("VITAPULSE_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]


settings = Settings()
