from __future__ import annotations

import os
from pathlib import Path
from typing import List


class Settings:
    """Centralized configuration for the coaching admin backend."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        repo_root = base_dir.parent
        data_root_default = repo_root / "data"

        self.data_root: Path = Path(
            os.environ.get("COACHHUB_DATA_ROOT") or data_root_default
        ).expanduser()
        self.app_db_path: Path = Path(
            os.environ.get("COACHHUB_DB_PATH") or (self.data_root / "coachhub.db")
        ).expanduser()
        # In production you MUST set COACHHUB_JWT_SECRET. The dev secret only keeps local
        # demos easy and is not safe for public deployments.
        self.jwt_secret: str = os.environ.get("COACHHUB_JWT_SECRET") or "dev-secret-change-me"
        self.token_ttl_days: int = int(os.environ.get("COACHHUB_TOKEN_TTL_DAYS") or "7")
        self.cookie_secure: bool = (os.environ.get("COACHHUB_COOKIE_SECURE") or "").strip() in {"1", "true", "True"}
        self.log_level: str = (os.environ.get("COACHHUB_LOG_LEVEL") or "INFO").upper()
        self.site_url: str = (
            os.environ.get("COACHHUB_SITE_URL") or "https://domdifferent.com"
        ).rstrip("/")
        # IANA zone used for calendar exports when the caller does not pass one.
        self.timezone: str = os.environ.get("COACHHUB_TIMEZONE") or "UTC"

        self.host: str = os.environ.get("COACHHUB_HOST") or os.environ.get("HOST") or "127.0.0.1"
        port_raw = os.environ.get("COACHHUB_PORT") or os.environ.get("PORT") or "8000"
        try:
            self.port: int = int(port_raw)
        except ValueError:
            self.port = 8000

        # ---- LLM provider (OpenAI-compatible chat/completions) ----
        self.llm_api_key: str | None = os.environ.get("LLM_API_KEY")
        self.llm_base_url: str = os.environ.get(
            "LLM_BASE_URL", "https://ai.gateway.lovable.dev/v1"
        )
        self.llm_model: str = os.environ.get("LLM_MODEL", "google/gemini-3-flash-preview")
        self.llm_timeout: float = float(os.environ.get("LLM_TIMEOUT", "60"))
        self.llm_max_tokens: int = int(os.environ.get("LLM_MAX_TOKENS", "4000"))
        self.llm_temperature: float = float(os.environ.get("LLM_TEMPERATURE", "0.7"))

        cors = os.environ.get("COACHHUB_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]


settings = Settings()
