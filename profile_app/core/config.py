import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

_PACKAGE_VIEWS_DIR = Path(__file__).resolve().parent.parent / "views"
STORE_BACKENDS = ("sqlite", "memory")


class Settings:
    """Centralised application configuration sourced from environment variables."""

    def __init__(self) -> None:
        load_dotenv()
        self.host = os.getenv("HOST", "0.0.0.0")
        self.port = self._get_int("PORT", default=3000)
        self.store_backend = os.getenv("STORE_BACKEND", "sqlite").strip().lower()
        if self.store_backend not in STORE_BACKENDS:
            raise RuntimeError(
                f"STORE_BACKEND must be one of {', '.join(STORE_BACKENDS)}, got {self.store_backend!r}"
            )
        self.database_path = Path(os.getenv("DATABASE_PATH", "data/profiles.db")).resolve()
        views_dir = os.getenv("VIEWS_DIR")
        self.views_dir = Path(views_dir).resolve() if views_dir else _PACKAGE_VIEWS_DIR
        self.basic_auth_user = os.getenv("BASIC_AUTH_USER") or None
        self.basic_auth_pass = os.getenv("BASIC_AUTH_PASS") or None
        self.rate_limit_window_seconds = self._get_float("RATE_LIMIT_WINDOW_SECONDS", default=60.0)
        self.rate_limit_max = self._get_int("RATE_LIMIT_MAX", default=300)
        self.write_rate_limit_max = self._get_int("WRITE_RATE_LIMIT_MAX", default=30)
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    @property
    def basic_auth_enabled(self) -> bool:
        return bool(self.basic_auth_user and self.basic_auth_pass)

    @staticmethod
    def _get_int(key: str, default: Optional[int] = None) -> int:
        value = os.getenv(key)
        if value is None:
            if default is None:
                raise RuntimeError(f"Missing required environment variable: {key}")
            return default
        try:
            return int(value)
        except ValueError as exc:
            raise RuntimeError(f"Environment variable {key} must be an integer") from exc

    @staticmethod
    def _get_float(key: str, default: float) -> float:
        value = os.getenv(key)
        if value is None:
            return default
        try:
            return float(value)
        except ValueError as exc:
            raise RuntimeError(f"Environment variable {key} must be a number") from exc
