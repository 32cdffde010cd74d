"""
Application configuration: environment-aware settings.

All environment variables are documented here. See .env.example for a template.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).parent

DEFAULT_SECRET_KEY = "dev-key-change-in-production"


def _flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class BaseConfig:
    # Core Flask
    SECRET_KEY = os.environ.get("SECRET_KEY", DEFAULT_SECRET_KEY)
    # SQLite database file
    DATABASE = os.environ.get("DATABASE_URL", str(BASE_DIR / "content.db"))

    # Content import
    CONTENT_ROOT = os.environ.get("CONTENT_ROOT", "./content")
    IMPORT_ON_STARTUP = _flag("IMPORT_ON_STARTUP", True)

    # Read API
    API_VERSION = "1.0.0"
    API_MAX_LIMIT = int(os.environ.get("API_MAX_LIMIT", "500"))
    CORS_ORIGINS = [
        o.strip()
        for o in os.environ.get("CORS_ORIGINS", "http://localhost:3000").split(",")
        if o.strip()
    ]

    # Logging
    LOG_FORMAT = os.environ.get("LOG_FORMAT", "text")  # "json" or "text"
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Response compression
    COMPRESS_MIMETYPES = ["application/json"]
    COMPRESS_MIN_SIZE = 500

    # Rate limiting (defaults to in-memory)
    RATELIMIT_STORAGE_URI = os.environ.get("RATELIMIT_STORAGE_URI", "") or "memory://"


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    LOG_FORMAT = os.environ.get("LOG_FORMAT", "text")


class ProductionConfig(BaseConfig):
    DEBUG = False
    LOG_FORMAT = os.environ.get("LOG_FORMAT", "json")

    @classmethod
    def validate(cls):
        """Fail fast on missing or insecure configuration in production."""
        errors: list[str] = []

        if cls.SECRET_KEY in (DEFAULT_SECRET_KEY, ""):
            errors.append("SECRET_KEY must be set to a secure value in production.")

        if not Path(cls.CONTENT_ROOT).is_dir():
            errors.append(f"CONTENT_ROOT does not exist: {cls.CONTENT_ROOT}")

        if errors:
            raise RuntimeError(
                "Production configuration errors:\n" + "\n".join(f"  - {e}" for e in errors)
            )


class TestingConfig(BaseConfig):
    TESTING = True
    IMPORT_ON_STARTUP = False


config_by_name = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
}
