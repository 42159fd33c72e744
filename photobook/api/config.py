"""
config.py — Environment configuration for the API.

Settings are read from environment variables, with an optional .env file
at the project root filling in anything not already set.
"""

import os
from functools import lru_cache
from pathlib import Path


# Load .env file if it exists
def _load_dotenv():
    env_path = Path(__file__).parent.parent.parent / ".env"
    if env_path.exists():
        with open(env_path) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, value = line.split("=", 1)
                    key = key.strip()
                    value = value.strip()
                    if key and value and key not in os.environ:
                        os.environ[key] = value

_load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(self):
        # Application
        self.app_name: str = os.environ.get("APP_NAME", "Photobook Layout API")
        self.app_version: str = os.environ.get("APP_VERSION", "1.0.0")
        self.environment: str = os.environ.get("ENVIRONMENT", "development")
        self.debug: bool = os.environ.get("DEBUG", "false").lower() == "true"
        self.api_prefix: str = os.environ.get("API_PREFIX", "/api/v1")

        # Server settings
        self.host: str = os.environ.get("HOST", "0.0.0.0")
        self.port: int = int(os.environ.get("PORT", "8000"))

        # CORS settings
        self.cors_origins: list = os.environ.get(
            "CORS_ORIGINS",
            "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"
        ).split(",")

        # Logging
        self.log_level: str = os.environ.get("LOG_LEVEL", "INFO").upper()

        # Layout limits
        self.default_dpi: int = int(os.environ.get("DEFAULT_DPI", "300"))
        self.max_photos_per_request: int = int(os.environ.get("MAX_PHOTOS_PER_REQUEST", "1000"))

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
