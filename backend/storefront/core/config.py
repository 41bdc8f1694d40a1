"""
Centralized application configuration
"""
import json
import logging
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, loaded from the environment and .env"""

    # API Settings
    API_TITLE: str = "Flash Tans API"
    API_VERSION: str = "1.0.0"
    API_DESCRIPTION: str = "Catalog, cart checkout and order history for the Flash Tans store"
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    # Store (PostgreSQL)
    DATABASE_URL: str = ""
    DB_POOL_MIN: int = 1
    DB_POOL_MAX: int = 10
    DB_POOL_TIMEOUT: float = 30.0
    DB_CONNECT_RETRIES: int = 3
    DB_RETRY_DELAY: float = 1.0
    SEED_SAMPLE_PRODUCTS: bool = True

    # Legacy relational database, read only by the migration script
    LEGACY_DB_DRIVER: str = "mysql+pymysql"
    LEGACY_DB_HOST: str = "localhost"
    LEGACY_DB_USER: str = "root"
    LEGACY_DB_PASSWORD: str = ""
    LEGACY_DB_NAME: str = "flash_tans_db"
    LEGACY_DB_PORT: int = 3306

    # CORS - Can be "*", a comma-separated string or a JSON array
    ALLOWED_ORIGINS: Optional[str] = "*"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    def get_allowed_origins(self) -> List[str]:
        """Parse ALLOWED_ORIGINS string into list"""
        if not self.ALLOWED_ORIGINS:
            return ["*"]

        # Try JSON parse first (for array format)
        try:
            origins = json.loads(self.ALLOWED_ORIGINS)
            if isinstance(origins, list):
                return origins
        except (json.JSONDecodeError, ValueError):
            pass

        # Fall back to comma-separated string
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]


def configure_logging(level: str = "INFO"):
    """Configure root logging once per process"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


settings = Settings()
