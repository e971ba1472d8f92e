"""
Configuration settings for the application.
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    # Durable storage slot
    STORAGE_BACKEND: str = os.getenv("STORAGE_BACKEND", "redis")
    REDIS_URL: str = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    STORAGE_KEY: str = os.getenv("STORAGE_KEY", "grso-pos-storage")
    STORAGE_SCHEMA_VERSION: int = int(os.getenv("STORAGE_SCHEMA_VERSION", "1"))

    # Inventory CSV files produced by spreadsheet tools are usually Windows-1252
    INVENTORY_IMPORT_ENCODING: str = os.getenv("INVENTORY_IMPORT_ENCODING", "cp1252")

    # Dashboard
    RECENT_TRANSACTIONS_LIMIT: int = int(os.getenv("RECENT_TRANSACTIONS_LIMIT", "5"))

    @property
    def is_production(self) -> bool:
        """
        Check if running in production environment.
        """
        return self.ENVIRONMENT.lower() == "production"

    @property
    def uses_memory_storage(self) -> bool:
        """Return True when state is kept in process memory instead of Redis."""
        return self.STORAGE_BACKEND.lower() == "memory"

    def __init__(self):
        self.debug = os.getenv("DEBUG", "false").lower() == "true"
        self.log_level = os.getenv("LOG_LEVEL", "INFO")
        logging.basicConfig(level=self.log_level)
        self.logger = logging.getLogger(__name__)

        self.logger.debug(
            f"Config initialized with env={self.ENVIRONMENT}, debug={self.debug}, "
            f"storage={self.STORAGE_BACKEND}, log_level={self.log_level}"
        )


# Create a global settings instance for import
settings = Settings()
