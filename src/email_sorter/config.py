"""
Application configuration management.

This module handles configuration from environment variables using Pydantic Settings.
"""

from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Engine configuration from environment variables.

    All settings can be overridden via environment variables with the same name
    (e.g. ``RULES_FILE=/etc/email-sorter/rules.json``).
    """

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # Rule set
    rules_file: Optional[str] = None  # JSON rule file replacing the starter rules

    # Batch classification (1 = sequential)
    batch_workers: int = 1

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


# Global settings instance
settings = Settings()
