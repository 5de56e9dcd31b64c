"""
bylawcheck Configuration Settings

Centralized configuration management using Pydantic for validation.
"""

from pathlib import Path
from typing import List, Optional
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


RULES_DIR = Path(__file__).parent / "rules"


class KnowledgeServiceConfig(BaseSettings):
    """
    Knowledge-service (LlamaCloud) connection settings.

    Read from LLAMACLOUD_API_KEY, LLAMACLOUD_ENDPOINT and
    LLAMACLOUD_DOCUMENT_ID. Resolvers skip the service entirely unless all
    three are set.
    """
    api_key: Optional[str] = None
    endpoint: Optional[str] = None
    document_id: Optional[str] = None

    timeout: float = 30.0
    max_retries: int = Field(default=1, ge=0)
    retry_backoff: float = Field(default=1.0, ge=0)

    class Config:
        env_prefix = "LLAMACLOUD_"
        env_file = ".env"
        extra = "ignore"

    @property
    def is_configured(self) -> bool:
        return all(
            value and value.strip()
            for value in (self.api_key, self.endpoint, self.document_id)
        )


class Settings(BaseSettings):
    """
    Main application settings.

    Configuration priority:
    1. Environment variables (highest)
    2. .env file
    3. Default values
    """

    # General
    app_name: str = "bylawcheck"
    debug: bool = False
    log_level: str = "INFO"

    # Default bylaw limits, loaded once at startup
    rules_file: Optional[Path] = RULES_DIR / "bbmp_2019.yaml"

    # Knowledge service
    knowledge: KnowledgeServiceConfig = Field(default_factory=KnowledgeServiceConfig)

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 3001
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    class Config:
        env_prefix = "BYLAWCHECK_"
        env_file = ".env"
        env_nested_delimiter = "__"
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
