"""Configuration management using Pydantic Settings"""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./smartspend.db"

    # External Services
    budget_api_base: str = "http://localhost:8001"

    # Service
    service_name: str = "smartspend-companion"
    log_level: str = "INFO"
    currency_symbol: str = "£"

    # HTTP Client
    http_timeout_seconds: float = 5.0

    # Companion
    reaction_buffer_ms: int = 500
    max_pending_reactions: Optional[int] = None  # None = unbounded FIFO
    recent_reactions_limit: int = 20
    dialogue_seed: Optional[int] = None


settings = Settings()
