import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Completions
    default_model: str = os.getenv("DEFAULT_MODEL", "gpt-3.5-turbo")
    token_delay: float = float(os.getenv("TOKEN_DELAY", "0.05"))  # seconds between fragments

    # Conversation history
    max_history_length: int = int(os.getenv("MAX_HISTORY_LENGTH", "50"))
    max_conversations: int = int(os.getenv("MAX_CONVERSATIONS", "1000"))
    conversation_evict_fraction: float = float(os.getenv("CONVERSATION_EVICT_FRACTION", "0.3"))

    # Response cache
    cache_sweep_interval: float = float(os.getenv("CACHE_SWEEP_INTERVAL", "300"))  # 5 minutes
    cache_eviction_probability: float = float(os.getenv("CACHE_EVICTION_PROBABILITY", "0.1"))

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", os.getenv("PORT", "3001")))
    api_reload: bool = os.getenv("API_RELOAD", "false").lower() == "true"

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.token_delay < 0:
            raise ValueError("TOKEN_DELAY must not be negative")

        if self.max_history_length < 1:
            raise ValueError("MAX_HISTORY_LENGTH must be at least 1")

        if self.max_conversations < 1:
            raise ValueError("MAX_CONVERSATIONS must be at least 1")

        if not 0 <= self.conversation_evict_fraction <= 1:
            raise ValueError("CONVERSATION_EVICT_FRACTION must be between 0 and 1")

        if self.cache_sweep_interval <= 0:
            raise ValueError("CACHE_SWEEP_INTERVAL must be positive")

        if not 0 <= self.cache_eviction_probability <= 1:
            raise ValueError("CACHE_EVICTION_PROBABILITY must be between 0 and 1")

    @property
    def log_level_value(self) -> int:
        """Resolve the configured log level name, falling back to INFO."""
        return getattr(logging, self.log_level.upper(), logging.INFO)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def setup_logging(app_settings: Settings | None = None) -> None:
    """Configure root logging for the server process."""
    app_settings = app_settings or settings
    logging.basicConfig(
        level=app_settings.log_level_value,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
