import os
from dataclasses import dataclass
from functools import lru_cache

import redis.asyncio as redis
from dotenv import load_dotenv

load_dotenv()

STORE_BACKENDS = ("redis", "memory")


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")
    redis_socket_timeout: float = float(os.getenv("REDIS_SOCKET_TIMEOUT", "5.0"))

    # Storage backend: "redis" or "memory"
    store_backend: str = os.getenv("STORE_BACKEND", "redis")

    # Cache
    cache_default_duration_ms: int = int(os.getenv("CACHE_DEFAULT_DURATION_MS", "3600000"))  # 1 hour
    cache_max_size: int = int(os.getenv("CACHE_MAX_SIZE", str(50 * 1024 * 1024)))  # 50 MiB
    cache_low_water_ratio: float = float(os.getenv("CACHE_LOW_WATER_RATIO", "0.8"))

    # News API
    news_api_key: str = os.getenv("NEWS_API_KEY", "")
    news_api_base_url: str = os.getenv("NEWS_API_BASE_URL", "https://newsapi.org")
    news_api_timeout: float = float(os.getenv("NEWS_API_TIMEOUT", "10.0"))

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    app_env: str = os.getenv("APP_ENV", "development")

    @property
    def has_news_api_key(self) -> bool:
        """Check if a usable News API key is configured.

        Returns:
            True if the key is set and is not the placeholder value
        """
        return bool(self.news_api_key) and self.news_api_key != "your_api_key_here"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_default_duration_ms <= 0:
            raise ValueError("CACHE_DEFAULT_DURATION_MS must be positive")

        if self.cache_max_size <= 0:
            raise ValueError("CACHE_MAX_SIZE must be positive")

        if not 0 < self.cache_low_water_ratio <= 1:
            raise ValueError("CACHE_LOW_WATER_RATIO must be in (0, 1]")

        if self.store_backend not in STORE_BACKENDS:
            raise ValueError(
                f"STORE_BACKEND must be one of {list(STORE_BACKENDS)}, got {self.store_backend!r}"
            )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client() -> redis.Redis:
    """Create an asyncio Redis client instance.

    Responses are decoded to ``str`` since the key-value store only holds
    JSON text.
    """
    return redis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        socket_timeout=settings.redis_socket_timeout,
        decode_responses=True,
    )
