# core/config.py
"""
Configuration settings for the compression middleware.
"""
import zlib
from functools import lru_cache
from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Process-wide defaults for compression middleware instances.
    All settings can be overridden by environment variables or a .env file.
    Options passed to a middleware instance always win over these values.
    """
    # --- Compression ---
    COMPRESSION_THRESHOLD: str = "1kb"  # smallest body worth compressing
    COMPRESSION_LEVEL: int = zlib.Z_DEFAULT_COMPRESSION
    COMPRESSION_MEM_LEVEL: int = 8
    COMPRESSION_WINDOW_BITS: int = zlib.MAX_WBITS
    COMPRESSION_CHUNK_SIZE: int = 16 * 1024  # codec/transport high-water mark

    # --- Logging ---
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    @field_validator("COMPRESSION_THRESHOLD", mode="before")
    def coerce_threshold(cls, v):
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("LOG_LEVEL")
    def normalize_log_level(cls, v):
        return v.upper()

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get compression settings with caching."""
    return Settings()


# Global settings instance
settings = get_settings()

__all__ = ["Settings", "settings", "get_settings"]
