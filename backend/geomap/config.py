"""Application configuration using pydantic-settings."""
from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Geo Map Boundaries"
    DEBUG: bool = False
    API_V1_PREFIX: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    # Datasets (dong.json, sgg.json, sido.json)
    DATA_DIR: str = "data"
    LOAD_DATASETS_ON_STARTUP: bool = True

    # Zoom level thresholds for admin level selection
    # zoom 0~9: sido, 10~12: sgg, 13+: dong
    SIDO_MAX_ZOOM: int = 9
    SGG_MAX_ZOOM: int = 12

    # Simplification tolerance in degrees (higher = more simplification)
    SIDO_SIMPLIFY_TOLERANCE: float = 0.001  # ~100m
    SGG_SIMPLIFY_TOLERANCE: float = 0.0005  # ~50m
    DONG_SIMPLIFY_TOLERANCE: float = 0.0002  # ~20m
    COORDINATE_PRECISION: int = 6  # ~10cm

    # Aggregation; groups are independent so they can be unioned in a pool
    AGGREGATE_MAX_WORKERS: int = 1

    # CORS
    CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
