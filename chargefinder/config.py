"""Application configuration management."""

import os
from pathlib import Path
from typing import List, Tuple

from dotenv import load_dotenv

# Load environment variables from project-level .env if available
PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(dotenv_path=PROJECT_ROOT / ".env")


class Settings:
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = os.getenv("APP_NAME", "EV Charge Finder")
    app_version: str = os.getenv("APP_VERSION", "1.0.0")
    environment: str = os.getenv("ENVIRONMENT", "development")
    debug: bool = os.getenv("DEBUG", "False") == "True"

    # Server
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))
    reload: bool = os.getenv("RELOAD", "True") == "True"

    # Station providers
    nrel_api_key: str = os.getenv("NREL_API_KEY", "")  # Free key at https://developer.nrel.gov/signup/
    nrel_base_url: str = os.getenv("NREL_BASE_URL", "https://developer.nrel.gov/api/alt-fuel-stations/v1")
    ocm_api_key: str = os.getenv("OCM_API_KEY", "")
    ocm_base_url: str = os.getenv("OCM_BASE_URL", "https://api.openchargemap.io/v3/poi")
    provider_timeout_seconds: float = float(os.getenv("PROVIDER_TIMEOUT_SECONDS", "10"))
    station_source: str = os.getenv("STATION_SOURCE", "live")

    # Search escalation
    default_radius_miles: float = float(os.getenv("DEFAULT_RADIUS_MILES", "50"))
    default_result_limit: int = int(os.getenv("DEFAULT_RESULT_LIMIT", "20"))
    secondary_radius_multiplier: float = float(os.getenv("SECONDARY_RADIUS_MULTIPLIER", "3.2"))
    fallback_radius: float = float(os.getenv("FALLBACK_RADIUS", "100"))
    primary_region_bbox: str = os.getenv("PRIMARY_REGION_BBOX", "24.5,-125.0,49.5,-66.9")

    # Synthetic availability bands (fraction of ports free)
    nrel_availability_min: float = float(os.getenv("NREL_AVAILABILITY_MIN", "0.6"))
    nrel_availability_max: float = float(os.getenv("NREL_AVAILABILITY_MAX", "0.9"))
    ocm_availability_min: float = float(os.getenv("OCM_AVAILABILITY_MIN", "0.7"))
    ocm_availability_max: float = float(os.getenv("OCM_AVAILABILITY_MAX", "0.95"))

    # Vehicle recommendations
    low_battery_threshold: int = int(os.getenv("LOW_BATTERY_THRESHOLD", "30"))
    critical_battery_threshold: int = int(os.getenv("CRITICAL_BATTERY_THRESHOLD", "20"))
    average_speed_mph: float = float(os.getenv("AVERAGE_SPEED_MPH", "25"))

    # CORS
    cors_origins: List[str] = [
        origin.strip()
        for origin in os.getenv(
            "CORS_ALLOW_ORIGINS",
            "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5000",
        ).split(",")
        if origin.strip()
    ]
    cors_allow_credentials: bool = True

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_format: str = os.getenv("LOG_FORMAT", "json")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() == "development"

    @property
    def uses_seed_stations(self) -> bool:
        """Serve nearby searches from the in-memory store instead of providers."""
        return self.station_source.strip().lower() == "seed"

    @property
    def primary_region(self) -> Tuple[float, float, float, float]:
        """Return the primary provider bounding box as (min_lat, min_lon, max_lat, max_lon)."""
        values = [float(value) for value in self.primary_region_bbox.split(",") if value.strip()]
        if len(values) != 4:
            raise ValueError(
                f"PRIMARY_REGION_BBOX must have four comma-separated values, got {self.primary_region_bbox!r}"
            )
        return values[0], values[1], values[2], values[3]


# Global settings instance
settings = Settings()
