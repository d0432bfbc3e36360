"""
Application configuration via Pydantic Settings.
Loads from environment variables with validation and defaults.
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, Field
from functools import lru_cache

VERSION = "1.4.0"


# === Detection thresholds ===

class ThresholdOverride(BaseModel):
    """Partial per-camera override of a threshold group."""

    confidence: Optional[float] = None
    min_area: Optional[int] = None


class CameraOverride(BaseModel):
    """Per-camera detect overrides (from DETECT_CAMERAS)."""

    match: ThresholdOverride = Field(default_factory=ThresholdOverride)
    unknown: ThresholdOverride = Field(default_factory=ThresholdOverride)


class Threshold(BaseModel):
    """Resolved confidence floor + minimum box area."""

    confidence: float = Field(..., ge=0)
    min_area: int = Field(0, ge=0)

    class Config:
        frozen = True

    def merged(self, override: ThresholdOverride) -> "Threshold":
        return Threshold(
            confidence=self.confidence if override.confidence is None else override.confidence,
            min_area=self.min_area if override.min_area is None else override.min_area,
        )


class CameraThresholds(BaseModel):
    """MATCH / UNKNOWN thresholds for a single camera."""

    match: Threshold
    unknown: Threshold

    class Config:
        frozen = True


class DetectSettings(BaseSettings):
    """Detection thresholds, global with optional per-camera overrides."""

    match_confidence: float = Field(default=60, alias="DETECT_MATCH_CONFIDENCE")
    match_min_area: int = Field(default=10000, alias="DETECT_MATCH_MIN_AREA")
    unknown_confidence: float = Field(default=40, alias="DETECT_UNKNOWN_CONFIDENCE")
    unknown_min_area: int = Field(default=0, alias="DETECT_UNKNOWN_MIN_AREA")

    # JSON: {"front-door": {"match": {"confidence": 80}}}
    cameras: Dict[str, CameraOverride] = Field(default_factory=dict, alias="DETECT_CAMERAS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    def for_camera(self, camera: Optional[str] = None) -> CameraThresholds:
        """Merge global thresholds with the overrides of ``camera``."""
        match = Threshold(confidence=self.match_confidence, min_area=self.match_min_area)
        unknown = Threshold(confidence=self.unknown_confidence, min_area=self.unknown_min_area)

        override = self.cameras.get(camera) if camera else None
        if override is not None:
            match = match.merged(override.match)
            unknown = unknown.merged(override.unknown)

        return CameraThresholds(match=match, unknown=unknown)


# === Immich backend ===

class ImmichSettings(BaseSettings):
    """Connection and job-polling settings for the Immich detector."""

    url: str = Field(default="http://localhost:2283", alias="IMMICH_URL")
    key: Optional[str] = Field(default=None, alias="IMMICH_KEY")
    timeout: float = Field(default=15.0, gt=0, alias="IMMICH_TIMEOUT")
    device_id: str = Field(default="recognition-hub", alias="IMMICH_DEVICE_ID")

    # Poll loop upper bound: job_max_retries * job_poll_interval seconds
    job_max_retries: int = Field(default=10, ge=0, alias="IMMICH_JOB_MAX_RETRIES")
    job_poll_interval: float = Field(default=1.0, ge=0, alias="IMMICH_JOB_POLL_INTERVAL")

    recognize_date_group: datetime = Field(
        default=datetime(1999, 1, 1, tzinfo=timezone.utc),
        alias="IMMICH_RECOGNIZE_DATE_GROUP",
    )
    train_date_group: datetime = Field(
        default=datetime(2000, 1, 1, tzinfo=timezone.utc),
        alias="IMMICH_TRAIN_DATE_GROUP",
    )
    delete_after_recognize: bool = Field(default=True, alias="IMMICH_DELETE_AFTER_RECOGNIZE")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # === Server ===
    server_host: str = Field(default="0.0.0.0", alias="SERVER_HOST")
    server_port: int = Field(default=8001, alias="SERVER_PORT")
    debug: bool = Field(default=False, alias="DEBUG")

    # === Storage ===
    storage_path: str = Field(default="data/recognition.db", alias="STORAGE_PATH")

    # === Detectors ===
    detectors: str = Field(default="immich", alias="DETECTORS")

    immich: ImmichSettings = Field(default_factory=ImmichSettings)
    detect: DetectSettings = Field(default_factory=DetectSettings)

    @property
    def enabled_detectors(self) -> List[str]:
        """Parse DETECTORS into list."""
        return [name.strip().lower() for name in self.detectors.split(",") if name.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars
        populate_by_name=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
