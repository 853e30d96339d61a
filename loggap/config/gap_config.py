"""Configuration models for gap detection."""

from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from loggap.errors import ConfigError, ExtractionError
from loggap.services.fields.field_selector import FieldSelection
from loggap.services.timestamps.base import TimestampStrategy
from loggap.services.timestamps.pattern_parser import compile_pattern
from loggap.services.timestamps.raw_parser import parse_date


class DetectionConfig(BaseModel):
    """
    Settings that drive extraction and classification.

    Direct construction raises pydantic's ValidationError. Use
    DetectionConfig.build (or ConfigLoader) to get ConfigError instead.
    """

    model_config = ConfigDict(frozen=True)

    delimiter: str = " "
    field: Optional[str] = None
    within: float = Field(2.0, ge=1, description="Standard deviation multiplier")
    window: int = Field(10, ge=1, description="Number of trailing gaps")
    minimum: Optional[int] = Field(None, ge=0, description="Gaps below this are not evaluated")
    maximum: Optional[int] = Field(None, ge=0, description="Gaps above this are not evaluated")
    strategy: TimestampStrategy = TimestampStrategy.RAW
    pattern: Optional[str] = None
    stop_caring: bool = False
    begin: Optional[datetime] = None
    end: Optional[datetime] = None

    @classmethod
    def build(cls, **settings: Any) -> "DetectionConfig":
        """
        Validate settings into a DetectionConfig.

        Raises:
            ConfigError: If any setting is invalid
        """
        try:
            return cls(**settings)
        except ValidationError as e:
            raise ConfigError(f"Invalid detection settings: {e}")

    @field_validator("delimiter")
    def validate_delimiter(cls, v: str) -> str:
        if not v:
            raise ValueError("Cannot use zero-length string as a delimiter")
        return v

    @field_validator("field")
    def validate_field(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            try:
                FieldSelection.parse(v)
            except ConfigError as e:
                raise ValueError(str(e))
        return v

    @field_validator("begin", "end", mode="before")
    def parse_date_bound(cls, v):  # type: ignore[no-untyped-def]
        if isinstance(v, str):
            try:
                return parse_date(v)
            except ExtractionError as e:
                raise ValueError(str(e))
        return v

    @field_validator("begin", "end")
    def make_aware(cls, v: Optional[datetime]) -> Optional[datetime]:
        if v is not None and v.tzinfo is None:
            return v.astimezone()
        return v

    @model_validator(mode="after")
    def validate_pattern(self) -> "DetectionConfig":
        if self.strategy is TimestampStrategy.PATTERN:
            if not self.pattern:
                raise ValueError("pattern is required for the pattern strategy")
            try:
                compile_pattern(self.pattern)
            except ConfigError as e:
                raise ValueError(str(e))
        return self


class OutputConfig(BaseModel):
    """Presentation settings."""

    pretty: bool = False
    display_date: bool = False
    only_outliers: bool = False
    running_stats: Optional[int] = Field(None, ge=0, description="Seconds between running stats")
    line_template: str = "[+{gap}] {line}"
    date_format: str = "%c"


class StorageConfig(BaseModel):
    """Storage configuration."""

    audit_log_path: Optional[str] = None

    def get_audit_log_path(self) -> Optional[Path]:
        """Get expanded audit log path, or None when auditing is disabled."""
        if not self.audit_log_path:
            return None
        return Path(self.audit_log_path).expanduser()


class AppConfig(BaseModel):
    """Main application configuration."""

    schema_version: str = "1.0"
    detection: DetectionConfig = Field(default_factory=DetectionConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)

    @field_validator("schema_version")
    def validate_schema_version(cls, v: str) -> str:
        if not v:
            raise ValueError("schema_version is required")
        return v
