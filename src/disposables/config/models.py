"""Typed configuration models with Pydantic validation."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class RegistrySettings(BaseModel):
    """Identification used in log records and metric labels."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="disposables", min_length=1, description="Service name")


class LoggingSettings(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(frozen=True)

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    format: Literal["json", "text"] = Field(default="json", description="Log output format")


class MetricsSettings(BaseModel):
    """Prometheus metrics configuration."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = Field(default=False, description="Record collection metrics")
    prefix: str = Field(
        default="disposables",
        min_length=1,
        pattern=r"^[a-zA-Z_][a-zA-Z0-9_]*$",
        description="Metric name prefix",
    )


class DisposablesSettings(BaseModel):
    """Root settings."""

    model_config = ConfigDict(frozen=True)

    registry: RegistrySettings = Field(default_factory=RegistrySettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    metrics: MetricsSettings = Field(default_factory=MetricsSettings)
