"""Registry settings: pydantic models, loading, and bootstrap."""

from disposables.config.errors import ConfigError
from disposables.config.loader import bootstrap, load_settings
from disposables.config.models import (
    DisposablesSettings,
    LoggingSettings,
    MetricsSettings,
    RegistrySettings,
)

__all__ = [
    "ConfigError",
    "DisposablesSettings",
    "LoggingSettings",
    "MetricsSettings",
    "RegistrySettings",
    "bootstrap",
    "load_settings",
]
