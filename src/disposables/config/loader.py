"""Reading and applying registry settings."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, TextIO

from pydantic import ValidationError

from disposables.config.errors import ConfigError
from disposables.config.models import DisposablesSettings
from disposables.observability.logging import bootstrap_logging_from_settings
from disposables.observability.metrics import (
    MetricsRecorder,
    configure_prometheus_metrics,
    set_metrics_recorder,
)

_MAPPING_SOURCE = "<mapping>"


def load_settings(source: Mapping[str, Any] | str | Path | None = None) -> DisposablesSettings:
    """Build settings from a mapping, a JSON file, or defaults when ``source`` is None.

    Raises:
        ConfigError: If the file is missing or unreadable, or the values do not validate.
    """
    if source is None:
        return DisposablesSettings()
    if isinstance(source, Mapping):
        return _validate(dict(source), _MAPPING_SOURCE)

    path = Path(source)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ConfigError(str(path), ["file does not exist"]) from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(str(path), [f"line {exc.lineno}: {exc.msg}"]) from exc
    if not isinstance(raw, dict):
        raise ConfigError(str(path), ["top level must be a JSON object"])
    return _validate(raw, str(path))


def _validate(raw: dict[str, Any], source: str) -> DisposablesSettings:
    try:
        return DisposablesSettings.model_validate(raw)
    except ValidationError as exc:
        problems = [
            f"{'.'.join(str(part) for part in error['loc']) or '<root>'}: {error['msg']}"
            for error in exc.errors()
        ]
        raise ConfigError(source, problems) from exc


def bootstrap(
    settings: DisposablesSettings,
    *,
    metrics_registry: Any | None = None,
    logger: logging.Logger | None = None,
    stream: TextIO | None = None,
) -> MetricsRecorder:
    """Apply ``settings``: configure logging and install the default metrics recorder."""
    bootstrap_logging_from_settings(settings, logger=logger, stream=stream)
    if not settings.metrics.enabled:
        return set_metrics_recorder(None)
    return configure_prometheus_metrics(
        registry=metrics_registry,
        prefix=settings.metrics.prefix,
    )
