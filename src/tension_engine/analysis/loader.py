"""YAML loading for analyzer configs and metric bags.

JSON is valid YAML, so ``.json`` metric dumps load through the same path.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from tension_engine.analysis.config import AnalyzerConfig
from tension_engine.analysis.metrics import MetricBag
from tension_engine.errors import ConfigurationError

logger = logging.getLogger(__name__)


def _read_mapping(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Could not parse {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"{path} must contain a mapping at the top level, got {type(data).__name__}"
        )
    return data


def load_analyzer_config(path: str | Path) -> AnalyzerConfig:
    """Read an :class:`AnalyzerConfig` from YAML. Missing keys keep their defaults."""
    path = Path(path)
    config = AnalyzerConfig.from_mapping(_read_mapping(path))
    logger.debug("Loaded analyzer config from %s", path)
    return config


def load_metric_bag(path: str | Path) -> MetricBag:
    """Read a metric bag from YAML or JSON. Invalid readings raise ``ValueError``."""
    path = Path(path)
    data = _read_mapping(path)
    try:
        return MetricBag.model_validate(data)
    except ValidationError as exc:
        raise ValueError(f"Invalid metrics in {path}: {exc}") from exc
