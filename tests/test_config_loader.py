"""Tests for YAML loading of analyzer configs and metric bags."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from tension_engine.analysis.loader import load_analyzer_config, load_metric_bag
from tension_engine.errors import ConfigurationError
from tests.conftest import EXAMPLE_METRICS


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "analyzer.yaml"
    path.write_text(
        yaml.dump(
            {
                "history_capacity": 20,
                "trend_threshold": 2.5,
                "weights": {"latency": 0.4},
                "thresholds": {"cpu_usage": [50, 60]},
            }
        )
    )
    return path


class TestLoadAnalyzerConfig:
    def test_values_override_defaults(self, config_file: Path):
        config = load_analyzer_config(config_file)
        assert config.history_capacity == 20
        assert config.trend_threshold == 2.5
        assert config.weights["latency"] == 0.4
        assert config.weights["error_rate"] == 0.25
        assert config.thresholds["cpu_usage"] == (50.0, 60.0)

    def test_empty_file_gives_defaults(self, tmp_path: Path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_analyzer_config(path).history_capacity == 100

    def test_invalid_values(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.dump({"history_capacity": 0}))
        with pytest.raises(ConfigurationError, match="history_capacity"):
            load_analyzer_config(path)

    def test_malformed_yaml(self, tmp_path: Path):
        path = tmp_path / "broken.yaml"
        path.write_text("weights: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Could not parse"):
            load_analyzer_config(path)

    def test_top_level_must_be_mapping(self, tmp_path: Path):
        path = tmp_path / "list.yaml"
        path.write_text(yaml.dump([1, 2, 3]))
        with pytest.raises(ConfigurationError, match="mapping"):
            load_analyzer_config(path)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(OSError):
            load_analyzer_config(tmp_path / "nope.yaml")


class TestLoadMetricBag:
    def test_yaml_camel_case(self, tmp_path: Path):
        path = tmp_path / "metrics.yaml"
        path.write_text(yaml.dump(EXAMPLE_METRICS))
        bag = load_metric_bag(path)
        assert bag.error_rate == 0.02
        assert bag.queue_depth == 2.0
        assert bag.disk_usage is None

    def test_json_is_accepted(self, tmp_path: Path):
        path = tmp_path / "metrics.json"
        path.write_text(json.dumps({"cpu_usage": 55, "latency": 120}))
        bag = load_metric_bag(path)
        assert bag.present() == {"latency": 120.0, "cpu_usage": 55.0}

    def test_invalid_reading(self, tmp_path: Path):
        path = tmp_path / "metrics.yaml"
        path.write_text(yaml.dump({"errorRate": 3}))
        with pytest.raises(ValueError, match="Invalid metrics"):
            load_metric_bag(path)
