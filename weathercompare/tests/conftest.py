"""Shared test fixtures."""

from pathlib import Path

import pytest
import yaml

from weathercompare.config.schema import WeatherCompareConfig
from weathercompare.tests.factories import FIXTURE_DIR, load_fixture


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURE_DIR


@pytest.fixture
def points_payload() -> dict:
    return load_fixture("nws_points_chicago.json")


@pytest.fixture
def forecast_payload() -> dict:
    return load_fixture("nws_forecast_chicago.json")


@pytest.fixture
def alerts_payload() -> dict:
    return load_fixture("nws_alerts_chicago.json")


@pytest.fixture
def geocode_payload() -> dict:
    return load_fixture("geocode_chicago.json")


@pytest.fixture
def default_config() -> WeatherCompareConfig:
    return WeatherCompareConfig()


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "display": {"max_days": 5, "alert_policy": "most-severe"},
        "nws": {"user_agent": "weathercompare-tests/1.0"},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
