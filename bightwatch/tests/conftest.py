"""Shared test fixtures."""

import json
from pathlib import Path

import pytest
import yaml

from bightwatch.config.loader import default_config as build_default_config
from bightwatch.config.schema import AppConfig
from bightwatch.tests.helpers import FakeClock

FIXTURE_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def default_config() -> AppConfig:
    """Return default AppConfig with every family."""
    return build_default_config()


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "rate_limit": {"window_minutes": 30},
        "client": {"refresh_minutes": 15, "storage_path": None},
        "families": [{"name": "buoy-data", "max_requests": 5, "cache_max_age_seconds": 60}],
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURE_DIR


@pytest.fixture
def cwf_text() -> str:
    return (FIXTURE_DIR / "cwf_ajk.txt").read_text()


@pytest.fixture
def zfp_text() -> str:
    return (FIXTURE_DIR / "zfp_arh.txt").read_text()


@pytest.fixture
def afd_page() -> str:
    return (FIXTURE_DIR / "afd_ajk.html").read_text()


@pytest.fixture
def ndbc_text() -> str:
    return (FIXTURE_DIR / "ndbc_46083.txt").read_text()


@pytest.fixture
def cfw_text() -> str:
    return (FIXTURE_DIR / "cfw_ajk.txt").read_text()


@pytest.fixture
def seak_raw() -> list:
    with open(FIXTURE_DIR / "seak_obs.json") as f:
        return json.load(f)


@pytest.fixture
def tide_json() -> dict:
    with open(FIXTURE_DIR / "tide_predictions.json") as f:
        return json.load(f)


@pytest.fixture
def current_json() -> dict:
    with open(FIXTURE_DIR / "current_predictions.json") as f:
        return json.load(f)
