import json
import random

import pytest

from airstation.logging_config import install_station_records
from airstation.models import StationConfig

ALL_KEYS = [
    "temperatureEnabled",
    "ozoneEnabled",
    "particulateEnabled",
    "carbonMonoxideEnabled",
    "nitrogenDioxideEnabled",
    "sulfurDioxideEnabled",
]


def make_flags(enabled=ALL_KEYS):
    """Config document values with the given keys set to "true" and the rest "false"."""
    return {key: "true" if key in enabled else "false" for key in ALL_KEYS}


def make_xml(values, root="station"):
    body = "".join(f"<{k}>{v}</{k}>" for k, v in values.items())
    return f'<?xml version="1.0" encoding="UTF-8"?><{root}>{body}</{root}>'


@pytest.fixture(autouse=True, scope="session")
def station_records():
    """Tag every record with record.station, as setup_logging() does at runtime."""
    install_station_records()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def all_enabled_config():
    return StationConfig(**{key: True for key in ALL_KEYS})


@pytest.fixture
def write_config(tmp_path):
    """Write a config document to a temp file and return its path."""
    def _write(content, name="station.json"):
        path = tmp_path / name
        if isinstance(content, dict):
            content = json.dumps(content)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        return path
    return _write
