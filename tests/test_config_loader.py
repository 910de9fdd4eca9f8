"""
Tests for loading station configuration from JSON and XML documents.
"""
import json
from pathlib import Path

import pytest

from airstation import config_loader
from airstation.errors import (
    ConfigError,
    InvalidValue,
    MissingKeys,
    SourceUnreadable,
    UnsupportedFormat,
)
from airstation.models import ChannelKind, StationConfig

from conftest import ALL_KEYS, make_flags, make_xml

SETTINGS_DIR = Path(__file__).resolve().parent.parent / "settings"


def test_json_all_keys(write_config):
    path = write_config(make_flags(["temperatureEnabled", "sulfurDioxideEnabled"]))

    config = config_loader.load(path)

    assert isinstance(config, StationConfig)
    assert config.enabled_kinds() == [ChannelKind.TEMPERATURE, ChannelKind.SULFUR_DIOXIDE]


def test_temperature_only_scenario(write_config):
    path = write_config(make_flags(["temperatureEnabled"]))

    config = config_loader.load(str(path))

    assert config.enabled_kinds() == [ChannelKind.TEMPERATURE]
    assert config.temperature is True
    assert config.ozone is False


@pytest.mark.parametrize("missing", ALL_KEYS)
def test_json_missing_one_key(missing):
    values = make_flags()
    del values[missing]

    with pytest.raises(MissingKeys) as exc_info:
        config_loader.load_bytes(json.dumps(values).encode())

    assert exc_info.value.missing == [missing]
    assert missing in str(exc_info.value)


def test_json_missing_several_keys_in_canonical_order():
    values = {"ozoneEnabled": "true", "particulateEnabled": "false", "sulfurDioxideEnabled": "true"}

    with pytest.raises(MissingKeys) as exc_info:
        config_loader.load_bytes(json.dumps(values).encode())

    assert exc_info.value.missing == [
        "temperatureEnabled",
        "carbonMonoxideEnabled",
        "nitrogenDioxideEnabled",
    ]


def test_empty_json_object_misses_everything():
    with pytest.raises(MissingKeys) as exc_info:
        config_loader.load_bytes(b"{}")
    assert exc_info.value.missing == ALL_KEYS


@pytest.mark.parametrize("raw,expected", [
    ("true", True),
    ("TRUE", True),
    (" True ", True),
    ("false", False),
    ("FaLsE", False),
    (True, True),
    (False, False),
])
def test_boolean_literals(raw, expected):
    values = make_flags([])
    values["ozoneEnabled"] = raw

    config = config_loader.load_bytes(json.dumps(values).encode())

    assert config.ozone is expected


@pytest.mark.parametrize("raw", ["yes", "1", "", "tru", 1, None, ["true"]])
def test_json_invalid_value(raw):
    values = make_flags()
    values["carbonMonoxideEnabled"] = raw

    with pytest.raises(InvalidValue) as exc_info:
        config_loader.load_bytes(json.dumps(values).encode())

    assert exc_info.value.key == "carbonMonoxideEnabled"
    assert exc_info.value.value == raw


def test_extra_keys_are_ignored():
    values = make_flags(["ozoneEnabled"])
    values["humidityEnabled"] = "true"

    config = config_loader.load_bytes(json.dumps(values).encode())

    assert config.enabled_kinds() == [ChannelKind.OZONE]


def test_xml_fallback_matches_json():
    values = make_flags(["temperatureEnabled", "particulateEnabled", "nitrogenDioxideEnabled"])

    from_json = config_loader.load_bytes(json.dumps(values).encode())
    from_xml = config_loader.load_bytes(make_xml(values).encode())

    assert from_xml == from_json


def test_xml_elements_found_at_any_depth(write_config):
    document = """<?xml version="1.0"?>
    <settings>
        <channels>
            <temperatureEnabled>true</temperatureEnabled>
            <ozoneEnabled>false</ozoneEnabled>
            <particulateEnabled>false</particulateEnabled>
        </channels>
        <gases>
            <carbonMonoxideEnabled> TRUE </carbonMonoxideEnabled>
            <nitrogenDioxideEnabled>false</nitrogenDioxideEnabled>
            <sulfurDioxideEnabled>false</sulfurDioxideEnabled>
        </gases>
    </settings>"""
    path = write_config(document, name="station.xml")

    config = config_loader.load(path)

    assert config.enabled_kinds() == [ChannelKind.TEMPERATURE, ChannelKind.CARBON_MONOXIDE]


def test_xml_missing_element():
    values = make_flags()
    del values["nitrogenDioxideEnabled"]

    with pytest.raises(MissingKeys) as exc_info:
        config_loader.load_bytes(make_xml(values).encode())

    assert exc_info.value.missing == ["nitrogenDioxideEnabled"]


def test_xml_invalid_value():
    values = make_flags()
    values["sulfurDioxideEnabled"] = "maybe"

    with pytest.raises(InvalidValue) as exc_info:
        config_loader.load_bytes(make_xml(values).encode())

    assert exc_info.value.key == "sulfurDioxideEnabled"
    assert exc_info.value.value == "maybe"


def test_xml_empty_element_is_invalid():
    values = make_flags()
    values["ozoneEnabled"] = ""

    with pytest.raises(InvalidValue):
        config_loader.load_bytes(make_xml(values).encode())


@pytest.mark.parametrize("data", [
    b"",
    b"temperatureEnabled=true",
    b"{not json",
    b"<station><temperatureEnabled>true</station>",
    b"[1, 2, 3]",
    b"42",
    b"\x89PNG\r\n\x1a\n",
])
def test_unsupported_format(data):
    with pytest.raises(UnsupportedFormat):
        config_loader.load_bytes(data, source="broken.cfg")


def test_errors_name_their_source(write_config):
    path = write_config("neither format", name="broken.txt")

    with pytest.raises(UnsupportedFormat) as exc_info:
        config_loader.load(path)

    assert exc_info.value.source == str(path)
    assert str(path) in str(exc_info.value)


def test_unreadable_source(tmp_path):
    path = tmp_path / "does-not-exist.json"

    with pytest.raises(SourceUnreadable) as exc_info:
        config_loader.load(path)

    assert exc_info.value.path == str(path)
    assert isinstance(exc_info.value.reason, FileNotFoundError)


def test_directory_is_unreadable(tmp_path):
    with pytest.raises(SourceUnreadable):
        config_loader.load(tmp_path)


def test_all_errors_share_a_base_class():
    for error in (UnsupportedFormat, MissingKeys, InvalidValue, SourceUnreadable):
        assert issubclass(error, ConfigError)


def test_default_path_from_environment(write_config, monkeypatch):
    path = write_config(make_flags(["ozoneEnabled"]), name="default.json")
    monkeypatch.setenv("STATION_DEFAULT_CONFIG", str(path))

    config = config_loader.load()

    assert config.enabled_kinds() == [ChannelKind.OZONE]


def test_str_input_is_accepted():
    config = config_loader.load_bytes(json.dumps(make_flags()))
    assert len(config.enabled_kinds()) == 6


def test_config_is_immutable():
    config = config_loader.load_bytes(json.dumps(make_flags()).encode())
    with pytest.raises(Exception):
        config.temperature = False


def test_bundled_settings_files_load():
    xml_config = config_loader.load(SETTINGS_DIR / "messstation.xml")
    json_config = config_loader.load(SETTINGS_DIR / "messstation2.json")
    default = config_loader.load(SETTINGS_DIR / "default_settings.json")

    assert ChannelKind.TEMPERATURE in xml_config.enabled_kinds()
    assert json_config.enabled_kinds() == [ChannelKind.TEMPERATURE]
    assert default.enabled_kinds() == list(ChannelKind)
