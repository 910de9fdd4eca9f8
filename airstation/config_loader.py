"""
Station configuration loader.

A configuration document names the six channels and whether each is shown.
Two formats are accepted and tried in order: a JSON object, then an XML
document with one element per key. Both must provide all six keys.
"""
import json
import logging
import os
import xml.etree.ElementTree as ET
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from .errors import InvalidValue, MissingKeys, SourceUnreadable, UnsupportedFormat
from .models import CONFIG_KEYS, StationConfig
from .settings import DEFAULT_CONFIG_PATH

logger = logging.getLogger(__name__)

REQUIRED_KEYS: List[str] = list(CONFIG_KEYS.values())

# A parse attempt returns the raw key/value mapping, or None if the bytes are not its format
ParseAttempt = Callable[[bytes], Optional[Dict[str, Any]]]


def _parse_json_object(data: bytes) -> Optional[Dict[str, Any]]:
    try:
        document = json.loads(data)
    except ValueError:
        return None
    if not isinstance(document, dict):
        return None
    return document


def _parse_xml_elements(data: bytes) -> Optional[Dict[str, Any]]:
    try:
        root = ET.fromstring(data)
    except ET.ParseError:
        return None

    values: Dict[str, Any] = {}
    for key in REQUIRED_KEYS:
        element = next(root.iter(key), None)
        if element is not None:
            values[key] = "".join(element.itertext())
    return values


FORMAT_ATTEMPTS: List[Tuple[str, ParseAttempt]] = [
    ("json", _parse_json_object),
    ("xml", _parse_xml_elements),
]


def parse_bool(key: str, value: Any, source: Optional[str] = None) -> bool:
    """Read a channel flag.

    Accepts the strings "true"/"false" in any case, with surrounding
    whitespace, and JSON boolean literals. Anything else is rejected.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized == "true":
            return True
        if normalized == "false":
            return False
    raise InvalidValue(key, value, source)


def _build_config(values: Dict[str, Any], source: str) -> StationConfig:
    missing = [key for key in REQUIRED_KEYS if key not in values]
    if missing:
        raise MissingKeys(missing, source)

    flags = {key: parse_bool(key, values[key], source) for key in REQUIRED_KEYS}
    return StationConfig(**flags)


def load_bytes(data: bytes, source: str = "<bytes>") -> StationConfig:
    """Parse and validate a configuration document held in memory.

    Raises:
        UnsupportedFormat: if the bytes are neither a JSON object nor XML
        MissingKeys: if the recognized document lacks channel keys
        InvalidValue: if a channel key holds something other than a boolean
    """
    if isinstance(data, str):
        data = data.encode("utf-8")

    for format_name, attempt in FORMAT_ATTEMPTS:
        values = attempt(data)
        if values is None:
            continue
        config = _build_config(values, source)
        logger.info(
            f"✅ Loaded {format_name} station config from {source}: "
            f"{', '.join(k.value for k in config.enabled_kinds()) or 'no channels'}"
        )
        return config

    logger.warning(f"⚠️ Unsupported configuration format in {source}")
    raise UnsupportedFormat(source)


def load(path: Union[str, os.PathLike, None] = None) -> StationConfig:
    """Load a station configuration file.

    Args:
        path: Path to a JSON or XML document; None selects the default
            settings file (STATION_DEFAULT_CONFIG or settings/default_settings.json)

    Returns:
        The validated StationConfig

    Raises:
        SourceUnreadable: if the file cannot be read
        ConfigError: any of the format or content errors from load_bytes
    """
    if path is None:
        path = os.getenv("STATION_DEFAULT_CONFIG", DEFAULT_CONFIG_PATH)
    source = os.fspath(path)

    try:
        with open(source, "rb") as f:
            data = f.read()
    except OSError as e:
        logger.error(f"❌ Could not read station config {source}: {e}")
        raise SourceUnreadable(source, e) from e

    return load_bytes(data, source)
