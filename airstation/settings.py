import os
from dataclasses import dataclass, field
from typing import List

DEFAULT_CONFIG_PATH = "settings/default_settings.json"
DEFAULT_TICK_INTERVAL = 5.0


@dataclass
class Settings:
    """Runtime settings for the station runner, read from the environment."""
    tick_interval: float = DEFAULT_TICK_INTERVAL
    config_paths: List[str] = field(default_factory=list)
    default_config_path: str = DEFAULT_CONFIG_PATH
    mqtt_broker: str = "localhost"
    mqtt_port: int = 1883
    mqtt_topic_prefix: str = "airstation/stations"
    edge_buffer_size: int = 1000

    @classmethod
    def from_env(cls) -> "Settings":
        raw_paths = os.getenv("STATION_CONFIGS", "")
        return cls(
            tick_interval=float(os.getenv("STATION_TICK_INTERVAL", DEFAULT_TICK_INTERVAL)),
            config_paths=[p.strip() for p in raw_paths.split(",") if p.strip()],
            default_config_path=os.getenv("STATION_DEFAULT_CONFIG", DEFAULT_CONFIG_PATH),
            mqtt_broker=os.getenv("MQTT_BROKER", "localhost"),
            mqtt_port=int(os.getenv("MQTT_PORT", 1883)),
            mqtt_topic_prefix=os.getenv("MQTT_TOPIC_PREFIX", "airstation/stations"),
            edge_buffer_size=int(os.getenv("EDGE_BUFFER_SIZE", 1000)),
        )
