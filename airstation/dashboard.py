"""
Dashboard of independent stations.

Each station is built from its own configuration file and named
"Station 1".."Station n" in the order given. A station can be open
(ticking) or closed; an open station cannot be opened a second time.
"""
import logging
import os
from typing import Dict, List, Optional, Sequence, Union

from . import config_loader
from .errors import ConfigError
from .logging_config import station_context
from .settings import DEFAULT_TICK_INTERVAL
from .simulators.station_simulator import Snapshot, StationSimulator

logger = logging.getLogger(__name__)


class Dashboard:
    """Owns several StationSimulators; they share no state and no timer."""

    def __init__(
        self,
        config_paths: Sequence[Union[str, os.PathLike, None]],
        interval: float = DEFAULT_TICK_INTERVAL,
    ):
        self.stations: Dict[str, StationSimulator] = {}
        for number, path in enumerate(config_paths, start=1):
            name = f"Station {number}"
            with station_context(name):
                try:
                    config = config_loader.load(path)
                except ConfigError as e:
                    logger.error(f"❌ Could not be configured: {e}")
                    raise
                self.stations[name] = StationSimulator(config, interval=interval, name=name)

    @property
    def names(self) -> List[str]:
        return list(self.stations)

    def get(self, name: str) -> StationSimulator:
        try:
            return self.stations[name]
        except KeyError:
            raise KeyError(f"Unknown station '{name}'") from None

    def is_open(self, name: str) -> bool:
        return self.get(name).running

    def open(self, name: str) -> bool:
        """Start a station. Returns False if it is already open."""
        station = self.get(name)
        with station_context(name):
            if station.running:
                logger.info("Already open")
                return False
            station.start()
            logger.info("🟢 Opened")
        return True

    def close(self, name: str) -> None:
        """Stop a station; it may be opened again afterwards."""
        station = self.get(name)
        with station_context(name):
            station.stop()
            logger.info("🔴 Closed")

    def open_all(self) -> None:
        for name in self.stations:
            self.open(name)

    def close_all(self) -> None:
        for name in self.stations:
            self.close(name)

    def snapshots(self, name: Optional[str] = None) -> Dict[str, Snapshot]:
        """Snapshots of the open stations, keyed by station name."""
        names = [name] if name else self.names
        return {n: self.get(n).snapshot() for n in names if self.get(n).running}
