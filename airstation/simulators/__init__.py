from .base import PeriodicSimulator
from .edge_buffer import EdgeBuffer
from .station_simulator import Snapshot, StationSimulator

__all__ = [
    'PeriodicSimulator',
    'EdgeBuffer',
    'Snapshot',
    'StationSimulator',
]
