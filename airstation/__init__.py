"""
Synthetic environmental measuring stations.

Load a station configuration, build a StationSimulator from it and read
its snapshots:

    config = load("settings/messstation2.json")
    with StationSimulator(config) as station:
        readings = station.snapshot()
"""
from .channels import CHANNEL_SPECS, ChannelSpec, classify, spec_for, tier_color
from .config_loader import load, load_bytes
from .dashboard import Dashboard
from .errors import (
    ConfigError,
    InvalidValue,
    MissingKeys,
    SimulationInvariantError,
    SourceUnreadable,
    UnsupportedFormat,
)
from .models import ChannelKind, ChannelReading, StationConfig, Tier
from .simulators import StationSimulator

__all__ = [
    'CHANNEL_SPECS',
    'ChannelSpec',
    'classify',
    'spec_for',
    'tier_color',
    'load',
    'load_bytes',
    'Dashboard',
    'ConfigError',
    'InvalidValue',
    'MissingKeys',
    'SimulationInvariantError',
    'SourceUnreadable',
    'UnsupportedFormat',
    'ChannelKind',
    'ChannelReading',
    'StationConfig',
    'Tier',
    'StationSimulator',
]
