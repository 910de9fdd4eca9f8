from .publisher import SnapshotPublisher, build_payload, station_slug

__all__ = [
    'SnapshotPublisher',
    'build_payload',
    'station_slug',
]
