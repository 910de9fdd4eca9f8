#!/usr/bin/env python3
"""
Headless station runner.

Opens one station per configuration file and logs every tick's readings.
Optionally publishes the snapshots to an MQTT broker for an external display.

Usage:
    python -m airstation settings/messstation.xml settings/messstation2.json
    python -m airstation --interval 1 --duration 30
    python -m airstation --mqtt settings/messstation3.json
"""
import argparse
import logging
import sys
import time
from typing import List, Optional

from dotenv import load_dotenv

from .channels import spec_for, tier_color
from .dashboard import Dashboard
from .errors import ConfigError
from .logging_config import setup_logging, station_context
from .mqtt.publisher import SnapshotPublisher
from .settings import Settings
from .simulators.station_simulator import Snapshot

logger = logging.getLogger("airstation")


def format_snapshot(snapshot: Snapshot) -> str:
    """Values are shown at display precision; tiers come from the unrounded value."""
    parts = []
    for reading in snapshot:
        spec = spec_for(reading.kind)
        parts.append(
            f"{spec.label}={reading.value:.{spec.decimals}f}{spec.unit} "
            f"[{reading.tier.name}/{tier_color(reading.tier)}]"
        )
    return " | ".join(parts) if parts else "no channels enabled"


def log_snapshot(snapshot: Snapshot, tick: int) -> None:
    logger.info(f"📊 Tick {tick}: {format_snapshot(snapshot)}")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run simulated environmental measuring stations")
    parser.add_argument("configs", nargs="*", help="Station configuration files (JSON or XML)")
    parser.add_argument("--interval", type=float, default=None, help="Seconds between ticks (default: 5)")
    parser.add_argument("--duration", type=float, default=None, help="Stop after this many seconds")
    parser.add_argument("--mqtt", action="store_true", help="Publish snapshots to the MQTT broker")
    parser.add_argument("--log-file", default=None, help="Also log to this file, rotated at midnight")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = parse_args(argv)
    settings = Settings.from_env()
    setup_logging(args.log_file)

    config_paths = args.configs or settings.config_paths or [settings.default_config_path]
    interval = args.interval if args.interval is not None else settings.tick_interval

    try:
        dashboard = Dashboard(config_paths, interval=interval)
    except ConfigError as e:
        logger.error(f"❌ Configuration error: {e}")
        return 2

    publishers: List[SnapshotPublisher] = []
    for station in dashboard.stations.values():
        station.add_listener(log_snapshot)
        with station_context(station.name):
            logger.info(f"📊 Initial: {format_snapshot(station.snapshot())}")
        if args.mqtt:
            publisher = SnapshotPublisher(
                station,
                broker=settings.mqtt_broker,
                port=settings.mqtt_port,
                topic_prefix=settings.mqtt_topic_prefix,
                max_buffer_size=settings.edge_buffer_size,
            )
            publisher.connect()
            publishers.append(publisher)

    dashboard.open_all()
    logger.info(f"🚀 Running {len(dashboard.names)} station(s), ticking every {interval}s (Ctrl+C to stop)")

    started = time.monotonic()
    try:
        while args.duration is None or time.monotonic() - started < args.duration:
            time.sleep(0.5)
    except KeyboardInterrupt:
        logger.info("Interrupted")
    finally:
        dashboard.close_all()
        for publisher in publishers:
            publisher.disconnect()
        logger.info("✅ All stations closed")
    return 0


if __name__ == "__main__":
    sys.exit(main())
