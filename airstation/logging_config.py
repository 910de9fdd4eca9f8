"""
Logging for the station runner.

Every log record carries ``record.station``: the name of the station the
current code is working for, or "-" outside any station. The name lives in a
context variable entered with station_context(). Timer threads, MQTT
callbacks and dashboard operations enter it, so messages never repeat the
station name themselves.
"""
import logging
import os
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from logging.handlers import TimedRotatingFileHandler
from typing import Iterator, Optional

import colorlog

NO_STATION = "-"
_current_station: ContextVar[str] = ContextVar("current_station", default=NO_STATION)

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(station)s] %(name)s (%(threadName)s): %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"
LOG_COLORS = {
    "DEBUG": "cyan",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}


def current_station() -> str:
    return _current_station.get()


@contextmanager
def station_context(name: Optional[str]) -> Iterator[None]:
    """Tag every record logged inside the block, on this thread, with a station name."""
    token = _current_station.set(name or NO_STATION)
    try:
        yield
    finally:
        _current_station.reset(token)


def install_station_records() -> None:
    """Make every LogRecord carry the current station. Safe to call repeatedly."""
    previous = logging.getLogRecordFactory()
    if getattr(previous, "tags_station", False):
        return

    def factory(*args, **kwargs):
        record = previous(*args, **kwargs)
        record.station = _current_station.get()
        return record

    factory.tags_station = True  # type: ignore[attr-defined]
    logging.setLogRecordFactory(factory)


def setup_logging(log_file: Optional[str] = None, level: Optional[str] = None) -> None:
    """Send logs to a colored stdout handler and optionally a midnight-rotated file.

    Calling it again replaces the handlers installed by the previous call and
    leaves any other root handlers alone. The level comes from ``level``, else
    LOG_LEVEL (default INFO). paho is held at NOISY_LOG_LEVEL (default WARNING).
    """
    install_station_records()

    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    root = logging.getLogger()
    root.setLevel(getattr(logging, level_name, logging.INFO))

    console = colorlog.StreamHandler(sys.stdout)
    console.setFormatter(colorlog.ColoredFormatter(
        "%(log_color)s" + LOG_FORMAT + "%(reset)s",
        datefmt=DATE_FORMAT,
        log_colors=LOG_COLORS,
    ))
    handlers = [console]

    if log_file:
        rotating = TimedRotatingFileHandler(log_file, when="midnight", backupCount=7, encoding="utf-8")
        rotating.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        handlers.append(rotating)

    for handler in list(root.handlers):
        if getattr(handler, "airstation_handler", False):
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        handler.airstation_handler = True  # type: ignore[attr-defined]
        root.addHandler(handler)

    noisy_level = os.getenv("NOISY_LOG_LEVEL", "WARNING").upper()
    logging.getLogger("paho").setLevel(getattr(logging, noisy_level, logging.WARNING))
