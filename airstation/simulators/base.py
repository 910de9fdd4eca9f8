"""
Base components for simulators.
Each simulator owns one timer thread that calls step() at a fixed interval.
"""
import logging
import threading
from abc import ABC, abstractmethod
from typing import Optional

from ..logging_config import station_context

logger = logging.getLogger(__name__)


class PeriodicSimulator(ABC):
    """
    Abstract base class for a simulator driven by its own periodic timer.

    Every started thread gets its own stop Event. stop() sets it, which wakes
    the thread and keeps it from ticking again even if it outlives the join
    timeout, so a later start() can never revive it.
    """

    def __init__(self, name: str, interval: float):
        if interval <= 0:
            raise ValueError(f"Tick interval must be positive, got {interval}")
        self.name = name
        self.interval = interval
        self._stop_event: Optional[threading.Event] = None
        self._thread: Optional[threading.Thread] = None
        self._lifecycle_lock = threading.Lock()

    @abstractmethod
    def step(self):
        """
        Advance the simulation by one tick. This should be implemented by subclasses.
        """
        pass

    def _on_tick_error(self, error: Exception) -> None:
        logger.error(f"❌ Error during tick: {error}", exc_info=True)

    def _worker(self, stop_event: threading.Event) -> None:
        with station_context(self.name):
            logger.info(f"▶️ Simulation started (every {self.interval}s)")
            while not stop_event.wait(timeout=self.interval):
                try:
                    self.step()
                except AssertionError:
                    # Out-of-range state is a bug, let it kill the timer
                    logger.critical("💥 Invariant violated, stopping timer", exc_info=True)
                    raise
                except Exception as e:
                    self._on_tick_error(e)
            logger.info("⏹️ Simulation stopped")

    @property
    def running(self) -> bool:
        """True between start() and stop()."""
        return (
            self._thread is not None
            and self._thread.is_alive()
            and self._stop_event is not None
            and not self._stop_event.is_set()
        )

    def start(self) -> None:
        """Begin periodic ticking. Starting a running simulator does nothing."""
        with self._lifecycle_lock:
            if self.running:
                logger.debug("start() ignored, already running")
                return
            self._stop_event = threading.Event()
            self._thread = threading.Thread(
                target=self._worker, args=(self._stop_event,), name=f"sim-{self.name}", daemon=True
            )
            self._thread.start()

    def stop(self, timeout: float = 5.0) -> None:
        """End periodic ticking. Stopping an idle simulator does nothing.

        A thread still busy in a slow tick after ``timeout`` finishes that tick
        and exits on its own; it never ticks again.
        """
        with self._lifecycle_lock:
            if not self._thread:
                return
            self._stop_event.set()
            if self._thread is not threading.current_thread():
                self._thread.join(timeout=timeout)
                if self._thread.is_alive():
                    logger.warning(f"⚠️ Timer thread still finishing a tick after {timeout}s")
            self._thread = None
            self._stop_event = None

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop()
        return False
