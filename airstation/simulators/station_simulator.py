"""
Station simulator: a clamped random walk per enabled channel, classified into severity tiers.
"""
import itertools
import logging
import random
import threading
from typing import Callable, List, Optional, Tuple

from ..channels import ChannelSpec, classify, spec_for
from ..errors import SimulationInvariantError
from ..logging_config import station_context
from ..models import ChannelKind, ChannelReading, StationConfig
from ..settings import DEFAULT_TICK_INTERVAL
from .base import PeriodicSimulator

logger = logging.getLogger(__name__)

Snapshot = Tuple[ChannelReading, ...]
# Called with the snapshot and the number of the tick that produced it
SnapshotListener = Callable[[Snapshot, int], None]

_station_numbers = itertools.count(1)


class StationSimulator(PeriodicSimulator):
    """
    Owns the readings of one station and advances them on a fixed schedule.

    Readings are kept as one immutable tuple that is replaced as a whole
    on every tick, so snapshot() always returns values and tiers from a
    single tick.
    """

    def __init__(
        self,
        config: StationConfig,
        interval: float = DEFAULT_TICK_INTERVAL,
        rng: Optional[random.Random] = None,
        name: Optional[str] = None,
    ):
        super().__init__(name or f"station_{next(_station_numbers)}", interval)
        self.config = config
        self._rng = rng or random.Random()
        self._specs: List[ChannelSpec] = [spec_for(kind) for kind in config.enabled_kinds()]
        self._state_lock = threading.Lock()
        self._listeners: List[SnapshotListener] = []
        self._tick_count = 0
        self._readings: Snapshot = tuple(self._reading(spec, self._seed(spec)) for spec in self._specs)
        with station_context(self.name):
            logger.info(
                f"🌱 Seeded {len(self._readings)} channels: "
                + ", ".join(f"{r.kind.value}={r.value}" for r in self._readings)
            )

    # ========== RANDOM WALK ==========

    def _draw(self, spec: ChannelSpec, low, high):
        if spec.integral:
            return self._rng.randint(int(low), int(high))
        # uniform() can round a hair past its upper bound
        return float(min(high, max(low, self._rng.uniform(low, high))))

    def _seed(self, spec: ChannelSpec):
        return self._draw(spec, spec.min_value, spec.max_value)

    def _next_value(self, spec: ChannelSpec, value):
        low, high = spec.clamp_range(value)
        return self._draw(spec, low, high)

    def _reading(self, spec: ChannelSpec, value) -> ChannelReading:
        if not spec.in_domain(value):
            raise SimulationInvariantError(
                f"{spec.kind.value} value {value} outside [{spec.min_value}, {spec.max_value}]"
            )
        return ChannelReading(kind=spec.kind, value=value, tier=classify(spec.kind, value))

    # ========== TICK ==========

    def step(self) -> Snapshot:
        """Advance every enabled channel by one tick and publish the batch atomically."""
        with self._state_lock:
            current = self._readings
            updated = tuple(
                self._reading(spec, self._next_value(spec, reading.value))
                for spec, reading in zip(self._specs, current)
            )
            self._readings = updated
            self._tick_count += 1
            tick = self._tick_count

        with station_context(self.name):
            logger.debug(f"Tick {tick}: " + ", ".join(
                f"{r.kind.value}={r.value} ({r.tier.name})" for r in updated
            ))
            self._notify(updated, tick)
        return updated

    def snapshot(self) -> Snapshot:
        """Current readings of the enabled channels in display order."""
        return self._readings

    def reading(self, kind: ChannelKind) -> Optional[ChannelReading]:
        """Current reading of one channel, or None if it is disabled."""
        for r in self._readings:
            if r.kind == kind:
                return r
        return None

    @property
    def tick_count(self) -> int:
        return self._tick_count

    @property
    def kinds(self) -> List[ChannelKind]:
        return [spec.kind for spec in self._specs]

    # ========== LISTENERS ==========

    def add_listener(self, listener: SnapshotListener) -> None:
        """Call listener(snapshot, tick) after every tick."""
        self._listeners.append(listener)

    def remove_listener(self, listener: SnapshotListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, snapshot: Snapshot, tick: int) -> None:
        for listener in list(self._listeners):
            try:
                listener(snapshot, tick)
            except Exception as e:
                logger.error(f"❌ Snapshot listener {listener!r} failed: {e}")
