"""
MQTT display collaborator: publishes every station snapshot as JSON.
Messages are buffered locally when the broker is unavailable and replayed when reconnected.

Payload per reading: ``value`` is rounded to the channel's display decimals,
``raw_value`` is the unrounded reading. ``tier`` and ``color`` are always
computed from ``raw_value``, so a rounded ``value`` can sit on the other side
of a breakpoint (SO2 0.1234 is shown as 0.1 but is TIER1).
"""
import json
import logging
import re
import threading
from datetime import datetime
from typing import Any, Dict, Optional

import paho.mqtt.client as mqtt

from ..channels import spec_for, tier_color
from ..logging_config import station_context
from ..simulators.edge_buffer import EdgeBuffer
from ..simulators.station_simulator import Snapshot, StationSimulator

logger = logging.getLogger(__name__)


def station_slug(name: str) -> str:
    """'Station 1' -> 'station-1'"""
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-") or "station"


def build_payload(station_name: str, tick: int, snapshot: Snapshot) -> Dict[str, Any]:
    readings = []
    for reading in snapshot:
        spec = spec_for(reading.kind)
        readings.append({
            "channel": reading.kind.value,
            "value": round(reading.value, spec.decimals) if spec.decimals else reading.value,
            "raw_value": reading.value,
            "tier": int(reading.tier),
            "color": tier_color(reading.tier),
            "unit": spec.unit,
        })
    return {
        "station": station_name,
        "tick": tick,
        "timestamp": datetime.now().isoformat(),
        "readings": readings,
    }


class SnapshotPublisher:
    """
    Publishes the snapshots of one station to <topic_prefix>/<station-slug>.
    Attach it to a StationSimulator; it is called from the station's timer thread.
    """

    def __init__(
        self,
        station: StationSimulator,
        broker: str = "localhost",
        port: int = 1883,
        topic_prefix: str = "airstation/stations",
        max_buffer_size: int = 1000,
        client: Optional[mqtt.Client] = None,
    ):
        self.station = station
        self.broker = broker
        self.port = port
        self.topic = f"{topic_prefix.rstrip('/')}/{station_slug(station.name)}"

        self._connected = False
        self._lock = threading.Lock()
        self._buffer = EdgeBuffer(max_size=max_buffer_size)

        self.client = client or mqtt.Client(mqtt.CallbackAPIVersion.VERSION2)
        self.client.on_connect = self._on_connect
        self.client.on_disconnect = self._on_disconnect

    @property
    def connected(self) -> bool:
        return self._connected

    @property
    def pending(self) -> int:
        return self._buffer.count()

    # paho runs these on its network thread, outside any station context

    def _on_connect(self, client, userdata, flags, rc, properties=None):
        """Handle successful connection."""
        with station_context(self.station.name):
            if rc == 0:
                self._connected = True
                logger.info(f"✅ Connected to MQTT Broker at {self.broker}:{self.port}")
                self._replay_buffer()
            else:
                self._connected = False
                logger.error(f"❌ Failed to connect, return code {rc}")

    def _on_disconnect(self, client, userdata, disconnect_flags, rc, properties=None):
        """Handle disconnection."""
        with station_context(self.station.name):
            self._connected = False
            logger.warning(f"⚠️ Disconnected from MQTT (rc={rc}), buffering enabled")

    def _replay_buffer(self):
        """Replay all buffered messages after reconnection."""
        with self._lock:
            if not self._buffer.has_pending():
                return

            count = self._buffer.count()
            logger.info(f"🔄 Replaying {count} buffered snapshots...")

            replayed = 0
            while self._buffer.has_pending() and self._connected:
                msg = self._buffer.pop()
                result = self.client.publish(msg.topic, json.dumps(msg.payload))
                if result.rc == mqtt.MQTT_ERR_SUCCESS:
                    replayed += 1
                else:
                    self._buffer.push_front(msg)
                    break

            logger.info(f"✅ Replayed {replayed}/{count} buffered snapshots")

    def publish(self, payload: Dict[str, Any]) -> bool:
        """Publish or buffer a message."""
        with self._lock:
            if self._connected:
                result = self.client.publish(self.topic, json.dumps(payload))
                if result.rc == mqtt.MQTT_ERR_SUCCESS:
                    logger.debug(f"📤 Published tick {payload.get('tick')} to {self.topic}")
                    return True
                logger.warning(f"⚠️ Publish failed (rc={result.rc}), buffering")
            self._buffer.add(self.topic, payload)
            return False

    def __call__(self, snapshot: Snapshot, tick: int) -> None:
        self.publish(build_payload(self.station.name, tick, snapshot))

    def connect(self) -> None:
        """Connect to the broker, start the network loop and begin listening to the station."""
        with station_context(self.station.name):
            self.client.reconnect_delay_set(min_delay=1, max_delay=30)
            logger.info(f"🔌 Connecting to {self.broker}:{self.port}...")
            # The network loop keeps retrying; snapshots are buffered until the first connect
            self.client.connect_async(self.broker, self.port, 60)
            self.client.loop_start()
            self.station.add_listener(self)

    def disconnect(self) -> None:
        with station_context(self.station.name):
            self.station.remove_listener(self)
            pending = self._buffer.count()
            if pending > 0:
                logger.warning(f"⚠️ {pending} snapshots still buffered (will be lost)")
            self.client.loop_stop()
            self.client.disconnect()
