"""
Simple in-memory buffer for station snapshots.
Stores messages when MQTT is unavailable and replays when connected.
"""
import logging
from collections import deque
from dataclasses import dataclass
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)


@dataclass
class BufferedMessage:
    """A buffered MQTT message."""
    topic: str
    payload: Dict[str, Any]


class EdgeBuffer:
    """
    In-memory FIFO buffer for offline tolerance.
    Oldest messages are dropped once max_size is reached.
    """

    def __init__(self, max_size: int = 1000):
        self.max_size = max_size
        self._buffer: deque = deque(maxlen=max_size)

    def add(self, topic: str, payload: Dict[str, Any]) -> None:
        """Add a message to the buffer."""
        if len(self._buffer) == self.max_size:
            logger.warning("⚠️ Buffer full, dropping oldest message")
        self._buffer.append(BufferedMessage(topic=topic, payload=payload))
        logger.info(f"📦 Buffered message ({len(self._buffer)} pending)")

    def push_front(self, message: BufferedMessage) -> None:
        """Return a message that failed to replay to the head of the queue."""
        self._buffer.appendleft(message)

    def pop(self) -> Optional[BufferedMessage]:
        """Remove and return the oldest message, or None if empty."""
        if self._buffer:
            return self._buffer.popleft()
        return None

    def has_pending(self) -> bool:
        return len(self._buffer) > 0

    def count(self) -> int:
        return len(self._buffer)
