"""Snowflake-style ID generator for bet IDs.

IDs are time-ordered strings ("bet_<int>"); the integer part follows placement
order. Single-process: the sequence counter is guarded by a lock, not shared
across workers (machine_id separates workers when more than one runs).
"""

import threading
import time


class SnowflakeIdGenerator:
    """64-bit layout: 41 bits ms since epoch | 10 bits machine | 12 bits sequence."""

    EPOCH_MS = 1_735_689_600_000  # 2025-01-01T00:00:00Z
    MACHINE_BITS = 10
    SEQUENCE_BITS = 12

    def __init__(self, machine_id: int = 0) -> None:
        max_machine = (1 << self.MACHINE_BITS) - 1
        if not (0 <= machine_id <= max_machine):
            raise ValueError(f"machine_id must be 0-{max_machine}")
        self._machine_id = machine_id
        self._sequence_mask = (1 << self.SEQUENCE_BITS) - 1
        self._sequence = 0
        self._last_ms = -1
        self._lock = threading.Lock()

    def next_int(self) -> int:
        with self._lock:
            now_ms = _clock_ms()
            if now_ms == self._last_ms:
                self._sequence = (self._sequence + 1) & self._sequence_mask
                if self._sequence == 0:
                    # Sequence exhausted for this millisecond
                    while now_ms <= self._last_ms:
                        now_ms = _clock_ms()
            else:
                self._sequence = 0
            self._last_ms = now_ms
            return (
                ((now_ms - self.EPOCH_MS) << (self.MACHINE_BITS + self.SEQUENCE_BITS))
                | (self._machine_id << self.SEQUENCE_BITS)
                | self._sequence
            )

    def next_id(self, prefix: str = "bet") -> str:
        return f"{prefix}_{self.next_int()}"


def _clock_ms() -> int:
    return time.time_ns() // 1_000_000


_default_generator = SnowflakeIdGenerator()


def generate_bet_id() -> str:
    """Generate a unique bet id using the module-level default generator."""
    return _default_generator.next_id("bet")
