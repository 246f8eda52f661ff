"""
OTP Record Store
================
In-memory, lock-guarded mapping of device id to verification state.
"""

import threading
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

from .models import OTPRecord


class OTPRecordStore:
    """
    Thread-safe record map with one record per device.

    Single-process only. Multi-step sequences must run inside
    ``transaction()`` so no other caller can interleave between the
    read and the write.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._records: Dict[str, OTPRecord] = {}

    @contextmanager
    def transaction(self) -> Iterator["OTPRecordStore"]:
        """Hold the exclusive lock for a whole read-check-write sequence."""
        with self._lock:
            yield self

    def get(self, device_id: str) -> Optional[OTPRecord]:
        with self._lock:
            return self._records.get(device_id)

    def get_live(self, device_id: str, now: float) -> Optional[OTPRecord]:
        """Return the device's record, purging it first if it is dead."""
        with self._lock:
            record = self._records.get(device_id)
            if record is None:
                return None
            if record.is_dead(now):
                del self._records[device_id]
                return None
            return record

    def put(self, device_id: str, record: OTPRecord) -> None:
        with self._lock:
            self._records[device_id] = record

    def delete(self, device_id: str) -> None:
        with self._lock:
            self._records.pop(device_id, None)

    def purge_dead(self, now: float) -> int:
        """Remove every dead record. Returns how many were removed."""
        with self._lock:
            dead = [
                device_id for device_id, record in self._records.items()
                if record.is_dead(now)
            ]
            for device_id in dead:
                del self._records[device_id]
            return len(dead)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
