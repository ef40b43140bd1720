"""Device Registry — per-device tier and daily image counter.

Invariants:
    - Records are created on first sight and never deleted
    - Tier is set at creation (free unless seeded pro) and never changed here
    - daily_image_count resets to 0 lazily, on the first access after the window elapses

Design Decisions:
    - Lazy reset on read instead of a scheduled job: no background work in the core
    - Pro seeding comes from configuration (PRO_DEVICE_IDS); there is no upgrade path
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable

from burnerlink.core.domain_types import DeviceId, DeviceTier


@dataclass
class DeviceRecord:
    device_id: DeviceId
    tier: DeviceTier
    last_reset_at: datetime
    first_seen_at: datetime
    daily_image_count: int = 0

    @property
    def is_free(self) -> bool:
        return self.tier is DeviceTier.FREE


class DeviceRegistry:
    """Process-lifetime map of device id to DeviceRecord. Not thread-safe on its own."""

    def __init__(
        self,
        quota_window: timedelta = timedelta(hours=24),
        pro_device_ids: Iterable[str] = (),
    ):
        self._devices: dict[DeviceId, DeviceRecord] = {}
        self._quota_window = quota_window
        self._pro_device_ids = frozenset(pro_device_ids)

    def get_or_create(self, device_id: DeviceId, now: datetime) -> DeviceRecord:
        """Return the record for device_id, creating it and applying the daily reset."""
        record = self._devices.get(device_id)
        if record is None:
            tier = DeviceTier.PRO if device_id in self._pro_device_ids else DeviceTier.FREE
            record = DeviceRecord(
                device_id=device_id, tier=tier, last_reset_at=now, first_seen_at=now,
            )
            self._devices[device_id] = record
            return record

        if now - record.last_reset_at > self._quota_window:
            record.daily_image_count = 0
            record.last_reset_at = now
        return record

    def __contains__(self, device_id: object) -> bool:
        return device_id in self._devices

    def __len__(self) -> int:
        return len(self._devices)
