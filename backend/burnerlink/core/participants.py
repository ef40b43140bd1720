"""Participant Set — insertion-ordered device set with a hard capacity.

Invariants:
    - len(self) <= capacity at all times; add() on a full set raises, never grows
    - Re-adding a member is a no-op (returns False)
"""

from typing import Iterator

from burnerlink.core.domain_types import DeviceId, MAX_PARTICIPANTS


class ParticipantCapacityError(Exception):
    """Raised by ParticipantSet.add when the set is full."""


class ParticipantSet:
    """Bounded set of device ids. Capacity defaults to MAX_PARTICIPANTS (2)."""

    __slots__ = ("_members", "capacity")

    def __init__(self, capacity: int = MAX_PARTICIPANTS):
        self._members: dict[DeviceId, None] = {}
        self.capacity = capacity

    def add(self, device_id: DeviceId) -> bool:
        """Add a device. Returns True if it was new, False if already present."""
        if device_id in self._members:
            return False
        if self.is_full:
            raise ParticipantCapacityError(device_id)
        self._members[device_id] = None
        return True

    def clear(self) -> None:
        self._members.clear()

    @property
    def is_full(self) -> bool:
        return len(self._members) >= self.capacity

    def __contains__(self, device_id: object) -> bool:
        return device_id in self._members

    def __len__(self) -> int:
        return len(self._members)

    def __iter__(self) -> Iterator[DeviceId]:
        return iter(list(self._members))

    def __repr__(self) -> str:
        return f"ParticipantSet({list(self._members)!r}, capacity={self.capacity})"
