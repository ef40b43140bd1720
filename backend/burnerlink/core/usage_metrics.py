"""Usage Metrics — process-lifetime counters for the stats endpoint.

Invariants:
    - Counters only grow; reset happens only on process restart
    - snapshot() returns a flat, JSON-serializable dict
    - activeSessions is supplied by the store (lazily expired sessions still count)
"""

from dataclasses import dataclass, field


@dataclass
class UsageMetrics:
    camera_clicks: int = 0
    sessions_created: int = 0
    devices: set[str] = field(default_factory=set)

    def record_device(self, device_id: str | None) -> None:
        if device_id:
            self.devices.add(device_id)

    def record_session_created(self, device_id: str) -> None:
        self.sessions_created += 1
        self.record_device(device_id)

    def record_camera_click(self, device_id: str | None = None) -> None:
        self.camera_clicks += 1
        self.record_device(device_id)

    def snapshot(self, active_sessions: int) -> dict:
        return {
            "cameraClicks": self.camera_clicks,
            "sessionsCreated": self.sessions_created,
            "activeSessions": active_sessions,
            "approximateUsers": len(self.devices),
        }
