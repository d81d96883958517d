from typing import Any

from pydantic import BaseModel


class ChannelInfo(BaseModel):
    name: str
    log_level: int
    original_log_level: int
    verbosity: str
    subscriber_count: int
    dispatch_count: int
    has_latest: bool
    latest: Any = None
    payload_type: str | None = None
    description: str | None = None


class FaultInfo(BaseModel):
    channel: str
    subscriber: str
    error: str
    replay: bool
    timestamp: float


class TowerSnapshot(BaseModel):
    channels: list[ChannelInfo]
    faults: list[FaultInfo] = []

    def latest_payloads(self) -> dict[str, Any]:
        """Payloads of every channel that has one, keyed by channel name.

        Feed the result to ``SignalTower.hydrate`` to seed another tower.
        """
        return {info.name: info.latest for info in self.channels if info.has_latest}

    def get(self, name: str) -> ChannelInfo | None:
        for info in self.channels:
            if info.name == name:
                return info
        return None
