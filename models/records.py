"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SensorStatus(str, Enum):
    """Whether a channel produced a value on the last poll."""

    available = "available"
    unavailable = "unavailable"

    @property
    def code(self) -> int:
        """Status byte as reported by the controller."""
        return 0x00 if self is SensorStatus.available else 0x01


@dataclass(frozen=True, slots=True)
class SensorReading:
    """A single temperature reading for one hardware channel.

    Nothing is validated: any channel number, either status and any float
    (NaN and infinities included) or ``None`` is stored as given.
    """

    channel: int
    status: SensorStatus
    temperature: Optional[float] = None
