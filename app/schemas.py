"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from models.records import SensorStatus


class ReadingIn(BaseModel):
    """A reading submitted for relay to the panel."""

    channel: int = Field(..., description="Hardware channel the reading came from.")
    status: SensorStatus = SensorStatus.available
    temperature: Optional[float] = Field(
        default=None, description="Degrees Celsius; omit when the channel has no value."
    )


class PublishResponse(BaseModel):
    """Echo of the relayed reading and the datagram that was sent."""

    channel: int
    status: SensorStatus
    temperature: Optional[float] = None
    payload: str = Field(..., description="ASCII text placed in the datagram.")
    destination: str = Field(..., description="host:port the datagram was sent to.")
