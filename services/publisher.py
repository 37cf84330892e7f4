"""Wire encoding and one-shot publishing of sensor readings to the panel."""

from __future__ import annotations

import logging
import math
from decimal import Decimal
from functools import lru_cache
from typing import Optional

from models.records import SensorReading, SensorStatus
from transport.udp import Destination, Transmitter, build_default_transmitter

logger = logging.getLogger(__name__)

PAYLOAD_ENCODING = "ascii"


class TransmitError(OSError):
    """Raised when a reading could not be handed to the network stack."""

    def __init__(
        self,
        message: str,
        destination: Optional[Destination] = None,
        channel: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.destination = destination
        self.channel = channel


# Shortest round-trip digits switch to exponent form once the integer part
# needs more than this many digits (or more than the significant digits).
_FIXED_NOTATION_DIGITS = 15


def format_temperature(value: Optional[float]) -> str:
    """Render a temperature the way the panel expects it.

    ``None`` becomes an empty string. Otherwise the shortest round-trip
    digits are laid out in fixed notation, or as ``1.5E+20``/``1E-05`` when
    the number is very large or very small.
    """
    if value is None:
        return ""
    number = float(value)
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "Infinity" if number > 0 else "-Infinity"
    if number == 0:
        return "-0" if math.copysign(1.0, number) < 0 else "0"

    shortest = Decimal(repr(number)).normalize()
    sign, digits, exponent = shortest.as_tuple()
    scientific_exponent = exponent + len(digits) - 1
    if -5 < scientific_exponent < max(len(digits), _FIXED_NOTATION_DIGITS):
        return format(shortest, "f")

    mantissa = str(digits[0])
    if len(digits) > 1:
        mantissa += "." + "".join(str(digit) for digit in digits[1:])
    exponent_sign = "+" if scientific_exponent >= 0 else "-"
    return f"{'-' if sign else ''}{mantissa}E{exponent_sign}{abs(scientific_exponent):02d}"


def encode_payload(reading: SensorReading) -> bytes:
    """``channel:temperature`` as ASCII. The status is deliberately left off."""
    text = f"{reading.channel}:{format_temperature(reading.temperature)}"
    return text.encode(PAYLOAD_ENCODING)


class ReadingPublisher:
    """Sends readings to the panel through an injected transmitter."""

    def __init__(self, transmitter: Transmitter) -> None:
        self.transmitter = transmitter

    @property
    def destination(self) -> Destination:
        return self.transmitter.destination

    def publish(self, reading: SensorReading) -> bytes:
        """Send exactly one datagram for ``reading`` and return its payload."""
        payload = encode_payload(reading)
        destination = self.destination
        try:
            self.transmitter.send(payload)
        except OSError as exc:
            logger.warning(
                "Failed to publish reading",
                extra={
                    "channel": reading.channel,
                    "destination": destination,
                    "reason": str(exc),
                },
            )
            host, port = destination
            raise TransmitError(
                f"Could not send reading for channel {reading.channel} to {host}:{port}: {exc}",
                destination=destination,
                channel=reading.channel,
            ) from exc

        logger.debug(
            "Published reading",
            extra={
                "channel": reading.channel,
                "status": reading.status,
                "payload": payload,
                "destination": destination,
                "byte_count": len(payload),
            },
        )
        return payload

    def report(
        self,
        channel: int,
        status: SensorStatus,
        temperature: Optional[float] = None,
    ) -> SensorReading:
        """Build a reading and publish it; the reading is only returned once sent."""
        reading = SensorReading(channel=channel, status=status, temperature=temperature)
        self.publish(reading)
        return reading


@lru_cache
def build_default_publisher() -> ReadingPublisher:
    """Factory that wires the publisher to the configured panel address."""
    return ReadingPublisher(transmitter=build_default_transmitter())
