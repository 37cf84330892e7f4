from __future__ import annotations

import socket
from functools import lru_cache
from typing import Optional, Protocol, Tuple

from settings import get_settings

Destination = Tuple[str, int]


class Transmitter(Protocol):
    destination: Destination

    def send(self, payload: bytes) -> None:
        ...


class UdpTransmitter:
    """Sends each payload as a single IPv4 datagram from a short-lived socket."""

    def __init__(self, host: str, port: int) -> None:
        self.host = host
        self.port = int(port)

    @property
    def destination(self) -> Destination:
        return (self.host, self.port)

    def send(self, payload: bytes) -> None:
        # One socket per datagram; nothing is shared between sends.
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.sendto(payload, self.destination)


@lru_cache
def build_default_transmitter(
    host: Optional[str] = None,
    port: Optional[int] = None,
) -> UdpTransmitter:
    settings = get_settings()
    panel_host = settings.panel_host if host is None else host
    panel_port = settings.panel_port if port is None else port
    return UdpTransmitter(host=panel_host, port=panel_port)
