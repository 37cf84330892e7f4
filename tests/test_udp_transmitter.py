from __future__ import annotations

import socket
from typing import Iterator, List

import pytest

from models.records import SensorStatus
from services.publisher import ReadingPublisher, TransmitError, build_default_publisher
from settings import get_settings
from transport.udp import UdpTransmitter, build_default_transmitter


@pytest.fixture()
def receiver() -> Iterator[socket.socket]:
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(2.0)
    try:
        yield sock
    finally:
        sock.close()


class FakeSocket:
    instances: List["FakeSocket"] = []

    def __init__(self, family, kind) -> None:
        self.family = family
        self.kind = kind
        self.sent: list[tuple[bytes, tuple[str, int]]] = []
        self.closed = False
        FakeSocket.instances.append(self)

    def __enter__(self) -> "FakeSocket":
        return self

    def __exit__(self, *exc_info) -> None:
        self.closed = True

    def sendto(self, data: bytes, address) -> int:
        self.sent.append((data, address))
        return len(data)


class BrokenSocket(FakeSocket):
    def sendto(self, data: bytes, address) -> int:
        raise OSError(101, "Network is unreachable")


@pytest.fixture()
def fake_socket(monkeypatch) -> Iterator[type[FakeSocket]]:
    FakeSocket.instances = []
    monkeypatch.setattr("transport.udp.socket.socket", FakeSocket)
    yield FakeSocket
    FakeSocket.instances = []


def test_datagram_reaches_loopback_listener(receiver: socket.socket) -> None:
    host, port = receiver.getsockname()
    publisher = ReadingPublisher(transmitter=UdpTransmitter(host, port))

    publisher.report(3, SensorStatus.available, 23.5)

    data, _ = receiver.recvfrom(1024)
    assert data == b"3:23.5"

    receiver.settimeout(0.2)
    with pytest.raises(socket.timeout):
        receiver.recvfrom(1024)


def test_unavailable_reading_on_the_wire(receiver: socket.socket) -> None:
    host, port = receiver.getsockname()
    publisher = ReadingPublisher(transmitter=UdpTransmitter(host, port))

    publisher.report(7, SensorStatus.unavailable)

    data, _ = receiver.recvfrom(1024)
    assert data == b"7:"


def test_each_send_uses_a_fresh_ipv4_udp_socket(fake_socket) -> None:
    transmitter = UdpTransmitter("127.0.0.1", 48620)

    transmitter.send(b"1:20")
    transmitter.send(b"2:21")

    assert len(fake_socket.instances) == 2
    for instance in fake_socket.instances:
        assert instance.family == socket.AF_INET
        assert instance.kind == socket.SOCK_DGRAM
        assert instance.closed is True
    assert fake_socket.instances[0].sent == [(b"1:20", ("127.0.0.1", 48620))]
    assert fake_socket.instances[1].sent == [(b"2:21", ("127.0.0.1", 48620))]


def test_socket_error_propagates(monkeypatch, fake_socket) -> None:
    monkeypatch.setattr("transport.udp.socket.socket", BrokenSocket)
    transmitter = UdpTransmitter("127.0.0.1", 48620)

    with pytest.raises(OSError, match="unreachable"):
        transmitter.send(b"1:20")

    with pytest.raises(TransmitError):
        ReadingPublisher(transmitter=transmitter).report(1, SensorStatus.available, 20.0)

    assert len(fake_socket.instances) == 2
    assert all(instance.closed for instance in fake_socket.instances)


def test_socket_creation_failure_propagates(monkeypatch) -> None:
    def refuse(*_args, **_kwargs):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr("transport.udp.socket.socket", refuse)
    publisher = ReadingPublisher(transmitter=UdpTransmitter("127.0.0.1", 48620))

    with pytest.raises(TransmitError) as excinfo:
        publisher.report(2, SensorStatus.unavailable)

    assert isinstance(excinfo.value.__cause__, PermissionError)


def test_default_destination_is_panel_port(monkeypatch, fake_socket) -> None:
    monkeypatch.delenv("PANEL_HOST", raising=False)
    monkeypatch.delenv("PANEL_PORT", raising=False)
    caches = (get_settings, build_default_transmitter, build_default_publisher)
    for cache in caches:
        cache.cache_clear()

    try:
        publisher = build_default_publisher()
        assert publisher.destination == ("127.0.0.1", 48620)

        publisher.report(3, SensorStatus.available, 23.5)

        assert fake_socket.instances[0].sent == [(b"3:23.5", ("127.0.0.1", 48620))]
    finally:
        for cache in caches:
            cache.cache_clear()


def test_explicit_destination_overrides_settings() -> None:
    try:
        transmitter = build_default_transmitter("localhost", 50000)
        assert transmitter.destination == ("localhost", 50000)
    finally:
        build_default_transmitter.cache_clear()
