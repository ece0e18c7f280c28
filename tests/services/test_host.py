from types import SimpleNamespace

import pytest

from chatwootctl.errors import ManagerError
from chatwootctl.services.host import HostService


class DummyLogger:
    def debug(self, *_args, **_kwargs):
        return None


class FakeSocket:
    def __init__(self, address=None):
        self.address = address
        self.closed = False

    def connect(self, _target):
        if self.address is None:
            raise OSError("network unreachable")

    def getsockname(self):
        return (self.address, 40000)

    def close(self):
        self.closed = True


def _socket_module(sock):
    return SimpleNamespace(AF_INET=2, SOCK_DGRAM=2, socket=lambda *_args: sock)


def test_require_root_raises_for_regular_user():
    service = HostService(logger=DummyLogger(), os_module=SimpleNamespace(geteuid=lambda: 1000))

    with pytest.raises(ManagerError, match="root privileges"):
        service.require_root()


def test_require_root_passes_for_root():
    service = HostService(logger=DummyLogger(), os_module=SimpleNamespace(geteuid=lambda: 0))

    service.require_root()


def test_primary_ip_uses_route_lookup():
    sock = FakeSocket("192.168.1.20")
    service = HostService(logger=DummyLogger(), socket_module=_socket_module(sock))

    assert service.primary_ip() == "192.168.1.20"
    assert sock.closed is True


def test_primary_ip_is_none_without_route():
    service = HostService(logger=DummyLogger(), socket_module=_socket_module(FakeSocket()))

    assert service.primary_ip() is None
