"""Host inspection helpers."""

import os
import socket
from typing import Optional

from chatwootctl.errors import ManagerError
from chatwootctl.errors_catalog import actionable_error


class HostService:
    """Answers questions about the machine the tool runs on."""

    def __init__(self, logger, os_module=os, socket_module=socket):
        self.logger = logger
        self.os = os_module
        self.socket = socket_module

    def is_root(self) -> bool:
        geteuid = getattr(self.os, "geteuid", None)
        if geteuid is None:
            return False
        return geteuid() == 0

    def require_root(self):
        if not self.is_root():
            raise ManagerError(actionable_error("root_required"))

    def primary_ip(self) -> Optional[str]:
        """Return the address of the interface used for outbound traffic.

        A UDP socket never sends anything on ``connect``; it only asks the
        kernel to pick a route.
        """
        sock = self.socket.socket(self.socket.AF_INET, self.socket.SOCK_DGRAM)
        try:
            sock.connect(("10.255.255.255", 1))
            return sock.getsockname()[0]
        except OSError as exc:
            self.logger.debug("Could not determine primary IP: %s", exc)
            return None
        finally:
            sock.close()
