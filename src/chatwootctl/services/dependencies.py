"""Host dependency probing and installation."""

import os
import platform
import shutil
import tempfile
from pathlib import Path
from typing import Callable, List, Optional

from chatwootctl.constants import (
    BINARY_MODE,
    COMPOSE_BINARY_PATH,
    COMPOSE_DOWNLOAD_URL,
    COMPOSE_VERSION,
    DOCKER_INSTALL_SCRIPT_URL,
    PACKAGE_MANAGERS,
)
from chatwootctl.errors import ManagerError
from chatwootctl.errors_catalog import actionable_error


class DependencyService:
    """Makes sure docker, docker compose and openssl are present on the host.

    Every check probes first, so calling ``ensure_dependencies`` repeatedly is
    cheap once the host is prepared. A tool that is still missing after one
    installation attempt is fatal.
    """

    def __init__(
        self,
        command_runner,
        download_service,
        logger,
        console,
        which: Callable[[str], Optional[str]] = shutil.which,
    ):
        self.command_runner = command_runner
        self.download_service = download_service
        self.logger = logger
        self.console = console
        self.which = which

    def ensure_dependencies(self) -> List[str]:
        self.ensure_docker()
        compose_cmd = self.ensure_compose()
        self.ensure_openssl()
        return compose_cmd

    def find_package_manager(self) -> Optional[str]:
        for manager in PACKAGE_MANAGERS:
            if self.which(manager):
                return manager
        return None

    def install_package(self, package: str) -> bool:
        manager = self.find_package_manager()
        if manager is None:
            self.console.print(
                f"[yellow]⚠ No supported package manager found. Please install {package} manually.[/yellow]"
            )
            self.logger.warning("No package manager available to install %s", package)
            return False

        self.logger.info("Installing %s with %s", package, manager)
        if manager == "apt-get":
            self.command_runner.run(["apt-get", "update", "-y"])
        self.command_runner.run([manager, "install", "-y", package])
        return True

    def ensure_docker(self):
        if self.which("docker"):
            return

        self.console.print("[cyan]🔧 Docker not found, installing...[/cyan]")
        fd, script_path = tempfile.mkstemp(prefix="get-docker-", suffix=".sh")
        os.close(fd)
        try:
            self.download_service.download_file(
                DOCKER_INSTALL_SCRIPT_URL,
                Path(script_path),
                "Downloading Docker install script...",
            )
            self.command_runner.run(["sh", script_path], check=False)
        finally:
            try:
                os.remove(script_path)
            except OSError:
                pass

        if self.which("systemctl"):
            self.command_runner.run(["systemctl", "enable", "--now", "docker"], check=False)

        if not self.which("docker"):
            raise ManagerError(actionable_error("docker_install_failed"))
        self.console.print("[green]✔ Docker installed[/green]")

    def detect_compose(self) -> Optional[List[str]]:
        if self.command_runner.succeeds(["docker", "compose", "version"]):
            return ["docker", "compose"]
        if self.which("docker-compose"):
            return ["docker-compose"]
        return None

    def ensure_compose(self) -> List[str]:
        compose_cmd = self.detect_compose()
        if compose_cmd:
            return compose_cmd

        self.console.print("[cyan]🔧 docker compose not found, installing...[/cyan]")
        url = COMPOSE_DOWNLOAD_URL.format(
            version=COMPOSE_VERSION,
            system=platform.system(),
            machine=platform.machine(),
        )
        binary_path = Path(COMPOSE_BINARY_PATH)
        try:
            self.download_service.download_file(url, binary_path, "Downloading docker-compose...")
            os.chmod(binary_path, BINARY_MODE)
        except (ManagerError, OSError) as exc:
            self.logger.error("docker-compose download failed: %s", exc)

        if not self.which("docker-compose"):
            raise ManagerError(actionable_error("compose_install_failed"))
        self.console.print("[green]✔ docker-compose installed[/green]")
        return ["docker-compose"]

    def ensure_openssl(self):
        if self.which("openssl"):
            return
        try:
            self.install_package("openssl")
        except ManagerError as exc:
            self.logger.warning("Could not install openssl: %s", exc)
            return
        if not self.which("openssl"):
            self.logger.warning("openssl is still unavailable; credentials are generated in-process.")
