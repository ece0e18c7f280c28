import logging
from typing import Callable, List, Optional

import requests
from rich.console import Console

from .constants import DB_PREPARE_COMMAND, DEFAULT_INSTALL_DIR, DEFAULT_PRESET, DIR_MODE
from .errors import ManagerError
from .models import AccessInfo, InstallPaths, Preset
from .presets import get_preset
from .services.command_runner import CommandRunner
from .services.compose import ComposeOrchestrator, ContainerOrchestrator, cleanup_targets
from .services.dependencies import DependencyService
from .services.download import DownloadService
from .services.filesystem import FileSystemService, installation_status, is_empty_dir
from .services.host import HostService
from .services.manifest import ManifestService
from .services.prompter import Prompter
from .services.settings import SettingsService

console = Console()
logger = logging.getLogger("chatwootctl")

OrchestratorFactory = Callable[[List[str], InstallPaths], ContainerOrchestrator]


class ChatwootManager:
    """Install, inspect, restart and remove one Chatwoot deployment.

    Whether Chatwoot is installed is derived from the filesystem on every
    call; no status record is persisted.
    """

    def __init__(
        self,
        install_dir: str = DEFAULT_INSTALL_DIR,
        preset: Optional[Preset] = None,
        prompter: Optional[Prompter] = None,
        dependency_service: Optional[DependencyService] = None,
        orchestrator_factory: Optional[OrchestratorFactory] = None,
        host_service: Optional[HostService] = None,
    ):
        self.paths = InstallPaths.from_dir(install_dir)
        self.preset = preset or get_preset(DEFAULT_PRESET)
        self.console = console
        self.prompter = prompter or Prompter(console=console)

        self.command_runner = CommandRunner(logger=logger)
        self.filesystem_service = FileSystemService(logger=logger, console=console)
        self.settings_service = SettingsService(
            filesystem_service=self.filesystem_service,
            logger=logger,
            console=console,
        )
        self.manifest_service = ManifestService(
            settings_service=self.settings_service,
            filesystem_service=self.filesystem_service,
            logger=logger,
            console=console,
        )
        self.host_service = host_service or HostService(logger=logger)
        self.dependency_service = dependency_service or DependencyService(
            command_runner=self.command_runner,
            download_service=DownloadService(
                logger=logger,
                console=console,
                requests_module=requests,
            ),
            logger=logger,
            console=console,
        )
        self.orchestrator_factory = orchestrator_factory or self._compose_orchestrator

    def _compose_orchestrator(self, compose_cmd: List[str], paths: InstallPaths) -> ContainerOrchestrator:
        return ComposeOrchestrator(
            compose_cmd=compose_cmd,
            paths=paths,
            command_runner=self.command_runner,
            logger=logger,
        )

    def is_installed(self) -> bool:
        return installation_status(self.paths)

    def _orchestrator(self) -> ContainerOrchestrator:
        compose_cmd = self.dependency_service.ensure_dependencies()
        return self.orchestrator_factory(compose_cmd, self.paths)

    def _report_not_installed(self):
        self.console.print("[red]✖ Chatwoot is not installed[/red]")
        logger.debug("No installation found at %s", self.paths.root)

    def install_or_update(self) -> AccessInfo:
        logger.info("Installing or updating Chatwoot in %s", self.paths.root)
        orchestrator = self._orchestrator()
        self.filesystem_service.ensure_dir(self.paths.root, mode=DIR_MODE)

        settings = self.settings_service.ensure_settings(self.paths, self.preset, self.prompter)
        self.manifest_service.render_manifest(self.paths)

        if is_empty_dir(self.paths.postgres_data_dir):
            self.filesystem_service.ensure_dir(self.paths.postgres_data_dir)
            self.console.print("[cyan]Preparing the Chatwoot database (first run)...[/cyan]")
            orchestrator.run_once("chatwoot", DB_PREPARE_COMMAND.split())

        orchestrator.up()

        access = self.access_info(settings.port, settings.domain)
        self.console.print("[green]✔ Chatwoot is up and running[/green]")
        self.console.print(f"🌍 Server address: {access.local_url}")
        self.console.print(f"🔗 Domain behind reverse proxy: {access.public_url}")
        return access

    def access_info(self, port: int, domain: str) -> AccessInfo:
        ip = self.host_service.primary_ip() or "<server-ip>"
        return AccessInfo(local_url=f"http://{ip}:{port}", public_url=f"https://{domain}")

    def show_status(self) -> bool:
        if not self.is_installed():
            self._report_not_installed()
            return False

        orchestrator = self._orchestrator()
        self.console.print(orchestrator.ps(), markup=False, highlight=False)
        return True

    def restart_service(self) -> bool:
        if not self.is_installed():
            self._report_not_installed()
            return False

        orchestrator = self._orchestrator()
        orchestrator.down()
        orchestrator.up()
        self.console.print("[green]✔ Chatwoot services restarted[/green]")
        return True

    def confirm_uninstall(self) -> bool:
        self.console.print(
            "[yellow]⚠ Uninstalling removes all Chatwoot data, containers and images![/yellow]"
        )
        answer = self.prompter.ask(f"❓ Really uninstall Chatwoot? {self.preset.confirm_hint}")
        return self.preset.is_confirmed(answer)

    def uninstall_all(self) -> bool:
        if not self.is_installed():
            self._report_not_installed()
            return False

        if not self.confirm_uninstall():
            self.console.print("[yellow]⚠ Uninstall cancelled[/yellow]")
            return False

        orchestrator = self._orchestrator()
        try:
            orchestrator.down(remove_images=True, volumes=True, remove_orphans=True)
        except ManagerError as exc:
            logger.warning("Ignoring failed teardown: %s", exc)

        orchestrator.force_remove(cleanup_targets(self.paths))
        self.filesystem_service.remove_tree(self.paths.root)

        self.console.print("[green]✔ Chatwoot has been completely uninstalled[/green]")
        return True
