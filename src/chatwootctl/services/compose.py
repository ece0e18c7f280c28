"""Container orchestration through the docker compose CLI."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from chatwootctl.constants import CHATWOOT_IMAGE, POSTGRES_IMAGE, REDIS_IMAGE, SERVICE_NAMES
from chatwootctl.errors import ManagerError
from chatwootctl.models import InstallPaths


@dataclass(frozen=True)
class CleanupTargets:
    containers: Tuple[str, ...]
    images: Tuple[str, ...]
    networks: Tuple[str, ...]


def cleanup_targets(paths: InstallPaths) -> CleanupTargets:
    """Resources left behind when ``down`` cannot run, named after the project."""
    project = paths.project_name
    return CleanupTargets(
        containers=tuple(f"{project}-{service}-1" for service in SERVICE_NAMES),
        images=(CHATWOOT_IMAGE, POSTGRES_IMAGE, REDIS_IMAGE),
        networks=(f"{project}_default",),
    )


class ContainerOrchestrator(ABC):
    """The narrow set of compose operations the lifecycle controller needs."""

    @abstractmethod
    def up(self):
        """Start every service in the background."""

    @abstractmethod
    def down(self, remove_images: bool = False, volumes: bool = False, remove_orphans: bool = False):
        """Stop and remove the stack."""

    @abstractmethod
    def ps(self) -> str:
        """Return the current container table."""

    @abstractmethod
    def run_once(self, service: str, command: Sequence[str]):
        """Run ``command`` in a throwaway container of ``service``."""

    @abstractmethod
    def force_remove(self, targets: CleanupTargets):
        """Remove leftover containers, images and networks, ignoring failures."""


class ComposeOrchestrator(ContainerOrchestrator):
    def __init__(self, compose_cmd: List[str], paths: InstallPaths, command_runner, logger):
        self.compose_cmd = list(compose_cmd)
        self.paths = paths
        self.command_runner = command_runner
        self.logger = logger

    def _compose(self, *args: str) -> List[str]:
        return self.compose_cmd + [
            "-f",
            str(self.paths.compose_file),
            "-p",
            self.paths.project_name,
            *args,
        ]

    def _run(self, cmd: List[str], check: bool = True, capture_output: bool = False):
        return self.command_runner.run(
            cmd,
            check=check,
            capture_output=capture_output,
            cwd=str(self.paths.root),
        )

    def up(self):
        self._run(self._compose("up", "-d"))

    def down(self, remove_images: bool = False, volumes: bool = False, remove_orphans: bool = False):
        args = ["down"]
        if remove_images:
            args += ["--rmi", "all"]
        if volumes:
            args.append("--volumes")
        if remove_orphans:
            args.append("--remove-orphans")
        self._run(self._compose(*args))

    def ps(self) -> str:
        result = self._run(self._compose("ps"), capture_output=True)
        return result.stdout or ""

    def run_once(self, service: str, command: Sequence[str]):
        self._run(self._compose("run", "--rm", service, *command))

    def force_remove(self, targets: CleanupTargets):
        commands = [
            ["docker", "rm", "-f", *targets.containers],
            ["docker", "rmi", "-f", *targets.images],
        ]
        commands += [["docker", "network", "rm", network] for network in targets.networks]

        for cmd in commands:
            try:
                result = self.command_runner.run(cmd, check=False, capture_output=True)
            except ManagerError as exc:
                self.logger.debug("Cleanup command could not run: %s", exc)
                continue
            if result.returncode != 0:
                self.logger.debug("Ignored cleanup failure: %s", " ".join(cmd))
