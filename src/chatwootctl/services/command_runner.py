"""Subprocess execution service for chatwootctl."""

import subprocess
from typing import List, Optional

from chatwootctl.errors import ManagerError
from chatwootctl.errors_catalog import actionable_error


class CommandRunner:
    """Runs external commands with consistent error handling.

    Output goes to the terminal unless ``capture_output`` is set.
    """

    def __init__(self, logger):
        self.logger = logger

    def run(
        self,
        cmd: List[str],
        check: bool = True,
        capture_output: bool = False,
        cwd: Optional[str] = None,
    ) -> subprocess.CompletedProcess:
        cmd_str = " ".join(cmd)
        self.logger.debug("Executing: %s", cmd_str)

        try:
            result = subprocess.run(
                cmd,
                text=True,
                capture_output=capture_output,
                cwd=cwd,
            )
        except FileNotFoundError as exc:
            raise ManagerError(actionable_error("command_not_found", command=cmd[0])) from exc
        except OSError as exc:
            raise ManagerError(f"Failed to execute command: {cmd_str}. {exc}") from exc

        if capture_output and result.stdout:
            self.logger.debug("Command output: %s", result.stdout.strip())

        if result.returncode == 0 or not check:
            return result

        stderr = (result.stderr or "").strip() if capture_output else ""
        message = f"Command failed ({result.returncode}): {cmd_str}"
        if stderr:
            message = f"{message}\n{stderr}"
        raise ManagerError(message)

    def succeeds(self, cmd: List[str], cwd: Optional[str] = None) -> bool:
        """Return True when ``cmd`` exits 0; a missing executable counts as failure."""
        try:
            result = self.run(cmd, check=False, capture_output=True, cwd=cwd)
        except ManagerError:
            return False
        return result.returncode == 0
