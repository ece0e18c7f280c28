"""Filesystem helpers for chatwootctl."""

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional

from rich.console import Console

from chatwootctl.errors import ManagerError
from chatwootctl.models import InstallPaths


def installation_status(paths: InstallPaths) -> bool:
    """Whether an installation exists. Directory presence is the only state kept."""
    return paths.root.is_dir()


def is_empty_dir(path: Path) -> bool:
    if not path.is_dir():
        return True
    return not any(path.iterdir())


class FileSystemService:
    """Encapsulates file and directory side effects."""

    def __init__(self, logger: logging.Logger, console: Console):
        self.logger = logger
        self.console = console

    def ensure_dir(self, path: Path, mode: Optional[int] = None):
        path.mkdir(parents=True, exist_ok=True)
        if mode is not None:
            self.set_permissions(path, mode)

    def set_permissions(self, path: Path, mode: int):
        try:
            os.chmod(path, mode)
        except OSError as exc:
            self.logger.warning("Could not set permissions on %s: %s", path, exc)

    def write_text(self, path: Path, content: str, mode: Optional[int] = None):
        """Replace ``path`` atomically so readers never see a partial file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_path = tempfile.mkstemp(prefix=f".{path.name}-", dir=str(path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as file_obj:
                file_obj.write(content)
            if mode is not None:
                os.chmod(temp_path, mode)
            os.replace(temp_path, path)
        except OSError as exc:
            raise ManagerError(f"Could not write {path}: {exc}") from exc
        finally:
            if os.path.exists(temp_path):
                try:
                    os.remove(temp_path)
                except OSError:
                    pass

    def read_marker(self, path: Path) -> Optional[str]:
        try:
            value = path.read_text(encoding="utf-8").strip()
        except OSError:
            return None
        return value or None

    def remove_tree(self, path: Path):
        if not path.exists():
            return
        try:
            shutil.rmtree(path)
        except OSError as exc:
            raise ManagerError(f"Could not remove {path}: {exc}") from exc
        self.logger.debug("Removed directory: %s", path)
