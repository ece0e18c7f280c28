"""Compose manifest generation."""

from pathlib import Path
from typing import Any, Dict

import yaml

from chatwootctl.constants import (
    CHATWOOT_IMAGE,
    CHATWOOT_INTERNAL_PORT,
    ENV_FILE_NAME,
    POSTGRES_IMAGE,
    REDIS_IMAGE,
)
from chatwootctl.models import InstallPaths


def build_manifest(port: int, postgres_password: str) -> Dict[str, Any]:
    app_service = {
        "image": CHATWOOT_IMAGE,
        "env_file": ENV_FILE_NAME,
        "depends_on": ["postgres", "redis"],
    }
    storage_volume = "./data/storage:/app/storage"

    return {
        "services": {
            "postgres": {
                "image": POSTGRES_IMAGE,
                "environment": {
                    "POSTGRES_DB": "chatwoot",
                    "POSTGRES_USER": "chatwoot",
                    "POSTGRES_PASSWORD": postgres_password,
                },
                "volumes": ["./data/postgres:/var/lib/postgresql/data"],
                "restart": "always",
            },
            "redis": {
                "image": REDIS_IMAGE,
                "env_file": ENV_FILE_NAME,
                "command": ["sh", "-c", 'redis-server --requirepass "$REDIS_PASSWORD"'],
                "volumes": ["./data/redis:/data"],
                "restart": "always",
            },
            "chatwoot": {
                **app_service,
                "ports": [f"{port}:{CHATWOOT_INTERNAL_PORT}"],
                "volumes": [storage_volume],
                "restart": "always",
                "command": f"bundle exec rails s -p {CHATWOOT_INTERNAL_PORT} -b 0.0.0.0",
            },
            "sidekiq": {
                **app_service,
                "volumes": [storage_volume],
                "restart": "always",
                "command": "bundle exec sidekiq -C config/sidekiq.yml",
            },
        }
    }


class ManifestService:
    """Regenerates docker-compose.yml from the current settings on every call."""

    def __init__(self, settings_service, filesystem_service, logger, console):
        self.settings_service = settings_service
        self.filesystem_service = filesystem_service
        self.logger = logger
        self.console = console

    def render(self, paths: InstallPaths) -> str:
        port = self.settings_service.read_port(paths)
        postgres_password = self.settings_service.read_env(paths).get("POSTGRES_PASSWORD", "")
        manifest = build_manifest(port, postgres_password)
        return yaml.safe_dump(manifest, sort_keys=False, default_flow_style=False)

    def render_manifest(self, paths: InstallPaths) -> Path:
        content = self.render(paths)
        self.filesystem_service.write_text(paths.compose_file, content)
        self.logger.debug("Manifest written to %s", paths.compose_file)
        self.console.print("[green]✔ docker-compose.yml generated[/green]")
        return paths.compose_file
