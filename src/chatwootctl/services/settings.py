"""Environment settings creation and parsing."""

import base64
import secrets
from typing import Dict, List, Optional, Tuple
from urllib.parse import urlparse

from chatwootctl.constants import (
    DEFAULT_PORT,
    PASSWORD_EXCLUDED_CHARS,
    PASSWORD_LENGTH,
    PRIVATE_FILE_MODE,
    SECRET_HEX_BYTES,
)
from chatwootctl.errors import ManagerError
from chatwootctl.errors_catalog import actionable_error
from chatwootctl.models import EnvironmentSettings, InstallPaths, Preset

MAIL_PLACEHOLDERS: List[Tuple[str, str]] = [
    ("MAILER_SENDER_EMAIL", "Chatwoot <noreply@{domain}>"),
    ("SMTP_ADDRESS", ""),
    ("SMTP_PORT", "587"),
    ("SMTP_USERNAME", ""),
    ("SMTP_PASSWORD", ""),
    ("SMTP_AUTHENTICATION", "login"),
    ("SMTP_ENABLE_STARTTLS_AUTO", "true"),
]
MAIL_KEY_PREFIXES = ("MAILER_", "SMTP_")

_EXCLUDED = str.maketrans("", "", PASSWORD_EXCLUDED_CHARS)


def generate_password(length: int = PASSWORD_LENGTH) -> str:
    """Random base64 token with ``=``, ``+`` and ``/`` stripped, exactly ``length`` long."""
    token = ""
    while len(token) < length:
        raw = base64.b64encode(secrets.token_bytes(length)).decode("ascii")
        token += raw.translate(_EXCLUDED)
    return token[:length]


def generate_secret() -> str:
    return secrets.token_hex(SECRET_HEX_BYTES)


def parse_env_file(content: str) -> Dict[str, str]:
    values: Dict[str, str] = {}
    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        values[key.strip()] = value
    return values


def parse_port(value: str) -> Optional[int]:
    try:
        port = int(value)
    except (TypeError, ValueError):
        return None
    if 1 <= port <= 65535:
        return port
    return None


class SettingsService:
    """Creates the settings file on first install and reads it afterwards."""

    def __init__(self, filesystem_service, logger, console):
        self.filesystem_service = filesystem_service
        self.logger = logger
        self.console = console

    def ensure_settings(self, paths: InstallPaths, preset: Preset, prompter) -> EnvironmentSettings:
        if paths.env_file.exists():
            self.logger.info("Reusing existing settings at %s", paths.env_file)
            return self.read_settings(paths)

        settings = self.collect_settings(preset, prompter)
        self.write_settings(paths, settings)
        self.console.print("[green]✔ .env settings file created[/green]")
        return settings

    def collect_settings(self, preset: Preset, prompter) -> EnvironmentSettings:
        domain = self._ask_domain(preset, prompter)
        port = self._ask_port(prompter)

        postgres_password = prompter.ask(
            "🔒 PostgreSQL password (leave empty to generate)", password=True
        ) or generate_password()
        redis_password = prompter.ask(
            "🔒 Redis password (leave empty to generate)", password=True
        ) or generate_password()
        secret_key_base = prompter.ask(
            "🔑 SECRET_KEY_BASE (leave empty to generate)", password=True
        ) or generate_secret()

        mail_settings: List[Tuple[str, str]] = []
        if preset.include_mail_settings:
            mail_settings = [(key, value.format(domain=domain)) for key, value in MAIL_PLACEHOLDERS]

        return EnvironmentSettings(
            domain=domain,
            port=port,
            postgres_password=postgres_password,
            redis_password=redis_password,
            secret_key_base=secret_key_base,
            mail_settings=mail_settings,
        )

    def _ask_domain(self, preset: Preset, prompter) -> str:
        if preset.domain_required:
            while True:
                domain = prompter.ask("🌍 Chatwoot domain (e.g. chat.example.com)")
                if domain:
                    return domain
                self.console.print("[red]✖ Domain cannot be empty, please try again[/red]")

        domain = prompter.ask(f"🌍 Chatwoot domain (default {preset.default_domain})")
        return domain or preset.default_domain

    def _ask_port(self, prompter) -> int:
        while True:
            answer = prompter.ask(f"📦 Port (default {DEFAULT_PORT})")
            if not answer:
                return DEFAULT_PORT
            port = parse_port(answer)
            if port is not None:
                return port
            self.console.print("[red]✖ Port must be a number between 1 and 65535[/red]")

    def write_settings(self, paths: InstallPaths, settings: EnvironmentSettings):
        self.filesystem_service.ensure_dir(paths.root)
        content = "\n".join(settings.to_env_lines()) + "\n"
        self.filesystem_service.write_text(paths.env_file, content, mode=PRIVATE_FILE_MODE)
        self.filesystem_service.write_text(paths.port_marker, f"{settings.port}\n")
        self.filesystem_service.write_text(paths.domain_marker, f"{settings.domain}\n")
        self.logger.debug("Settings written to %s", paths.env_file)

    def read_env(self, paths: InstallPaths) -> Dict[str, str]:
        if not paths.env_file.exists():
            raise ManagerError(actionable_error("settings_missing", path=str(paths.env_file)))
        return parse_env_file(paths.env_file.read_text(encoding="utf-8"))

    def read_port(self, paths: InstallPaths) -> int:
        port = parse_port(self.filesystem_service.read_marker(paths.port_marker) or "")
        if port is None:
            self.logger.warning("Port marker missing or invalid, using default %s", DEFAULT_PORT)
            return DEFAULT_PORT
        return port

    def read_domain(self, paths: InstallPaths, values: Optional[Dict[str, str]] = None) -> str:
        domain = self.filesystem_service.read_marker(paths.domain_marker)
        if domain:
            return domain
        values = values if values is not None else self.read_env(paths)
        return urlparse(values.get("FRONTEND_URL", "")).hostname or ""

    def read_settings(self, paths: InstallPaths) -> EnvironmentSettings:
        values = self.read_env(paths)
        return EnvironmentSettings(
            domain=self.read_domain(paths, values),
            port=self.read_port(paths),
            postgres_password=values.get("POSTGRES_PASSWORD", ""),
            redis_password=values.get("REDIS_PASSWORD", ""),
            secret_key_base=values.get("SECRET_KEY_BASE", ""),
            mail_settings=[
                (key, value) for key, value in values.items() if key.startswith(MAIL_KEY_PREFIXES)
            ],
        )
