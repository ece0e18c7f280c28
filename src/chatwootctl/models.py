"""Shared domain models for chatwootctl."""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, List, Optional, Tuple

from .constants import (
    COMPOSE_FILE_NAME,
    DOMAIN_MARKER_NAME,
    ENV_FILE_NAME,
    PORT_MARKER_NAME,
)


@dataclass(frozen=True)
class InstallPaths:
    """Every file the tool manages, derived from one installation directory."""

    root: Path

    @classmethod
    def from_dir(cls, install_dir) -> "InstallPaths":
        return cls(root=Path(install_dir))

    @property
    def env_file(self) -> Path:
        return self.root / ENV_FILE_NAME

    @property
    def compose_file(self) -> Path:
        return self.root / COMPOSE_FILE_NAME

    @property
    def port_marker(self) -> Path:
        return self.root / PORT_MARKER_NAME

    @property
    def domain_marker(self) -> Path:
        return self.root / DOMAIN_MARKER_NAME

    @property
    def data_dir(self) -> Path:
        return self.root / "data"

    @property
    def postgres_data_dir(self) -> Path:
        return self.data_dir / "postgres"

    @property
    def project_name(self) -> str:
        # Same normalization docker compose applies to a directory name:
        # the project name must start with a letter or digit.
        name = re.sub(r"[^a-z0-9_-]", "", self.root.name.lower())
        name = re.sub(r"^[^a-z0-9]+", "", name)
        return name or "chatwoot"


@dataclass(frozen=True)
class Preset:
    """Prompt wording and confirmation rules for one flavour of the tool."""

    name: str
    title: str
    default_domain: Optional[str]
    domain_required: bool
    confirm_tokens: FrozenSet[str]
    confirm_case_sensitive: bool
    include_mail_settings: bool = False
    confirm_hint: str = "[y/N]"

    def is_confirmed(self, answer: str) -> bool:
        answer = answer.strip()
        if self.confirm_case_sensitive:
            return answer in self.confirm_tokens
        return answer.lower() in {token.lower() for token in self.confirm_tokens}


@dataclass
class EnvironmentSettings:
    domain: str
    port: int
    postgres_password: str
    redis_password: str
    secret_key_base: str
    mail_settings: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def public_url(self) -> str:
        return f"https://{self.domain}"

    def to_env_lines(self) -> List[str]:
        lines = [
            "RAILS_ENV=production",
            "INSTALLATION_ENV=docker",
            f"FRONTEND_URL={self.public_url}",
            f"BACKEND_URL={self.public_url}",
            f"SECRET_KEY_BASE={self.secret_key_base}",
            "POSTGRES_HOST=postgres",
            "POSTGRES_PORT=5432",
            "POSTGRES_USERNAME=chatwoot",
            f"POSTGRES_PASSWORD={self.postgres_password}",
            "POSTGRES_DATABASE=chatwoot",
            "REDIS_URL=redis://redis:6379",
            f"REDIS_PASSWORD={self.redis_password}",
        ]
        lines.extend(f"{key}={value}" for key, value in self.mail_settings)
        return lines


@dataclass(frozen=True)
class AccessInfo:
    local_url: str
    public_url: str
