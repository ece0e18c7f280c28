"""Actionable error catalog for chatwootctl."""

from typing import Dict

_ERROR_MESSAGES: Dict[str, Dict[str, str]] = {
    "root_required": {
        "what": "This tool must be run with root privileges.",
        "next": "Re-run the command with `sudo` or as the root user.",
    },
    "docker_install_failed": {
        "what": "Docker installation failed.",
        "next": "Install Docker manually (https://docs.docker.com/engine/install/) and retry.",
    },
    "compose_install_failed": {
        "what": "Docker Compose installation failed.",
        "next": "Install the `docker compose` plugin or the `docker-compose` binary and retry.",
    },
    "command_not_found": {
        "what": "Required command not found: {command}.",
        "next": "Install it and make sure it is on PATH.",
    },
    "settings_missing": {
        "what": "Settings file not found: {path}",
        "next": "Run the install action first to create the configuration.",
    },
    "unknown_preset": {
        "what": "Unknown preset '{name}'.",
        "next": "Choose one of: {choices}.",
    },
}


def actionable_error(code: str, **kwargs: str) -> str:
    if code not in _ERROR_MESSAGES:
        raise KeyError(f"Unknown error catalog key: {code}")

    template = _ERROR_MESSAGES[code]
    what = template["what"].format(**kwargs)
    next_step = template["next"].format(**kwargs)
    return f"{what} Suggested action: {next_step}"
