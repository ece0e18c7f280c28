"""Defaults shared across chatwootctl services."""

DEFAULT_INSTALL_DIR = "/root/data/chatwoot"
DEFAULT_PORT = 6698
DEFAULT_PRESET = "strict"

ENV_FILE_NAME = ".env"
COMPOSE_FILE_NAME = "docker-compose.yml"
PORT_MARKER_NAME = ".port"
DOMAIN_MARKER_NAME = ".domain"

PASSWORD_LENGTH = 24
PASSWORD_EXCLUDED_CHARS = "=+/"
SECRET_HEX_BYTES = 64

CHATWOOT_IMAGE = "chatwoot/chatwoot:latest"
POSTGRES_IMAGE = "pgvector/pgvector:pg16"
REDIS_IMAGE = "redis:6.2"
CHATWOOT_INTERNAL_PORT = 3000

SERVICE_NAMES = ("chatwoot", "sidekiq", "postgres", "redis")
DB_PREPARE_COMMAND = "bundle exec rails db:chatwoot_prepare"

DOCKER_INSTALL_SCRIPT_URL = "https://get.docker.com"
COMPOSE_VERSION = "v2.24.5"
COMPOSE_DOWNLOAD_URL = (
    "https://github.com/docker/compose/releases/download/{version}/docker-compose-{system}-{machine}"
)
COMPOSE_BINARY_PATH = "/usr/local/bin/docker-compose"
PACKAGE_MANAGERS = ("apt-get", "yum", "dnf")

DIR_MODE = 0o755
PRIVATE_FILE_MODE = 0o600
BINARY_MODE = 0o755
