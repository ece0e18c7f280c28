import logging

import click
from rich.logging import RichHandler

from .constants import DEFAULT_INSTALL_DIR, DEFAULT_PRESET
from .core import ChatwootManager, ManagerError, console
from .menu import MenuDispatcher
from .presets import PRESETS, get_preset
from .services.config_loader import ConfigLoader
from .services.host import HostService
from .services.prompter import Prompter


def _resolve_option(cli_value, config, key, default=None):
    if cli_value is not None:
        return cli_value
    if key in config:
        return config[key]
    return default


logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True, show_level=False, show_path=False)],
)


@click.command()
@click.option(
    "--config",
    required=False,
    type=click.Path(),
    help="Path to a YAML configuration file. Defaults to .chatwootctl.yml if present.",
)
@click.option(
    "--install-dir",
    required=False,
    type=click.Path(file_okay=False),
    help=f"Installation directory (default: {DEFAULT_INSTALL_DIR}).",
)
@click.option(
    "--preset",
    required=False,
    type=click.Choice(sorted(PRESETS)),
    help=f"Prompt and confirmation style (default: {DEFAULT_PRESET}).",
)
@click.option("--verbose", is_flag=True, default=None, help="Enable verbose logging")
@click.option("--log-file", type=click.Path(), help="Path to log file")
@click.version_option(package_name="chatwootctl")
def main(config, install_dir, preset, verbose, log_file):
    """Install and manage a Chatwoot deployment with Docker Compose."""
    logger = logging.getLogger("chatwootctl")

    try:
        HostService(logger=logger).require_root()
    except ManagerError as exc:
        raise click.ClickException(str(exc)) from exc

    try:
        config_loader = ConfigLoader()
        config_values = config_loader.load(config_loader.resolve_path(config))
    except ManagerError as exc:
        raise click.ClickException(str(exc)) from exc

    install_dir = _resolve_option(install_dir, config_values, "install_dir", default=DEFAULT_INSTALL_DIR)
    preset_name = _resolve_option(preset, config_values, "preset", default=DEFAULT_PRESET)
    verbose = bool(_resolve_option(verbose, config_values, "verbose", default=False))
    log_file = _resolve_option(log_file, config_values, "log_file")

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
        file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
        logger.addHandler(file_handler)

    prompter = Prompter(console=console)
    try:
        manager = ChatwootManager(
            install_dir=install_dir,
            preset=get_preset(preset_name),
            prompter=prompter,
        )
        exit_code = MenuDispatcher(manager, prompter, console).run()
    except KeyboardInterrupt:
        console.print("[bold red]Operation cancelled by user.[/bold red]")
        logger.info("Operation cancelled by user")
        exit_code = 130
    except ManagerError as exc:
        logger.error(str(exc))
        raise click.ClickException(str(exc)) from exc

    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
