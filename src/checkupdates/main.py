import importlib
import json
import logging
import os
import sys
import tomllib
from pathlib import Path
from typing import Callable

import typer
import yaml

from checkupdates import __version__, app_config, cli
from checkupdates.config import Configuration
from checkupdates.data import Severity

logger = logging.getLogger(__name__)

# Base class of the usage errors raised by the click typer runs on,
# which may be a copy vendored inside typer rather than click itself.
ClickException = importlib.import_module(typer.BadParameter.__module__).ClickException

# Environment variable pointing to an explicit configuration file
CONFIG_ENV = "CHECK_UPDATES_CONFIG"

# List of configuration file paths to check, in order of precedence
# The search stops at first match, so ordering matters.
CONFPATHS: list[Path] = [
    Path("/etc") / "check_updates" / "config.yaml",
    Path("/etc") / "check_updates" / "config.toml",
    Path("/etc") / "check_updates" / "config.json",
    Path.home() / ".config" / "check_updates" / "config.yaml",
    Path.home() / ".config" / "check_updates" / "config.toml",
    Path.home() / ".config" / "check_updates" / "config.json",
]

LOADERS: dict[str, Callable] = {
    "yaml": yaml.safe_load,
    "yml": yaml.safe_load,
    "toml": tomllib.load,
    "json": json.load,
}


def setup_logging(log_level: str, log_file: str | None = None) -> None:
    """
    Set up logging configuration.

    Logs go to the log file if one is given, standard error otherwise.
    Standard output is reserved for the plugin status line.

    :param log_level: The logging level to set.
    :param log_file: Optional log file path to write logs to.
    """
    handler: logging.Handler

    if log_file:
        handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(log_level)

    logging.basicConfig(
        level=logging.WARN,  # Default to WARN for root logger, avoid library noise
        handlers=[handler],
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    logging.getLogger("checkupdates").setLevel(log_level)
    logging.getLogger(__name__).debug("Logging initialized with level: %s", log_level)


def get_confpaths() -> list[Path]:
    """
    Get configuration file candidates, the environment override first.
    """
    override = os.environ.get(CONFIG_ENV)

    if override:
        return [Path(override)] + CONFPATHS

    return CONFPATHS


def load_first_config(config: Configuration) -> bool:
    """
    Load the first configuration file found in the list of paths.
    Exits with UNKNOWN status in case of issues beyond ENOENT and EISDIR.

    :param config: The configuration object to populate.

    :return: True if a configuration file was loaded, False otherwise.
    """
    for confpath in get_confpaths():
        logger.debug("Trying config file at %s", confpath)
        if not confpath.exists():
            continue

        ext = confpath.suffix[1:].lower()
        loader = LOADERS.get(ext)

        if not loader:
            logger.error("No working loaders for extension: %s, skipping.", ext)
            continue

        try:
            if config.from_file(filepath=str(confpath), loader=loader, silent=True):
                logger.debug("Loaded config file from %s", confpath)
                return True
            else:
                logger.warning("Failed to load config file from %s", confpath)
        except Exception as e:
            # Exception will contain the actual error message
            logger.error("Startup error: %s", e)
            sys.exit(Severity.UNKNOWN.exit_code)

    return False


def main() -> None:
    """
    Program Entry Point
    """
    # Load the first configuration file found, then the environment
    config_loaded = load_first_config(app_config)
    app_config.from_env()

    # initialize logging and setup handlers depending on config
    log_file: str | None = app_config["options"].get("log_file")
    debug_mode: bool = app_config["options"].get("debug")

    try:
        if debug_mode:
            setup_logging("DEBUG")
        else:
            setup_logging(app_config["options"]["log_level"], log_file)
    except (OSError, ValueError) as e:
        sys.stderr.write(f"Startup error setting up logging: {e}\n")
        sys.exit(Severity.UNKNOWN.exit_code)

    logger.debug("check_updates version %s", __version__)

    if not config_loaded:
        logger.debug("No configuration file found. Using defaults.")

    try:
        app_config.policy()
    except (KeyError, TypeError, ValueError) as e:
        logger.error("Startup error, invalid thresholds: %s", e)
        sys.exit(Severity.UNKNOWN.exit_code)

    try:
        app_config.timeout()
    except (KeyError, TypeError, ValueError) as e:
        logger.error("Startup error, invalid timeout: %s", e)
        sys.exit(Severity.UNKNOWN.exit_code)

    # Usage errors must not be confused with a CRITICAL status
    try:
        code = cli.app(standalone_mode=False)
    except ClickException as e:
        e.show()
        sys.exit(Severity.UNKNOWN.exit_code)
    except typer.Abort:
        sys.exit(Severity.UNKNOWN.exit_code)

    sys.exit(code or 0)


if __name__ == "__main__":
    main()
