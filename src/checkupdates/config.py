import copy
import errno
import json
import logging
import os
import tomllib
from collections.abc import Callable
from typing import Any, BinaryIO

import yaml

from checkupdates.data import ThresholdPolicy

ENV_PREFIX = "CHECK_UPDATES"


class Configuration(dict):
    """
    Hold configuration values for the application.
    Extends a native dict to store the options and thresholds
    sections of the configuration file.
    """

    DEFAULTS: dict = {
        "options": {
            "debug": False,  # Debug mode, log to console at DEBUG level
            "log_level": "WARNING",  # Default log level for the application
            "log_file": None,  # Log file, logs go to stderr if unset
            "timeout": 30,  # Timeout for each package manager command (in seconds)
        },
        "thresholds": {
            "warning": 5,  # Warning if more updates than this
            "critical": 10,  # Critical if more updates than this
            "security_critical": 1,  # Critical if more security updates than this
        },
    }

    def __init__(self) -> None:
        """
        Initialize the Configuration object with default values.
        """
        dict.__init__(self, copy.deepcopy(self.DEFAULTS))
        self.logger = logging.getLogger(__name__)

    def from_toml(self, filepath: str, silent: bool = False) -> bool:
        """
        Populate the configuration structure from a toml file

        This method is a convenience wrapper used for shorthand
        for the from_file method, with tomllib.load() as the loader.

        see `from_file()`for details.
        """
        return self.from_file(filepath, tomllib.load, silent=silent)

    def from_yaml(self, filepath: str, silent: bool = False) -> bool:
        """
        Populate the configuration structure from a yaml file

        see `from_file()`for details.
        """
        return self.from_file(filepath, yaml.safe_load, silent=silent)

    def from_json(self, filepath: str, silent: bool = False) -> bool:
        """
        Populate the configuration structure from a json file

        see `from_file()`for details.
        """
        return self.from_file(filepath, json.load, silent=silent)

    def from_file(
        self, filepath: str, loader: Callable[[BinaryIO], dict], silent: bool = False
    ) -> bool:
        """
        Populate the configuration structure from a file, with a
        specified loader function callable.

        The loader must be a reference to a callable that takes a
        file handle and returns a mapping of the data contained within.

        :param filepath: Path to the configuration file
        :param loader: Callable returning a mapping from a file handle
        :param silent: Return False instead of raising if the file is missing
        :return: True if the file was loaded
        """
        try:
            with open(filepath, "rb") as f:
                data = loader(f)
        except IOError as e:
            if silent and e.errno in (errno.ENOENT, errno.EISDIR):
                return False

            e.strerror = f"Unable to load config file {filepath}: {e.strerror}"

            raise

        # An empty yaml document loads as None
        return self.update_from_mapping(data or {})

    def from_env(self, prefix: str = ENV_PREFIX) -> bool:
        """
        Populate the configuration structure from environment variables.

        Variables are named PREFIX_SECTION_KEY, for instance
        CHECK_UPDATES_THRESHOLDS_WARNING=20. Values are parsed as
        yaml scalars, so numbers and booleans get their native type.

        :param prefix: Prefix of the environment variables
        :return: True once the environment has been processed
        """
        mapping: dict[str, dict[str, Any]] = {}

        for name, raw in os.environ.items():
            if not name.startswith(f"{prefix}_"):
                continue

            remainder = name[len(prefix) + 1 :].lower()
            section = next(
                (s for s in self.DEFAULTS if remainder.startswith(f"{s}_")), None
            )

            if section is None:
                continue

            key = remainder[len(section) + 1 :]
            if key not in self.DEFAULTS[section]:
                self.logger.warning(
                    "Environment variable %s is not a valid %s key, ignoring",
                    name,
                    section,
                )
                continue

            try:
                value = yaml.safe_load(raw)
            except yaml.YAMLError:
                value = raw

            mapping.setdefault(section, {})[key] = value

        return self.update_from_mapping(mapping)

    def update_from_mapping(self, *mapping: dict, **kwargs: dict) -> bool:
        """
        Populate values like the native dict.update() method, but
        only if the key is a valid root configuration key.

        This will also deep merge the values from the mapping
        if they are also dicts.
        """
        mappings = []

        if len(mapping) == 1:
            if hasattr(mapping[0], "items"):
                mappings.append(mapping[0].items())
            else:
                mappings.append(mapping[0])
        elif len(mapping) > 1:
            raise TypeError(
                f"Config mapping expected at most 1 positional argument, "
                f"got {len(mapping)}"
            )

        mappings.append(kwargs.items())

        # Parse and filter mappings
        for items in mappings:
            for k, v in items:
                if k in self.DEFAULTS:
                    if isinstance(self[k], dict) and isinstance(v, dict):
                        # deep merge the dicts
                        self.deep_update(self[k], v)
                    else:
                        self[k] = v
                else:
                    self.logger.warning(
                        "Configuration key %s is not a valid root key, ignoring", k
                    )

        return True

    def deep_update(self, d: dict, u: dict) -> dict:
        """
        Recursively update a dictionary with another dictionary.
        Ensures nested dicts are updated rather than replaced.
        """
        for k, v in u.items():
            if isinstance(v, dict) and k in d and isinstance(d[k], dict):
                self.deep_update(d[k], v)
            else:
                d[k] = v
        return d

    def timeout(self) -> int:
        """
        Get the per command timeout from the options section.

        :return: Timeout in seconds, a positive integer
        """
        timeout = self["options"]["timeout"]

        # bool is an int subclass, but "timeout: true" is not a timeout
        if isinstance(timeout, bool) or not isinstance(timeout, int) or timeout <= 0:
            raise ValueError(f"Timeout must be a positive integer, got {timeout!r}")

        return timeout

    def policy(self) -> ThresholdPolicy:
        """
        Build the threshold policy from the thresholds section.

        :return: ThresholdPolicy
        """
        thresholds = self["thresholds"]

        return ThresholdPolicy(
            warning_threshold=int(thresholds["warning"]),
            critical_threshold=int(thresholds["critical"]),
            security_critical_threshold=int(thresholds["security_critical"]),
        )
