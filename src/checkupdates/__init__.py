import importlib.metadata

from checkupdates.config import Configuration

# Global Instance: configuration
# Populated at startup by main, then read by the CLI to build the
# threshold policy and timeouts handed to the check.

app_config = Configuration()  # Has default values out of the box

# Current software version, imported from pyproject metadata
__version__ = importlib.metadata.version("check-updates")

__all__ = ["__version__", "app_config"]
