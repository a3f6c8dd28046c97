import logging
import shutil
from abc import ABC, abstractmethod

from invoke import Context
from invoke.exceptions import CommandTimedOut

from checkupdates.data import RawListing

DEFAULT_TIMEOUT = 30


class PkgManager(ABC):
    """
    Abstract Base Class for Package Manager

    Defines the interface for Package Manager implementations.
    Implementations only list pending updates, they never apply them.
    """

    #: Name of the executable the implementation depends on
    binary: str = ""

    def __init__(self, timeout: int = DEFAULT_TIMEOUT) -> None:
        """
        Initialize the Package Manager.

        :param timeout: Timeout in seconds for each command invocation.
        """
        self.timeout = timeout

        # Setup logging
        self.logger = logging.getLogger(__name__)

    @abstractmethod
    def list_updates(self) -> RawListing:
        """
        List available updates.

        This method should be implemented by subclasses to provide
        the specific query for different package managers.

        :return: Raw listing of the package manager output.
        """
        raise NotImplementedError("list_updates method is not implemented.")

    def run(self, command: str) -> RawListing:
        """
        Run a package manager command locally and capture its output.

        The exit code of the command is never treated as a failure,
        since update checking tools conventionally use non-zero exit
        codes to signal pending updates. Only a missing binary, a
        command that cannot be executed or a timeout are reported,
        as an unavailable listing.

        :param command: Command line to run.
        :return: Raw listing of standard output.
        """
        if shutil.which(self.binary) is None:
            self.logger.error("Unable to find %s in PATH", self.binary)
            return RawListing.unavailable(f"{self.binary} not found")

        self.logger.debug("Running: %s (timeout: %ss)", command, self.timeout)

        try:
            result = Context().run(
                command,
                hide=True,
                warn=True,
                in_stream=False,
                timeout=self.timeout,
                env={"LC_ALL": "C"},
            )
        except CommandTimedOut:
            self.logger.error(
                "Command '%s' timed out after %s seconds", command, self.timeout
            )
            return RawListing.unavailable(f"{command} timed out")
        except OSError as e:
            self.logger.error("Unable to execute '%s': %s", command, e)
            return RawListing.unavailable(str(e))

        if result.failed:
            self.logger.debug(
                "Command '%s' exited with %d: %s",
                command,
                result.return_code,
                result.stderr.strip(),
            )

        return RawListing.from_output(result.stdout, result.return_code)
