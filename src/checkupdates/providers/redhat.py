from checkupdates.data import RawListing
from checkupdates.providers.api import DEFAULT_TIMEOUT, PkgManager


class Dnf(PkgManager):
    """
    DNF Package Manager

    Lists pending updates through `dnf check-update`, which exits
    with 100 when updates are available and 1 on errors.
    Security updates come from a separate, advisory filtered query.
    """

    binary = "dnf"

    def __init__(self, timeout: int = DEFAULT_TIMEOUT) -> None:
        """
        Initialize the DNF package manager.

        :param timeout: Timeout in seconds for each command invocation.
        """
        super().__init__(timeout)
        self.logger.debug("Initializing RedHat DNF package manager")

    def list_updates(self) -> RawListing:
        """
        List all available updates.

        :return: Raw listing, the first line being the metadata header.
        """
        self.logger.debug("Getting available updates")
        return self.run("dnf check-update")

    def list_security_updates(self) -> RawListing:
        """
        List updates marked as security by the repository advisories.

        :return: Raw listing, the first line being the metadata header.
        """
        self.logger.debug("Getting security updates")
        return self.run("dnf check-update --security")
