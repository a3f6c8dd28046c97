from checkupdates.data import RawListing
from checkupdates.providers.api import DEFAULT_TIMEOUT, PkgManager


class Apt(PkgManager):
    """
    Apt Package Manager

    Apt has no clean security-only query, so a single listing is
    returned and security relevance is decided by the parser.
    """

    binary = "apt"

    def __init__(self, timeout: int = DEFAULT_TIMEOUT) -> None:
        """
        Initialize the Apt package manager.

        :param timeout: Timeout in seconds for each command invocation.
        """
        super().__init__(timeout)
        self.logger.debug("Initializing Debian Apt package manager")

    def list_updates(self) -> RawListing:
        """
        List upgradable packages.

        Output lines look like:
        bash/stable-security 5.2.15-2+b8 amd64 [upgradable from: 5.2.15-2+b7]

        :return: Raw listing, the first line being the "Listing..." header.
        """
        self.logger.debug("Getting upgradable packages")
        return self.run("apt list --upgradable")
