from checkupdates.data import Platform
from checkupdates.providers.api import DEFAULT_TIMEOUT, PkgManager
from checkupdates.providers.debian import Apt
from checkupdates.providers.redhat import Dnf


class PkgManagerFactory:
    """
    Factory class for creating package manager instances.
    """

    _REGISTRY: dict[Platform, type[PkgManager]] = {
        Platform.RHEL_LIKE: Dnf,
        Platform.DEBIAN_LIKE: Apt,
    }

    @staticmethod
    def create(platform: Platform, timeout: int = DEFAULT_TIMEOUT) -> PkgManager:
        """
        Create a package manager instance for the provided platform.

        :param platform: Platform family of the host.
        :param timeout: Timeout in seconds for each command invocation.
        :return: An instance of the matching package manager.
        """
        if platform not in PkgManagerFactory._REGISTRY:
            raise ValueError(f"Unsupported platform: {platform.value}")

        pkg_impl = PkgManagerFactory._REGISTRY[platform]
        return pkg_impl(timeout=timeout)

    @staticmethod
    def get_registry() -> dict[Platform, type[PkgManager]]:
        """
        Get a copy of the platform to package manager registry.
        """
        return PkgManagerFactory._REGISTRY.copy()
