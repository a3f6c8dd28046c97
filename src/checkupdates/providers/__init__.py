from .api import PkgManager
from .debian import Apt
from .factory import PkgManagerFactory
from .redhat import Dnf

__all__ = [
    "Apt",
    "Dnf",
    "PkgManager",
    "PkgManagerFactory",
]
