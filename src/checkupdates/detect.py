# Detection Module
# This module identifies the distribution family of the local host
# from well known files under /etc. It never raises: files that are
# missing or unreadable simply do not match.

import logging
from collections.abc import Callable
from pathlib import Path

from checkupdates.data import Platform

logger = logging.getLogger(__name__)

REDHAT_RELEASE = Path("etc/redhat-release")
OS_RELEASE = Path("etc/os-release")
DEBIAN_VERSION = Path("etc/debian_version")

RHEL_KEYWORDS = ("rhel", "centos", "fedora")
DEBIAN_KEYWORDS = ("debian", "ubuntu")


def _exists(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError as e:
        logger.debug("Unable to stat %s: %s", path, e)
        return False


def _contains(path: Path, keywords: tuple[str, ...]) -> bool:
    """
    Check whether a file contains any of the keywords, case-insensitive.

    :param path: File to search
    :param keywords: Lowercase keywords to look for
    :return: True if any keyword is found, False otherwise or if unreadable
    """
    try:
        content = path.read_text(encoding="utf-8", errors="replace").lower()
    except OSError as e:
        logger.debug("Unable to read %s: %s", path, e)
        return False

    return any(keyword in content for keyword in keywords)


def _rules(root: Path) -> list[tuple[Platform, Callable[[], bool]]]:
    """
    Ordered detection rules. First match wins.
    """
    return [
        (
            Platform.RHEL_LIKE,
            lambda: _exists(root / REDHAT_RELEASE)
            or _contains(root / OS_RELEASE, RHEL_KEYWORDS),
        ),
        (
            Platform.DEBIAN_LIKE,
            lambda: _exists(root / DEBIAN_VERSION)
            or _contains(root / OS_RELEASE, DEBIAN_KEYWORDS),
        ),
    ]


def detect(root: Path = Path("/")) -> Platform:
    """
    Detect the platform family of the host.

    :param root: Filesystem root to inspect, for testing
    :return: Detected Platform, Platform.UNKNOWN if nothing matched
    """
    for platform, matches in _rules(root):
        if matches():
            logger.debug("Detected platform: %s", platform.value)
            return platform

    logger.info("Unable to detect platform under %s", root)
    return Platform.UNKNOWN
