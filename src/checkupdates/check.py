# Check Module
# Runs a single evaluation: select the platform, query the package
# manager, count the updates, classify and render the result.

import logging
from pathlib import Path

from checkupdates.classify import classify
from checkupdates.data import (
    CheckResult,
    Mode,
    Platform,
    Severity,
    ThresholdPolicy,
    UpdateCounts,
)
from checkupdates.detect import detect
from checkupdates.errors import DetectionError, ParseError, ToolUnavailableError
from checkupdates.parser import parse
from checkupdates.providers import Apt, Dnf, PkgManagerFactory
from checkupdates.providers.api import DEFAULT_TIMEOUT
from checkupdates.reporting import (
    CHECK_FAILED,
    DETECTION_FAILED,
    render,
    render_unknown,
)

logger = logging.getLogger(__name__)

_FORCED_PLATFORMS: dict[Mode, Platform] = {
    Mode.RHEL: Platform.RHEL_LIKE,
    Mode.DEBIAN: Platform.DEBIAN_LIKE,
}


def resolve_platform(mode: Mode, root: Path = Path("/")) -> Platform:
    """
    Resolve the platform to check from the selected mode.

    :param mode: Mode selected on the command line
    :param root: Filesystem root used for detection in AUTO mode
    :return: Platform to check
    """
    if mode in _FORCED_PLATFORMS:
        logger.debug("Platform forced to %s", _FORCED_PLATFORMS[mode].value)
        return _FORCED_PLATFORMS[mode]

    platform = detect(root)

    if platform is Platform.UNKNOWN:
        raise DetectionError()

    return platform


def count_updates(platform: Platform, timeout: int = DEFAULT_TIMEOUT) -> UpdateCounts:
    """
    Query the package manager for the platform and count pending updates.

    :param platform: Platform to check
    :param timeout: Timeout in seconds for each command invocation
    :return: UpdateCounts
    """
    pkgmanager = PkgManagerFactory.create(platform, timeout=timeout)

    if isinstance(pkgmanager, Dnf):
        listing = pkgmanager.list_updates()
        if not listing.available:
            # Skip the security query, it would fail the same way
            raise ToolUnavailableError(f"dnf is unavailable: {listing.reason}")
        return parse(platform, listing, pkgmanager.list_security_updates())

    if isinstance(pkgmanager, Apt):
        return parse(platform, pkgmanager.list_updates())

    raise ParseError(f"No update query for {type(pkgmanager).__name__}")


def run_check(
    mode: Mode = Mode.AUTO,
    policy: ThresholdPolicy | None = None,
    timeout: int = DEFAULT_TIMEOUT,
    root: Path = Path("/"),
) -> CheckResult:
    """
    Run a complete check and produce its result.

    Every failure is resolved into an UNKNOWN result, nothing is raised.

    :param mode: How to select the platform
    :param policy: Threshold policy, defaults if not provided
    :param timeout: Timeout in seconds for each command invocation
    :param root: Filesystem root used for detection
    :return: CheckResult
    """
    policy = policy or ThresholdPolicy()

    try:
        platform = resolve_platform(mode, root)
    except DetectionError as e:
        logger.warning("Platform detection failed: %s", e)
        return CheckResult(
            platform=Platform.UNKNOWN,
            severity=Severity.UNKNOWN,
            report=render_unknown(DETECTION_FAILED),
        )

    try:
        counts = count_updates(platform, timeout)
    except ParseError as e:
        logger.error("Failed to check updates on %s: %s", platform.value, e)
        return CheckResult(
            platform=platform,
            severity=Severity.UNKNOWN,
            report=render_unknown(CHECK_FAILED),
        )

    severity = classify(counts, policy)

    # Message style follows the host distribution, even in a forced mode
    style = platform if mode is Mode.AUTO else detect(root)
    report = render(style, counts, severity, policy)

    logger.info(
        "Check complete: %d updates, %d security, %s",
        counts.total,
        counts.security,
        severity.name,
    )

    return CheckResult(
        platform=platform,
        severity=severity,
        report=report,
        counts=counts,
    )
