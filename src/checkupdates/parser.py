"""
Update parser module

Turns raw package manager listings into update counts.
"""

import logging

from checkupdates.data import Platform, RawListing, UpdateCounts
from checkupdates.errors import ParseError, ToolUnavailableError

logger = logging.getLogger(__name__)

# dnf check-update exit code for errors. 100 means updates are available.
DNF_ERROR_CODE = 1

APT_HEADER = "Listing..."
APT_UPGRADABLE_TOKEN = "upgradable"
SECURITY_TOKEN = "security"


def _ensure_available(listing: RawListing) -> None:
    if not listing.available:
        raise ToolUnavailableError(
            f"Package manager is unavailable: {listing.reason or 'unknown reason'}"
        )


def _non_blank(listing: RawListing) -> list[str]:
    return [line for line in listing.lines if line.strip()]


def _count_dnf(listing: RawListing, label: str) -> int:
    """
    Count packages in a dnf check-update listing.

    The first non-blank line is the metadata header and is not counted.

    :param listing: Raw dnf listing
    :param label: Name of the query, for error messages
    :return: Number of package lines
    """
    _ensure_available(listing)

    if listing.return_code == DNF_ERROR_CODE:
        raise ParseError(
            f"dnf {label} query failed with exit code {listing.return_code}",
            stdout="\n".join(listing.lines),
        )

    lines = _non_blank(listing)

    if not lines:
        if listing.return_code != 0:
            raise ParseError(
                f"dnf {label} query returned {listing.return_code} "
                "without any output"
            )

        logger.debug("Empty dnf %s listing, no updates", label)
        return 0

    return len(lines) - 1


def parse_rhel(listing: RawListing, security_listing: RawListing) -> UpdateCounts:
    """
    Parse the general and security dnf listings into update counts.

    Both counts are derived independently and are not cross checked.

    :param listing: Listing of all available updates
    :param security_listing: Listing of security updates only
    :return: UpdateCounts
    """
    total = _count_dnf(listing, "updates")
    security = _count_dnf(security_listing, "security updates")

    logger.debug("Parsed dnf listings: %d updates, %d security", total, security)
    return UpdateCounts(total=total, security=security)


def parse_debian(listing: RawListing) -> UpdateCounts:
    """
    Parse an apt upgradable listing into update counts.

    Any line mentioning "security" (case-insensitive) is counted as
    a security update. This is an approximation: a package whose
    target repository merely has "security" in its name is counted
    even if no advisory is attached to it.

    :param listing: Listing of upgradable packages
    :return: UpdateCounts
    """
    _ensure_available(listing)

    lines = _non_blank(listing)

    # apt always prints the header, even with nothing to upgrade
    if not any(line.strip().startswith(APT_HEADER) for line in lines):
        raise ParseError(
            f"Unrecognized apt output (exit code {listing.return_code}), "
            f"no '{APT_HEADER}' header",
            stdout="\n".join(listing.lines),
        )

    upgradable = [line for line in lines if APT_UPGRADABLE_TOKEN in line]

    security = sum(1 for line in lines if SECURITY_TOKEN in line.lower())

    logger.debug(
        "Parsed apt listing: %d updates, %d security", len(upgradable), security
    )
    return UpdateCounts(total=len(upgradable), security=security)


def parse(platform: Platform, *listings: RawListing) -> UpdateCounts:
    """
    Parse listings for the given platform.

    RHEL-like platforms expect the general and security listings,
    in that order. Debian-like platforms expect a single listing.

    :param platform: Platform the listings were produced on
    :param listings: Raw listings from the package manager
    :return: UpdateCounts
    """
    if platform is Platform.RHEL_LIKE:
        if len(listings) != 2:
            raise TypeError(f"Expected 2 listings for dnf, got {len(listings)}")
        return parse_rhel(*listings)

    if platform is Platform.DEBIAN_LIKE:
        if len(listings) != 1:
            raise TypeError(f"Expected 1 listing for apt, got {len(listings)}")
        return parse_debian(*listings)

    raise ParseError(f"No parser for platform: {platform.value}")
