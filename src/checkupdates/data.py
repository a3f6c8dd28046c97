# Data Types and Classes

from dataclasses import dataclass
from enum import Enum, IntEnum


class Platform(Enum):
    """
    Host platform family, as far as update checking is concerned.
    """

    RHEL_LIKE = "rhel"
    DEBIAN_LIKE = "debian"
    UNKNOWN = "unknown"


class Mode(Enum):
    """
    How the platform to check is selected on the command line.
    """

    AUTO = "auto"
    RHEL = "rhel"
    DEBIAN = "debian"


class Severity(IntEnum):
    """
    Monitoring plugin status.

    The integer value is the plugin exit code expected by the
    supervisor. UNKNOWN is an escape value, not a worse CRITICAL.
    """

    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3

    @property
    def exit_code(self) -> int:
        return int(self.value)


@dataclass(frozen=True)
class UpdateCounts:
    """
    Data class to hold the number of pending updates on a host.

    The security count is NOT guaranteed to be lower than or equal
    to the total. On RHEL hosts both numbers come from separate
    queries, and on Debian hosts the security count is a substring
    heuristic over the same listing.
    """

    total: int = 0
    security: int = 0

    def __post_init__(self) -> None:
        if self.total < 0 or self.security < 0:
            raise ValueError(
                f"Update counts cannot be negative: {self.total}, {self.security}"
            )


@dataclass(frozen=True)
class ThresholdPolicy:
    """
    Data class to hold alerting thresholds.

    A count strictly greater than a threshold trips it.
    """

    warning_threshold: int = 5
    critical_threshold: int = 10
    security_critical_threshold: int = 1

    def __post_init__(self) -> None:
        for name in (
            "warning_threshold",
            "critical_threshold",
            "security_critical_threshold",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"Threshold {name} cannot be negative")


@dataclass(frozen=True)
class RawListing:
    """
    Data class to hold the raw output of a package manager query.

    Lines are surfaced regardless of the exit code of the tool.
    An unavailable listing signals the tool could not be run at all.
    """

    lines: tuple[str, ...] = ()
    return_code: int = 0
    available: bool = True
    reason: str = ""

    @classmethod
    def from_output(cls, stdout: str, return_code: int = 0) -> "RawListing":
        return cls(lines=tuple(stdout.splitlines()), return_code=return_code)

    @classmethod
    def unavailable(cls, reason: str) -> "RawListing":
        return cls(available=False, return_code=-1, reason=reason)


@dataclass(frozen=True)
class Report:
    """
    Data class to hold a rendered plugin report.
    """

    message: str
    perfdata: str = ""

    @property
    def line(self) -> str:
        """
        The single status line printed on standard output.
        """
        if not self.perfdata:
            return self.message

        return f"{self.message} | {self.perfdata}"


@dataclass(frozen=True)
class CheckResult:
    """
    Data class to hold the outcome of a single check run.
    """

    platform: Platform
    severity: Severity
    report: Report
    counts: UpdateCounts | None = None
