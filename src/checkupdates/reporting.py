"""
Reporting module

This module renders the plugin status line and its performance data
using Jinja2 templates shipped with the package.
"""

import logging
from functools import lru_cache

import jinja2

from checkupdates.data import (
    Platform,
    Report,
    Severity,
    ThresholdPolicy,
    UpdateCounts,
)

logger: logging.Logger = logging.getLogger(__name__)

DETECTION_FAILED = "UNKNOWN - Cannot detect distribution or unsupported OS"
CHECK_FAILED = "UNKNOWN - Failed to check updates"


class ReportRenderer:
    """
    Renders plugin reports using Jinja2 templates.

    Output follows the monitoring plugin convention of a human
    readable message, a pipe, and performance data in the
    label=value;warn;crit;min;max format.
    """

    def __init__(self) -> None:
        """Initialize the report renderer."""

        self.env = self.setup_jinja_environment()

    def setup_jinja_environment(self) -> jinja2.Environment:
        """
        Setup Jinja2 environment with templates from the package.

        :return: Configured Jinja2 Environment
        """
        logger.debug("Setting up reporting environment")

        # Templates are found under the "templates" directory of the package
        loader = jinja2.PackageLoader("checkupdates")
        return jinja2.Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=jinja2.StrictUndefined,
        )

    def render(
        self,
        platform: Platform,
        counts: UpdateCounts,
        severity: Severity,
        policy: ThresholdPolicy,
    ) -> Report:
        """
        Render a report for the given update counts.

        :param platform: Platform that was checked, selects the message style
        :param counts: Pending update counts
        :param severity: Classified severity
        :param policy: Threshold policy, embedded in the performance data
        :return: Rendered Report
        """
        context = {
            "rhel": platform is Platform.RHEL_LIKE,
            "counts": counts,
            "severity": severity,
            "policy": policy,
        }

        message = self.env.get_template("message.txt.j2").render(context).strip()
        perfdata = self.env.get_template("perfdata.txt.j2").render(context).strip()

        logger.debug("Rendered %s report: %s", severity.name, message)
        return Report(message=message, perfdata=perfdata)


@lru_cache(maxsize=1)
def get_renderer() -> ReportRenderer:
    """
    Get the shared report renderer instance.
    """
    return ReportRenderer()


def render(
    platform: Platform,
    counts: UpdateCounts,
    severity: Severity,
    policy: ThresholdPolicy | None = None,
) -> Report:
    """
    Render a report with the shared renderer.

    See `ReportRenderer.render()` for details.
    """
    return get_renderer().render(
        platform, counts, severity, policy or ThresholdPolicy()
    )


def render_unknown(message: str) -> Report:
    """
    Render a report for the UNKNOWN paths, which carry no performance data.
    """
    return Report(message=message)
