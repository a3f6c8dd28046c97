import logging

from checkupdates.data import Severity, ThresholdPolicy, UpdateCounts

logger = logging.getLogger(__name__)


def classify(counts: UpdateCounts, policy: ThresholdPolicy) -> Severity:
    """
    Classify pending updates against the threshold policy.

    Rules are evaluated in order and the first match wins.
    Never returns Severity.UNKNOWN.

    :param counts: Pending update counts
    :param policy: Threshold policy to apply
    :return: Severity of the host
    """
    if counts.security > policy.security_critical_threshold:
        severity = Severity.CRITICAL
    elif counts.total > policy.critical_threshold:
        severity = Severity.CRITICAL
    elif counts.total > policy.warning_threshold:
        severity = Severity.WARNING
    else:
        severity = Severity.OK

    logger.debug("Classified %s as %s", counts, severity.name)
    return severity
