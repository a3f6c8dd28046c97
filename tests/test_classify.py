import itertools

import pytest

from checkupdates.classify import classify
from checkupdates.data import Severity, ThresholdPolicy, UpdateCounts


@pytest.fixture(
    params=[
        ThresholdPolicy(),
        ThresholdPolicy(
            warning_threshold=0, critical_threshold=3, security_critical_threshold=0
        ),
        ThresholdPolicy(
            warning_threshold=20, critical_threshold=50, security_critical_threshold=5
        ),
    ],
    ids=["defaults", "strict", "lenient"],
)
def policy(request):
    return request.param


def _grid(policy: ThresholdPolicy):
    """
    All count pairs around the thresholds of a policy.
    """
    totals = range(policy.critical_threshold + 5)
    securities = range(policy.security_critical_threshold + 4)
    return [UpdateCounts(t, s) for t, s in itertools.product(totals, securities)]


class TestClassify:
    def test_security_critical(self, policy):
        """
        Too many security updates is critical regardless of the total.
        """
        for counts in _grid(policy):
            if counts.security > policy.security_critical_threshold:
                assert classify(counts, policy) is Severity.CRITICAL

    def test_total_critical(self, policy):
        for counts in _grid(policy):
            if (
                counts.security <= policy.security_critical_threshold
                and counts.total > policy.critical_threshold
            ):
                assert classify(counts, policy) is Severity.CRITICAL

    def test_warning(self, policy):
        for counts in _grid(policy):
            if (
                counts.security <= policy.security_critical_threshold
                and policy.warning_threshold < counts.total <= policy.critical_threshold
            ):
                assert classify(counts, policy) is Severity.WARNING

    def test_ok(self, policy):
        for counts in _grid(policy):
            if (
                counts.security <= policy.security_critical_threshold
                and counts.total <= policy.warning_threshold
            ):
                assert classify(counts, policy) is Severity.OK

    def test_never_unknown(self, policy):
        for counts in _grid(policy):
            assert classify(counts, policy) is not Severity.UNKNOWN

    @pytest.mark.parametrize(
        "total, security, expected",
        [
            (3, 0, Severity.OK),
            (5, 1, Severity.OK),
            (6, 0, Severity.WARNING),
            (7, 0, Severity.WARNING),
            (10, 1, Severity.WARNING),
            (11, 0, Severity.CRITICAL),
            (12, 2, Severity.CRITICAL),
            (0, 2, Severity.CRITICAL),
        ],
    )
    def test_default_boundaries(self, total, security, expected):
        """
        Thresholds are exclusive: a count equal to a threshold does not trip it.
        """
        assert classify(UpdateCounts(total, security), ThresholdPolicy()) is expected
