import pytest

from checkupdates.data import Platform, RawListing, UpdateCounts
from checkupdates.errors import ParseError, ToolUnavailableError
from checkupdates.parser import parse, parse_debian, parse_rhel

DNF_UPDATES = """\
Last metadata expiration check: 0:12:01 ago on Sat 18 Oct 2025 10:00:00 AM UTC.

bash.x86_64                     5.2.26-4.el10           baseos
curl.x86_64                     8.9.1-5.el10            baseos
kernel.x86_64                   6.12.0-55.el10          baseos

openssl.x86_64                  1:3.2.2-16.el10         baseos
"""

DNF_SECURITY = """\
Last metadata expiration check: 0:12:03 ago on Sat 18 Oct 2025 10:00:02 AM UTC.

openssl.x86_64                  1:3.2.2-16.el10         baseos
"""

APT_UPGRADABLE = """\
Listing...
base-files/stable 12.4+deb12u11 amd64 [upgradable from: 12.4+deb12u10]
bash/stable 5.2.15-2+b8 amd64 [upgradable from: 5.2.15-2+b7]
libssl3/stable-security 3.0.17-1~deb12u2 amd64 [upgradable from: 3.0.15-1~deb12u1]
openssl/jammy-updates,jammy-security 3.0.2-0ubuntu1.19 amd64 [upgradable from: 3.0.2-0ubuntu1.18]

"""


def _listing(text: str, return_code: int = 0) -> RawListing:
    return RawListing.from_output(text, return_code)


class TestParseRhel:
    def test_parse(self):
        """
        Header and blank lines are not counted.
        """
        counts = parse_rhel(_listing(DNF_UPDATES, 100), _listing(DNF_SECURITY, 100))

        assert counts == UpdateCounts(total=4, security=1)

    def test_header_only(self):
        header = "Last metadata expiration check: 0:00:01 ago.\n"

        counts = parse_rhel(_listing(header), _listing(header))

        assert counts == UpdateCounts(total=0, security=0)

    def test_empty_with_success_code(self):
        counts = parse_rhel(_listing(""), _listing(""))

        assert counts == UpdateCounts(total=0, security=0)

    def test_counts_not_cross_checked(self):
        """
        Security count is taken as reported, even if above the total.
        """
        security = "header\na 1 repo\nb 1 repo\n"

        counts = parse_rhel(_listing("header\n", 0), _listing(security, 100))

        assert counts == UpdateCounts(total=0, security=2)

    def test_error_exit_code(self):
        with pytest.raises(ParseError):
            parse_rhel(_listing("Error: Failed to download metadata", 1), _listing(""))

    @pytest.mark.parametrize("return_code", [100, 2], ids=["updates", "other"])
    def test_missing_header(self, return_code):
        """
        No output at all while the tool reports something is not zero updates.
        """
        with pytest.raises(ParseError):
            parse_rhel(_listing("", return_code), _listing(""))

    def test_security_listing_unavailable(self):
        with pytest.raises(ToolUnavailableError):
            parse_rhel(_listing(DNF_UPDATES, 100), RawListing.unavailable("timed out"))


class TestParseDebian:
    def test_parse(self):
        counts = parse_debian(_listing(APT_UPGRADABLE))

        assert counts == UpdateCounts(total=4, security=2)

    def test_header_only(self):
        counts = parse_debian(_listing("Listing... Done\n"))

        assert counts == UpdateCounts(total=0, security=0)

    def test_security_substring_heuristic(self):
        """
        Any line mentioning security counts, whatever the repository.
        """
        text = (
            "Listing...\n"
            "my-tool/security-tools-repo 2.0 all [upgradable from: 1.0]\n"
            "foo/stable 1.1 all [upgradable from: 1.0]\n"
        )

        counts = parse_debian(_listing(text))

        assert counts == UpdateCounts(total=2, security=1)

    def test_unrecognized_output(self):
        with pytest.raises(ParseError):
            parse_debian(_listing("E: Could not open lock file\n", 100))

    @pytest.mark.parametrize("return_code", [0, 100], ids=["success", "error"])
    def test_empty_listing(self, return_code):
        """
        apt always prints its header, no output at all is not zero updates.
        """
        with pytest.raises(ParseError):
            parse_debian(_listing("", return_code))

    def test_blank_lines_only(self):
        with pytest.raises(ParseError):
            parse_debian(_listing("\n  \n"))

    def test_missing_header(self):
        """
        Package lines without the header are not trusted either.
        """
        text = "bash/stable 5.2.15-2+b8 amd64 [upgradable from: 5.2.15-2+b7]\n"

        with pytest.raises(ParseError):
            parse_debian(_listing(text))

    def test_unavailable(self):
        with pytest.raises(ToolUnavailableError):
            parse_debian(RawListing.unavailable("apt not found"))


class TestParseDispatch:
    def test_rhel(self):
        counts = parse(
            Platform.RHEL_LIKE, _listing(DNF_UPDATES, 100), _listing(DNF_SECURITY, 100)
        )

        assert counts.total == 4

    def test_debian(self):
        counts = parse(Platform.DEBIAN_LIKE, _listing(APT_UPGRADABLE))

        assert counts.total == 4

    def test_unknown_platform(self):
        with pytest.raises(ParseError):
            parse(Platform.UNKNOWN, _listing(""))

    def test_listing_count_mismatch(self):
        with pytest.raises(TypeError):
            parse(Platform.RHEL_LIKE, _listing(DNF_UPDATES, 100))

    def test_unavailable_is_parse_error(self):
        """
        Tool unavailability is a parse failure, handled the same way.
        """
        with pytest.raises(ParseError):
            parse(Platform.DEBIAN_LIKE, RawListing.unavailable("apt not found"))
