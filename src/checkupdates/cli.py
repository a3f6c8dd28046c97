import logging
from typing import Annotated

from rich.console import Console
from typer import Exit, Option, Typer

from checkupdates import app_config
from checkupdates.check import run_check
from checkupdates.data import Mode, Severity

logger = logging.getLogger(__name__)

USAGE_ERROR = "UNKNOWN - Only one of --rhel, --debian or --auto may be given"

app = Typer(
    help="Check for available system updates on RHEL and Debian hosts.",
    add_completion=False,
    no_args_is_help=False,
)

# Plugin output must stay a single, unstyled line
console = Console(highlight=False, emoji=False, soft_wrap=True)


def emit(line: str) -> None:
    """
    Print a status line on standard output, verbatim.
    """
    console.print(line, markup=False)


@app.command()
def check(
    rhel: Annotated[
        bool, Option("--rhel", help="Check updates with dnf (RHEL, CentOS, Fedora).")
    ] = False,
    debian: Annotated[
        bool, Option("--debian", help="Check updates with apt (Debian, Ubuntu).")
    ] = False,
    auto: Annotated[
        bool, Option("--auto", help="Detect the distribution (default).")
    ] = False,
) -> None:
    """
    Report pending updates in monitoring plugin format.

    Exit codes: 0 OK, 1 WARNING, 2 CRITICAL, 3 UNKNOWN.
    """
    selected = [
        mode
        for mode, flag in ((Mode.RHEL, rhel), (Mode.DEBIAN, debian), (Mode.AUTO, auto))
        if flag
    ]

    if len(selected) > 1:
        logger.error(
            "Conflicting modes given: %s", ", ".join(m.value for m in selected)
        )
        emit(USAGE_ERROR)
        raise Exit(Severity.UNKNOWN.exit_code)

    mode = selected[0] if selected else Mode.AUTO
    logger.debug("Running check in %s mode", mode.value)

    result = run_check(
        mode=mode,
        policy=app_config.policy(),
        timeout=app_config.timeout(),
    )

    emit(result.report.line)
    raise Exit(result.severity.exit_code)
