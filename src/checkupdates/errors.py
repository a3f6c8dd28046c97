# Exception Types


class CheckError(Exception):
    """Exception raised for errors encountered while checking updates."""

    def __init__(self, message: str, stdout: str = "", stderr: str = "") -> None:
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(message)


class DetectionError(CheckError):
    """Exception raised when the host distribution cannot be identified."""

    def __init__(
        self, message: str = "Cannot detect distribution or unsupported OS"
    ) -> None:
        super().__init__(message)


class ParseError(CheckError):
    """Exception raised for package manager output that cannot be parsed."""


class ToolUnavailableError(ParseError):
    """Exception raised when the package manager could not be run."""

    def __init__(self, message: str = "Package manager is unavailable") -> None:
        super().__init__(message)
