from typing import Sequence


class CFishError(Exception):
    """Base class for every error raised by cFish"""


class CommandError(CFishError):
    """
    Raised when an invocation of the runtime CLI does not complete successfully.

    :param args: the full argument vector that was executed
    :param output: combined stdout/stderr captured from the process, if any
    """

    def __init__(self, message: str, args: Sequence[str] = (), output: str = ''):
        super().__init__(message)
        self.command = list(args)
        self.output = output


class ProcessLaunchError(CommandError):
    """The CLI binary is missing or could not be executed"""


class ProcessExitError(CommandError):
    """The CLI exited with a non-zero code"""

    def __init__(self, message: str, args: Sequence[str] = (), output: str = '', returncode: int = 1):
        super().__init__(message, args, output)
        self.returncode = returncode


class ProcessTimeoutError(CommandError):
    """The CLI did not exit before the configured timeout"""


class CollectionError(CFishError):
    """Listing running containers failed. `output` holds the process diagnostic."""

    def __init__(self, message: str, output: str = ''):
        super().__init__(message)
        self.output = output


class DecodeError(CFishError):
    def __init__(self, message: str, line: str):
        super().__init__(message)
        self.line = line


class TimeParseError(CFishError):
    def __init__(self, message: str, value: str):
        super().__init__(message)
        self.value = value
