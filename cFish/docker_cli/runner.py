import logging
import subprocess
from typing import List, NamedTuple, Optional, Union

from cFish.exceptions import ProcessExitError, ProcessLaunchError, ProcessTimeoutError


class CommandOutput(NamedTuple):
    args: List[str]
    returncode: int
    output: str

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0


class CommandRunner:
    """
    Runs the container runtime CLI as a child process and collects its combined output.
    Every call is independent; nothing is kept between invocations.
    """

    def __init__(self, executable: str = "docker", timeout: Optional[Union[int, float]] = None):
        self.executable = executable
        self.timeout = timeout

    def run(self, *args: str, check: bool = True) -> CommandOutput:
        """
        Executes `<executable> <args...>` and waits for it to exit.

        :param args: subcommand and its arguments
        :param check: raise ProcessExitError when the process exits with a non-zero code
        :return: a CommandOutput with the exit code and the merged stdout/stderr text
        :raises ProcessLaunchError: if the executable is missing or cannot be started
        :raises ProcessTimeoutError: if the process outlives the configured timeout
        """
        command = [self.executable, *args]
        logging.debug(f"CommandRunner - Running {command}")

        try:
            completed = subprocess.run(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            output = e.output or ''
            if isinstance(output, bytes):
                output = output.decode('utf-8', errors='replace')
            raise ProcessTimeoutError(f"`{' '.join(command)}` timed out after {self.timeout}s", command,
                                      output) from e
        except OSError as e:
            # FileNotFoundError, PermissionError and friends
            raise ProcessLaunchError(f"Failed to run `{' '.join(command)}` ({e})", command, str(e)) from e

        result = CommandOutput(command, completed.returncode, completed.stdout or '')
        if check and not result.succeeded:
            raise ProcessExitError(f"`{' '.join(command)}` exited with code {result.returncode}", command,
                                   result.output.strip(), result.returncode)
        return result
