import logging
from datetime import datetime, timezone
from typing import Callable, List

from cFish.docker_cli.parser import LIST_FORMATS, parse_listing
from cFish.docker_cli.runner import CommandRunner
from cFish.exceptions import CollectionError, CommandError
from cFish.models import ContainerRecord


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ContainerCollector:
    """
    Lists the running containers through the runtime CLI (`docker ps`) and turns each output line into a
    ContainerRecord.
    """

    def __init__(self, runner: CommandRunner, output_format: str = 'json', clock: Callable[[], datetime] = utc_now):
        if output_format not in LIST_FORMATS:
            raise ValueError(f"Unknown output format `{output_format}`")
        self.__runner = runner
        self.__output_format = output_format
        self.__clock = clock

    @property
    def output_format(self) -> str:
        return self.__output_format

    def list_running_containers(self) -> List[ContainerRecord]:
        """
        Returns a fresh snapshot of the running containers, in the order the runtime lists them.

        :return: list of ContainerRecord, empty when nothing runs
        :raises CollectionError: if the CLI could not be started, timed out or exited with a non-zero code
        """
        try:
            result = self.__runner.run("ps", "--format", LIST_FORMATS[self.__output_format])
        except CommandError as e:
            logging.error(f"ContainerCollector - Failed to list containers ({e})")
            raise CollectionError(f"Failed to list containers: {e}", e.output) from e

        return parse_listing(result.output, self.__output_format, self.__clock())
