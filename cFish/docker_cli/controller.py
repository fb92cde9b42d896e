import logging
from typing import Iterable, Optional

from cFish.docker_cli.runner import CommandRunner
from cFish.exceptions import CommandError
from cFish.models import ContainerRecord, KillAllResult, KillResult
from cFish.notifier import LoggingNotifier, Notifier


class ContainerController:
    """
    Terminates containers through the runtime CLI (`docker kill`). Each call is a standalone process
    invocation, so calls need no ordering or locking between them.
    """

    def __init__(self, runner: CommandRunner, notifier: Optional[Notifier] = None):
        self.__runner = runner
        self.__notifier = notifier or LoggingNotifier()

    def kill(self, container_id: str, record: Optional[ContainerRecord] = None) -> KillResult:
        """
        Kills a single container.

        :param container_id: ID (or name) of the container
        :param record: the listed record for the container, only used to word the failure notification
        :return: a KillResult, failed results carry the CLI's diagnostic output
        """
        try:
            result = self.__runner.run("kill", container_id)
        except CommandError as e:
            diagnostic = e.output or str(e)
            label = f"{record.image} container {container_id}" if record else f"container {container_id}"
            logging.error(f"ContainerController - Error killing {label} ({e})\n{e.output}")
            self.__notifier.notify("Error", f"Error killing {label}: {diagnostic}")
            return KillResult(container_id=container_id, succeeded=False, output=diagnostic)

        logging.info(f"ContainerController - Killed container {container_id}")
        return KillResult(container_id=container_id, succeeded=True, output=result.output.strip())

    def kill_all(self, records: Iterable[ContainerRecord]) -> KillAllResult:
        """
        Attempts to kill every given container. A failure does not stop the remaining attempts.

        :param records: the containers to kill, usually the latest poll result
        :return: a KillAllResult with one KillResult per attempt
        """
        summary = KillAllResult()
        for record in records:
            summary.results.append(self.kill(record.id, record))

        if summary.success_count:
            content = f"{summary.success_count} of {summary.attempted} containers have been killed"
            self.__notifier.notify("Containers Killed", content)
        if summary.failures:
            logging.warning(f"ContainerController - Failed to kill {len(summary.failures)} container(s): "
                            f"{', '.join(summary.failures)}")
        return summary
