from cFish.docker_cli.collector import ContainerCollector
from cFish.docker_cli.controller import ContainerController
from cFish.docker_cli.poller import ContainerPoller
from cFish.docker_cli.runner import CommandRunner, CommandOutput

__all__ = [
    'CommandOutput',
    'CommandRunner',
    'ContainerCollector',
    'ContainerController',
    'ContainerPoller',
]
