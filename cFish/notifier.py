import logging
from typing import Callable, List, Protocol, Tuple


class Notifier(Protocol):
    def notify(self, title: str, content: str) -> None:
        ...


class LoggingNotifier:
    """Writes notifications to the log"""

    def notify(self, title: str, content: str) -> None:
        logging.info(f"Notification - {title}: {content}")


class CallbackNotifier:
    """
    Hands notifications to a callback, and keeps the latest ones around for screens that want to show them.
    """

    def __init__(self, callback: Callable[[str, str], None] = None, keep: int = 5):
        self.callback = callback
        self.keep = keep
        self.messages: List[Tuple[str, str]] = []

    def notify(self, title: str, content: str) -> None:
        self.messages = (self.messages + [(title, content)])[-self.keep:]
        if self.callback:
            self.callback(title, content)
