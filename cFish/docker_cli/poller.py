import logging
import threading
import time
from typing import Callable, List, Optional, Tuple, Union

from cFish.docker_cli.collector import ContainerCollector
from cFish.exceptions import CollectionError
from cFish.models import ContainerRecord

Snapshot = Tuple[ContainerRecord, ...]
Subscriber = Callable[[Snapshot], None]


class ContainerPoller:
    """
    Periodically collects the running containers on a background thread and publishes each snapshot to the
    subscribers. A failed collection publishes nothing and the previous snapshot stays current.
    """

    DEFAULT_INTERVAL = 1.0

    def __init__(self, collector: ContainerCollector, interval: Union[int, float] = DEFAULT_INTERVAL):
        self.collector = collector
        self.interval: Union[int, float] = interval

        self.__latest: Snapshot = ()
        self.__subscribers: List[Subscriber] = []

        # Re-entrant so a subscriber may call stop() from the poller thread
        self.__publish_lock = threading.RLock()
        self.__stop_event = threading.Event()
        self.__thread: Optional[threading.Thread] = None

    @property
    def latest(self) -> Snapshot:
        """
        Returns the most recently published snapshot
        """
        return self.__latest

    @property
    def is_running(self) -> bool:
        return self.__thread is not None and self.__thread.is_alive() and not self.__stop_event.is_set()

    def subscribe(self, callback: Subscriber) -> None:
        self.__subscribers.append(callback)

    def unsubscribe(self, callback: Subscriber) -> None:
        if callback in self.__subscribers:
            self.__subscribers.remove(callback)

    def poll_once(self) -> Optional[Snapshot]:
        """
        Runs one collect and publish cycle.

        :return: the published snapshot, or None if the collection failed or the poller was stopped
        """
        try:
            records = self.collector.list_running_containers()
        except CollectionError as e:
            logging.error(f"ContainerPoller - Skipping update ({e})")
            return None

        return self.__publish(tuple(records))

    def __publish(self, snapshot: Snapshot) -> Optional[Snapshot]:
        with self.__publish_lock:
            if self.__stop_event.is_set():
                return None

            self.__latest = snapshot
            for subscriber in list(self.__subscribers):
                try:
                    subscriber(snapshot)
                except Exception as e:
                    logging.error(f"ContainerPoller - Subscriber {subscriber!r} failed ({type(e).__name__}: {e})")
            return snapshot

    def __run(self) -> None:
        while not self.__stop_event.is_set():
            started = time.monotonic()
            try:
                self.poll_once()
            except Exception as e:
                logging.exception(f"ContainerPoller - Unexpected {type(e).__name__} while polling ({e})")

            # Ticks are spaced by the interval, a slow cycle delays the next one instead of overlapping it
            remaining = self.interval - (time.monotonic() - started)
            self.__stop_event.wait(max(remaining, 0))

    def start(self) -> None:
        """
        Starts polling in a daemon thread. The first cycle runs right away.

        :raise RuntimeError: if the poller is already running or was stopped
        """
        if self.__thread is not None:
            raise RuntimeError("Already polling!")

        logging.debug(f"ContainerPoller - Starting with a {self.interval}s interval")
        self.__thread = threading.Thread(target=self.__run, name="cFish-poller", daemon=True)
        self.__thread.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        """
        Stops polling. Once this returns no subscriber is called again.
        """
        with self.__publish_lock:
            self.__stop_event.set()

        thread = self.__thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        logging.debug("ContainerPoller - Stopped")
