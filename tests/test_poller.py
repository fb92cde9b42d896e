import threading
import time
import unittest
from unittest import mock

from cFish.docker_cli.collector import ContainerCollector
from cFish.docker_cli.poller import ContainerPoller
from cFish.exceptions import CollectionError
from tests.factories import make_record


class TestContainerPoller(unittest.TestCase):

    def setUp(self):
        self.collector = mock.create_autospec(ContainerCollector, instance=True)
        self.records = [make_record(id="one"), make_record(id="two")]
        self.collector.list_running_containers.return_value = self.records
        self.poller = ContainerPoller(self.collector, interval=0.01)
        self.addCleanup(self.poller.stop, 1)

    def test_poll_once_publishes(self):
        received = []
        self.poller.subscribe(received.append)

        snapshot = self.poller.poll_once()

        self.assertEqual(snapshot, tuple(self.records))
        self.assertEqual(self.poller.latest, tuple(self.records))
        self.assertEqual(received, [tuple(self.records)])

    def test_latest_is_replaced_not_patched(self):
        first = self.poller.poll_once()
        self.collector.list_running_containers.return_value = [make_record(id="three")]
        second = self.poller.poll_once()

        self.assertEqual([r.id for r in first], ["one", "two"])
        self.assertEqual([r.id for r in second], ["three"])
        self.assertIs(self.poller.latest, second)

    def test_failed_collection_keeps_previous_snapshot(self):
        received = []
        self.poller.subscribe(received.append)
        self.poller.poll_once()

        self.collector.list_running_containers.side_effect = CollectionError("boom", "daemon down")
        self.assertIsNone(self.poller.poll_once())

        self.assertEqual(self.poller.latest, tuple(self.records))
        self.assertEqual(len(received), 1)

    def test_failing_subscriber_does_not_block_others(self):
        received = []
        self.poller.subscribe(mock.Mock(side_effect=ValueError("bad consumer")))
        self.poller.subscribe(received.append)

        self.poller.poll_once()

        self.assertEqual(len(received), 1)

    def test_unsubscribe(self):
        received = []
        self.poller.subscribe(received.append)
        self.poller.unsubscribe(received.append)
        self.poller.poll_once()
        self.assertEqual(received, [])

    def test_background_polling_and_stop(self):
        calls = []
        ticked = threading.Event()

        def subscriber(snapshot):
            calls.append(snapshot)
            if len(calls) >= 3:
                ticked.set()

        self.poller.subscribe(subscriber)
        self.poller.start()
        self.assertTrue(ticked.wait(2))
        self.assertTrue(self.poller.is_running)

        self.poller.stop(1)
        delivered = len(calls)
        time.sleep(0.1)

        self.assertFalse(self.poller.is_running)
        self.assertEqual(len(calls), delivered)
        self.assertIsNone(self.poller.poll_once())

    def test_collection_errors_do_not_stop_the_driver(self):
        ticked = threading.Event()
        attempts = []

        def list_running_containers():
            attempts.append(1)
            if len(attempts) <= 2:
                raise CollectionError("boom")
            return self.records

        self.collector.list_running_containers.side_effect = list_running_containers
        self.poller.subscribe(lambda snapshot: ticked.set())

        self.poller.start()

        self.assertTrue(ticked.wait(2))

    def test_start_twice(self):
        self.poller.start()
        with self.assertRaises(RuntimeError):
            self.poller.start()

    def test_stop_from_subscriber(self):
        stopped = threading.Event()

        def subscriber(snapshot):
            self.poller.stop()
            stopped.set()

        self.poller.subscribe(subscriber)
        self.poller.start()

        self.assertTrue(stopped.wait(2))

    def test_stop_without_start(self):
        self.poller.stop()
        self.assertFalse(self.poller.is_running)


if __name__ == "__main__":
    unittest.main()
