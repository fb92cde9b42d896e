import logging
import os
import select
import sys
import termios
import time
import tty
from threading import Thread
from typing import Optional

from cFish.config import Config
from cFish.docker_cli import CommandRunner, ContainerCollector, ContainerController, ContainerPoller
from cFish.docker_cli.poller import Snapshot
from cFish.notifier import CallbackNotifier
from cFish.outputs.keys import ACTIONS_BY_KEY
from cFish.outputs.screen import cFishRichScreen


class cFishStandalone:
    RENDER_SLEEP = 0.05

    def __init__(self, config: Config, runner: Optional[CommandRunner] = None,
                 screen: Optional[cFishRichScreen] = None):
        self.config = config
        self.screen = screen or cFishRichScreen(config)

        runner = runner or CommandRunner(config.docker_cli, config.command_timeout)
        self.notifier = CallbackNotifier(self.screen.show_message)
        self.collector = ContainerCollector(runner, config.output_format)
        self.controller = ContainerController(runner, self.notifier)
        self.poller = ContainerPoller(self.collector, config.poll_interval)
        self.poller.subscribe(self.on_snapshot)

        self.row_index = 0
        self._changed = True
        self.records: Snapshot = ()

        self.is_running = True
        self.key_press_listener_thread = Thread(target=self.key_strokes_listener, args=(), daemon=True)

    def run(self):
        self.screen.init_screen()
        self.poller.start()
        self.key_press_listener_thread.start()

        while self.is_running:
            try:
                if self._changed:
                    self._changed = False
                    self.screen.render()
                time.sleep(self.RENDER_SLEEP)
            except KeyboardInterrupt:
                self.shutdown()
            except Exception as e:
                self.shutdown()
                raise e

    def on_snapshot(self, records: Snapshot):
        row_key = self.get_row_key()
        self.records = records

        # Update row index to keep the same container selected
        self.row_index = 0
        for i, record in enumerate(self.records):
            if record.id == row_key:
                self.row_index = i
                break

        self.screen.update_container_table(self.records, self.row_index)
        self._changed = True

    def get_row_key(self) -> str:
        # The key thread may have moved the index against an older, longer snapshot
        records, index = self.records, self.row_index
        return records[index].id if 0 <= index < len(records) else ''

    def key_strokes_listener(self):
        if not sys.stdin.isatty():
            logging.warning("cFishStandalone - stdin is not a terminal, key bindings are disabled")
            return

        fd = sys.stdin.fileno()
        saved = termios.tcgetattr(fd)
        tty.setcbreak(fd)
        try:
            while self.is_running:
                readable, _, _ = select.select([fd], [], [], self.RENDER_SLEEP)
                if readable:
                    self.handle_key_stroke(os.read(fd, 1).decode(errors="ignore"))
        finally:
            termios.tcsetattr(fd, termios.TCSAFLUSH, saved)

    def handle_key_stroke(self, key_pressed: str):
        action = ACTIONS_BY_KEY.get(key_pressed)
        if action:
            getattr(self, action)()

    def select_previous(self):
        self._update_row_index(self.row_index - 1)

    def select_next(self):
        self._update_row_index(self.row_index + 1)

    def _update_row_index(self, index: int):
        records = self.records
        self.row_index = index % max(len(records), 1)
        self.screen.update_container_table(records, self.row_index)
        self._changed = True

    def kill_selected(self):
        records, index = self.records, self.row_index
        if not records or index >= len(records):
            return
        record = records[index]
        result = self.controller.kill(record.id, record)
        if result.succeeded:
            self.notifier.notify("Killed", f"{record.image} container {record.short_id}")
            self.poller.poll_once()
        self._changed = True

    def kill_all(self):
        records = self.records
        if not records:
            return
        summary = self.controller.kill_all(records)
        if summary.success_count:
            self.poller.poll_once()
        self._changed = True

    def shutdown(self):
        if self.is_running:
            logging.debug("cFishStandalone - Shutting down")
            self.is_running = False
            self.poller.stop()
            self.screen.stop()
