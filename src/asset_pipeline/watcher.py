"""Rebuild-on-change loop for development mode.

Change events from the subscription are queued by the notifier thread and
consumed here. A rebuild starts once no new event has arrived for the
debounce interval; each new event restarts that interval. Events that arrive
during a rebuild are left in the queue and cause exactly one more rebuild.
"""

import queue
import sys
import threading
from collections.abc import Iterable
from pathlib import Path
from typing import Callable

from .capabilities.watch import ChangeEvent, Subscribe, watch_directory
from .core.errors import AssetPipelineError

IDLE = "idle"
BUILDING = "building"


class WatchLoop:
    """Debounced rebuild loop.

    Attributes:
        state: ``IDLE`` while waiting for changes, ``BUILDING`` while the
            build callable runs. Readable from any thread, including from
            inside the build callable.

    Example:
        >>> loop = WatchLoop(Path('assets'), pipeline.build)
        >>> loop.run()  # until interrupted
    """

    def __init__(
        self,
        root: Path,
        build: Callable[[], object],
        debounce: float = 0.1,
        subscribe: Subscribe = watch_directory,
        ignore: Callable[[str], bool] | None = None,
        poll_interval: float = 0.5,
    ):
        """Initialize the loop.

        Args:
            root: Directory to watch
            build: Runs one full build; AssetPipelineError is reported,
                anything else propagates
            debounce: Quiet period, in seconds, before rebuilding
            subscribe: Starts change notifications for ``root``
            ignore: Predicate for event paths that never trigger a build
                (the output artifact and its temporary files)
            poll_interval: How often an idle loop checks the stop event
        """
        self.root = root
        self.build = build
        self.debounce = debounce
        self.subscribe = subscribe
        self.ignore = ignore
        self.poll_interval = poll_interval
        self.state = IDLE
        self._events: queue.Queue[ChangeEvent] = queue.Queue()

    def notify(self, event: ChangeEvent) -> None:
        """Queue a change event. Safe to call from any thread."""
        if self.ignore is not None and self.ignore(event.path):
            return
        self._events.put(event)

    def run(self, stop: threading.Event | None = None, max_cycles: int | None = None) -> int:
        """Rebuild on change until ``stop`` is set or ``max_cycles`` is reached.

        Returns:
            Number of build cycles run
        """
        stop = stop or threading.Event()
        cycles = 0

        subscription = self.subscribe(self.root, self.notify)
        try:
            while not stop.is_set():
                try:
                    first = self._events.get(timeout=self.poll_interval)
                except queue.Empty:
                    continue

                events = [first, *self._settle()]
                self._cycle(events)
                cycles += 1

                if max_cycles is not None and cycles >= max_cycles:
                    break
        finally:
            subscription.stop()

        return cycles

    def _settle(self) -> list[ChangeEvent]:
        # Collect events until the debounce interval passes without one
        events: list[ChangeEvent] = []
        while True:
            try:
                events.append(self._events.get(timeout=self.debounce))
            except queue.Empty:
                return events

    def _cycle(self, events: Iterable[ChangeEvent]) -> None:
        self.state = BUILDING
        try:
            for path in sorted({event.path for event in events}):
                print(f"Changed: {path}", file=sys.stderr)

            try:
                self.build()
            except AssetPipelineError as e:
                print(f"Error: Build failed: {e}", file=sys.stderr)
        finally:
            self.state = IDLE
