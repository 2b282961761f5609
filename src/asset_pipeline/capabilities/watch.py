"""Filesystem change notifications via watchdog.

``watch_directory`` subscribes a callback to every change under a root and
returns a handle whose ``stop()`` ends the subscription.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Protocol

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer
from watchdog.observers.api import BaseObserver


@dataclass(frozen=True)
class ChangeEvent:
    """A filesystem change under the watched root."""

    kind: str
    path: str


class Subscription(Protocol):
    def stop(self) -> None: ...


ChangeCallback = Callable[[ChangeEvent], None]
Subscribe = Callable[[Path, ChangeCallback], Subscription]


class _ForwardingHandler(FileSystemEventHandler):
    def __init__(self, callback: ChangeCallback):
        super().__init__()
        self._callback = callback

    def on_any_event(self, event: FileSystemEvent) -> None:
        # Opening and closing files for reading is not a change
        if event.event_type in ("opened", "closed_no_write"):
            return
        if event.is_directory and event.event_type == "modified":
            return
        path = event.src_path
        if isinstance(path, bytes):
            path = path.decode("utf-8", errors="replace")
        self._callback(ChangeEvent(kind=event.event_type, path=path))


class ObserverSubscription:
    """Running watchdog observer."""

    def __init__(self, observer: BaseObserver):
        self._observer = observer

    def stop(self) -> None:
        self._observer.stop()
        self._observer.join()


def watch_directory(root: Path, callback: ChangeCallback) -> ObserverSubscription:
    """Start watching ``root`` recursively.

    Args:
        root: Directory to watch
        callback: Called from the observer thread for every change

    Returns:
        Handle that stops the observer
    """
    observer = Observer()
    observer.schedule(_ForwardingHandler(callback), str(root), recursive=True)
    observer.start()
    return ObserverSubscription(observer)
