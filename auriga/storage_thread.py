"""Background thread that persists traces without blocking the caller."""

from __future__ import annotations

import logging
import os
import queue
import threading
import weakref
from collections.abc import Iterable

from auriga.database import Database
from auriga.trace import Trace
from auriga.turn import Turn

_log = logging.getLogger(__name__)

_SHUTDOWN = object()


def _run(db: Database, commands: queue.Queue) -> None:
    try:
        while True:
            command = commands.get()
            if command is _SHUTDOWN:
                break
            trace, turns = command
            try:
                db.save_trace(trace, turns)
            except Exception:
                _log.exception("storage persistence failed")
    finally:
        db.close()


def _stop(commands: queue.Queue, thread: threading.Thread) -> None:
    commands.put(_SHUTDOWN)
    if thread is not threading.current_thread():
        thread.join()


class StorageHandle:
    """Handle to the storage thread; shuts it down when closed or collected."""

    def __init__(self, db: Database) -> None:
        self._commands: queue.Queue = queue.Queue()
        self._thread = threading.Thread(
            target=_run, args=(db, self._commands), name="storage", daemon=True
        )
        self._thread.start()
        # Runs at shutdown(), on garbage collection, or at interpreter exit.
        self._finalizer = weakref.finalize(self, _stop, self._commands, self._thread)

    def save_trace(self, trace: Trace, turns: Iterable[Turn]) -> None:
        """Queue a trace and its turns for persistence; never blocks."""
        if not self._finalizer.alive or not self._thread.is_alive():
            _log.warning("storage thread gone, dropping save_trace")
            return
        self._commands.put((trace, list(turns)))

    def shutdown(self) -> None:
        """Stop the thread after the queued work and wait for it to finish."""
        self._finalizer()

    def __enter__(self) -> StorageHandle:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()


def start_storage_thread(db_path: str | os.PathLike[str]) -> StorageHandle:
    """Open the database at db_path and start the thread that writes to it."""
    return StorageHandle(Database.open(db_path))