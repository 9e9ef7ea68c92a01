"""Named commands the GUI shell invokes on the note store."""

from __future__ import annotations

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Dict, List, Mapping, Optional

from .logger import configure_logging
from .notes.store import NoteStore

_LOG = configure_logging()

CommandCallback = Callable[["Future[Any]"], None]


class CommandError(Exception):
    """Raised when a command call cannot be dispatched."""


class UnknownCommandError(CommandError):
    pass


class CommandArgumentError(CommandError):
    pass


def _int_arg(args: Mapping[str, Any], name: str) -> int:
    if name not in args:
        raise CommandArgumentError(f"missing argument: {name}")
    value = args[name]
    if isinstance(value, bool) or not isinstance(value, int):
        raise CommandArgumentError(f"{name} must be an integer, got {value!r}")
    return value


def _str_arg(args: Mapping[str, Any], name: str) -> str:
    if name not in args:
        raise CommandArgumentError(f"missing argument: {name}")
    value = args[name]
    if not isinstance(value, str):
        raise CommandArgumentError(f"{name} must be text, got {type(value).__name__}")
    return value


def _id_list_arg(args: Mapping[str, Any], name: str, alias: str) -> List[int]:
    key = name if name in args else alias
    if key not in args:
        raise CommandArgumentError(f"missing argument: {name}")
    values = args[key]
    if isinstance(values, (str, bytes)) or not isinstance(values, (list, tuple)):
        raise CommandArgumentError(f"{name} must be a list of integers")
    for value in values:
        if isinstance(value, bool) or not isinstance(value, int):
            raise CommandArgumentError(f"{name} must be a list of integers, got {value!r}")
    return list(values)


class CommandDispatcher:
    """Maps command names to store operations.

    ``invoke`` runs on the calling thread. ``submit`` queues the call on a single
    worker so blocking disk writes stay off the main loop, in submission order.
    """

    def __init__(self, store: NoteStore) -> None:
        self.store = store
        self._handlers: Dict[str, Callable[[Mapping[str, Any]], Any]] = {
            "list_notes": self._list_notes,
            "add_note": self._add_note,
            "delete_note": self._delete_note,
            "toggle_pin": self._toggle_pin,
            "reorder_notes": self._reorder_notes,
        }
        self._executor: Optional[ThreadPoolExecutor] = None
        self._executor_lock = threading.Lock()

    @property
    def commands(self) -> List[str]:
        return list(self._handlers)

    def invoke(self, name: str, args: Optional[Mapping[str, Any]] = None) -> Any:
        handler = self._handlers.get(name)
        if handler is None:
            raise UnknownCommandError(f"unknown command: {name}")
        return handler(args or {})

    def submit(
        self,
        name: str,
        args: Optional[Mapping[str, Any]] = None,
        callback: Optional[CommandCallback] = None,
    ) -> "Future[Any]":
        with self._executor_lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="toutdo-store")
            future = self._executor.submit(self.invoke, name, dict(args or {}))
        if callback is not None:
            future.add_done_callback(callback)
        return future

    def shutdown(self) -> None:
        with self._executor_lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            _LOG.info("Waiting for pending note commands")
            executor.shutdown(wait=True)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------
    def _list_notes(self, _args: Mapping[str, Any]) -> List[Dict[str, Any]]:
        return [note.to_dict() for note in self.store.list_notes()]

    def _add_note(self, args: Mapping[str, Any]) -> None:
        self.store.add_note(_str_arg(args, "content"))

    def _delete_note(self, args: Mapping[str, Any]) -> None:
        self.store.delete_note(_int_arg(args, "id"))

    def _toggle_pin(self, args: Mapping[str, Any]) -> None:
        self.store.toggle_pin(_int_arg(args, "id"))

    def _reorder_notes(self, args: Mapping[str, Any]) -> None:
        self.store.reorder_notes(_id_list_arg(args, "ordered_ids", "orderedIds"))


__all__ = [
    "CommandArgumentError",
    "CommandDispatcher",
    "CommandError",
    "UnknownCommandError",
]
