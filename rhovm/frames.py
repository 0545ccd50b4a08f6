"""Execution frames: local variables, value stack and try-catch handlers."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, Iterable

from .codeobject import CodeObject


class _Empty:
    """Marker for a slot holding no value at all, distinct from null."""

    _instance: _Empty | None = None

    def __new__(cls) -> _Empty:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "EMPTY"

    def __bool__(self) -> bool:
        return False


EMPTY = _Empty()


def is_empty(value: Any) -> bool:
    return value is EMPTY


@dataclass(frozen=True)
class ExcHandler:
    """An active try block.

    ``purge_wall`` is the value-stack height to shrink back to when the
    handler catches an exception; values below it stay in place.
    """

    start: int
    end: int
    handler_pos: int
    purge_wall: int

    def covers(self, pos: int) -> bool:
        return self.start <= pos <= self.end


class Frame:
    """State of one activation of a code object.

    ``co`` is only set while the frame is being executed; the sizes of the
    local and free-variable tables come from the code object the frame was
    made for.
    """

    def __init__(self, co: CodeObject) -> None:
        self.co: CodeObject | None = None
        self.locals: list[Any] = [EMPTY] * len(co.names)
        self.frees: list[str] = list(co.frees)
        self.stack: list[Any] = []
        self.return_value: Any = EMPTY
        self.handlers: list[ExcHandler] = []
        self.pos = 0
        self.prev: Frame | None = None
        self.mailbox: Any = None
        self.active = False
        self.persistent = False
        self.top_level = False
        self.force_free_locals = False
        self._owned = threading.Lock()

    @property
    def n_locals(self) -> int:
        return len(self.locals)

    def claim(self) -> bool:
        """Take ownership of the frame; False if it is already owned."""
        return self._owned.acquire(blocking=False)

    def release(self) -> None:
        """Give up ownership of the frame, if it is owned."""
        if self._owned.locked():
            self._owned.release()

    @property
    def owned(self) -> bool:
        return self._owned.locked()

    def save_state(
        self,
        pos: int,
        ret_val: Any,
        stack: Iterable[Any],
        handlers: Iterable[ExcHandler],
    ) -> None:
        """Record where a suspended frame should resume and what it produced."""
        self.pos = pos
        self.stack = list(stack)
        self.handlers = list(handlers)
        self.return_value = ret_val

    def reset(self) -> None:
        """Return the frame to its initial state for reuse.

        Module-level locals are global variables and survive a reset unless
        ``force_free_locals`` is set.
        """
        if not self.top_level or self.force_free_locals:
            self.locals = [EMPTY] * len(self.locals)
        self.return_value = EMPTY
        self.stack = []
        self.handlers = []
        self.pos = 0