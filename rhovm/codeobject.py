"""Compiled code objects and their line-number lookup."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from .model import OBJECT_CLASS, RhoClass, RhoObject

CODE_CLASS = RhoClass("CodeObject", OBJECT_CLASS)


@dataclass(eq=False)
class CodeObject(RhoObject):
    """A unit of compiled bytecode with its symbol and constant tables.

    ``lno_table`` holds pairs of (instruction delta, line delta) bytes and
    ends with a (0, 0) pair.
    """

    name: str
    bc: bytes
    argcount: int = 0
    stack_depth: int = 0
    try_catch_depth: int = 0
    names: list[str] = field(default_factory=list)
    attrs: list[str] = field(default_factory=list)
    frees: list[str] = field(default_factory=list)
    consts: list[Any] = field(default_factory=list)
    hints: list[RhoClass | None] | None = None
    lno_table: bytes = b""
    first_lineno: int = 1
    vm: Any = None
    frame: Any = None
    _line_cache: dict[int, int] = field(default_factory=dict, init=False, repr=False)

    rho_class = CODE_CLASS

    @property
    def num_hints(self) -> int:
        return self.argcount + 1 if self.hints is not None else 0

    @property
    def ret_hint(self) -> RhoClass | None:
        return self.hints[self.argcount] if self.hints is not None else None

    def line_for(self, pos: int, arg_size: Callable[[int], int]) -> int:
        """Source line of the instruction starting at byte offset ``pos``.

        ``arg_size`` gives the number of argument bytes following an opcode,
        or a negative number for an invalid opcode.
        """
        cached = self._line_cache.get(pos)
        if cached is not None:
            return cached

        if not 0 <= pos < len(self.bc):
            raise ValueError(f"position {pos} is outside the bytecode")

        ins_pos = 0
        p = 0
        while p != pos:
            ins_pos += 1
            size = arg_size(self.bc[p])
            if size < 0:
                raise ValueError(f"invalid opcode {self.bc[p]:#x} at position {p}")
            p += size + 1
            if p > pos:
                raise ValueError(f"position {pos} is not at an instruction boundary")

        lineno_offset = 0
        ins_offset = 0
        table = iter(self.lno_table)
        for ins_delta, lineno_delta in zip(table, table):
            if ins_delta == 0 and lineno_delta == 0:
                break
            ins_offset += ins_delta
            if ins_offset >= ins_pos:
                break
            lineno_offset += lineno_delta

        lineno = self.first_lineno + lineno_offset
        self._line_cache[pos] = lineno
        return lineno