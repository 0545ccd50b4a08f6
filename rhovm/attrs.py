"""Attribute descriptors for built-in classes and the lookup table over them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Iterable

FLAG_READONLY = 1 << 2
FLAG_TYPE_STRICT = 1 << 3

DICT_FLAG_FOUND = 1 << 0
DICT_FLAG_METHOD = 1 << 1


class AttrType(Enum):
    """Storage type of a member attribute."""

    CHAR = auto()
    BYTE = auto()
    SHORT = auto()
    INT = auto()
    LONG = auto()
    UBYTE = auto()
    USHORT = auto()
    UINT = auto()
    ULONG = auto()
    SIZE_T = auto()
    BOOL = auto()
    FLOAT = auto()
    DOUBLE = auto()
    STRING = auto()
    OBJECT = auto()


@dataclass(frozen=True)
class AttrMember:
    """A data attribute of a class."""

    name: str
    type: AttrType
    flags: int = 0

    @property
    def readonly(self) -> bool:
        return bool(self.flags & FLAG_READONLY)

    @property
    def type_strict(self) -> bool:
        return bool(self.flags & FLAG_TYPE_STRICT)


@dataclass(frozen=True)
class AttrMethod:
    """A method attribute of a class."""

    name: str
    meth: Callable[..., Any]


@dataclass(frozen=True)
class AttrInfo:
    """Result of a lookup: where the attribute lives and whether it is a method."""

    index: int
    is_method: bool

    @property
    def value(self) -> int:
        """Packed form: index in the high bits, then method and found flags."""
        packed = (self.index << 2) | DICT_FLAG_FOUND
        if self.is_method:
            packed |= DICT_FLAG_METHOD
        return packed

    @classmethod
    def from_value(cls, value: int) -> AttrInfo | None:
        if not value & DICT_FLAG_FOUND:
            return None
        return cls(value >> 2, bool(value & DICT_FLAG_METHOD))


def attr_hash(key: str) -> int:
    """Hash a name into a signed 32-bit integer."""
    h = 0
    for b in key.encode("utf-8"):
        if b >= 0x80:
            b -= 0x100
        h = (31 * h + b) & 0xFFFFFFFF
    return h - (1 << 32) if h & 0x80000000 else h


@dataclass
class _Entry:
    key: str
    info: AttrInfo
    hash: int


class AttrDict:
    """Fixed-capacity map from attribute names to AttrInfo.

    Filled once when a class is set up; a name registered twice is shadowed
    by its latest registration.
    """

    def __init__(self, max_size: int) -> None:
        self.capacity = (max_size * 8) // 5
        self._table: list[list[_Entry]] = [[] for _ in range(self.capacity)]

    def _put(self, key: str, index: int, is_method: bool) -> None:
        if self.capacity == 0:
            raise RuntimeError("cannot add attributes to an empty attribute dictionary")
        h = attr_hash(key)
        self._table[h & (self.capacity - 1)].insert(0, _Entry(key, AttrInfo(index, is_method), h))

    def register_members(self, members: Iterable[AttrMember] | None) -> None:
        if members is None:
            return
        for index, member in enumerate(members):
            self._put(member.name, index, False)

    def register_methods(self, methods: Iterable[AttrMethod] | None) -> None:
        if methods is None:
            return
        for index, method in enumerate(methods):
            self._put(method.name, index, True)

    def get(self, key: str) -> AttrInfo | None:
        if self.capacity == 0:
            return None
        h = attr_hash(key)
        for entry in self._table[h & (self.capacity - 1)]:
            if entry.hash == h and entry.key == key:
                return entry.info
        return None

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None