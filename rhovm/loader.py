"""Loading compiled modules from disk."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

RHO_EXT = ".rho"
RHOC_EXT = ".rhoc"


class LoadError(Exception):
    """A compiled module could not be loaded."""

    class Reason(Enum):
        NOT_FOUND = "not found"
        INVALID_SIGNATURE = "invalid signature"

    def __init__(self, name: str, reason: LoadError.Reason) -> None:
        super().__init__(f"cannot load '{name}': {reason.value}")
        self.name = name
        self.reason = reason


def load_from_file(name: str, magic: bytes, name_has_ext: bool = False) -> bytes:
    """Read a compiled module and return its bytecode, without the file signature.

    Unless ``name_has_ext`` is true, the compiled-file extension is appended.
    """
    path = Path(name if name_has_ext else name + RHOC_EXT)
    try:
        data = path.read_bytes()
    except OSError:
        raise LoadError(name, LoadError.Reason.NOT_FOUND) from None

    if data[: len(magic)] != magic or len(data) < len(magic):
        raise LoadError(name, LoadError.Reason.INVALID_SIGNATURE)
    return data[len(magic):]