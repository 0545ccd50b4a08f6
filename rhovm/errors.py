"""Runtime errors, exceptions and traceback bookkeeping."""

from __future__ import annotations

from enum import Enum
from typing import ClassVar

_MAX_MSG_LEN = 1023
_MAX_LINE_LEN = 1024


class ErrorType(Enum):
    """Kinds of irrecoverable runtime errors, valued by their headers."""

    FATAL = "Fatal Error"
    TYPE = "Type Error"
    NAME = "Name Error"
    DIV_BY_ZERO = "Division by Zero Error"
    NO_MT = "Multithreading Error"

    @property
    def header(self) -> str:
        return self.value


class Traceback:
    """Ordered record of (function, line number) pairs."""

    def __init__(self) -> None:
        self.entries: list[tuple[str, int]] = []

    def add(self, fn: str, lineno: int) -> None:
        self.entries.append((str(fn), int(lineno)))

    def format(self) -> str:
        lines = ["Traceback:\n"]
        lines.extend(f"  Line {lineno} in {fn}\n" for fn, lineno in self.entries)
        return "".join(lines)

    def __len__(self) -> int:
        return len(self.entries)


class RhoError(Exception):
    """An irrecoverable runtime error, which no try-catch can handle."""

    def __init__(self, type: ErrorType, msg: str) -> None:
        msg = msg[:_MAX_MSG_LEN]
        super().__init__(msg)
        self.type = type
        self.msg = msg
        self.traceback = Traceback()

    def append_traceback(self, fn: str, lineno: int) -> None:
        self.traceback.add(fn, lineno)

    def format_message(self) -> str:
        return f"{self.type.header}: {self.msg}\n"


class RhoException(Exception):
    """A catchable exception raised by running code."""

    rho_name: ClassVar[str] = "Exception"

    def __init__(self, msg: str) -> None:
        super().__init__(msg)
        self.msg = msg
        self.traceback = Traceback()

    def append_traceback(self, fn: str, lineno: int) -> None:
        self.traceback.add(fn, lineno)

    def format_message(self) -> str:
        return f"{self.rho_name}: {self.msg}\n"


class IndexException(RhoException):
    rho_name = "IndexException"


class TypeException(RhoException):
    rho_name = "TypeException"


class IOException(RhoException):
    rho_name = "IOException"


class AttributeException(RhoException):
    rho_name = "AttributeException"


class ImportException(RhoException):
    rho_name = "ImportException"


class IllegalStateChangeException(RhoException):
    rho_name = "IllegalStateChangeException"


class SequenceExpandException(RhoException):
    rho_name = "SequenceExpandException"


class ActorException(RhoException):
    rho_name = "ActorException"


class ConcurrentAccessException(RhoException):
    rho_name = "ConcurrentAccessException"


def invalid_file_signature_error(module: str) -> RhoError:
    return RhoError(
        ErrorType.FATAL,
        f"invalid file signature encountered when loading module '{module}'",
    )


def unbound_error(var: str) -> RhoError:
    return RhoError(ErrorType.NAME, f"cannot reference unbound variable '{var}'")


def invalid_catch_error(cls_name: str, is_class: bool) -> RhoError:
    """Error for a catch clause whose target is not an exception class.

    ``is_class`` tells whether the target was a class at all (but not an
    Exception subclass) rather than an instance of ``cls_name``.
    """
    if is_class:
        return RhoError(ErrorType.TYPE, "cannot catch non-subclass of Exception")
    return RhoError(ErrorType.TYPE, f"cannot catch instances of class {cls_name}")


def invalid_throw_error(cls_name: str) -> RhoError:
    return RhoError(
        ErrorType.TYPE,
        f"can only throw instances of a subclass of Exception, not {cls_name}",
    )


def div_by_zero_error() -> RhoError:
    return RhoError(ErrorType.DIV_BY_ZERO, "division or modulo by zero")


def multithreading_not_supported() -> RhoError:
    return RhoError(
        ErrorType.NO_MT,
        "multithreading is not supported by this build of the Rho runtime",
    )


def error_on_char(code: str, culprit: int, target_line: int) -> str:
    """Render the line ``target_line`` (1-based) of ``code`` with a caret under
    the character at offset ``culprit``."""
    line_start = 0
    for _ in range(target_line - 1):
        nl = code.find("\n", line_start)
        if nl < 0:
            raise ValueError(f"code has no line {target_line}")
        line_start = nl + 1

    line_end = code.find("\n", line_start)
    if line_end < 0:
        line_end = len(code)
    line = code[line_start:min(line_end, line_start + _MAX_LINE_LEN)]

    tok_offset = max(0, min(culprit - line_start, _MAX_LINE_LEN))
    mark = "".join(
        "\t" if i < len(line) and line[i] == "\t" else " " for i in range(tok_offset)
    )
    return f"{line}\n{mark}^\n"


def unsupported_unary(op: str, cls_name: str) -> TypeException:
    return TypeException(f"unsupported operand type for {op}: '{cls_name}'")


def unsupported_binary(op: str, cls_name1: str, cls_name2: str) -> TypeException:
    return TypeException(
        f"unsupported operand types for {op}: '{cls_name1}' and '{cls_name2}'"
    )


def call_num_args(fn: str, got: int, expected: int) -> TypeException:
    plural = "" if expected == 1 else "s"
    return TypeException(
        f"{fn}(): expected {expected} argument{plural}, got {got}"
    )


def import_not_found(name: str) -> ImportException:
    return ImportException(f"cannot find module '{name}'")


def seq_expand_inconsistent(got: int, expected: int) -> SequenceExpandException:
    return SequenceExpandException(
        f"inconsistent sequence expansion: expected {expected} elements, got {got}"
    )