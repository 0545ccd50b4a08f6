"""Runtime object model: classes with operation slots, and the built-in value kinds.

Runtime values are plain Python values where one fits: ``None`` is null,
``bool``/``int``/``float``/``str`` are the primitive kinds, a ``RhoClass`` is a
class value, and ``RhoException`` instances are exception values. Everything
else is a ``RhoObject`` that carries its own runtime class.

Slot functions follow these conventions:

* unary slots take ``(this)``; binary slots take ``(this, other)`` and return
  ``NotImplemented`` when they do not support the operand types;
* ``cmp`` returns a negative, zero or positive integer;
* ``call`` takes ``(this, args, named)`` where ``named`` is a sequence of
  ``(name, value)`` pairs;
* ``init`` takes ``(cls, args)`` and returns the new value;
* errors are raised as ``RhoError`` or ``RhoException``.
"""

from __future__ import annotations

import math
import operator
import threading
from typing import Any, Callable, Iterable, Mapping, Sequence

from .attrs import AttrDict, AttrMember, AttrMethod
from .errors import (
    ActorException,
    AttributeException,
    ConcurrentAccessException,
    IllegalStateChangeException,
    ImportException,
    IndexException,
    IOException,
    RhoException,
    SequenceExpandException,
    TypeException,
    call_num_args,
    div_by_zero_error,
)

BINARY_SLOTS = (
    "add", "sub", "mul", "div", "mod", "pow",
    "bitand", "bitor", "xor", "shiftl", "shiftr",
)

SLOT_NAMES = frozenset({
    "init", "eq", "hash", "cmp", "str", "call", "print", "iter", "iternext",
    "attr_get", "attr_set",
    "plus", "minus", "abs", "bitnot", "nonzero", "to_int", "to_float",
    "len", "get", "set", "contains", "apply", "iapply",
    *BINARY_SLOTS,
    *(f"i{name}" for name in BINARY_SLOTS),
    *(f"r{name}" for name in BINARY_SLOTS),
})

CONCURRENT_ACCESS_MSG = "invalid concurrent access of non-thread-safe method or function"


class RhoClass:
    """A runtime class: a name, an optional base class and a table of slots."""

    def __init__(
        self,
        name: str,
        base: RhoClass | None = None,
        slots: Mapping[str, Callable[..., Any]] | None = None,
        members: Iterable[AttrMember] = (),
        methods: Iterable[AttrMethod] = (),
    ) -> None:
        self.name = name
        self.base = base
        self.slots = dict(slots or {})
        unknown = sorted(set(self.slots) - SLOT_NAMES)
        if unknown:
            raise ValueError(f"unknown slots for class {name}: {', '.join(unknown)}")
        self.members = tuple(members)
        self.methods = tuple(methods)
        self.attr_dict = AttrDict(len(self.members) + len(self.methods))
        self.attr_dict.register_members(self.members)
        self.attr_dict.register_methods(self.methods)

    def __repr__(self) -> str:
        return f"<class {self.name}>"

    def ancestry(self) -> Iterable[RhoClass]:
        """This class followed by each of its base classes."""
        cls: RhoClass | None = self
        while cls is not None:
            yield cls
            cls = cls.base

    def resolve(self, slot: str) -> Callable[..., Any] | None:
        """Find ``slot`` on this class or the nearest base class defining it."""
        if slot not in SLOT_NAMES:
            raise ValueError(f"unknown slot: {slot}")
        for cls in self.ancestry():
            fn = cls.slots.get(slot)
            if fn is not None:
                return fn
        return None

    def is_subclass(self, parent: RhoClass) -> bool:
        return any(cls is parent for cls in self.ancestry())

    def lookup_attr(self, name: str) -> AttrMember | AttrMethod | None:
        """Find an attribute declared directly on this class."""
        info = self.attr_dict.get(name)
        if info is None:
            return None
        return self.methods[info.index] if info.is_method else self.members[info.index]

    def instantiate(self, args: Sequence[Any], named: Sequence[tuple[str, Any]] = ()) -> Any:
        if named:
            raise TypeException("constructors do not take named arguments")
        init = self.resolve("init")
        if init is None:
            raise TypeException(f"cannot instantiate class {self.name}")
        return init(self, list(args))


# --- numeric helpers -------------------------------------------------------

def _is_num(v: Any) -> bool:
    return type(v) in (int, float)


def _is_int(v: Any) -> bool:
    return type(v) is int


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _arith(fn: Callable[[Any, Any], Any]) -> Callable[[Any, Any], Any]:
    def slot(a: Any, b: Any) -> Any:
        return fn(a, b) if _is_num(b) else NotImplemented
    return slot


def _bitwise(fn: Callable[[int, int], int]) -> Callable[[Any, Any], Any]:
    def slot(a: Any, b: Any) -> Any:
        return fn(a, b) if _is_int(b) else NotImplemented
    return slot


def _num_div(a: Any, b: Any) -> Any:
    if not _is_num(b):
        return NotImplemented
    if b == 0:
        raise div_by_zero_error()
    if _is_int(a) and _is_int(b):
        return _trunc_div(a, b)
    return a / b


def _num_mod(a: Any, b: Any) -> Any:
    if not _is_num(b):
        return NotImplemented
    if b == 0:
        raise div_by_zero_error()
    if _is_int(a) and _is_int(b):
        return a - b * _trunc_div(a, b)
    return math.fmod(a, b)


def _num_pow(a: Any, b: Any) -> Any:
    if not _is_num(b):
        return NotImplemented
    if _is_int(a) and _is_int(b) and b >= 0:
        return a ** b
    try:
        return math.pow(a, b)
    except OverflowError:
        return math.inf
    except ValueError:
        return math.inf if a == 0 else math.nan


def _shiftl(a: int, b: int) -> int:
    return a << b if b >= 0 else a >> -b


def _shiftr(a: int, b: int) -> int:
    return a >> b if b >= 0 else a << -b


def _num_cmp(a: Any, b: Any) -> Any:
    if not _is_num(b):
        return NotImplemented
    return (a > b) - (a < b)


def _num_eq(a: Any, b: Any) -> bool:
    return _is_num(b) and a == b


_NUMERIC_SLOTS: dict[str, Callable[..., Any]] = {
    "eq": _num_eq,
    "hash": hash,
    "cmp": _num_cmp,
    "plus": lambda a: a,
    "minus": operator.neg,
    "abs": abs,
    "add": _arith(operator.add),
    "sub": _arith(operator.sub),
    "mul": _arith(operator.mul),
    "div": _num_div,
    "mod": _num_mod,
    "pow": _num_pow,
    "nonzero": lambda a: a != 0,
    "to_int": int,
    "to_float": float,
}


# --- string helpers --------------------------------------------------------

def _str_get(s: str, idx: Any) -> str:
    if not _is_int(idx):
        raise TypeException(f"string indices must be integers, not {getclass(idx).name}")
    if not 0 <= idx < len(s):
        raise IndexException(f"string index out of range (index: {idx}, len: {len(s)})")
    return s[idx]


def _str_contains(s: str, sub: Any) -> bool:
    if type(sub) is not str:
        raise TypeException(f"left operand of 'in' must be a string, not {getclass(sub).name}")
    return sub in s


def _str_cmp(a: str, b: Any) -> Any:
    if type(b) is not str:
        return NotImplemented
    return (a > b) - (a < b)


# --- base and primitive classes --------------------------------------------

OBJECT_CLASS = RhoClass(
    "Object",
    slots={
        "eq": lambda a, b: a is b,
        "hash": id,
        "str": lambda a: f"<{getclass(a).name} at {id(a):#x}>",
        "nonzero": lambda a: True,
    },
)

NULL_CLASS = RhoClass(
    "Null",
    OBJECT_CLASS,
    slots={
        "eq": lambda a, b: b is None,
        "hash": lambda a: 0,
        "str": lambda a: "null",
        "nonzero": lambda a: False,
    },
)

BOOL_CLASS = RhoClass(
    "Bool",
    OBJECT_CLASS,
    slots={
        "eq": lambda a, b: type(b) is bool and a == b,
        "hash": hash,
        "str": lambda a: "true" if a else "false",
        "nonzero": bool,
        "to_int": int,
        "to_float": float,
    },
)

INT_CLASS = RhoClass(
    "Int",
    OBJECT_CLASS,
    slots={
        **_NUMERIC_SLOTS,
        "str": str,
        "bitnot": operator.invert,
        "bitand": _bitwise(operator.and_),
        "bitor": _bitwise(operator.or_),
        "xor": _bitwise(operator.xor),
        "shiftl": _bitwise(_shiftl),
        "shiftr": _bitwise(_shiftr),
    },
)

FLOAT_CLASS = RhoClass("Float", OBJECT_CLASS, slots={**_NUMERIC_SLOTS, "str": repr})

STR_CLASS = RhoClass(
    "Str",
    OBJECT_CLASS,
    slots={
        "eq": lambda a, b: type(b) is str and a == b,
        "hash": hash,
        "cmp": _str_cmp,
        "str": lambda a: a,
        "len": len,
        "get": _str_get,
        "contains": _str_contains,
        "add": lambda a, b: a + b if type(b) is str else NotImplemented,
        "nonzero": bool,
    },
)

META_CLASS = RhoClass(
    "Meta",
    OBJECT_CLASS,
    slots={
        "str": lambda cls: f"<class {cls.name}>",
        "call": lambda cls, args, named: cls.instantiate(args, named),
    },
)


# --- objects ---------------------------------------------------------------

class RhoObject:
    """Base of heap values; ``rho_class`` names the value's runtime class."""

    rho_class: RhoClass = OBJECT_CLASS

    def __init__(self, rho_class: RhoClass | None = None) -> None:
        if rho_class is not None:
            self.rho_class = rho_class


class NativeFunction(RhoObject):
    """A function implemented in Python, called with positional arguments."""

    def __init__(self, func: Callable[..., Any], name: str | None = None) -> None:
        super().__init__()
        self.func = func
        self.name = name if name is not None else getattr(func, "__name__", "<native>")

    def __repr__(self) -> str:
        return f"NativeFunction({self.name!r})"


class Method(RhoObject):
    """A method function bound to the value it was looked up on."""

    def __init__(self, binder: Any, method: Callable[..., Any]) -> None:
        super().__init__()
        self.binder = binder
        self.method = method


class Module(RhoObject):
    """A namespace of exported names."""

    def __init__(self, name: str, contents: Mapping[str, Any] | None = None) -> None:
        super().__init__()
        self.name = name
        self.contents: dict[str, Any] = dict(contents or {})

    def __repr__(self) -> str:
        return f"Module({self.name!r})"


class IterStop(RhoObject):
    """Singleton marking the end of an iteration."""

    _instance: IterStop | None = None

    def __new__(cls) -> IterStop:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ITER_STOP"


class Range(RhoObject):
    """Iterator over the integers from ``start`` up to, not including, ``stop``.

    A range may only be advanced by the thread that created it.
    """

    def __init__(self, start: Any, stop: Any) -> None:
        if not (_is_int(start) and _is_int(stop)):
            raise TypeException(
                f"invalid types for range: '{getclass(start).name}' and "
                f"'{getclass(stop).name}'"
            )
        super().__init__()
        self.start = start
        self.stop = stop
        self.i = start
        self._owner = threading.get_ident()

    def __repr__(self) -> str:
        return f"Range({self.start}, {self.stop})"


ITER_STOP = IterStop()


def get_iter_stop() -> IterStop:
    return ITER_STOP


def _native_call(fn: NativeFunction, args: Sequence[Any], named: Sequence[tuple[str, Any]]) -> Any:
    if named:
        raise TypeException("native functions do not take named arguments")
    return fn.func(*args)


def _method_call(m: Method, args: Sequence[Any], named: Sequence[tuple[str, Any]]) -> Any:
    return m.method(m.binder, list(args), list(named))


def _module_attr_get(module: Module, attr: str) -> Any:
    try:
        return module.contents[attr]
    except KeyError:
        raise AttributeException(
            f"module '{module.name}' has no attribute '{attr}'"
        ) from None


def _range_next(r: Range) -> Any:
    if threading.get_ident() != r._owner:
        raise ConcurrentAccessException(CONCURRENT_ACCESS_MSG)
    if r.i >= r.stop:
        return ITER_STOP
    value = r.i
    r.i += 1
    return value


NATIVE_FUNC_CLASS = RhoClass(
    "NativeFunction",
    OBJECT_CLASS,
    slots={"call": _native_call, "str": lambda f: f"<native function {f.name}>"},
)
METHOD_CLASS = RhoClass("Method", OBJECT_CLASS, slots={"call": _method_call})
MODULE_CLASS = RhoClass(
    "Module",
    OBJECT_CLASS,
    slots={"attr_get": _module_attr_get, "str": lambda m: f"<module {m.name}>"},
)
ITER_CLASS = RhoClass("Iter", OBJECT_CLASS, slots={"iter": lambda it: it})
ITER_STOP_CLASS = RhoClass("IterStop", OBJECT_CLASS)
RANGE_CLASS = RhoClass("Range", ITER_CLASS, slots={"iternext": _range_next})

NativeFunction.rho_class = NATIVE_FUNC_CLASS
Method.rho_class = METHOD_CLASS
Module.rho_class = MODULE_CLASS
IterStop.rho_class = ITER_STOP_CLASS
Range.rho_class = RANGE_CLASS


# --- exception classes -----------------------------------------------------

_EXC_TYPE_BY_CLASS: dict[RhoClass, type[RhoException]] = {}
_EXC_CLASS_BY_TYPE: dict[type, RhoClass] = {}


def _exception_init(cls: RhoClass, args: list[Any]) -> RhoException:
    if len(args) != 1:
        raise call_num_args(cls.name, len(args), 1)
    if type(args[0]) is not str:
        raise TypeException(
            f"{cls.name}(): expected a string message, got {getclass(args[0]).name}"
        )
    return _EXC_TYPE_BY_CLASS[cls](args[0])


def _exception_class(exc_type: type[RhoException], base: RhoClass) -> RhoClass:
    slots = {"init": _exception_init, "str": lambda e: e.msg} if base is OBJECT_CLASS else {}
    cls = RhoClass(exc_type.rho_name, base, slots=slots)
    _EXC_TYPE_BY_CLASS[cls] = exc_type
    _EXC_CLASS_BY_TYPE[exc_type] = cls
    return cls


EXCEPTION_CLASS = _exception_class(RhoException, OBJECT_CLASS)
INDEX_EXCEPTION_CLASS = _exception_class(IndexException, EXCEPTION_CLASS)
TYPE_EXCEPTION_CLASS = _exception_class(TypeException, EXCEPTION_CLASS)
IO_EXCEPTION_CLASS = _exception_class(IOException, EXCEPTION_CLASS)
ATTR_EXCEPTION_CLASS = _exception_class(AttributeException, EXCEPTION_CLASS)
IMPORT_EXCEPTION_CLASS = _exception_class(ImportException, EXCEPTION_CLASS)
ISC_EXCEPTION_CLASS = _exception_class(IllegalStateChangeException, EXCEPTION_CLASS)
SEQ_EXP_EXCEPTION_CLASS = _exception_class(SequenceExpandException, EXCEPTION_CLASS)
ACTOR_EXCEPTION_CLASS = _exception_class(ActorException, EXCEPTION_CLASS)
CONC_ACCESS_EXCEPTION_CLASS = _exception_class(ConcurrentAccessException, EXCEPTION_CLASS)

BUILTIN_CLASSES: tuple[RhoClass, ...] = (
    OBJECT_CLASS,
    NULL_CLASS,
    BOOL_CLASS,
    INT_CLASS,
    FLOAT_CLASS,
    STR_CLASS,
    METHOD_CLASS,
    NATIVE_FUNC_CLASS,
    MODULE_CLASS,
    META_CLASS,
    EXCEPTION_CLASS,
    INDEX_EXCEPTION_CLASS,
    TYPE_EXCEPTION_CLASS,
    IO_EXCEPTION_CLASS,
    ATTR_EXCEPTION_CLASS,
    IMPORT_EXCEPTION_CLASS,
    ISC_EXCEPTION_CLASS,
    SEQ_EXP_EXCEPTION_CLASS,
    ACTOR_EXCEPTION_CLASS,
    CONC_ACCESS_EXCEPTION_CLASS,
)

_PRIMITIVE_CLASSES: dict[type, RhoClass] = {
    type(None): NULL_CLASS,
    bool: BOOL_CLASS,
    int: INT_CLASS,
    float: FLOAT_CLASS,
    str: STR_CLASS,
}


def getclass(value: Any) -> RhoClass:
    """Return the runtime class of ``value``."""
    cls = _PRIMITIVE_CLASSES.get(type(value))
    if cls is not None:
        return cls
    if isinstance(value, RhoClass):
        return META_CLASS
    if isinstance(value, RhoObject):
        return value.rho_class
    if isinstance(value, RhoException):
        for t in type(value).__mro__:
            cls = _EXC_CLASS_BY_TYPE.get(t)
            if cls is not None:
                return cls
    raise TypeError(f"not a runtime value: {type(value).__name__}")


def is_a(value: Any, cls: RhoClass) -> bool:
    return getclass(value).is_subclass(cls)


def is_iter_stop(value: Any) -> bool:
    return value is ITER_STOP