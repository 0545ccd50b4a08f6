# rhovm

`rhovm` holds the runtime building blocks of the Rho language: the object
model with its classes and operation slots, runtime errors and exceptions,
the instruction set, code objects with line-number lookup, call frames and
the loader for compiled `.rhoc` files. It has no dependencies beyond the
standard library.

## Modules

| Module | Contents |
| --- | --- |
| `rhovm.errors` | `ErrorType`, `Traceback`, `RhoError`, `RhoException` and its subclasses, and functions that build the standard error messages. |
| `rhovm.attrs` | `AttrType`, `AttrMember`, `AttrMethod`, `AttrInfo`, `AttrDict` and `attr_hash`. |
| `rhovm.opcodes` | `Opcode`, `SymbolTableCode` and `ConstTableCode`. |
| `rhovm.model` | `RhoClass`, `RhoObject`, `NativeFunction`, `Method`, `Module`, `IterStop`, `Range`, the built-in class values and `getclass`, `is_a`, `is_iter_stop`. |
| `rhovm.codeobject` | `CodeObject` and its `line_for` lookup. |
| `rhovm.loader` | `load_from_file` and `LoadError`. |
| `rhovm.frames` | `Frame`, `ExcHandler` and the `EMPTY` marker with `is_empty`. |

## Values and classes

Runtime values are Python values where one fits: `None` is null, and
`bool`, `int`, `float` and `str` are the primitive kinds. A `RhoClass` is
itself a value (of class `Meta`), exception values are `RhoException`
instances, and everything else is a `RhoObject` carrying its own class.

`getclass(value)` returns a value's runtime class. A class holds a table of
slot functions; `resolve(slot)` finds a slot on the class or its nearest
base, and `is_subclass(parent)` walks the base chain.

```python
from rhovm.model import INT_CLASS, getclass, is_a, OBJECT_CLASS

add = getclass(3).resolve("add")
add(3, 4)                            # 7
INT_CLASS.resolve("div")(7, -2)      # -3, integer division truncates
is_a(3, OBJECT_CLASS)                # True
```

Binary slots return `NotImplemented` for operand types they do not
support. Integer or float division and modulo by zero raise a `RhoError` of
type `ErrorType.DIV_BY_ZERO`.

`Range(start, stop)` yields the integers from `start` up to `stop` through
its `iternext` slot and returns the `ITER_STOP` marker at the end. Advancing
it from a thread other than the one that made it raises
`ConcurrentAccessException`.

Calling an exception class (through its `Meta` class's `call` slot or
`RhoClass.instantiate`) with one string argument makes the matching
`RhoException` subclass instance.

## Errors and exceptions

* `RhoError` is irrecoverable and carries an `ErrorType`; its
  `format_message()` gives lines such as
  `Name Error: cannot reference unbound variable 'x'`.
* `RhoException` and its subclasses (`TypeException`, `IndexException`,
  `AttributeException`, `ImportException`, `SequenceExpandException`,
  `ConcurrentAccessException`, ...) are the catchable kind.

Both collect traceback entries with `append_traceback(fn, lineno)`;
`Traceback.format()` renders them as `Traceback:` followed by
`  Line N in fn` lines.

`error_on_char(code, culprit, target_line)` renders one source line with a
caret under the offending character, keeping tabs aligned.

## Attribute tables

`AttrDict(max_size)` maps names to `AttrInfo(index, is_method)`.
`register_members` and `register_methods` number the given attributes in
order; `get(name)` returns the `AttrInfo` or `None`.

## Code objects and line numbers

`CodeObject.line_for(pos, arg_size)` translates a byte offset in the
bytecode to a source line using the object's line-number table.
`arg_size(opcode)` must give the number of argument bytes after an opcode,
or a negative number for an invalid one. Results are cached per position.

## Frames

A `Frame` made for a code object has one local slot per name, all holding
`EMPTY`, a value stack and a list of `ExcHandler` records. `save_state`
records where a suspended frame resumes; `reset` clears it for reuse while
keeping the locals of a top-level frame unless `force_free_locals` is set.
`claim()` and `release()` mark a frame as owned.

## Loading compiled code

```python
from rhovm.loader import LoadError, load_from_file

magic = b"\x00RHO"  # the signature expected at the start of the file
try:
    code = load_from_file("program", magic)
except LoadError as exc:
    print(exc.reason)
```

Without `name_has_ext=True`, `.rhoc` is appended to the name. A missing
file gives `LoadError.Reason.NOT_FOUND`; a file not starting with the
signature gives `LoadError.Reason.INVALID_SIGNATURE`. The returned bytes
exclude the signature.

## What this package does not do

The package does not execute bytecode. It has no evaluation loop, no
dispatch of operators across values, no built-in functions such as `len` or
`print`, no import resolution and no command-line program. It provides the
pieces such an interpreter is built from.