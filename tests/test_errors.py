import pytest

from rhovm.errors import (
    ErrorType,
    ImportException,
    RhoError,
    RhoException,
    SequenceExpandException,
    Traceback,
    TypeException,
    call_num_args,
    div_by_zero_error,
    error_on_char,
    import_not_found,
    invalid_catch_error,
    invalid_file_signature_error,
    invalid_throw_error,
    multithreading_not_supported,
    seq_expand_inconsistent,
    unbound_error,
    unsupported_binary,
    unsupported_unary,
)


def test_error_type_headers():
    dbz = RhoError(ErrorType.DIV_BY_ZERO, "m")
    assert dbz.format_message() == "Division by Zero Error: m\n"
    no_mt = RhoError(ErrorType.NO_MT, "m")
    assert no_mt.format_message() == "Multithreading Error: m\n"


def test_traceback_format():
    tb = Traceback()
    tb.add("<module>", 3)
    tb.add("f", 7)
    assert tb.format() == "Traceback:\n  Line 3 in <module>\n  Line 7 in f\n"
    assert len(tb) == 2


def test_empty_traceback_format():
    assert Traceback().format() == "Traceback:\n"


def test_div_by_zero_message():
    err = div_by_zero_error()
    assert err.type is ErrorType.DIV_BY_ZERO
    assert err.format_message() == "Division by Zero Error: division or modulo by zero\n"


def test_unbound_error():
    err = unbound_error("x")
    assert err.type is ErrorType.NAME
    assert err.msg == "cannot reference unbound variable 'x'"


def test_invalid_catch_variants():
    assert invalid_catch_error("Meta", True).msg == "cannot catch non-subclass of Exception"
    assert invalid_catch_error("Int", False).msg == "cannot catch instances of class Int"


def test_invalid_throw_and_signature():
    assert invalid_throw_error("Str").msg.endswith("not Str")
    sig = invalid_file_signature_error("mod")
    assert sig.type is ErrorType.FATAL
    assert "'mod'" in sig.msg


def test_multithreading_error_type():
    assert multithreading_not_supported().type is ErrorType.NO_MT


def test_error_message_truncated():
    err = RhoError(ErrorType.FATAL, "x" * 5000)
    assert len(err.msg) == 1023


def test_error_traceback_append():
    err = div_by_zero_error()
    err.append_traceback("g", 12)
    assert err.traceback.entries == [("g", 12)]
    with pytest.raises(RhoError):
        raise err


def test_exception_traceback_and_message():
    exc = TypeException("bad")
    exc.append_traceback("h", 4)
    assert exc.traceback.format() == "Traceback:\n  Line 4 in h\n"
    assert exc.format_message().endswith(": bad\n")
    assert isinstance(exc, RhoException)


def test_error_on_char_marks_culprit():
    code = "a = 1\nb = $\nc = 2"
    culprit = code.index("$")
    out = error_on_char(code, culprit, 2)
    line, mark = out.splitlines()
    assert line == "b = $"
    assert mark.endswith("^")
    assert len(mark) == line.index("$") + 1


def test_error_on_char_keeps_tabs():
    code = "\tx ?"
    out = error_on_char(code, code.index("?"), 1)
    line, mark = out.splitlines()
    assert line == code
    assert mark[0] == "\t"
    assert mark.index("^") == code.index("?")


def test_error_on_char_missing_line():
    with pytest.raises(ValueError):
        error_on_char("one line", 0, 3)


def test_unsupported_helpers():
    un = unsupported_unary("~", "Str")
    assert isinstance(un, TypeException)
    assert "~" in un.msg and "Str" in un.msg
    bi = unsupported_binary("+", "Int", "Str")
    assert "Int" in bi.msg and "Str" in bi.msg and "+" in bi.msg


def test_call_num_args():
    exc = call_num_args("len", 2, 1)
    assert isinstance(exc, TypeException)
    assert exc.msg.startswith("len()")


def test_import_and_seq_expand():
    imp = import_not_found("nothere")
    assert isinstance(imp, ImportException)
    assert "nothere" in imp.msg
    seq = seq_expand_inconsistent(4, 2)
    assert isinstance(seq, SequenceExpandException)
    assert "4" in seq.msg and "2" in seq.msg