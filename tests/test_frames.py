import pytest

from rhovm.codeobject import CodeObject
from rhovm.frames import EMPTY, ExcHandler, Frame, is_empty


@pytest.fixture
def code():
    return CodeObject(name="f", bc=b"\x30", names=["a", "b"], frees=["x", "y"])


def test_new_frame_state(code):
    frame = Frame(code)
    assert frame.locals == [EMPTY, EMPTY]
    assert frame.n_locals == len(code.names)
    assert frame.frees == code.frees
    assert frame.stack == []
    assert frame.handlers == []
    assert frame.pos == 0
    assert is_empty(frame.return_value)
    assert frame.co is None
    assert not frame.active
    assert not frame.top_level


def test_empty_is_not_null():
    assert not is_empty(None)
    assert is_empty(EMPTY)
    assert not EMPTY


def test_exc_handler_covers():
    h = ExcHandler(start=4, end=10, handler_pos=12, purge_wall=1)
    assert h.covers(4)
    assert h.covers(10)
    assert not h.covers(3)
    assert not h.covers(11)


def test_save_state(code):
    frame = Frame(code)
    stack = [1, 2]
    handlers = [ExcHandler(0, 5, 6, 0)]
    frame.save_state(7, "out", stack, handlers)
    assert frame.pos == 7
    assert frame.return_value == "out"
    assert frame.stack == [1, 2]
    assert frame.handlers == handlers
    stack.append(3)
    assert frame.stack == [1, 2]


def test_reset_clears_locals_of_inner_frame(code):
    frame = Frame(code)
    frame.locals[0] = 42
    frame.save_state(3, 9, [1], [ExcHandler(0, 1, 2, 0)])
    frame.reset()
    assert frame.locals == [EMPTY, EMPTY]
    assert frame.stack == []
    assert frame.handlers == []
    assert frame.pos == 0
    assert is_empty(frame.return_value)


def test_reset_keeps_top_level_locals(code):
    frame = Frame(code)
    frame.top_level = True
    frame.locals[1] = "kept"
    frame.reset()
    assert frame.locals[1] == "kept"
    assert frame.pos == 0


def test_reset_forced_free_of_top_level_locals(code):
    frame = Frame(code)
    frame.top_level = True
    frame.force_free_locals = True
    frame.locals[1] = "gone"
    frame.reset()
    assert is_empty(frame.locals[1])


def test_claim_and_release(code):
    frame = Frame(code)
    assert frame.claim() is True
    assert frame.owned
    assert frame.claim() is False
    frame.release()
    assert not frame.owned
    assert frame.claim() is True
    frame.release()
    frame.release()
    assert not frame.owned