import pytest

from rhovm.opcodes import ConstTableCode, Opcode, SymbolTableCode


def test_first_opcode_value():
    assert Opcode.NOP == 0x30
    assert Opcode(0x30) is Opcode.NOP


@pytest.mark.parametrize("enum_cls", [Opcode, SymbolTableCode, ConstTableCode])
def test_values_are_contiguous(enum_cls):
    values = [member.value for member in enum_cls]
    first = values[0]
    assert values == list(range(first, first + len(values)))


def test_table_markers_start_values():
    assert SymbolTableCode(0x10) is SymbolTableCode.ENTRY_BEGIN
    assert ConstTableCode(0x20) is ConstTableCode.ENTRY_BEGIN


def test_opcode_order_follows_declaration():
    assert Opcode(0x31) is Opcode.LOAD_CONST
    assert Opcode(Opcode.ROT_THREE - 1) is Opcode.ROT
    assert Opcode(Opcode.ADD + 1) is Opcode.SUB
    assert Opcode(Opcode.SUB + 1) is Opcode.MUL


@pytest.mark.parametrize("value", [m.value for m in SymbolTableCode] + [m.value for m in ConstTableCode])
def test_opcodes_do_not_overlap_table_codes(value):
    with pytest.raises(ValueError):
        Opcode(value)


def test_unknown_byte_rejected():
    with pytest.raises(ValueError):
        Opcode(0x00)