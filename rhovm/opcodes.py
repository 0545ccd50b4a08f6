"""Bytecode instruction and table-marker codes."""

from enum import IntEnum, auto


class Opcode(IntEnum):
    NOP = 0x30
    LOAD_CONST = auto()
    LOAD_NULL = auto()
    LOAD_ITER_STOP = auto()
    ADD = auto()
    SUB = auto()
    MUL = auto()
    DIV = auto()
    MOD = auto()
    POW = auto()
    BITAND = auto()
    BITOR = auto()
    XOR = auto()
    BITNOT = auto()
    SHIFTL = auto()
    SHIFTR = auto()
    AND = auto()
    OR = auto()
    NOT = auto()
    EQUAL = auto()
    NOTEQ = auto()
    LT = auto()
    GT = auto()
    LE = auto()
    GE = auto()
    UPLUS = auto()
    UMINUS = auto()
    IADD = auto()
    ISUB = auto()
    IMUL = auto()
    IDIV = auto()
    IMOD = auto()
    IPOW = auto()
    IBITAND = auto()
    IBITOR = auto()
    IXOR = auto()
    ISHIFTL = auto()
    ISHIFTR = auto()
    MAKE_RANGE = auto()
    IN = auto()
    STORE = auto()
    STORE_GLOBAL = auto()
    LOAD = auto()
    LOAD_GLOBAL = auto()
    LOAD_ATTR = auto()
    SET_ATTR = auto()
    LOAD_INDEX = auto()
    SET_INDEX = auto()
    APPLY = auto()
    IAPPLY = auto()
    LOAD_NAME = auto()
    PRINT = auto()
    JMP = auto()
    JMP_BACK = auto()
    JMP_IF_TRUE = auto()
    JMP_IF_FALSE = auto()
    JMP_BACK_IF_TRUE = auto()
    JMP_BACK_IF_FALSE = auto()
    JMP_IF_TRUE_ELSE_POP = auto()
    JMP_IF_FALSE_ELSE_POP = auto()
    CALL = auto()
    RETURN = auto()
    THROW = auto()
    PRODUCE = auto()
    TRY_BEGIN = auto()
    TRY_END = auto()
    JMP_IF_EXC_MISMATCH = auto()
    MAKE_LIST = auto()
    MAKE_TUPLE = auto()
    MAKE_SET = auto()
    MAKE_DICT = auto()
    IMPORT = auto()
    EXPORT = auto()
    EXPORT_GLOBAL = auto()
    EXPORT_NAME = auto()
    RECEIVE = auto()
    GET_ITER = auto()
    LOOP_ITER = auto()
    MAKE_FUNCOBJ = auto()
    MAKE_GENERATOR = auto()
    MAKE_ACTOR = auto()
    SEQ_EXPAND = auto()
    POP = auto()
    DUP = auto()
    DUP_TWO = auto()
    ROT = auto()
    ROT_THREE = auto()


class SymbolTableCode(IntEnum):
    ENTRY_BEGIN = 0x10
    ENTRY_END = auto()


class ConstTableCode(IntEnum):
    ENTRY_BEGIN = 0x20
    ENTRY_INT = auto()
    ENTRY_FLOAT = auto()
    ENTRY_STRING = auto()
    ENTRY_CODEOBJ = auto()
    ENTRY_END = auto()