import pytest
from ttk91_asm.parser import parse
from ttk91_asm.linker import first_pass
from ttk91_asm.encoding import encode, encode_statement, pack, resolve_address
from ttk91_asm.ast import Symbol
from ttk91_asm.diagnostics import StructureError, RangeError, AddressingError

def _enc(line: str, symtab=None) -> int:
    return encode_statement(parse(line)[0], symtab or {})

@pytest.mark.parametrize("src, word", [
    ("add r1 =0", 287309824),
    ("ADD R1, =0", 0x11200000),
    ("add r1 @(r1)", 288423936),
    ("store r1 @0", 19398656),
    ("store r1 @(r1)", 19464192),
    ("nop", pack(0x00, 0, 1, 0, 0)),
    ("load r2, =-1", pack(0x02, 2, 0, 0, 0xFFFF)),
    ("load r1, r2", pack(0x02, 1, 0, 2, 0)),
    ("load r1, @r2", pack(0x02, 1, 1, 2, 0)),
    ("load r1, (r2)", pack(0x02, 1, 1, 2, 0)),
    ("load r1, 5(sp)", pack(0x02, 1, 1, 6, 5)),
    ("load r1, =0xffff", pack(0x02, 1, 0, 0, 0xFFFF)),
    ("out r1, =CRT", pack(0x04, 1, 0, 0, 0)),
    ("in r1, =KBD", pack(0x03, 1, 0, 0, 1)),
    ("svc sp, =HALT", pack(0x70, 6, 0, 0, 11)),
    ("jump 12", pack(0x20, 0, 0, 0, 12)),
    ("jump @12", pack(0x20, 0, 1, 0, 12)),
    ("jequ 3(r4)", pack(0x28, 0, 0, 4, 3)),
    ("jneg r3, 7", pack(0x21, 3, 0, 0, 7)),
    ("not r5", pack(0x1B, 5, 1, 0, 0)),
    ("pushr fp", pack(0x35, 7, 1, 0, 0)),
    ("hlt", pack(0x71, 0, 1, 0, 0)),
])
def test_encode_single(src, word):
    assert _enc(src) == word

def test_pack_layout():
    w = pack(0xFF, 7, 3, 7, 0xFFFF)
    assert w == -1
    assert pack(0x11, 1, 2, 3, 0x1234) == 0x11331234

def test_resolve_address_priority():
    symtab = {"CRT": Symbol("CRT", "data", 99), "x": Symbol("x", "data", 42), "10": Symbol("10", "code", 5)}
    assert resolve_address("", symtab) == 0
    # las constantes incorporadas tienen prioridad sobre los símbolos
    assert resolve_address("CRT", symtab) == 0
    assert resolve_address("x", symtab) == 42
    # y los símbolos sobre los literales
    assert resolve_address("10", symtab) == 5
    assert resolve_address("0x10", symtab) == 16
    with pytest.raises(ValueError):
        resolve_address("y", symtab)

def test_forward_reference():
    src = """
        ORG 10
        JUMP end
    x   DC 4
        LOAD R1, x
    end NOP
    """
    sts = parse(src)
    link = first_pass(sts)
    words = encode(sts, link.symtab, org=link.org)
    assert [w.address for w in words] == [10, 11, 12]
    assert [w.mnemonic for w in words] == ["JUMP", "LOAD", "NOP"]
    assert words[0].word == pack(0x20, 0, 0, 0, 12)
    assert words[1].word == pack(0x02, 1, 1, 0, 13)

@pytest.mark.parametrize("src, exc, msg", [
    ("add r1", StructureError, "Número de operandos inválido para ADD"),
    ("nop r1", StructureError, "Se esperaban 0, hay 1"),
    ("jump r1, 5", StructureError, "Se esperaban 1, hay 2"),
    ("add 5, =1", AddressingError, "Registro inválido"),
    ("add r1, =-r2", AddressingError, "negativo"),
    ("add r1, 1(r2)3", AddressingError, "ambos lados"),
    ("add r1, 1(r2", AddressingError, "sin cerrar"),
    ("add r1, undefined", AddressingError, "Dirección inválida: undefined"),
    ("add r1, ==1", AddressingError, "Dirección inválida: =1"),
    ("add r1, =@1", AddressingError, "Dirección inválida: @1"),
    ("add r1, =INT_MAX", RangeError, "fuera de rango"),
    ("add r1, 65536", RangeError, "fuera de rango"),
    ("add r1, -32769", RangeError, "fuera de rango"),
    ("store r1, =5", RangeError, "Modo -1 fuera de rango"),
    ("add r1, =r2", RangeError, "Modo -1 fuera de rango"),
    ("jump =5", RangeError, "Modo -1"),
])
def test_encode_errors(src, exc, msg):
    with pytest.raises(exc) as ei:
        _enc("\n" + src)
    d = ei.value.diagnostics[0]
    assert msg in d.message
    assert d.line == 2

def test_address_range_limits():
    assert _enc("add r1, 65535") == pack(0x11, 1, 1, 0, 0xFFFF)
    assert _enc("add r1, -32768") == pack(0x11, 1, 1, 0, 0x8000)
    assert _enc("add r1, =UINT_MAX") == pack(0x11, 1, 0, 0, 0xFFFF)
