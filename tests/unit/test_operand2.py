import pytest
from ttk91_asm.parser import parse_op2

# Modos de direccionamiento:
#
#     texto       efecto
#     "="         resta 1 al modo
#     "@"         suma 1 al modo
#     "R1"        sin dirección: resta 1 (directo a registro)
#     "-R1"       ilegal
#     "(R1)"      equivale a "0(R1)"
#     Sólo el primer carácter es signo de modo: "=-1" vale, "-=1" no se resuelve.

@pytest.mark.parametrize("src, mode", [
    ("=0", -1), ("0", 0), ("@0", 1),
    ("=55555", -1), ("55555", 0), ("@55555", 1),
    ("=-55555", -1), ("-55555", 0), ("@-55555", 1),
    ("=0x500", -1), ("0x500", 0), ("@0x500", 1),
])
def test_mode_sign(src, mode):
    assert parse_op2(src).mode == mode

@pytest.mark.parametrize("src, mode, addr", [
    ("-=1", 0, "-=1"),
    ("-@1", 0, "-@1"),
    ("0=1", 0, "0=1"),
    ("0@1", 0, "0@1"),
    ("==1", -1, "=1"),
    ("@@1", 1, "@1"),
    ("=@1", -1, "@1"),
    ("@=1", 1, "=1"),
])
def test_only_first_char_is_mode_sign(src, mode, addr):
    op = parse_op2(src)
    assert op.mode == mode and op.addr == addr

@pytest.mark.parametrize("src, reg", [
    ("R0", 0), ("R1", 1), ("r5", 5), ("R7", 7), ("SP", 6), ("FP", 7),
])
def test_direct_register(src, reg):
    op = parse_op2(src)
    assert op.mode == -1 and op.register == reg and op.addr == ""

def test_direct_register_with_sign():
    assert parse_op2("@R1").mode == 0
    assert parse_op2("=R1").mode == -2

@pytest.mark.parametrize("src", ["-R0", "-R1", "-FP", "=-R2", "@-SP"])
def test_negative_direct_register(src):
    with pytest.raises(ValueError):
        parse_op2(src)

@pytest.mark.parametrize("src, mode, reg, addr", [
    ("(R0)", 0, 0, ""),
    ("(R1)", 0, 1, ""),
    ("(SP)", 0, 6, ""),
    ("0(R3)", 0, 3, "0"),
    ("0x123(R0)", 0, 0, "0x123"),
    ("-0x123(R1)", 0, 1, "-0x123"),
    ("-0b1010(R3)", 0, 3, "-0b1010"),
    ("0O8887(R7)", 0, 7, "0O8887"),
    ("9999(FP)", 0, 7, "9999"),
    ("table(r2)", 0, 2, "table"),
    ("(R2)table", 0, 2, "table"),
    ("=(R1)", -1, 1, ""),
    ("=0x123(R0)", -1, 0, "0x123"),
    ("=-0x123(R1)", -1, 1, "-0x123"),
    ("@(R7)", 1, 7, ""),
    ("@0(FP)", 1, 7, "0"),
    ("@-0b1010(R3)", 1, 3, "-0b1010"),
])
def test_indexed(src, mode, reg, addr):
    op = parse_op2(src)
    assert (op.mode, op.register, op.addr) == (mode, reg, addr)

def test_plain_address_defaults_to_r0():
    op = parse_op2("loop")
    assert op.register == 0 and op.addr == "loop" and op.mode == 0

@pytest.mark.parametrize("src, msg", [
    ("5(R1", "sin cerrar"),
    ("(R1", "sin cerrar"),
    ("1(R1)2", "ambos lados"),
    ("5(R9)", "Registro inválido"),
    ("x(y)", "Registro inválido"),
])
def test_malformed(src, msg):
    with pytest.raises(ValueError, match=msg):
        parse_op2(src)
