import pytest
from ttk91_asm.parser import parse
from ttk91_asm.data import statement_value, ds_size, build_data_segment
from ttk91_asm.diagnostics import StructureError, RangeError

def _st(line):
    return parse(line)[0]

@pytest.mark.parametrize("line, value", [
    ("x dc 5", 5),
    ("x dc -5", -5),
    ("x dc 0x10", 16),
    ("x dc 0b101", 5),
    ("x dc INT_MIN", -2147483648),
    ("x dc UINT_MAX", -1),
    ("x dc 4294967295", -1),
    ("x equ HALT", 11),
])
def test_statement_value(line, value):
    assert statement_value(_st(line)) == value

@pytest.mark.parametrize("line, msg", [
    ("x dc", "No se indicó valor"),
    ("x dc 1 2", "Demasiadas palabras"),
    ("x dc uno", "No se pudo leer el valor"),
    ("x dc 0x100000000", "No se pudo leer el valor"),
])
def test_statement_value_errors(line, msg):
    with pytest.raises(StructureError, match=msg):
        statement_value(_st(line))

def test_ds_size():
    assert ds_size(_st("buf ds 3")) == 3
    assert ds_size(_st("buf ds KBD")) == 1

@pytest.mark.parametrize("line, msg", [
    ("buf ds 0", "cero direcciones"),
    ("buf ds -2", "número negativo"),
])
def test_ds_size_errors(line, msg):
    with pytest.raises(RangeError, match=msg) as ei:
        ds_size(_st(line))
    assert ei.value.diagnostics[0].line == 1

def test_build_data_segment_in_source_order():
    src = """
    a dc 7
    nop
    b ds 3
    c dc -1
    k equ 99
    """
    assert build_data_segment(parse(src)) == [7, 0, 0, 0, -1]

def test_build_data_segment_ignores_code_and_constants():
    assert build_data_segment(parse("nop\nk equ 3\n")) == []
