# src/ttk91_asm/encoding.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Mapping, Sequence

from .ast import Statement, Symbol
from .isa import spec as isa_spec
from .regs import reg_num
from .parser import parse_op2
from .literals import is_builtin_const, builtin_const, parse_integer
from .utils import to_i32, fits_16
from .diagnostics import StructureError, RangeError, AddressingError

# ---------------- Resultados de codificación ----------------

@dataclass(frozen=True)
class Encoded:
    word: int      # i32
    address: int   # dirección absoluta de esta instrucción
    mnemonic: str

# ---------------- Empaquetado de bits ----------------

# opcode[31:24] rj[23:21] mode[20:19] ri[18:16] addr[15:0]
def pack(opcode: int, rj: int, mode: int, ri: int, addr: int) -> int:
    return to_i32((opcode & 0xFF) << 24 |
                  (rj & 0x7) << 21 |
                  (mode & 0x3) << 19 |
                  (ri & 0x7) << 16 |
                  (addr & 0xFFFF))

# ---------------- Resolución de direcciones ----------------

def resolve_address(text: str, symtab: Mapping[str, Symbol]) -> int:
    """Vacío -> 0; luego constante incorporada, símbolo y literal, en ese orden.

    Lanza ValueError si no se puede resolver.
    """
    if text == "":
        return 0
    if is_builtin_const(text):
        return builtin_const(text)
    sym = symtab.get(text)
    if sym is not None:
        return sym.offset
    return parse_integer(text)

def encode_mode(default_mode: int, delta: int) -> int:
    """Modo final del campo: el de la instrucción más el ajuste del operando."""
    return default_mode + delta

# ---------------- Codificador principal ----------------

def encode_statement(st: Statement, symtab: Mapping[str, Symbol]) -> int:
    """Codifica una sentencia de código en una palabra de 32 bits (i32)."""
    try:
        sp = isa_spec(st.keyword)
    except KeyError as ex:
        raise StructureError(f"Instrucción desconocida: {st.keyword}", line=st.line) from ex

    words = st.operands
    if len(words) != sp.operands:
        raise StructureError(
            f"Número de operandos inválido para {sp.name}. Se esperaban {sp.operands}, hay {len(words)}",
            line=st.line,
        )

    # Reparto de operandos textuales
    if len(words) == 0:
        op1, op2 = "R0", ""
    elif len(words) == 1:
        # algunos saltos usan op2 pero no op1
        if sp.op2_only:
            op1, op2 = "R0", words[0]
        else:
            op1, op2 = words[0], ""
    else:
        op1, op2 = words[0], words[1]

    try:
        rj = reg_num(op1)
    except ValueError as ex:
        raise AddressingError(str(ex), line=st.line, hint="el primer operando debe ser un registro") from ex

    if op2 == "":
        mode = sp.default_mode
        ri = 0
        addr = 0
    else:
        try:
            parsed = parse_op2(op2)
        except ValueError as ex:
            raise AddressingError(f"No se pudo analizar el segundo operando: {ex}", line=st.line) from ex
        mode = encode_mode(sp.default_mode, parsed.mode)
        ri = parsed.register
        try:
            addr = resolve_address(parsed.addr, symtab)
        except ValueError as ex:
            raise AddressingError(f"Dirección inválida: {parsed.addr}", line=st.line,
                                  hint="no es constante incorporada, símbolo ni literal") from ex

    if not 0 <= mode <= 2:
        raise RangeError(f"Modo {mode} fuera de rango en '{op2}'", line=st.line,
                         hint="revise los signos '=' y '@' para esta instrucción")
    if not fits_16(addr):
        raise RangeError(f"Dirección {addr} fuera de rango", line=st.line,
                         hint="el campo de dirección es de 16 bits")

    return pack(sp.opcode, rj, mode, ri, addr)

def encode(statements: Sequence[Statement], symtab: Mapping[str, Symbol], *,
           org: int = 0) -> List[Encoded]:
    """Segunda pasada: codifica cada sentencia de código en orden de fuente."""
    words: List[Encoded] = []
    address = org
    for st in statements:
        if st.kind != "code":
            continue
        word = encode_statement(st, symtab)
        words.append(Encoded(word=word, address=address, mnemonic=st.keyword))
        address += 1
    return words
