'''
desensamblador TTK-91: palabra de 32 bits -> texto
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, List

from .isa import by_code
from .regs import reg_name
from .utils import u32, sign_extend, split_bits

# Marca visible de "no se pudo decodificar"; desensamblar nunca lanza excepciones
INVALID = "N/A"

_SIGN: Dict[int, str] = {-1: "=", 0: " ", 1: "@", 2: "@"}

@dataclass(frozen=True)
class Fields:
    opcode: int
    rj: int
    mode: int     # modo tal cual está en la palabra (0..3)
    ri: int
    addr: int     # con signo, 16 bits

def split_word(word: int) -> Fields:
    """Separa los campos de una palabra (acepta i32 o u32)."""
    opcode, rj, mode, ri, addr = split_bits(u32(word), ((31, 24), (23, 21), (20, 19), (18, 16), (15, 0)))
    return Fields(opcode, rj, mode, ri, sign_extend(addr, 16))

def decode_mode(default_mode: int, mode: int) -> int:
    """Inverso de 'default_mode + ajuste' del codificador."""
    return mode - default_mode

def operand_mode(f: Fields, default_mode: int) -> int:
    """Ajuste de modo tal como se escribiría en el texto.

    Con dirección 0 y registro índice distinto de R0 se supone direccionamiento
    directo a registro, que el codificador había restado.
    """
    m = decode_mode(default_mode, f.mode)
    if f.addr == 0 and f.ri != 0:
        m += 1
    return m

def is_valid_mode(m: int, default_mode: int) -> bool:
    if m not in _SIGN:
        return False
    return not (m == 2 and default_mode == 1)

def second_to_string(m: int, ri: int, addr: int) -> str:
    sign = _SIGN.get(m, "?")
    if m == 2:
        # '@(R1)'
        body = f"({reg_name(ri)})"
        return sign + (f"{addr}{body}" if addr != 0 else body)
    if ri == 0:
        return sign + str(addr)
    if addr != 0:
        return sign + f"{addr}({reg_name(ri)})"
    return sign + reg_name(ri)

def disassemble_instruction(word: int, *, strict: bool = False, classic_only: bool = False) -> str:
    """Texto de una instrucción.

    Modo permisivo (por defecto): sólo un opcode desconocido produce 'N/A'.
    strict: los modos inválidos producen 'N/A'.
    classic_only: las instrucciones extendidas (IEXIT, HLT, HCF) producen 'N/A'.
    """
    f = split_word(word)
    sp = by_code(f.opcode)
    if sp is None:
        return INVALID
    if classic_only and not sp.classic:
        return INVALID

    m = operand_mode(f, sp.default_mode)
    if strict and not is_valid_mode(m, sp.default_mode):
        return INVALID

    head = f"{sp.name:<6}"
    if sp.operands == 0:
        return sp.name
    if sp.operands == 1:
        if sp.op2_only:
            return head + second_to_string(m, f.ri, f.addr)
        return head + reg_name(f.rj)
    return head + reg_name(f.rj) + ", " + second_to_string(m, f.ri, f.addr)

def disassemble_classic(word: int) -> str:
    """Decodificación estricta del repertorio clásico."""
    return disassemble_instruction(word, strict=True, classic_only=True)

def disassemble(words: Iterable[int], *, start: int = 0, strict: bool = False) -> List[str]:
    """Listado 'dirección: texto' de una secuencia de palabras."""
    return [f"{start + i}: {disassemble_instruction(w, strict=strict)}" for i, w in enumerate(words)]
