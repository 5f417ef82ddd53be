'''
tabla formal TTK-91 (opcodes, número de operandos, modo por defecto)
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Optional

@dataclass(frozen=True)
class OpSpec:
    """Especificación de una instrucción TTK-91.

    - name: mnemónico en mayúsculas
    - opcode: campo de 8 bits (bits 31..24)
    - operands: número de operandos textuales (0, 1 o 2)
    - default_mode: 0 si la instrucción debe direccionar memoria
      (STORE, saltos, CALL), 1 en el resto
    - op2_only: el único operando ocupa la posición del segundo operando
      (JUMP y los saltos que comparan con el registro de estado)
    - classic: pertenece al repertorio clásico (excluye IEXIT, HLT, HCF)
    """
    name: str
    opcode: int
    operands: int
    default_mode: int = 1
    op2_only: bool = False
    classic: bool = True

# Conjunto TTK-91, por mnemónico
SPEC: Dict[str, OpSpec] = {}
# Índice inverso: código numérico -> especificación
BY_CODE: Dict[int, OpSpec] = {}

def _add(name: str, opcode: int, operands: int, *, default_mode: int = 1,
         op2_only: bool = False, classic: bool = True) -> None:
    s = OpSpec(name, opcode, operands, default_mode, op2_only, classic)
    SPEC[name] = s
    BY_CODE[opcode] = s

# Transferencia de datos
_add("NOP",   0x00, 0)
_add("STORE", 0x01, 2, default_mode=0)
_add("LOAD",  0x02, 2)
_add("IN",    0x03, 2)
_add("OUT",   0x04, 2)

# Aritmética y lógica
_add("ADD",   0x11, 2)
_add("SUB",   0x12, 2)
_add("MUL",   0x13, 2)
_add("DIV",   0x14, 2)
_add("MOD",   0x15, 2)
_add("AND",   0x16, 2)
_add("OR",    0x17, 2)
_add("XOR",   0x18, 2)
_add("SHL",   0x19, 2)
_add("SHR",   0x1A, 2)
_add("NOT",   0x1B, 1)
_add("SHRA",  0x1C, 2)
_add("COMP",  0x1F, 2)

# Saltos (siempre direccionan memoria)
_add("JUMP",  0x20, 1, default_mode=0, op2_only=True)
_add("JNEG",  0x21, 2, default_mode=0)
_add("JZER",  0x22, 2, default_mode=0)
_add("JPOS",  0x23, 2, default_mode=0)
_add("JNNEG", 0x24, 2, default_mode=0)
_add("JNZER", 0x25, 2, default_mode=0)
_add("JNPOS", 0x26, 2, default_mode=0)
# Saltos por registro de estado: sin primer operando
_add("JLES",  0x27, 1, default_mode=0, op2_only=True)
_add("JEQU",  0x28, 1, default_mode=0, op2_only=True)
_add("JGRE",  0x29, 1, default_mode=0, op2_only=True)
_add("JNLES", 0x2A, 1, default_mode=0, op2_only=True)
_add("JNEQU", 0x2B, 1, default_mode=0, op2_only=True)
_add("JNGRE", 0x2C, 1, default_mode=0, op2_only=True)

# Subrutinas y pila
_add("CALL",  0x31, 2, default_mode=0)
_add("EXIT",  0x32, 2)
_add("PUSH",  0x33, 2)
_add("POP",   0x34, 2)
_add("PUSHR", 0x35, 1)
_add("POPR",  0x36, 1)
_add("SVC",   0x70, 2)

# Extendidas (titomachine)
_add("IEXIT", 0x39, 2, classic=False)
_add("HLT",   0x71, 0, classic=False)
_add("HCF",   0x72, 0, classic=False)

def spec(mnemonic: str) -> OpSpec:
    """Devuelve la especificación de una instrucción por mnemónico."""
    m = mnemonic.upper()
    if m not in SPEC:
        raise KeyError(f"Instrucción desconocida: {mnemonic}")
    return SPEC[m]

def is_mnemonic(token: str) -> bool:
    return token.upper() in SPEC

def by_code(code: int) -> Optional[OpSpec]:
    """Especificación para un código de 8 bits, o None si no existe."""
    return BY_CODE.get(code)
