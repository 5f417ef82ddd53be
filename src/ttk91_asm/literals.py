'''
constantes incorporadas y literales numéricos (dec/0b/0o/0x)
'''

from __future__ import annotations
import re
from typing import Dict

from .utils import to_i32

# Constantes simbólicas disponibles sin definirlas en el programa
BUILTIN_CONSTS: Dict[str, int] = {
    # límites numéricos
    "SHRT_MAX": 32767,
    "SHRT_MIN": -32768,
    "USHRT_MAX": 65535,
    "INT_MAX": 2147483647,
    "INT_MIN": -2147483648,
    "UINT_MAX": -1,
    # puertos de dispositivo
    "CRT": 0,
    "KBD": 1,
    "RTC": 2,
    # llamadas al sistema (SVC)
    "HALT": 11,
    "READ": 12,
    "WRITE": 13,
    "TIME": 14,
    "DATE": 15,
}

_DIGITS_RE = {
    2: re.compile(r"^[01]+$"),
    8: re.compile(r"^[0-7]+$"),
    10: re.compile(r"^[0-9]+$"),
    16: re.compile(r"^[0-9a-fA-F]+$"),
}
_PREFIX_RADIX = {"0b": 2, "0o": 8, "0x": 16}

def is_builtin_const(name: str) -> bool:
    return name in BUILTIN_CONSTS

def builtin_const(name: str) -> int:
    """Valor de una constante incorporada; KeyError si no existe."""
    if name not in BUILTIN_CONSTS:
        raise KeyError(f"{name} no es una constante incorporada")
    return BUILTIN_CONSTS[name]

def parse_integer(token: str) -> int:
    """Convierte un literal entero a int32.

    Sin signo menos, los dígitos se leen como u32 y se reinterpretan en
    complemento a dos ('0xffffffff' -> -1). Con '-', se leen sin signo y se niegan.
    El prefijo sólo se reconoce en minúscula tras un '-' ('-0X10' no es válido) y
    los dígitos admiten un '+' delante ('+5', '0x+5').
    Lanza ValueError si el texto no es un literal válido.
    """
    minus = token.startswith("-")
    text = token[1:] if minus else token.lower()

    radix = _PREFIX_RADIX.get(text[:2], 10)
    if radix != 10:
        text = text[2:]
    if text.startswith("+"):
        text = text[1:]

    if not _DIGITS_RE[radix].fullmatch(text):
        raise ValueError(f"Literal entero inválido: '{token}'")
    raw = int(text, radix)
    if raw > 0xFFFFFFFF:
        raise ValueError(f"Literal fuera del rango de 32 bits: '{token}'")

    return to_i32(-raw) if minus else to_i32(raw)

def parse_value(token: str) -> int:
    """Constante incorporada o literal entero (para ORG, EQU, DC y DS)."""
    if is_builtin_const(token):
        return builtin_const(token)
    return parse_integer(token)
