'''
dataclases de nivel fuente (Statement, Symbol, Op2)
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Literal, Tuple

# Categoría de una sentencia según su palabra clave
StatementKind = Literal["directive", "const", "data", "code"]

# Categoría de un símbolo (las directivas no definen símbolos)
SymbolKind = Literal["const", "code", "data"]

# ---- Nodos a nivel de fuente ----

@dataclass(frozen=True)
class Statement:
    """Una línea de código clasificada.

    - keyword: palabra clave en mayúsculas ('ADD', 'EQU', 'DS', 'ORG'...)
    - operands: palabras restantes tras la palabra clave, tal cual se escribieron
    - comment: texto tras el primer ';' (sin el ';'), o None
    """
    kind: StatementKind
    keyword: str
    operands: Tuple[str, ...]
    line: int
    label: Optional[str] = None
    comment: Optional[str] = None

@dataclass(frozen=True)
class Symbol:
    """Símbolo del programa.

    'offset' es relativo a su segmento hasta la pasada de direcciones
    absolutas; después es la dirección absoluta (o el valor, si es constante).
    """
    name: str
    kind: SymbolKind
    offset: int

# ---- Operandos ----

@dataclass(frozen=True)
class Op2:
    """Segundo operando analizado: '=123(R2)' -> (mode=-1, register=2, addr='123').

    mode es el ajuste relativo al modo por defecto del opcode.
    """
    mode: int
    register: int
    addr: str
