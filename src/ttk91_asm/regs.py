'''
nombres de registro R0..R7, alias SP/FP, validaciones
'''

from __future__ import annotations
from typing import Dict

# Alias textuales; la codificación binaria no los distingue
ALIAS_TO_R: Dict[str, str] = {
    "SP": "R6",
    "FP": "R7",
}

# Nombre preferido al desensamblar
R_TO_DISPLAY: Dict[int, str] = {6: "SP", 7: "FP"}

def is_reg(token: str) -> bool:
    """Indica si el token representa un registro válido (Rn, SP o FP)."""
    try:
        normalize_reg(token)
        return True
    except ValueError:
        return False

def normalize_reg(token: str) -> str:
    """Devuelve el nombre canónico 'Rn' o lanza ValueError."""
    t = token.strip().upper()
    if t in ALIAS_TO_R:
        return ALIAS_TO_R[t]
    if len(t) == 2 and t[0] == "R" and t[1].isdigit():
        n = int(t[1])
        if 0 <= n <= 7:
            return f"R{n}"
    raise ValueError(f"Registro inválido: {token}")

def reg_num(token: str) -> int:
    """Devuelve el índice numérico 0..7 del registro, aceptando alias."""
    return int(normalize_reg(token)[1:])

def reg_name(num: int) -> str:
    """Nombre para mostrar de un registro (R6 y R7 como SP y FP)."""
    if not 0 <= num <= 7:
        raise ValueError(f"Número de registro fuera de rango: {num}")
    return R_TO_DISPLAY.get(num, f"R{num}")
