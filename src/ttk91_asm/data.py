'''
segmento de datos: expansión de DC (valor) y DS (reserva de n palabras)
'''

from __future__ import annotations
from typing import List, Sequence

from .ast import Statement
from .literals import parse_value
from .diagnostics import StructureError, RangeError

def statement_value(st: Statement) -> int:
    """Valor del único operando de una sentencia EQU/DC/DS/ORG."""
    if len(st.operands) == 0:
        raise StructureError(f"No se indicó valor para '{st.keyword}'", line=st.line)
    if len(st.operands) > 1:
        raise StructureError(f"Demasiadas palabras para '{st.keyword}'", line=st.line)
    try:
        return parse_value(st.operands[0])
    except ValueError as ex:
        raise StructureError(f"No se pudo leer el valor: {ex}", line=st.line) from ex

def ds_size(st: Statement) -> int:
    """Número de palabras que reserva 'DS n' (n > 0)."""
    n = statement_value(st)
    if n < 0:
        raise RangeError(f"Reserva de un número negativo de direcciones con '{st.keyword}'", line=st.line)
    if n == 0:
        raise RangeError(f"Reserva de cero direcciones con '{st.keyword}'", line=st.line)
    return n

def build_data_segment(statements: Sequence[Statement]) -> List[int]:
    """Construye el segmento de datos en orden de fuente.

    DC v añade v; DS n añade n ceros. La posición de cada sentencia coincide
    con el desplazamiento relativo calculado por el linker.
    """
    segment: List[int] = []
    for st in statements:
        if st.kind != "data":
            continue
        if st.keyword == "DC":
            segment.append(statement_value(st))
        elif st.keyword == "DS":
            segment.extend([0] * ds_size(st))
        else:
            raise StructureError(f"'{st.keyword}' no es una palabra clave de datos", line=st.line)
    return segment
