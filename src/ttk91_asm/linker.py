# src/ttk91_asm/linker.py
from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence

from .ast import Statement, Symbol
from .data import statement_value, ds_size
from .utils import is_signed_nbit
from .diagnostics import Diagnostic, StructureError, RangeError, error

# Última dirección alcanzable con un campo de 16 bits
ADDRESS_MAX = 0xFFFF

# ---------- Resultado de la resolución de símbolos ----------

@dataclass(frozen=True)
class LinkResult:
    symtab: Mapping[str, Symbol]   # absoluto, de sólo lectura
    org: int
    code_size: int

    @property
    def code_start(self) -> int:
        return self.org

    @property
    def data_start(self) -> int:
        return self.org + self.code_size

    def addresses(self) -> Dict[str, int]:
        """Nombre -> dirección absoluta (o valor), en orden de definición."""
        return {name: sym.offset for name, sym in self.symtab.items()}

# ---------- Comprobaciones ----------

def assert_no_multiple_definition(statements: Sequence[Statement]) -> None:
    """Recoge todas las etiquetas repetidas antes de informar.

    Un único StructureError con un diagnóstico por etiqueta, listando todas sus líneas.
    """
    definitions: Dict[str, List[int]] = {}
    for st in statements:
        if st.label is not None:
            definitions.setdefault(st.label, []).append(st.line)

    diags: List[Diagnostic] = []
    for label, lines in definitions.items():
        if len(lines) > 1:
            where = ", ".join(str(n) for n in lines)
            diags.append(error(f"Definición múltiple de '{label}' en las líneas: {where}",
                               line=lines[1], kind="estructura"))
    if diags:
        raise StructureError("", diagnostics=diags)

# ---------- Directivas ----------

def parse_org_directive(st: Statement) -> int:
    if st.label is not None:
        raise StructureError(f"No se puede etiquetar una directiva: '{st.keyword}'", line=st.line)
    value = statement_value(st)
    if value < 0:
        raise RangeError(f"'{st.keyword}' desplaza el programa a una dirección negativa", line=st.line)
    return value

def find_org(statements: Sequence[Statement]) -> int:
    """Pasada de directivas: como mucho un ORG; 0 si no hay."""
    org: Optional[int] = None
    for st in statements:
        if st.kind != "directive":
            continue
        if st.keyword != "ORG":
            raise StructureError(f"'{st.keyword}' no es una directiva", line=st.line)
        if org is not None:
            raise StructureError("'ORG' ya estaba definido", line=st.line)
        org = parse_org_directive(st)
    return org if org is not None else 0

def parse_const(st: Statement) -> int:
    value = statement_value(st)
    if not is_signed_nbit(value, 16):
        raise RangeError("Valor fuera de rango", line=st.line,
                         hint="las constantes son de 16 bits con signo")
    return value

# ---------- Tabla de símbolos ----------

def code_segment_size(statements: Sequence[Statement]) -> int:
    return sum(1 for st in statements if st.kind == "code")

def create_symbol_table(statements: Sequence[Statement]) -> Dict[str, Symbol]:
    """Pasada de desplazamientos: offsets relativos a cada segmento."""
    table: Dict[str, Symbol] = {}
    code_offset = -1
    data_offset = -1
    for st in statements:
        if st.kind == "const":
            if st.label is None:
                raise StructureError("Una constante necesita nombre", line=st.line)
            table[st.label] = Symbol(st.label, "const", parse_const(st))
            continue
        if st.kind == "code":
            code_offset += 1
            if st.label is not None:
                table[st.label] = Symbol(st.label, "code", code_offset)
            continue
        if st.kind == "data":
            data_offset += 1
            if st.label is not None:
                table[st.label] = Symbol(st.label, "data", data_offset)
            if st.keyword == "DS":
                # ya se contó una posición
                data_offset += ds_size(st) - 1
    return table

def create_absolute_symbol_table(relative: Mapping[str, Symbol], code_start: int,
                                 data_start: int) -> Dict[str, Symbol]:
    """Aplica el inicio de cada segmento; las constantes no cambian."""
    absolute: Dict[str, Symbol] = {}
    for name, sym in relative.items():
        if sym.kind == "code":
            sym = Symbol(name, "code", sym.offset + code_start)
        elif sym.kind == "data":
            sym = Symbol(name, "data", sym.offset + data_start)
        absolute[name] = sym
    return absolute

def check_data_fits(statements: Sequence[Statement], data_start: int) -> None:
    """El segmento de datos no puede pasar de la última dirección de 16 bits.

    Se comprueba antes de construir el segmento, para no reservar memoria de más.
    """
    data_end = data_start - 1
    for st in statements:
        if st.kind != "data":
            continue
        data_end += 1 if st.keyword == "DC" else ds_size(st)
        if data_end > ADDRESS_MAX:
            raise RangeError(f"El segmento de datos llega a la dirección {data_end}", line=st.line,
                             hint=f"la última dirección válida es {ADDRESS_MAX}")

def first_pass(statements: Sequence[Statement]) -> LinkResult:
    """Resuelve etiquetas antes de codificar: duplicados, ORG, offsets, absolutos."""
    assert_no_multiple_definition(statements)
    org = find_org(statements)
    relative = create_symbol_table(statements)
    code_size = code_segment_size(statements)
    check_data_fits(statements, org + code_size)
    absolute = create_absolute_symbol_table(relative, org, org + code_size)
    return LinkResult(
        symtab=MappingProxyType(absolute),
        org=org,
        code_size=code_size,
    )
