'''
clase Diagnostic, helpers y jerarquía de excepciones del ensamblador
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Literal

# Severidad de los diagnósticos (en español)
Severity = Literal["error", "advertencia", "nota"]

# Categoría del problema: léxico, estructura del programa, rango de valores,
# gramática de direccionamiento o formato del contenedor .b91
Kind = Literal["lexico", "estructura", "rango", "direccionamiento", "formato"]

_SEV_TO_LABEL = {
    "error": "ERROR",
    "advertencia": "ADVERTENCIA",
    "nota": "NOTA",
}

@dataclass(frozen=True)
class Diagnostic:
    """Estructura de un diagnóstico para reportar problemas.

    Abarca errores, advertencias y notas, con ubicación opcional (archivo, línea y columna)
    y un mensaje de ayuda (pista) para orientar la corrección.
    """
    severity: Severity
    message: str
    line: Optional[int] = None
    col: Optional[int] = None
    hint: Optional[str] = None
    file: Optional[str] = None
    kind: Optional[Kind] = None

    def __str__(self) -> str:
        loc = ""
        if self.file is not None:
            loc += f"{self.file}:"
        if self.line is not None:
            loc += f"{self.line}"
            if self.col is not None:
                loc += f":{self.col}"
        if loc:
            loc += ": "
        sev = _SEV_TO_LABEL.get(self.severity, str(self.severity).upper())
        core = f"{sev}: {self.message}"
        if self.hint:
            core += f"  (pista: {self.hint})"
        return loc + core

def error(message: str, *, line: int | None = None, col: int | None = None,
          file: str | None = None, hint: str | None = None,
          kind: Kind | None = None) -> Diagnostic:
    """Crea un diagnóstico de tipo error."""
    return Diagnostic("error", message, line, col, hint, file, kind)

# ---- Excepciones ----

class AssemblyError(Exception):
    """Fallo de ensamblado. Lleva uno o más diagnósticos de error.

    El ensamblado es todo-o-nada: cualquier AssemblyError aborta la compilación.
    """
    kind: Kind = "estructura"

    def __init__(self, message: str, *, line: int | None = None,
                 hint: str | None = None,
                 diagnostics: Optional[List[Diagnostic]] = None):
        if diagnostics is None:
            diagnostics = [error(message, line=line, hint=hint, kind=self.kind)]
        self.diagnostics: List[Diagnostic] = list(diagnostics)
        self.line = line
        super().__init__("\n".join(str(d) for d in self.diagnostics))

    def with_file(self, filename: str | None) -> "AssemblyError":
        """Devuelve los mismos diagnósticos, anotados con el nombre de archivo."""
        if filename is None:
            return self
        diags = [Diagnostic(d.severity, d.message, d.line, d.col, d.hint, filename, d.kind)
                 for d in self.diagnostics]
        return type(self)("", line=self.line, diagnostics=diags)

class LexError(AssemblyError):
    """Palabra clave desconocida o registro usado como palabra clave."""
    kind: Kind = "lexico"

class StructureError(AssemblyError):
    """ORG repetido, etiquetas duplicadas, número de operandos incorrecto..."""
    kind: Kind = "estructura"

class RangeError(AssemblyError):
    """Valor fuera de rango (16 bits, tamaño de DS, ORG negativo)."""
    kind: Kind = "rango"

class AddressingError(AssemblyError):
    """Segundo operando mal formado o dirección sin resolver."""
    kind: Kind = "direccionamiento"

class B91ParseError(ValueError):
    """Contenedor .b91 mal formado."""

    def __init__(self, message: str, *, line: int | None = None):
        self.diagnostic = error(message, line=line, kind="formato")
        self.line = line
        super().__init__(str(self.diagnostic))
