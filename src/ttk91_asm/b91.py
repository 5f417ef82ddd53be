'''
modelo del programa compilado (.b91) y lector del contenedor de texto
'''

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .diagnostics import B91ParseError

HEADER = "___b91___"
CODE = "___code___"
DATA = "___data___"
SYMBOLS = "___symboltable___"
COMMENTS = "___comments___"
END = "___end___"

@dataclass
class Segment:
    """Segmento de código o de datos. Rango [start, end] inclusivo; vacío si end == start - 1."""
    start: int
    end: int
    content: List[int] = field(default_factory=list)

    @classmethod
    def at(cls, start: int, content: List[int]) -> "Segment":
        return cls(start=start, end=start + len(content) - 1, content=list(content))

@dataclass
class Artifact:
    """Programa compilado: segmentos, tabla de símbolos y comentarios por dirección."""
    code_segment: Segment
    data_segment: Segment
    symbol_table: Dict[str, int] = field(default_factory=dict)
    comments: Dict[int, str] = field(default_factory=dict)

    @property
    def org(self) -> int:
        return self.code_segment.start

    @property
    def fp_start(self) -> int:
        # puede ser org - 1 si no hay código
        return self.code_segment.end

    @property
    def sp_start(self) -> int:
        return self.data_segment.end

# ---------- Lectura ----------

class _Lines:
    """Cursor sobre las líneas, con número de línea para los diagnósticos."""

    def __init__(self, text: str):
        self._lines = text.splitlines()
        self.lineno = 0

    def next(self) -> str:
        if self.lineno >= len(self._lines):
            raise B91ParseError("Fin inesperado del contenido", line=self.lineno or None)
        line = self._lines[self.lineno]
        self.lineno += 1
        return line

def _parse_segment(lines: _Lines) -> Segment:
    header = lines.next()
    words = header.split()
    if len(words) != 2:
        raise B91ParseError(f"No se pudieron leer los límites del segmento: '{header}'", line=lines.lineno)
    try:
        start, end = int(words[0]), int(words[1])
    except ValueError:
        raise B91ParseError(f"No se pudieron leer los límites del segmento: '{header}'", line=lines.lineno)
    if start > end + 1:
        raise B91ParseError(f"Tamaño de segmento negativo: '{header}'", line=lines.lineno)

    content: List[int] = []
    for _ in range(end - start + 1):
        line = lines.next()
        try:
            content.append(int(line.strip()))
        except ValueError:
            raise B91ParseError(f"Valor inválido en el segmento: '{line}'", line=lines.lineno)
    return Segment(start=start, end=end, content=content)

def _parse_symbol_table(lines: _Lines) -> Tuple[Dict[str, int], bool]:
    """Lee hasta ___end___ o ___comments___; indica si siguen comentarios."""
    table: Dict[str, int] = {}
    while True:
        line = lines.next()
        if line == END:
            return table, False
        if line == COMMENTS:
            return table, True
        words = line.split()
        if len(words) != 2:
            raise B91ParseError(f"No se pudo leer el símbolo: '{line}'", line=lines.lineno)
        name = words[0]
        try:
            value = int(words[1])
        except ValueError:
            raise B91ParseError(f"No se pudo leer el símbolo: '{line}'", line=lines.lineno)
        if name in table:
            raise B91ParseError(f"Símbolo repetido: '{name}'", line=lines.lineno)
        table[name] = value

def _parse_comments(lines: _Lines) -> Dict[int, str]:
    comments: Dict[int, str] = {}
    while True:
        line = lines.next()
        if line == END:
            return comments
        addr_text, sep, text = line.partition(" ")
        if not sep:
            raise B91ParseError(f"No se pudo leer el comentario: '{line}'", line=lines.lineno)
        try:
            addr = int(addr_text)
        except ValueError:
            raise B91ParseError(f"No se pudo leer el comentario: '{line}'", line=lines.lineno)
        if addr in comments:
            raise B91ParseError(f"Comentario repetido para la dirección {addr}", line=lines.lineno)
        comments[addr] = text

def parse_artifact(text: str) -> Artifact:
    """Lee un .b91 con las secciones que genera titokone.

    - ___b91___ (primera línea)
    - ___code___ y ___data___
    - ___symboltable___ (termina en ___end___ o en ___comments___)
    - ___comments___ opcional, hasta ___end___
    Lanza B91ParseError si el contenido está mal formado.
    """
    lines = _Lines(text)
    if lines.next() != HEADER:
        raise B91ParseError(f"Identificador incorrecto. Se esperaba '{HEADER}'", line=1)

    code: Optional[Segment] = None
    data: Optional[Segment] = None
    symbols: Optional[Dict[str, int]] = None
    comments: Dict[int, str] = {}

    while symbols is None:
        line = lines.next()
        if line == "":
            continue
        if line == CODE:
            if code is not None:
                raise B91ParseError(f"Sección repetida: '{CODE}'", line=lines.lineno)
            code = _parse_segment(lines)
        elif line == DATA:
            if data is not None:
                raise B91ParseError(f"Sección repetida: '{DATA}'", line=lines.lineno)
            data = _parse_segment(lines)
        elif line == SYMBOLS:
            symbols, has_comments = _parse_symbol_table(lines)
            if has_comments:
                comments = _parse_comments(lines)
        else:
            raise B91ParseError(f"Sección desconocida: '{line}'", line=lines.lineno)

    if code is None:
        raise B91ParseError(f"Falta la sección '{CODE}'")
    if data is None:
        raise B91ParseError(f"Falta la sección '{DATA}'")

    return Artifact(code_segment=code, data_segment=data, symbol_table=symbols, comments=comments)
