# src/ttk91_asm/parser.py
from __future__ import annotations
from typing import List, Optional

from .lexer import strip_comment, split_words, keyword_kind
from .ast import Statement, Op2
from .regs import is_reg, reg_num
from .diagnostics import LexError

def parse_op2(token: str) -> Op2:
    """Analiza el segundo operando: '=123(R2)', '@R1', '(SP)', 'label'...

    Reglas:
      - Sólo el primer carácter cuenta como signo de modo: '=' resta 1, '@' suma 1.
      - Un '-' inicial pertenece a la dirección, nunca al registro.
      - Registro solo ('R1'): direccionamiento directo a registro, resta 1 más.
      - 'dir(Rn)' o '(Rn)': indexado; '(Rn)' equivale a '0(Rn)'.
    Lanza ValueError si el operando está mal formado.
    """
    text = token
    mode = 0
    if text.startswith("="):
        mode = -1
        text = text[1:]
    elif text.startswith("@"):
        mode = 1
        text = text[1:]

    addr = ""
    if text.startswith("-"):
        addr = "-"
        text = text[1:]

    # Registro sin dirección
    if is_reg(text):
        if addr == "-":
            raise ValueError(
                f"Direccionamiento directo a registro negativo no permitido: '{token}'. "
                "El signo menos sólo afecta a la dirección."
            )
        return Op2(mode=mode - 1, register=reg_num(text), addr="")

    # Registro entre paréntesis
    if "(" in text:
        before, _, after_open = text.partition("(")
        if ")" not in after_open:
            raise ValueError(f"Paréntesis sin cerrar: '{token}'")
        reg_text, _, after = after_open.partition(")")
        register = reg_num(reg_text)
        if before and after:
            raise ValueError(f"Texto a ambos lados del paréntesis: '{token}'")
        return Op2(mode=mode, register=register, addr=addr + before + after)

    # Sin registro: todo es dirección
    return Op2(mode=mode, register=0, addr=addr + text)

def parse(text: str, *, filename: Optional[str] = None) -> List[Statement]:
    """
    Devuelve la lista de sentencias del programa, en orden de fuente.

    Reglas:
      - Comentarios: ';' hasta fin de línea.
      - Las comas equivalen a espacios.
      - Si la primera palabra no es palabra clave ni registro, es una etiqueta.
      - La palabra clave determina la categoría: opcode -> code, EQU -> const,
        DS/DC -> data, ORG -> directive.
    Las líneas vacías (tras quitar el comentario) no generan sentencia.
    Lanza LexError ante una palabra clave desconocida o un registro como palabra clave.
    """
    statements: List[Statement] = []

    for lineno, raw in enumerate(text.splitlines(), start=1):
        code, comment = strip_comment(raw)
        words = split_words(code)
        if not words:
            continue

        # 1) etiqueta
        label: Optional[str] = None
        if keyword_kind(words[0]) == "none":
            label = words.pop(0)
            if not words:
                raise LexError(f"Etiqueta '{label}' sin sentencia", line=lineno,
                               hint="una etiqueta debe ir seguida de una instrucción o directiva"
                               ).with_file(filename)

        # 2) palabra clave
        keyword = words[0].upper()
        kind = keyword_kind(keyword)
        if kind == "none":
            raise LexError(f"Palabra clave desconocida '{keyword}'", line=lineno).with_file(filename)
        if kind == "register":
            raise LexError(f"Registro inesperado '{keyword}' usado como palabra clave",
                           line=lineno).with_file(filename)

        statements.append(Statement(
            kind=kind,
            keyword=keyword,
            operands=tuple(words[1:]),
            line=lineno,
            label=label,
            comment=comment,
        ))

    return statements
