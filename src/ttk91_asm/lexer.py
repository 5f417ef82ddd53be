from __future__ import annotations
from typing import Literal, Optional, Tuple, List

from .isa import is_mnemonic
from .regs import is_reg

# Category of a keyword token; "none" means it can only be a label
KeywordKind = Literal["code", "register", "const", "data", "directive", "none"]

CONST_KEYWORDS = {"EQU"}
DATA_KEYWORDS = {"DS", "DC"}
DIRECTIVE_KEYWORDS = {"ORG"}

def strip_comment(line: str) -> Tuple[str, Optional[str]]:
    """Split at the first ';'. Returns (code, comment) where comment keeps its spacing."""
    code, sep, comment = line.partition(";")
    if not sep:
        return line, None
    return code, comment

def split_words(code: str) -> List[str]:
    """Commas are separators just like whitespace."""
    return code.replace(",", " ").split()

def keyword_kind(token: str) -> KeywordKind:
    """Classify a token. First match wins: opcode, register, EQU, DS/DC, ORG."""
    t = token.upper()
    if is_mnemonic(t):
        return "code"
    if is_reg(t):
        return "register"
    if t in CONST_KEYWORDS:
        return "const"
    if t in DATA_KEYWORDS:
        return "data"
    if t in DIRECTIVE_KEYWORDS:
        return "directive"
    return "none"
