from __future__ import annotations
import argparse, sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from .ast import Statement
from .parser import parse
from .linker import first_pass, LinkResult
from .encoding import encode
from .data import build_data_segment, ds_size
from .b91 import Artifact, Segment, parse_artifact
from .writers import write_b91
from .disasm import disassemble
from .diagnostics import AssemblyError, B91ParseError, Diagnostic

def _collect_comments(statements: Sequence[Statement], link: LinkResult) -> Dict[int, str]:
    """Comentarios de código y datos, indexados por dirección absoluta."""
    comments: Dict[int, str] = {}
    code_addr = link.code_start
    data_addr = link.data_start
    for st in statements:
        if st.kind == "code":
            if st.comment is not None:
                comments[code_addr] = st.comment
            code_addr += 1
        elif st.kind == "data":
            if st.comment is not None:
                comments[data_addr] = st.comment
            data_addr += 1 if st.keyword == "DC" else ds_size(st)
    return comments

def compile(source: str, *, filename: str | None = None) -> Artifact:
    """Ensambla el programa completo. Todo o nada: lanza AssemblyError ante el primer error
    (las etiquetas duplicadas se informan todas juntas)."""
    try:
        statements = parse(source)
        link = first_pass(statements)
        data_segment = build_data_segment(statements)
        code = encode(statements, link.symtab, org=link.org)
        comments = _collect_comments(statements, link)
    except AssemblyError as ex:
        if filename is None:
            raise
        raise ex.with_file(filename) from ex

    return Artifact(
        code_segment=Segment.at(link.code_start, [e.word for e in code]),
        data_segment=Segment.at(link.data_start, data_segment),
        symbol_table=link.addresses(),
        comments=comments,
    )

def assemble_text(text: str, *, filename: str | None = None) -> Tuple[Optional[Artifact], List[Diagnostic]]:
    """Como compile(), pero devuelve (artifact, diagnostics) en lugar de lanzar.
    Si hay errores, artifact es None."""
    try:
        return compile(text, filename=filename), []
    except AssemblyError as ex:
        return None, list(ex.diagnostics)

def _disasm_main(path: str) -> int:
    try:
        with open(path, "r", encoding="utf-8") as f:
            artifact = parse_artifact(f.read())
    except OSError as ex:
        print(f"ERROR: no pude leer {path}: {ex}", file=sys.stderr)
        return 2
    except B91ParseError as ex:
        print(ex.diagnostic, file=sys.stderr)
        return 1
    seg = artifact.code_segment
    for line in disassemble(seg.content, start=seg.start):
        print(line)
    return 0

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="TTK-91 assembler")
    ap.add_argument("source", help="archivo .k91 de entrada (o .b91 con --disasm)")
    ap.add_argument("-o", "--output", help="archivo .b91 de salida (por defecto, el de entrada con extensión .b91)")
    ap.add_argument("--disasm", action="store_true", help="desensamblar el segmento de código de un .b91")
    args = ap.parse_args(argv)

    if args.disasm:
        return _disasm_main(args.source)

    try:
        with open(args.source, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as ex:
        print(f"ERROR: no pude leer {args.source}: {ex}", file=sys.stderr)
        return 2

    artifact, diags = assemble_text(text, filename=args.source)
    for d in diags:
        print(d, file=sys.stderr)
    if artifact is None:
        return 1

    out = args.output or str(Path(args.source).with_suffix(".b91"))
    try:
        write_b91(artifact, out)
    except OSError as ex:
        print(f"ERROR al escribir salidas: {ex}", file=sys.stderr)
        return 3

    print(f"OK: {len(artifact.code_segment.content)} instrucciones → {out}")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
