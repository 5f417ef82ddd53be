from __future__ import annotations
from typing import List

from .b91 import Artifact, Segment, HEADER, CODE, DATA, SYMBOLS, COMMENTS, END

def _segment_lines(seg: Segment) -> List[str]:
    return [f"{seg.start} {seg.end}"] + [str(w) for w in seg.content]

def to_b91_lines(artifact: Artifact) -> List[str]:
    lines = [HEADER, CODE]
    lines += _segment_lines(artifact.code_segment)
    lines.append(DATA)
    lines += _segment_lines(artifact.data_segment)
    lines.append(SYMBOLS)
    lines += [f"{name} {value}" for name, value in artifact.symbol_table.items()]
    if artifact.comments:
        lines.append(COMMENTS)
        lines += [f"{addr} {text}" for addr, text in sorted(artifact.comments.items())]
    lines.append(END)
    return lines

def serialize_artifact(artifact: Artifact) -> str:
    return "".join(line + "\n" for line in to_b91_lines(artifact))

def write_b91(artifact: Artifact, path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(serialize_artifact(artifact))
