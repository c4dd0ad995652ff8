# pegforge/runtime/__init__.py
"""Runtime preamble texts prepended to generated parsers.

- untyped : machine.py
- typed   : machine.py + machine_types.py
"""

from __future__ import annotations
import ast as _pyast
from pathlib import Path
from typing import Set

_HERE = Path(__file__).parent


def _read(name: str) -> str:
    text = (_HERE / name).read_text(encoding="utf-8")
    return text.replace("\r\n", "\n").replace("\r", "\n")


def load_preamble(types: bool) -> str:
    src = _read("machine.py")
    if types:
        src = src.rstrip("\n") + "\n\n\n" + _read("machine_types.py")
    return src


def defined_names(preamble: str) -> Set[str]:
    """Top-level names a preamble binds (functions, classes, imports, assignments)."""
    names: Set[str] = set()
    for stmt in _pyast.parse(preamble).body:
        if isinstance(stmt, (_pyast.FunctionDef, _pyast.ClassDef)):
            names.add(stmt.name)
        elif isinstance(stmt, _pyast.ImportFrom) and stmt.module == "__future__":
            continue
        elif isinstance(stmt, (_pyast.Import, _pyast.ImportFrom)):
            for alias in stmt.names:
                names.add((alias.asname or alias.name).split(".")[0])
        elif isinstance(stmt, _pyast.Assign):
            for target in stmt.targets:
                if isinstance(target, _pyast.Name):
                    names.add(target.id)
    return names
