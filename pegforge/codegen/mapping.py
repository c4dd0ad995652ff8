# pegforge/codegen/mapping.py
"""Structural mapping compiler.

A structural handler rebuilds a value out of the raw capture without user
code. `source` is the expression holding that capture (the handler's
`value` parameter).

Offset convention for {v: n}
----------------------------
- sequence : offset -1   $1..$N -> source[0..N-1], $0 -> source
- regex    : offset  0   $0 -> source[0] (full match), $1..$9 -> groups
- single   : the capture is exactly one value, every {v: ...} is `source`
"""

from __future__ import annotations

from ..grammar.ast import (
    MapArray, MapNull, MapObject, MapRef, MapScalar, MapString, MapVerbatim, Mapping,
)
from .ir import Const, DictExpr, Expr, Index, ListExpr, Name, Verbatim


def _verbatim(code: object) -> Verbatim:
    if isinstance(code, str):
        return Verbatim(code)
    # bool/None/numbers: their Python literal
    return Verbatim(repr(code))


def compile_mapping(mapping: Mapping, source: Expr, single: bool = False, offset: int = -1) -> Expr:
    if isinstance(mapping, MapString):
        return Const(mapping.text)
    if isinstance(mapping, MapArray):
        return ListExpr(tuple(compile_mapping(m, source, single, offset) for m in mapping.items))
    if isinstance(mapping, MapNull):
        return Const(None)
    if isinstance(mapping, MapVerbatim):
        return _verbatim(mapping.code)
    if isinstance(mapping, MapScalar):
        return Const(mapping.value)
    if isinstance(mapping, MapRef):
        if single:
            return source
        sel = mapping.selector
        if isinstance(sel, int):
            n = sel + offset
            if n == -1:  # $0
                return source
            return Index(source, n)
        return Name(sel)
    if isinstance(mapping, MapObject):
        return DictExpr(tuple(
            (key, compile_mapping(m, source, single, offset)) for key, m in mapping.fields
        ))
    raise ValueError(f"unknown object mapping: {mapping!r}")
