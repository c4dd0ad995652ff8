"""
pegforge code generation IR
===========================

The compilers (operators / mapping / handlers / rules) never build source
text. They build this small expression tree, and `emit_py` renders it in
one separate pass.

Expressions
-----------
- Name(id)                 : bare identifier (rule function, terminal id, binding)
- Const(value)             : str / int / float / bool / None, rendered as a Python literal
- Verbatim(code)           : code inserted as-is ({l: X} mappings)
- Call(func, args)         : runtime primitive call
- Index(target, index)     : target[index]
- ListExpr / DictExpr      : list / dict displays
- Narrowed(members, expr)  : expr statically narrowed to Parser[Literal[members...]]
- HandlerFunction          : a handler `def`, hoisted by the renderer and
                             referenced by name at its use site

Statements
----------
- Assign(target, value)    : `<rule>_<i> = <parser expr>`
- RuleFunction             : the public per-rule parser function
- RuleDefinition           : everything one rule contributes
- Program                  : the whole generated module
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple, Union


@dataclass(frozen=True)
class Name:
    id: str

@dataclass(frozen=True)
class Const:
    value: Union[str, int, float, bool, None]

@dataclass(frozen=True)
class Verbatim:
    code: str

@dataclass(frozen=True)
class Call:
    func: str
    args: Tuple["Expr", ...] = ()

@dataclass(frozen=True)
class Index:
    target: "Expr"
    index: int

@dataclass(frozen=True)
class ListExpr:
    items: Tuple["Expr", ...] = ()

@dataclass(frozen=True)
class DictExpr:
    entries: Tuple[Tuple[str, "Expr"], ...] = ()

@dataclass(frozen=True)
class Narrowed:
    members: Tuple[str, ...]
    expr: "Expr"

@dataclass(frozen=True)
class HandlerFunction:
    """
    def <name>(<params>):
        <local> = <expr>        # one per named capture binding
        <body>                  # user code, or
        return <returns>        # structural mapping
    """
    name: str
    params: Tuple[str, ...]
    bindings: Tuple[Tuple[str, "Expr"], ...] = ()
    body: Optional[str] = None
    returns: Optional["Expr"] = None

Expr = Union[Name, Const, Verbatim, Call, Index, ListExpr, DictExpr, Narrowed, HandlerFunction]


def walk(expr: Expr) -> Iterator[Expr]:
    """Pre-order traversal, arguments left to right."""
    yield expr
    if isinstance(expr, Call):
        for a in expr.args:
            yield from walk(a)
    elif isinstance(expr, Index):
        yield from walk(expr.target)
    elif isinstance(expr, ListExpr):
        for it in expr.items:
            yield from walk(it)
    elif isinstance(expr, DictExpr):
        for _k, v in expr.entries:
            yield from walk(v)
    elif isinstance(expr, Narrowed):
        yield from walk(expr.expr)
    elif isinstance(expr, HandlerFunction):
        for _n, v in expr.bindings:
            yield from walk(v)
        if expr.returns is not None:
            yield from walk(expr.returns)


# ---------- statements ----------

@dataclass(frozen=True)
class Assign:
    target: str
    value: Expr

@dataclass(frozen=True)
class RuleFunction:
    """
    def <name>(state):
        [trace]
        if state.tokenize: return _TOKEN(<name>, state, <p0>(state) or <p1>(state) ...)
        else:              return <p0>(state) or <p1>(state) ...
    """
    name: str
    parsers: Tuple[str, ...]
    typed: bool = False

@dataclass
class RuleDefinition:
    name: str
    parsers: List[Assign] = field(default_factory=list)
    function: Optional[RuleFunction] = None

    def handlers(self) -> List[HandlerFunction]:
        """Handler functions referenced by this rule's parsers, in order."""
        out: List[HandlerFunction] = []
        for a in self.parsers:
            out.extend(e for e in walk(a.value) if isinstance(e, HandlerFunction))
        return out

@dataclass
class Program:
    preamble: str
    literals: List[str] = field(default_factory=list)
    regexes: List[str] = field(default_factory=list)
    rules: List[RuleDefinition] = field(default_factory=list)

    def rule_names(self) -> List[str]:
        return [r.name for r in self.rules]
