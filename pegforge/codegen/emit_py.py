# pegforge/codegen/emit_py.py
"""Python code emit (one self-contained module; runtime included).

Overview
--------
- Takes a `Program` (codegen IR) and renders it into Python source text.
- Emission order:
  * runtime preamble (typed or untyped)
  * terminal constants, literals then regexes, in first-seen order
  * per rule: hoisted handler functions, then the rule function
  * per rule: parser bindings (`<rule>_<i> = ...`)
  * the `parse` entry point
- Rule functions come before every parser binding: a binding evaluates its
  combinator arguments when the module is executed, so every referenced rule
  function must already exist.
"""

from __future__ import annotations
import json
import textwrap
from typing import List

from .ir import (
    Assign, Call, Const, DictExpr, Expr, HandlerFunction, Index, ListExpr,
    Name, Narrowed, Program, RuleDefinition, RuleFunction, Verbatim,
)

_INDENT = "    "


# ---------- utils ----------

def py_str(s: str) -> str:
    """Python string literal (double quoted)."""
    return json.dumps(s, ensure_ascii=False)


def render_const(value) -> str:
    if isinstance(value, str):
        return py_str(value)
    # None / bool / int / float
    return repr(value)


def render_type(members) -> str:
    return f"Parser[Literal[{', '.join(py_str(m) for m in members)}]]"


# ---------- expressions ----------

def render_expr(expr: Expr) -> str:
    if isinstance(expr, Name):
        return expr.id
    if isinstance(expr, Const):
        return render_const(expr.value)
    if isinstance(expr, Verbatim):
        return expr.code
    if isinstance(expr, Call):
        return f"{expr.func}({', '.join(render_expr(a) for a in expr.args)})"
    if isinstance(expr, Index):
        return f"{render_expr(expr.target)}[{expr.index}]"
    if isinstance(expr, ListExpr):
        return f"[{', '.join(render_expr(it) for it in expr.items)}]"
    if isinstance(expr, DictExpr):
        inner = ", ".join(f"{py_str(k)}: {render_expr(v)}" for k, v in expr.entries)
        return "{" + inner + "}"
    if isinstance(expr, Narrowed):
        return f"cast({render_type(expr.members)}, {render_expr(expr.expr)})"
    if isinstance(expr, HandlerFunction):
        # defined ahead of its use, referenced by name
        return expr.name
    raise AssertionError(f"emit_py: unknown expression {expr!r}")


# ---------- statements ----------

def render_handler(fn: HandlerFunction) -> str:
    lines = [f"def {fn.name}({', '.join(fn.params)}):"]
    for local, value in fn.bindings:
        lines.append(f"{_INDENT}{local} = {render_expr(value)}")
    if fn.returns is not None:
        lines.append(f"{_INDENT}return {render_expr(fn.returns)}")
    else:
        body = textwrap.dedent(fn.body or "").strip("\n")
        if body.strip():
            lines.append(textwrap.indent(body, _INDENT))
        else:
            lines.append(f"{_INDENT}pass")
    return "\n".join(lines) + "\n"


def render_rule_function(fn: RuleFunction) -> str:
    name = py_str(fn.name)
    param = "state: ParseState" if fn.typed else "state"
    choices = " or ".join(f"{p}(state)" for p in fn.parsers) or "None"
    return (
        f"def {fn.name}({param}):\n"
        f"{_INDENT}if state.verbose:\n"
        f"{_INDENT * 2}print(\"ENTER:\", {name}, file=sys.stderr)\n"
        f"{_INDENT}if state.tokenize:\n"
        f"{_INDENT * 2}return _TOKEN({name}, state, {choices})\n"
        f"{_INDENT}else:\n"
        f"{_INDENT * 2}return {choices}\n"
    )


def render_assign(a: Assign) -> str:
    return f"{a.target} = {render_expr(a.value)}\n"


def render_rule(rd: RuleDefinition) -> str:
    """Handler functions followed by the rule function."""
    parts = [render_handler(h) for h in rd.handlers()]
    if rd.function is not None:
        parts.append(render_rule_function(rd.function))
    return "\n".join(parts)


def render_entry(rule_names: List[str]) -> str:
    if not rule_names:
        return "parse = parser_state({}).parse\n"
    table = "".join(f"{_INDENT}{py_str(n)}: {n},\n" for n in rule_names)
    return "parse = parser_state({\n" + table + "}).parse\n"


def emit_py_to_string(program: Program) -> str:
    """
    emit_py_to_string(program) -> str
    ---------------------------------
    Render the whole program as one Python module exposing `parse`.
    """
    out: List[str] = [program.preamble.rstrip("\n") + "\n"]

    out.append("\n# ---- terminals ----\n")
    out.extend(f"_L{i} = _L({py_str(s)})\n" for i, s in enumerate(program.literals))
    out.extend(f"_R{i} = _R({py_str(r)})\n" for i, r in enumerate(program.regexes))

    out.append("\n# ---- rules ----\n")
    for rd in program.rules:
        out.append("\n" + render_rule(rd))

    out.append("\n# ---- parsers ----\n")
    for rd in program.rules:
        out.extend(render_assign(a) for a in rd.parsers)

    out.append("\n")
    out.append(render_entry(program.rule_names()))
    out.append("\n__all__ = [\"parse\"]\n")
    return "".join(out)
