# pegforge/codegen/operators.py
"""Operator compiler: one grammar node -> runtime combinator expression.

Handlers on nested nodes are not compiled here; only the handler compiler
looks at a node's handler slot. `default_handler` only affects regex leaves
(unwrap the match object to its text).
"""

from __future__ import annotations
import json

from ..grammar.ast import (
    Choice, Literal, Lookahead, Named, Node, Ref, Regex, Repeat, Seq, Text,
)
from .context import CompilationContext
from .ir import Call, Const, Expr, Name, Narrowed
from .retype import re_type

_REPEAT_PRIMITIVES = {"*": "_Q", "+": "_P", "?": "_E"}


def describe(rule_name: str, terminal: str, is_regex: bool = False) -> str:
    """Human readable terminal description used in parse failure messages."""
    if is_regex:
        return f"{rule_name} /{terminal}/"
    return f"{rule_name} {json.dumps(terminal, ensure_ascii=False)}"


def compile_operator(ctx: CompilationContext, node: Node, rule_name: str,
                     default_handler: bool, types: bool) -> Expr:
    if isinstance(node, Ref):
        return Name(node.name)

    if isinstance(node, Literal):
        tid = ctx.intern_literal(node.text)
        return Call("_EXPECT", (Name(tid), Const(describe(rule_name, node.text))))

    if isinstance(node, Regex):
        tid = ctx.intern_regex(node.pattern)
        expr: Expr = Call("_EXPECT", (Name(tid), Const(describe(rule_name, node.pattern, True))))
        if default_handler:
            expr = Call("_R_0", (expr,))
            members = re_type(types, node.pattern)
            if members:
                expr = Narrowed(members, expr)
        return expr

    if isinstance(node, Choice):
        return Call("_C", tuple(compile_operator(ctx, n, rule_name, default_handler, types) for n in node.alts))

    if isinstance(node, Seq):
        return Call("_S", tuple(compile_operator(ctx, n, rule_name, default_handler, types) for n in node.items))

    if isinstance(node, Repeat):
        inner = compile_operator(ctx, node.node, rule_name, default_handler, types)
        return Call(_REPEAT_PRIMITIVES[node.kind], (inner,))

    if isinstance(node, Text):
        # only the consumed text survives, inner handling is irrelevant
        return Call("_TEXT", (compile_operator(ctx, node.node, rule_name, False, types),))

    if isinstance(node, Lookahead):
        inner = compile_operator(ctx, node.node, rule_name, default_handler, types)
        return Call("_N" if node.negated else "_Y", (inner,))

    if isinstance(node, Named):
        return compile_operator(ctx, node.node, rule_name, default_handler, types)

    raise AssertionError(f"unknown node: {node!r}")
