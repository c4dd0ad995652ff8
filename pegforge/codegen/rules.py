# pegforge/codegen/rules.py
"""Rule compiler.

A rule takes one of two shapes:
  - single   : the whole body has one handler          -> <rule>_0
  - choice   : top-level `/` without its own handler    -> <rule>_0 .. <rule>_{n-1},
               each alternative compiled with its own handler and tried in
               declaration order (first success wins)
"""

from __future__ import annotations

from ..grammar.ast import Choice, Node
from .context import CompilationContext
from .handlers import compile_handler
from .ir import Assign, RuleDefinition, RuleFunction


def is_alternative_rule(node: Node) -> bool:
    """Un-handled top-level choice: alternatives carry their own handlers."""
    return isinstance(node, Choice) and node.handler is None


def compile_rule(ctx: CompilationContext, types: bool, name: str, node: Node) -> RuleDefinition:
    rd = RuleDefinition(name)
    if is_alternative_rule(node):
        branches = node.alts
    else:
        branches = (node,)

    for i, branch in enumerate(branches):
        slot = f"{name}_{i}"
        rd.parsers.append(Assign(slot, compile_handler(ctx, types, branch, name, slot)))

    rd.function = RuleFunction(name, tuple(a.target for a in rd.parsers), typed=types)
    return rd
