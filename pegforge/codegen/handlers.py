# pegforge/codegen/handlers.py
"""Handler compiler.

Decides, per grammar node, how its handler wraps the compiled operator.

  handler     node kind   wrapper  handler parameters
  ----------  ----------  -------  ----------------------------------------
  functional  Seq         _TS      _skip, _loc, _0, _1 .. _N  (N = items)
  functional  Regex       _TR      _skip, _loc, _0 .. _9      (match, groups)
  functional  other       _TV      _skip, _loc, _0, _1
  structural  any         _T       value
  (none)      any         -        operator compiled with default unwrap

Named captures become local bindings at the top of the handler:
  - Seq items:          name = _<i>      (functional)
                        name = value[i]  (structural)
  - a Named node itself name = _1        (functional; structural sees `value`)
"""

from __future__ import annotations
from typing import List, Tuple

from ..grammar.ast import FunctionHandler, Node, Ref, Regex, Seq, capture_name
from .context import CompilationContext
from .ir import Call, Expr, HandlerFunction, Index, Name
from .mapping import compile_mapping
from .operators import compile_operator

HANDLER_PREFIX_PARAMS = ("_skip", "_loc", "_0")
REGEX_HANDLER_PARAMS = HANDLER_PREFIX_PARAMS + tuple(f"_{i}" for i in range(1, 10))
REGULAR_HANDLER_PARAMS = HANDLER_PREFIX_PARAMS + ("_1",)


def _sequence_bindings(seq: Seq, structural: bool) -> Tuple[Tuple[str, Expr], ...]:
    out: List[Tuple[str, Expr]] = []
    for i, item in enumerate(seq.items):
        name = capture_name(item)
        if name:
            out.append((name, Index(Name("value"), i) if structural else Name(f"_{i + 1}")))
    return tuple(out)


def compile_handler(ctx: CompilationContext, types: bool, node: Node,
                    rule_name: str, slot: str) -> Expr:
    """
    compile_handler(ctx, types, node, rule_name, slot) -> Expr
    ----------------------------------------------------------
    `slot` is the binding name of the parser being built (`<rule>_<i>`); a
    handler function, if any, is named `<slot>_handler`.
    """
    if isinstance(node, Ref):
        return Name(node.name)

    h = node.handler
    if h is None:
        return compile_operator(ctx, node, rule_name, True, types)

    parser = compile_operator(ctx, node, rule_name, False, types)
    fname = f"{slot}_handler"

    if isinstance(h, FunctionHandler):
        if isinstance(node, Seq):
            params = HANDLER_PREFIX_PARAMS + tuple(f"_{i + 1}" for i in range(len(node.items)))
            fn = HandlerFunction(fname, params, _sequence_bindings(node, False), body=h.body)
            return Call("_TS", (parser, fn))
        if isinstance(node, Regex):
            # TODO: expose named regex groups as bindings once the front end emits them
            fn = HandlerFunction(fname, REGEX_HANDLER_PARAMS, body=h.body)
            return Call("_TR", (parser, fn))
        name = capture_name(node)
        bindings = ((name, Name("_1")),) if name else ()
        fn = HandlerFunction(fname, REGULAR_HANDLER_PARAMS, bindings, body=h.body)
        return Call("_TV", (parser, fn))

    # structural mapping
    source = Name("value")
    if isinstance(node, Seq):
        fn = HandlerFunction(fname, ("value",), _sequence_bindings(node, True),
                             returns=compile_mapping(h, source, False, -1))
    elif isinstance(node, Regex):
        fn = HandlerFunction(fname, ("value",), returns=compile_mapping(h, source, False, 0))
    else:
        fn = HandlerFunction(fname, ("value",), returns=compile_mapping(h, source, True))
    return Call("_T", (parser, fn))
