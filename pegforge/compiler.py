# pegforge/compiler.py
"""Program assembler: rule set -> one self-contained Python parser module.

Pipeline
--------
  JSON-shaped rules --decode--> Grammar --compile_rule (per rule)--> Program (IR)
                                                    --emit_py--> source text

Every call builds a fresh `CompilationContext`, so terminal ids never leak
between compilations and concurrent calls do not interfere.
"""

from __future__ import annotations
import builtins
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Set, Union

from .codegen.context import CompilationContext
from .codegen.emit_py import emit_py_to_string
from .codegen.ir import Program
from .codegen.rules import compile_rule
from .grammar.ast import Grammar
from .grammar.decode import decode_rules
from .runtime import defined_names, load_preamble


@dataclass(frozen=True)
class CompileOptions:
    types: bool = False     # typed preamble + regex return-type narrowing


DEFAULT_OPTIONS = CompileOptions()

# bound by the module epilogue
_EPILOGUE_NAMES = {"parse", "__all__"}

# looked up at parse time by the runtime and the rule functions (len, print, ...)
_BUILTIN_NAMES = {n for n in dir(builtins) if not n.startswith("_")}


def _check_names(program: Program, reserved: Set[str]) -> None:
    """Generated top-level names must not shadow the runtime or each other."""
    seen: Dict[str, str] = {}

    def claim(name: str, what: str) -> None:
        if name in reserved:
            raise ValueError(f"{what} {name!r} collides with a runtime name")
        if name in _BUILTIN_NAMES:
            raise ValueError(f"{what} {name!r} shadows a Python builtin")
        if name in seen:
            raise ValueError(f"{what} {name!r} collides with {seen[name]}")
        seen[name] = what

    for i in range(len(program.literals)):
        claim(f"_L{i}", "literal constant")
    for i in range(len(program.regexes)):
        claim(f"_R{i}", "regex constant")
    for rd in program.rules:
        claim(rd.name, "rule")
    for rd in program.rules:
        for a in rd.parsers:
            claim(a.target, f"parser of rule {rd.name!r}")
        for h in rd.handlers():
            claim(h.name, f"handler of rule {rd.name!r}")


def build_program(rules: Union[Mapping[str, Any], Grammar],
                  options: Optional[CompileOptions] = None) -> Program:
    """
    build_program(rules[, options]) -> Program
    ------------------------------------------
    Compile every rule, in declaration order, into the codegen IR.
    Terminal tables are in first-seen order across the whole rule set.
    """
    options = options or DEFAULT_OPTIONS
    g = decode_rules(rules)
    ctx = CompilationContext()

    compiled = [compile_rule(ctx, options.types, name, node) for name, node in g.rules.items()]

    preamble = load_preamble(options.types)
    program = Program(
        preamble=preamble,
        literals=list(ctx.literals),
        regexes=list(ctx.regexes),
        rules=compiled,
    )
    _check_names(program, defined_names(preamble) | _EPILOGUE_NAMES)
    return program


def compile_rules(rules: Union[Mapping[str, Any], Grammar],
                  options: Optional[CompileOptions] = None) -> str:
    """
    compile_rules(rules[, options]) -> str
    --------------------------------------
    Rule set -> generated parser source exposing a single `parse` function.
    """
    return emit_py_to_string(build_program(rules, options))
