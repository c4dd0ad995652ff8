# pegforge/__init__.py
"""pegforge: compiles PEG rule sets into standalone recursive-descent parsers.

This package provides:
- a grammar AST and a decoder for the JSON-shaped rule form
- a code generation IR plus a Python emitter
- the parser runtime prepended to every generated module
"""

from .compiler import CompileOptions, build_program, compile_rules
from .grammar import decode_rules, load_rules
