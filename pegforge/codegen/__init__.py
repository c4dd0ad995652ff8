# pegforge/codegen/__init__.py
"""Rule compilers producing codegen IR, and the Python emitter."""

from .context import CompilationContext
from .retype import re_type
from .mapping import compile_mapping
from .operators import compile_operator
from .handlers import compile_handler
from .rules import compile_rule
from .emit_py import emit_py_to_string
