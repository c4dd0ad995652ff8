# pegforge/codegen/context.py
"""Terminal registry, scoped to one compilation.

Literal strings and regex patterns are interned into two append-only tables.
An id is `_L<index>` / `_R<index>` where index is the first-seen position,
so every reference to an equal terminal shares one constant definition.
"""

from __future__ import annotations
from typing import Dict, List


class CompilationContext:
    """Per-`compile` state. Created fresh for every run, never shared."""

    def __init__(self) -> None:
        self.literals: List[str] = []
        self.regexes: List[str] = []
        self._literal_ids: Dict[str, int] = {}
        self._regex_ids: Dict[str, int] = {}

    def intern_literal(self, value: str) -> str:
        idx = self._literal_ids.get(value)
        if idx is None:
            idx = len(self.literals)
            self.literals.append(value)
            self._literal_ids[value] = idx
        return f"_L{idx}"

    def intern_regex(self, pattern: str) -> str:
        idx = self._regex_ids.get(pattern)
        if idx is None:
            idx = len(self.regexes)
            self.regexes.append(pattern)
            self._regex_ids[pattern] = idx
        return f"_R{idx}"
