# pegforge/codegen/retype.py
"""Static return-type narrowing for simple regex terminals.

Only two pattern shapes can be enumerated:
  - no metacharacters at all      "a|b|cd"  -> "a", "b", "cd"
  - a plain character class       "[abc]"   -> "a", "b", "c"
Anything else (quantifiers, groups, escapes, ranges, negation) is not narrowed.
"""

from __future__ import annotations
from typing import Tuple

import regex as re

# `$` is not in the metacharacter set: "a$" narrows to "a$" although only "a" is matched
_SIMPLE = re.compile(r"[^.*+?{}()\[\]^\\]*")
# no '^' / '-' / '\' and no nested brackets inside the class
_SIMPLE_CLASS = re.compile(r"\[[^\-^\\\[\]]*\]")


def re_type(enabled: bool, pattern: str) -> Tuple[str, ...]:
    """Literal members the matched text is limited to; () when not narrowable."""
    if not enabled:
        return ()
    if _SIMPLE.fullmatch(pattern):
        return tuple(pattern.split("|"))
    if _SIMPLE_CLASS.fullmatch(pattern):
        return tuple(pattern[1:-1])
    return ()
