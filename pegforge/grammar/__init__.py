# pegforge/grammar/__init__.py
"""Grammar AST and decoding of JSON-shaped rule sets."""

from .ast import (
    Ref, Literal, Regex, Choice, Seq, Repeat, Text, Lookahead, Named,
    FunctionHandler, MapString, MapArray, MapNull, MapVerbatim, MapRef,
    MapObject, MapScalar, Grammar, capture_name,
)
from .decode import decode_rules, decode_node, decode_mapping, decode_handler
from .loader import load_rules
