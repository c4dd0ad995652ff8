# pegforge/grammar/decode.py
"""Decode the JSON-shaped rule set into the grammar AST.

Input form (as produced by the grammar-language front end):

    node    := RULE_NAME
             | [tag, operand]
             | [tag, operand, handler]
    tag     := "L" | "R" | "/" | "S" | "*" | "+" | "?" | "$" | "&" | "!"
             | {"name": CAPTURE_NAME}          # named capture, operand is the real node
    handler := {"f": BODY} | mapping
    mapping := STRING | [mapping...] | null | NUMBER | BOOL
             | {"l": X} | {"v": INDEX_OR_NAME} | {"o": {KEY: mapping}}

Any shape outside this grammar is rejected here, before code generation.
"""

from __future__ import annotations
import json
import keyword
from typing import Any, Mapping as TMapping, Optional

import regex as re

from .ast import (
    Choice, FunctionHandler, Grammar, Handler, Literal, Lookahead, MapArray,
    MapNull, MapObject, MapRef, MapScalar, MapString, MapVerbatim, Mapping,
    Named, Node, Ref, Regex, Repeat, Seq, Text,
)

_REPEAT_TAGS = ("*", "+", "?")
_LOOKAHEAD_TAGS = {"&": False, "!": True}

# handler parameters: `value` (structural), `_skip`, `_loc`, `_0`, `_1` ... (functional)
_HANDLER_PARAM = re.compile(r"value|_skip|_loc|_[0-9]+")


def _dump(value: Any) -> str:
    return json.dumps(value, default=repr, ensure_ascii=False)


# ---------- structural mappings ----------

def decode_mapping(value: Any) -> Mapping:
    """JSON value -> structural mapping. Unknown object shapes raise ValueError."""
    if isinstance(value, str):
        return MapString(value)
    if value is None:
        return MapNull()
    if isinstance(value, (list, tuple)):
        return MapArray(tuple(decode_mapping(v) for v in value))
    if isinstance(value, dict):
        if "l" in value:
            return MapVerbatim(value["l"])
        if "v" in value:
            sel = value["v"]
            if isinstance(sel, bool) or not isinstance(sel, (int, str)):
                raise ValueError(f"unknown object mapping: invalid selector {_dump(value)}")
            return MapRef(sel)
        if "o" in value:
            record = value["o"]
            if not isinstance(record, dict):
                raise ValueError(f"unknown object mapping: {_dump(value)}")
            return MapObject(tuple((str(k), decode_mapping(v)) for k, v in record.items()))
        raise ValueError(f"unknown object mapping: {_dump(value)}")
    if isinstance(value, (bool, int, float)):
        return MapScalar(value)
    raise ValueError(f"unknown object mapping: {_dump(value)}")


def decode_handler(value: Any) -> Handler:
    if isinstance(value, dict) and "f" in value:
        body = value["f"]
        if not isinstance(body, str):
            raise ValueError(f"handler body must be a string: {_dump(value)}")
        return FunctionHandler(body)
    return decode_mapping(value)


# ---------- nodes ----------

def _expect_str(tag: str, operand: Any) -> str:
    if not isinstance(operand, str):
        raise ValueError(f"op {tag!r} expects a string operand, got {_dump(operand)}")
    return operand


def _expect_list(tag: str, operand: Any) -> list:
    if not isinstance(operand, (list, tuple)):
        raise ValueError(f"op {tag!r} expects a list of nodes, got {_dump(operand)}")
    return list(operand)


def decode_node(value: Any) -> Node:
    """JSON-shaped node -> AST node."""
    if isinstance(value, str):
        return Ref(value)
    if not isinstance(value, (list, tuple)) or len(value) not in (2, 3):
        raise ValueError(f"malformed node: {_dump(value)}")

    tag, operand = value[0], value[1]
    handler: Optional[Handler] = decode_handler(value[2]) if len(value) == 3 else None

    if isinstance(tag, dict):
        name = tag.get("name")
        if isinstance(name, str) and _HANDLER_PARAM.fullmatch(name):
            raise ValueError(f"invalid capture name {name!r}: reserved for handler parameters")
        if isinstance(name, str) and name.isidentifier() and not keyword.iskeyword(name):
            return Named(name, decode_node(operand), handler)
        if name:
            raise ValueError(f"invalid capture name {name!r}: must be a Python identifier")
    elif tag == "L":
        return Literal(_expect_str(tag, operand), handler)
    elif tag == "R":
        return Regex(_expect_str(tag, operand), handler)
    elif tag == "/":
        return Choice(tuple(decode_node(n) for n in _expect_list(tag, operand)), handler)
    elif tag == "S":
        return Seq(tuple(decode_node(n) for n in _expect_list(tag, operand)), handler)
    elif tag in _REPEAT_TAGS:
        return Repeat(tag, decode_node(operand), handler)
    elif tag == "$":
        return Text(decode_node(operand), handler)
    elif isinstance(tag, str) and tag in _LOOKAHEAD_TAGS:
        return Lookahead(decode_node(operand), _LOOKAHEAD_TAGS[tag], handler)

    shown = tag if isinstance(tag, str) else _dump(tag)
    raise ValueError(f"Unknown op: {shown} {_dump(operand)}")


def _check_rule_name(name: Any) -> str:
    if not isinstance(name, str) or not name.isidentifier() or keyword.iskeyword(name):
        raise ValueError(f"invalid rule name {name!r}: must be a Python identifier")
    return name


def decode_rules(rules: TMapping[str, Any]) -> Grammar:
    """Ordered mapping rule name -> JSON node  =>  Grammar (order preserved)."""
    if isinstance(rules, Grammar):
        return rules
    g = Grammar()
    for name, node in rules.items():
        try:
            g.rules[_check_rule_name(name)] = decode_node(node)
        except ValueError as e:
            raise ValueError(f"rule {name!r}: {e}") from e
    return g
