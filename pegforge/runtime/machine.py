"""pegforge parser runtime.

Prepended verbatim to every generated parser. Parsers are plain functions
`state -> Result | None`; None means "no match at state.pos".

Primitives used by generated code
---------------------------------
- _L(text) / _R(pattern)          : terminal matchers (interned constants)
- _EXPECT(parser, description)    : records `description` at the failure position
- _C _S _Q _P _E                  : choice, sequence, *, +, ?
- _TEXT _Y _N                     : consumed text, &lookahead, !lookahead
- _T _TS _TR _TV                  : handler wrappers (structural, sequence,
                                    regex, single value)
- _R_0                            : default regex unwrap (match -> matched text)
- _TOKEN(name, state, result)     : tokenizing-mode wrapper
- parser_state(rules).parse(text) : entry point
"""

from __future__ import annotations

import sys
from types import SimpleNamespace

import regex


class ParseError(SyntaxError):
    pass


class _Skip:
    def __repr__(self):
        return "SKIP"


# returned by a handler to reject the match
SKIP = _Skip()


class Loc:
    __slots__ = ("pos", "length")

    def __init__(self, pos, length):
        self.pos = pos
        self.length = length

    def __repr__(self):
        return f"Loc(pos={self.pos}, length={self.length})"


class Result:
    __slots__ = ("loc", "pos", "value")

    def __init__(self, loc, pos, value):
        self.loc = loc
        self.pos = pos
        self.value = value

    def __repr__(self):
        return f"Result(loc={self.loc!r}, pos={self.pos}, value={self.value!r})"


class Token:
    __slots__ = ("type", "loc", "children", "token")

    def __init__(self, type, loc, children, token):
        self.type = type
        self.loc = loc
        self.children = children
        self.token = token

    def __repr__(self):
        return f"Token({self.type!r}, {self.token!r})"


class _Expectations:
    """Descriptions that failed at the furthest position reached."""

    def __init__(self):
        self.pos = -1
        self.names = []

    def add(self, pos, name):
        if pos > self.pos:
            self.pos = pos
            self.names = [name]
        elif pos == self.pos and name not in self.names:
            self.names.append(name)


class ParseState:
    __slots__ = ("input", "pos", "tokenize", "verbose", "expected")

    def __init__(self, input, pos=0, tokenize=False, verbose=False, expected=None):
        self.input = input
        self.pos = pos
        self.tokenize = tokenize
        self.verbose = verbose
        self.expected = expected if expected is not None else _Expectations()

    def at(self, pos):
        if pos == self.pos:
            return self
        return ParseState(self.input, pos, self.tokenize, self.verbose, self.expected)

    def fail(self, pos, description):
        self.expected.add(pos, description)


# ---------- terminals ----------

def _L(literal):
    length = len(literal)

    def match_literal(state):
        pos = state.pos
        if state.input.startswith(literal, pos):
            return Result(Loc(pos, length), pos + length, literal)
        return None
    return match_literal


def _R(pattern):
    rx = regex.compile(pattern, regex.DOTALL)

    def match_regex(state):
        pos = state.pos
        m = rx.match(state.input, pos)
        if m is None:
            return None
        end = m.end()
        return Result(Loc(pos, end - pos), end, m)
    return match_regex


def _EXPECT(parser, description):
    def expect(state):
        result = parser(state)
        if result is None:
            state.fail(state.pos, description)
        return result
    return expect


# ---------- combinators ----------

def _C(*parsers):
    def choice(state):
        for parser in parsers:
            result = parser(state)
            if result is not None:
                return result
        return None
    return choice


def _S(*parsers):
    def sequence(state):
        start = pos = state.pos
        values = []
        for parser in parsers:
            result = parser(state.at(pos))
            if result is None:
                return None
            pos = result.pos
            values.append(result.value)
        return Result(Loc(start, pos - start), pos, values)
    return sequence


def _repeat(parser, state, values):
    pos = state.pos
    while True:
        result = parser(state.at(pos))
        if result is None:
            break
        values.append(result.value)
        if result.pos == pos:
            # empty match, stop instead of looping forever
            break
        pos = result.pos
    return pos


def _Q(parser):
    def zero_or_more(state):
        values = []
        pos = _repeat(parser, state, values)
        return Result(Loc(state.pos, pos - state.pos), pos, values)
    return zero_or_more


def _P(parser):
    def one_or_more(state):
        first = parser(state)
        if first is None:
            return None
        values = [first.value]
        pos = first.pos
        if pos != state.pos:
            pos = _repeat(parser, state.at(pos), values)
        return Result(Loc(state.pos, pos - state.pos), pos, values)
    return one_or_more


def _E(parser):
    def optional(state):
        result = parser(state)
        if result is None:
            return Result(Loc(state.pos, 0), state.pos, None)
        return result
    return optional


def _TEXT(parser):
    def text(state):
        result = parser(state)
        if result is None:
            return None
        return Result(result.loc, result.pos, state.input[state.pos:result.pos])
    return text


def _Y(parser):
    def lookahead(state):
        if parser(state) is None:
            return None
        return Result(Loc(state.pos, 0), state.pos, None)
    return lookahead


def _N(parser):
    def negative_lookahead(state):
        if parser(state) is not None:
            return None
        return Result(Loc(state.pos, 0), state.pos, None)
    return negative_lookahead


# ---------- handlers ----------

def _finish(result, value):
    if value is SKIP:
        return None
    return Result(result.loc, result.pos, value)


def _T(parser, fn):
    def transform(state):
        result = parser(state)
        if result is None:
            return None
        return _finish(result, fn(result.value))
    return transform


def _TS(parser, fn):
    def transform_sequence(state):
        result = parser(state)
        if result is None:
            return None
        return _finish(result, fn(SKIP, result.loc, result.value, *result.value))
    return transform_sequence


def _TR(parser, fn):
    def transform_regex(state):
        result = parser(state)
        if result is None:
            return None
        m = result.value
        groups = (m.group(0),) + m.groups()
        groups = (groups + (None,) * 10)[:10]
        return _finish(result, fn(SKIP, result.loc, *groups))
    return transform_regex


def _TV(parser, fn):
    def transform_value(state):
        result = parser(state)
        if result is None:
            return None
        return _finish(result, fn(SKIP, result.loc, result.value, result.value))
    return transform_value


def _R_0(parser):
    def match_text(state):
        result = parser(state)
        if result is None:
            return None
        return Result(result.loc, result.pos, result.value.group(0))
    return match_text


def _TOKEN(name, state, result):
    if result is None:
        return None
    token = Token(name, result.loc, result.value, state.input[state.pos:result.pos])
    return Result(result.loc, result.pos, token)


# ---------- entry point ----------

def _location(text, pos):
    line = text.count("\n", 0, pos) + 1
    col = pos - (text.rfind("\n", 0, pos) + 1) + 1
    return line, col


def parser_state(grammar):
    def parse(input, start_rule=None, tokenize=False, verbose=False):
        if not grammar:
            raise ValueError("parser has no rules")
        if start_rule is None:
            start_rule = next(iter(grammar))
        rule = grammar[start_rule]
        state = ParseState(input, 0, tokenize, verbose)
        result = rule(state)
        if result is not None and result.pos == len(input):
            return result.value

        expected = state.expected
        if result is not None and result.pos >= expected.pos:
            line, col = _location(input, result.pos)
            raise ParseError(f"Unconsumed input at {line}:{col}: {input[result.pos:result.pos + 20]!r}")
        pos = max(expected.pos, 0)
        line, col = _location(input, pos)
        found = repr(input[pos:pos + 20]) if pos < len(input) else "EOF"
        raise ParseError(
            f"Failed to parse at {line}:{col}, expected: {', '.join(expected.names) or start_rule}; found: {found}"
        )
    return SimpleNamespace(parse=parse)
