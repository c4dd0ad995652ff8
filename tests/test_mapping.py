"""
Tests for the structural mapping compiler
"""
import pytest

from pegforge.codegen.emit_py import render_expr
from pegforge.codegen.ir import Const, DictExpr, Index, ListExpr, Name, Verbatim
from pegforge.codegen.mapping import compile_mapping
from pegforge.grammar.decode import decode_mapping

VALUE = Name("value")


def _m(raw, single=False, offset=-1):
    return compile_mapping(decode_mapping(raw), VALUE, single, offset)


class TestConstants:
    def test_string(self):
        assert _m("hello") == Const("hello")

    def test_null(self):
        assert _m(None) == Const(None)

    def test_scalars(self):
        assert _m(3) == Const(3)
        assert _m(True) == Const(True)

    def test_verbatim(self):
        assert _m({"l": "len(value)"}) == Verbatim("len(value)")
        assert _m({"l": 1}) == Verbatim("1")
        assert _m({"l": False}) == Verbatim("False")

    def test_array_compiles_every_element(self):
        assert _m(["a", {"v": 1}, None]) == ListExpr((Const("a"), Index(VALUE, 0), Const(None)))

    def test_object_compiles_every_field(self):
        got = _m({"o": {"type": "Pair", "left": {"v": 1}, "right": {"v": 3}}})
        assert got == DictExpr((
            ("type", Const("Pair")),
            ("left", Index(VALUE, 0)),
            ("right", Index(VALUE, 2)),
        ))
        assert render_expr(got) == '{"type": "Pair", "left": value[0], "right": value[2]}'


class TestReferences:
    @pytest.mark.parametrize("offset", [-1, 0, 5])
    def test_single_mode_returns_source(self, offset):
        assert _m({"v": 0}, single=True, offset=offset) == VALUE
        assert _m({"v": 3}, single=True, offset=offset) == VALUE
        assert _m({"v": "name"}, single=True, offset=offset) == VALUE

    def test_sequence_positions(self):
        assert _m({"v": 1}) == Index(VALUE, 0)
        assert _m({"v": 2}) == Index(VALUE, 1)
        assert _m({"v": 3}) == Index(VALUE, 2)

    def test_sequence_zero_is_whole_capture(self):
        assert _m({"v": 0}) == VALUE

    def test_regex_positions(self):
        assert _m({"v": 0}, offset=0) == Index(VALUE, 0)
        assert _m({"v": 1}, offset=0) == Index(VALUE, 1)
        assert _m({"v": 9}, offset=0) == Index(VALUE, 9)

    def test_named_reference(self):
        assert _m({"v": "left"}) == Name("left")
        assert _m({"v": "left"}, offset=0) == Name("left")


class TestInvalidShapes:
    def test_unknown_object(self):
        with pytest.raises(ValueError, match="unknown object mapping"):
            decode_mapping({"x": 1})

    def test_nested_unknown_object(self):
        with pytest.raises(ValueError, match="unknown object mapping"):
            decode_mapping({"o": {"a": [{"bogus": True}]}})

    def test_bad_selector(self):
        with pytest.raises(ValueError, match="invalid selector"):
            decode_mapping({"v": [1]})
