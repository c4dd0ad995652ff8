"""
Tests for decoding the JSON-shaped rule form
"""
import json

import pytest

from pegforge.grammar import (
    Choice, FunctionHandler, Literal, Lookahead, MapObject, MapRef, MapString, Named,
    Ref, Regex, Repeat, Seq, Text, decode_node, decode_rules, load_rules,
)


class TestNodes:
    def test_leaves(self):
        assert decode_node("Other") == Ref("Other")
        assert decode_node(["L", "x"]) == Literal("x")
        assert decode_node(["R", "[0-9]+"]) == Regex("[0-9]+")

    def test_combinators(self):
        assert decode_node(["/", ["A", "B"]]) == Choice((Ref("A"), Ref("B")))
        assert decode_node(["S", ["A", ["L", "b"]]]) == Seq((Ref("A"), Literal("b")))
        assert decode_node(["+", "A"]) == Repeat("+", Ref("A"))
        assert decode_node(["$", "A"]) == Text(Ref("A"))
        assert decode_node(["&", "A"]) == Lookahead(Ref("A"), False)
        assert decode_node(["!", "A"]) == Lookahead(Ref("A"), True)

    def test_named_capture(self):
        assert decode_node([{"name": "lhs"}, "Expr"]) == Named("lhs", Ref("Expr"))

    def test_handlers(self):
        assert decode_node(["L", "x", {"f": "return 1"}]).handler == FunctionHandler("return 1")
        assert decode_node(["L", "x", "X"]).handler == MapString("X")
        got = decode_node(["S", ["A"], {"o": {"a": {"v": 1}}}]).handler
        assert got == MapObject((("a", MapRef(1)),))

    def test_unknown_tag(self):
        with pytest.raises(ValueError, match='Unknown op: Z "x"'):
            decode_node(["Z", "x"])

    def test_object_tag_without_name(self):
        with pytest.raises(ValueError, match="Unknown op"):
            decode_node([{"label": "x"}, "A"])

    @pytest.mark.parametrize("raw", [
        ["S", "A"],
        ["/", "A"],
        ["L", ["x"]],
        ["R", 5],
        ["L"],
        ["L", "x", None, "extra"],
        42,
    ])
    def test_malformed(self, raw):
        with pytest.raises(ValueError):
            decode_node(raw)

    def test_capture_name_must_be_identifier(self):
        with pytest.raises(ValueError, match="invalid capture name"):
            decode_node([{"name": "not valid"}, "A"])


class TestRules:
    def test_order_preserved(self):
        g = decode_rules({"B": "A", "A": ["L", "a"]})
        assert g.names() == ("B", "A")

    def test_error_names_rule(self):
        with pytest.raises(ValueError, match="rule 'Bad'"):
            decode_rules({"Good": ["L", "a"], "Bad": ["?", ["Q", 1]]})

    def test_load_rules(self, tmp_path):
        path = tmp_path / "g.json"
        path.write_text(json.dumps({"A": ["L", "a"], "B": "A"}), encoding="utf-8")
        assert list(load_rules(str(path))) == ["A", "B"]

    def test_load_rules_rejects_non_object(self, tmp_path):
        path = tmp_path / "g.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ValueError, match="must be a JSON object"):
            load_rules(str(path))

    def test_load_rules_rejects_bad_json(self, tmp_path):
        path = tmp_path / "g.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(ValueError, match="invalid JSON"):
            load_rules(str(path))


class TestCaptureNames:
    @pytest.mark.parametrize("name", ["value", "_skip", "_loc", "_0", "_1", "_9", "_12"])
    def test_handler_parameter_names_rejected(self, name):
        with pytest.raises(ValueError, match="reserved for handler parameters"):
            decode_node(["S", [[{"name": name}, ["L", "a"]]], {"v": name}])

    def test_ordinary_names_accepted(self):
        assert decode_node([{"name": "values"}, "A"]) == Named("values", Ref("A"))
        assert decode_node([{"name": "_x1"}, "A"]) == Named("_x1", Ref("A"))
