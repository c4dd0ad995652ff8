"""
Tests for terminal interning and regex type narrowing
"""
import pytest

from pegforge.codegen.context import CompilationContext
from pegforge.codegen.retype import re_type


# ═══════════════════════════════════════════
# Interning
# ═══════════════════════════════════════════

class TestInterning:
    def test_first_seen_ids(self):
        ctx = CompilationContext()
        assert ctx.intern_literal("foo") == "_L0"
        assert ctx.intern_literal("bar") == "_L1"
        assert ctx.literals == ["foo", "bar"]

    def test_equal_literal_reuses_id(self):
        ctx = CompilationContext()
        a = ctx.intern_literal("foo")
        ctx.intern_literal("bar")
        assert ctx.intern_literal("foo") == a
        assert ctx.literals == ["foo", "bar"]

    def test_literals_and_regexes_are_separate_tables(self):
        ctx = CompilationContext()
        assert ctx.intern_literal("a") == "_L0"
        assert ctx.intern_regex("a") == "_R0"
        assert ctx.intern_regex("[0-9]+") == "_R1"
        assert ctx.intern_regex("a") == "_R0"
        assert ctx.regexes == ["a", "[0-9]+"]

    def test_contexts_do_not_share_state(self):
        first = CompilationContext()
        first.intern_literal("x")
        first.intern_literal("y")
        second = CompilationContext()
        assert second.intern_literal("y") == "_L0"
        assert second.literals == ["y"]


# ═══════════════════════════════════════════
# Type narrowing
# ═══════════════════════════════════════════

class TestReType:
    def test_alternation_of_plain_strings(self):
        assert re_type(True, "a|b") == ("a", "b")
        assert re_type(True, "let|var|const") == ("let", "var", "const")

    def test_plain_string(self):
        assert re_type(True, "=>") == ("=>",)

    def test_character_class(self):
        assert re_type(True, "[abc]") == ("a", "b", "c")

    @pytest.mark.parametrize("pattern", [
        "a+", "[a-z]", "[^abc]", "[\\n]", "(a|b)", "a.b", "\\d", "x{2}", "^a",
    ])
    def test_not_narrowable(self, pattern):
        assert re_type(True, pattern) == ()

    def test_disabled(self):
        assert re_type(False, "a|b") == ()
        assert re_type(False, "[abc]") == ()

    def test_end_anchor_is_taken_literally(self):
        # only the listed metacharacters block narrowing
        assert re_type(True, "a$") == ("a$",)
