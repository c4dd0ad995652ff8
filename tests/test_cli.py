"""
Tests for the pegforgec command line
"""
import json

from pegforge.pegforgec import main

RULES = {
    "Greeting": ["S", [["L", "hello "], [{"name": "who"}, "Name"]], {"f": "return who"}],
    "Name": ["R", "[a-z]+"],
}


def _write(tmp_path, rules):
    path = tmp_path / "grammar.json"
    path.write_text(json.dumps(rules), encoding="utf-8")
    return str(path)


class TestCheck:
    def test_ok(self, tmp_path, capsys):
        assert main(["check", _write(tmp_path, RULES)]) == 0
        assert "[CHECK OK] rules=2 literals=1 regexes=1" in capsys.readouterr().out

    def test_debug(self, tmp_path, capsys):
        assert main(["check", _write(tmp_path, RULES), "-D"]) == 0
        err = capsys.readouterr().err
        assert "[DEBUG] rules loaded | rules=2" in err
        assert "handlers=1" in err

    def test_error(self, tmp_path, capsys):
        assert main(["check", _write(tmp_path, {"A": ["Z", "x"]})]) == 2
        assert "Unknown op: Z" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert main(["check", str(tmp_path / "nope.json")]) == 2
        assert "[ERROR]" in capsys.readouterr().err


class TestBuild:
    def test_writes_module(self, tmp_path, capsys):
        out = tmp_path / "out" / "greeting.py"
        assert main(["build", _write(tmp_path, RULES), "-o", str(out)]) == 0
        assert "[EMIT]" in capsys.readouterr().out
        ns = {}
        exec(compile(out.read_text(encoding="utf-8"), str(out), "exec"), ns)
        assert ns["parse"]("hello world") == "world"

    def test_stdout(self, tmp_path, capsys):
        assert main(["build", _write(tmp_path, RULES), "--types"]) == 0
        src = capsys.readouterr().out
        assert "def Greeting(state: ParseState):" in src
        assert src.rstrip().endswith('__all__ = ["parse"]')
