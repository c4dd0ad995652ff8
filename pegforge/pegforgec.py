"""pegforgec – pegforge CLI

Usage)
    $ python -m pegforge.pegforgec check grammar.json -D
    $ python -m pegforge.pegforgec build grammar.json -o out/parser.py --types

Commands
--------
- check : load the JSON rule set, compile it and print a summary
- build : emit the generated parser module (to -o, or to stdout)

With -D/--debug, per-stage summaries go to stderr.
"""

from __future__ import annotations
import argparse
import pathlib
import sys
from typing import Optional

# ------------------------------
# helpers
# ------------------------------

def _eprint(*args, **kw) -> None:
    print(*args, file=sys.stderr, **kw)

# ------------------------------
# pipeline
# ------------------------------

def _load_program(rules_path: str, debug: bool, types: bool):
    """rules file -> Program (codegen IR)"""
    from .grammar.loader import load_rules
    from .compiler import CompileOptions, build_program

    rules = load_rules(rules_path)
    if debug: _eprint("[DEBUG] rules loaded | rules=%d" % len(rules))

    program = build_program(rules, CompileOptions(types=types))
    if debug: _eprint("[DEBUG] program built | literals=%d regexes=%d handlers=%d" %
                      (len(program.literals), len(program.regexes),
                       sum(len(rd.handlers()) for rd in program.rules)))
    return program

# ------------------------------
# commands
# ------------------------------

def cmd_check(args) -> int:
    try:
        program = _load_program(args.file, debug=args.debug, types=False)
    except (ValueError, OSError) as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2

    print(f"[CHECK OK] rules={len(program.rules)} literals={len(program.literals)} regexes={len(program.regexes)}")
    return 0


def cmd_build(args) -> int:
    from .codegen.emit_py import emit_py_to_string

    try:
        program = _load_program(args.file, debug=args.debug, types=args.types)
    except (ValueError, OSError) as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2

    src = emit_py_to_string(program)
    if args.debug:
        _eprint(f"[DEBUG] types={args.types} bytes={len(src)}")

    if not args.output:
        sys.stdout.write(src)
        return 0

    out_path = pathlib.Path(args.output)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(src, encoding="utf-8")
    print(f"[EMIT] rules={len(program.rules)} types={args.types} -> {out_path}")
    return 0

# ------------------------------
# entry point
# ------------------------------

def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="pegforgec", description="pegforge parser generator CLI")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_check = sub.add_parser("check", help="compile the rule set and report a summary")
    p_check.add_argument("file", help="JSON rule set")
    p_check.add_argument("-D", "--debug", action="store_true", help="print stage summaries to stderr")
    p_check.set_defaults(func=cmd_check)

    p_build = sub.add_parser("build", help="emit the generated Python parser")
    p_build.add_argument("file", help="JSON rule set")
    p_build.add_argument("-o", "--output", help="output path (default: stdout)")
    p_build.add_argument("--types", action="store_true", help="typed runtime and regex type narrowing")
    p_build.add_argument("-D", "--debug", action="store_true", help="print stage summaries to stderr")
    p_build.set_defaults(func=cmd_build)

    args = ap.parse_args(argv)
    return int(args.func(args))

if __name__ == "__main__":
    sys.exit(main())
