"""Rule set (.json) loader"""

from __future__ import annotations
import json
from pathlib    import Path
from typing     import Any, Dict


def load_rules_text(path: str) -> str:
    """
    Load Rules Text
    """
    text = Path(path).read_text(encoding="utf-8")
    return text.replace("\r\n", "\n").replace("\r", "\n")


def load_rules(path: str) -> Dict[str, Any]:
    """Read a JSON rule set. Key order is the declaration order."""
    try:
        rules = json.loads(load_rules_text(path))
    except json.JSONDecodeError as e:
        raise ValueError(f"{path}: invalid JSON rule set: {e}") from e
    if not isinstance(rules, dict):
        raise ValueError(f"{path}: rule set must be a JSON object, got {type(rules).__name__}")
    return rules
