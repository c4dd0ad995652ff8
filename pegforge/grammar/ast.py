# pegforge/grammar/ast.py
"""Grammar AST for the rule compiler.

- Node: one frozen dataclass per operator kind (closed sum type)
- Handler: a functional body (`FunctionHandler`) or a structural mapping
- Grammar: rule name -> node, in declaration order
"""

from __future__     import annotations
from dataclasses    import dataclass, field
from typing         import Dict, Optional, Tuple, Union

# ---- Structural mappings ----

@dataclass(frozen=True)
class MapString:
    text: str               # rendered as a quoted string constant

@dataclass(frozen=True)
class MapArray:
    items: Tuple["Mapping", ...]

@dataclass(frozen=True)
class MapNull:
    pass

@dataclass(frozen=True)
class MapVerbatim:
    code: object            # {l: X}, inserted as-is

@dataclass(frozen=True)
class MapRef:
    selector: Union[int, str]   # 1-based position ($0 = whole capture) or capture name

@dataclass(frozen=True)
class MapObject:
    fields: Tuple[Tuple[str, "Mapping"], ...]

@dataclass(frozen=True)
class MapScalar:
    value: Union[int, float, bool]

Mapping = Union[MapString, MapArray, MapNull, MapVerbatim, MapRef, MapObject, MapScalar]

# ---- Handlers ----

@dataclass(frozen=True)
class FunctionHandler:
    body: str               # user code, a Python statement block

Handler = Union[FunctionHandler, MapString, MapArray, MapNull, MapVerbatim, MapRef, MapObject, MapScalar]

# ---- Grammar nodes ----

@dataclass(frozen=True)
class Ref:
    name: str               # reference to another rule

@dataclass(frozen=True)
class Literal:
    text: str
    handler: Optional[Handler] = None

@dataclass(frozen=True)
class Regex:
    pattern: str
    handler: Optional[Handler] = None

@dataclass(frozen=True)
class Choice:
    alts: Tuple["Node", ...]
    handler: Optional[Handler] = None

@dataclass(frozen=True)
class Seq:
    items: Tuple["Node", ...]
    handler: Optional[Handler] = None

@dataclass(frozen=True)
class Repeat:
    kind: str               # '*', '+', '?'
    node: "Node"
    handler: Optional[Handler] = None

@dataclass(frozen=True)
class Text:
    node: "Node"            # '$': keep consumed text only
    handler: Optional[Handler] = None

@dataclass(frozen=True)
class Lookahead:
    node: "Node"
    negated: bool           # '&' = False, '!' = True
    handler: Optional[Handler] = None

@dataclass(frozen=True)
class Named:
    name: str               # capture name, consumed by the handler compiler
    node: "Node"
    handler: Optional[Handler] = None

Node = Union[Ref, Literal, Regex, Choice, Seq, Repeat, Text, Lookahead, Named]


def capture_name(node: Node) -> Optional[str]:
    """Capture name of a `Named` wrapper, None for everything else."""
    if isinstance(node, Named):
        return node.name
    return None


@dataclass
class Grammar:
    rules: Dict[str, Node] = field(default_factory=dict)

    def names(self) -> Tuple[str, ...]:
        return tuple(self.rules)
