# json_value.py
# In-memory JSON value tree: one class per variant plus deep copy
#
# =============================================================================
#  VALUE TREE
# =============================================================================
#
# A JSON document is a closed tagged union of six variants. Each variant is a
# small dataclass deriving from Value and tagged with a Kind, so callers can
# dispatch either on isinstance() or on value.kind.
#
# Containers own their children outright: an Object maps str keys to Value
# nodes, an Array holds a list of Value nodes, and no node ever sits in two
# containers at once. Nothing here hands out shared structure implicitly;
# copy.copy() and copy.deepcopy() both go through clone(), which rebuilds
# every container.
# =============================================================================

import enum
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Iterator, List

# ---------------------------------------------------------------------------
# TAGS
# ---------------------------------------------------------------------------
class Kind(enum.Enum):
    NULL    = "null"
    BOOLEAN = "boolean"
    NUMBER  = "number"
    STRING  = "string"
    OBJECT  = "object"
    ARRAY   = "array"

# ---------------------------------------------------------------------------
# VARIANTS
# ---------------------------------------------------------------------------
class Value:
    """
    Base of the six JSON variants. Not instantiated directly.
    """
    __slots__ = ()
    kind: ClassVar[Kind]

    def clone(self) -> "Value":
        return clone(self)

    def to_python(self) -> Any:
        """Convert the tree into plain None/bool/float/str/dict/list objects."""
        raise NotImplementedError

    def __copy__(self) -> "Value":
        return clone(self)

    def __deepcopy__(self, memo) -> "Value":
        return clone(self)


@dataclass
class Null(Value):
    kind: ClassVar[Kind] = Kind.NULL

    def to_python(self) -> None:
        return None


@dataclass
class Boolean(Value):
    value: bool
    kind: ClassVar[Kind] = Kind.BOOLEAN

    def to_python(self) -> bool:
        return self.value


@dataclass
class Number(Value):
    """Every JSON number, integral or not, is held as a double."""
    value: float
    kind: ClassVar[Kind] = Kind.NUMBER

    def __post_init__(self):
        self.value = float(self.value)

    def to_python(self) -> float:
        return self.value


@dataclass
class String(Value):
    value: str
    kind: ClassVar[Kind] = Kind.STRING

    def to_python(self) -> str:
        return self.value


@dataclass
class Object(Value):
    """
    Key/value members. A repeated key replaces the earlier value but keeps
    the position where the key was first inserted.
    """
    members: Dict[str, Value] = field(default_factory=dict)
    kind: ClassVar[Kind] = Kind.OBJECT

    def __len__(self) -> int:
        return len(self.members)

    def __iter__(self) -> Iterator[str]:
        return iter(self.members)

    def __getitem__(self, key: str) -> Value:
        return self.members[key]

    def __contains__(self, key) -> bool:
        return key in self.members

    def to_python(self) -> Dict[str, Any]:
        return {key: member.to_python() for key, member in self.members.items()}


@dataclass
class Array(Value):
    items: List[Value] = field(default_factory=list)
    kind: ClassVar[Kind] = Kind.ARRAY

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)

    def __getitem__(self, index: int) -> Value:
        return self.items[index]

    def to_python(self) -> List[Any]:
        return [item.to_python() for item in self.items]

# ---------------------------------------------------------------------------
# DEEP COPY
# ---------------------------------------------------------------------------
def clone(value: Value) -> Value:
    """
    Return a fully independent copy of a value tree.

    Every node of the result is newly allocated, so no container is shared
    with the source. Trees are acyclic by construction, so there is no memo.

    Recursion is one frame per nesting level, so trees from parse() under its
    default depth limit are fine; hand-built trees nested thousands of levels
    deep exceed the interpreter recursion limit.
    """
    if isinstance(value, Object):
        return Object({key: clone(member) for key, member in value.members.items()})
    if isinstance(value, Array):
        return Array([clone(item) for item in value.items])
    if isinstance(value, String):
        return String(value.value)
    if isinstance(value, Number):
        return Number(value.value)
    if isinstance(value, Boolean):
        return Boolean(value.value)
    if isinstance(value, Null):
        return Null()
    raise TypeError(f"not a JSON value: {type(value).__name__}")
