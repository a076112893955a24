"""Serialization of AST objects to JSON-compatible dicts."""

from __future__ import annotations

from .ast import (
    Array,
    Attribute,
    Block,
    Dictionary,
    Document,
    EndOfInput,
    Literal,
    Node,
    Pos,
)
from .errors import ParseError
from .tokens import Token


def serialize(obj: object) -> object:
    """Recursively serialize an object to a JSON-compatible structure."""
    if obj is None:
        return None
    if isinstance(obj, bool):
        return obj
    if isinstance(obj, (int, float)):
        return obj
    if isinstance(obj, str):
        return obj
    if isinstance(obj, (list, tuple)):
        return [serialize(x) for x in obj]
    if isinstance(obj, dict):
        return {str(k): serialize(v) for k, v in obj.items()}
    return _ast_serialize(obj)


def _ast_serialize(obj: object) -> object:
    """Serialize AST types via isinstance dispatch."""
    if isinstance(obj, Token):
        return {
            "_type": "Token",
            "kind": obj.kind,
            "value": obj.value,
            "line": obj.line,
            "col": obj.col,
        }
    if isinstance(obj, Pos):
        return {"_type": "Pos", "line": obj.line, "col": obj.col}
    if isinstance(obj, Node):
        return _serialize_node(obj)
    if isinstance(obj, Document):
        return {
            "_type": "Document",
            "nodes": serialize(obj.nodes),
            "errors": serialize(obj.errors),
        }
    if isinstance(obj, ParseError):
        return {
            "_type": type(obj).__name__,
            "msg": obj.msg,
            "line": obj.line,
            "col": obj.col,
        }
    raise TypeError("cannot serialize " + type(obj).__name__)


def _serialize_node(obj: Node) -> dict[str, object]:
    """Serialize Node subclasses. Parent links are omitted."""
    if isinstance(obj, Literal):
        return {"_type": "Literal", "kind": obj.kind, "token": serialize(obj.token)}
    if isinstance(obj, Attribute):
        return {
            "_type": "Attribute",
            "name": serialize(obj.name_token),
            "assign": serialize(obj.assign_token),
            "value": serialize(obj.value),
        }
    if isinstance(obj, Dictionary):
        return {
            "_type": "Dictionary",
            "open": serialize(obj.open_token),
            "close": serialize(obj.close_token),
            "entries": serialize(obj.entries),
        }
    if isinstance(obj, Array):
        return {
            "_type": "Array",
            "open": serialize(obj.open_token),
            "close": serialize(obj.close_token),
            "values": serialize(obj.values),
        }
    if isinstance(obj, Block):
        return {
            "_type": "Block",
            "name": serialize(obj.name_token),
            "labels": serialize(obj.labels),
            "open": serialize(obj.open_token),
            "close": serialize(obj.close_token),
            "body": serialize(obj.body),
        }
    if isinstance(obj, EndOfInput):
        return {"_type": "EndOfInput", "token": serialize(obj.token)}
    raise TypeError("cannot serialize node " + type(obj).__name__)
