"""blockconf public API."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from .ast import (
    Array as Array,
    Attribute as Attribute,
    Block as Block,
    Dictionary as Dictionary,
    Document as Document,
    EndOfInput as EndOfInput,
    Literal as Literal,
    Node as Node,
    ancestors as ancestors,
    depth as depth,
    walk as walk,
)
from .config import ParserConfig as ParserConfig
from .errors import (
    InvalidValueType as InvalidValueType,
    MissingAssignment as MissingAssignment,
    MissingBlockBody as MissingBlockBody,
    MissingTerminator as MissingTerminator,
    NestingTooDeep as NestingTooDeep,
    ParseError as ParseError,
    UnexpectedToken as UnexpectedToken,
    UnterminatedContainer as UnterminatedContainer,
)
from .parse import Parser as Parser
from .serialize import serialize as serialize
from .tokens import Token as Token


def parse(
    tokens: Iterable[Token],
    config: ParserConfig | Mapping[str, Any] | None = None,
) -> Document:
    """Parse a token sequence ending in EOF into a Document."""
    return Parser(tokens, config).parse()
