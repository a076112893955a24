"""blockconf AST node definitions and tree navigation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator

from .tokens import Token

if TYPE_CHECKING:
    from .errors import ParseError


# ============================================================
# POSITION
# ============================================================


@dataclass
class Pos:
    """Source position, 1-indexed."""

    line: int
    col: int


# ============================================================
# LITERAL KINDS
# ============================================================

LIT_STRING = "string"
LIT_INTEGER = "integer"
LIT_DECIMAL = "decimal"
LIT_HEREDOC = "heredoc"
LIT_INDENTED_HEREDOC = "indented_heredoc"


# ============================================================
# NODES
# ============================================================


@dataclass
class Node:
    """Base for all nodes.

    `parent` is a lookup convenience written once by the parser after the
    node is complete; it takes no part in equality or repr.
    """

    def __post_init__(self) -> None:
        self.parent: Node | None = None

    @property
    def children(self) -> list[Node]:
        return []

    @property
    def first_token(self) -> Token:
        """Token the node starts at. Every concrete node overrides this."""
        raise NotImplementedError

    @property
    def pos(self) -> Pos:
        tok = self.first_token
        return Pos(tok.line, tok.col)


@dataclass
class Literal(Node):
    """Scalar value: string, integer, decimal, or (indented) heredoc."""

    kind: str
    token: Token

    @property
    def value(self) -> str:
        return self.token.value

    @property
    def first_token(self) -> Token:
        return self.token


@dataclass
class Attribute(Node):
    """name = value."""

    name_token: Token
    assign_token: Token
    value: Node

    @property
    def name(self) -> str:
        return self.name_token.value

    @property
    def children(self) -> list[Node]:
        return [self.value]

    @property
    def first_token(self) -> Token:
        return self.name_token


@dataclass
class Dictionary(Node):
    """{ name = value ... } used as a value. Entries keep source order."""

    open_token: Token
    close_token: Token
    entries: list[Attribute]

    @property
    def children(self) -> list[Node]:
        return list(self.entries)

    @property
    def first_token(self) -> Token:
        return self.open_token


@dataclass
class Array(Node):
    """[ value, ... ]. Values keep source order and may repeat."""

    open_token: Token
    close_token: Token
    values: list[Node]

    @property
    def children(self) -> list[Node]:
        return list(self.values)

    @property
    def first_token(self) -> Token:
        return self.open_token


@dataclass
class Block(Node):
    """name "label"... { body }."""

    name_token: Token
    labels: list[Literal]
    open_token: Token
    close_token: Token
    body: list[Node]

    @property
    def name(self) -> str:
        return self.name_token.value

    @property
    def label_values(self) -> list[str]:
        return [label.value for label in self.labels]

    @property
    def children(self) -> list[Node]:
        return [*self.labels, *self.body]

    @property
    def first_token(self) -> Token:
        return self.name_token


@dataclass
class EndOfInput(Node):
    """Terminal sentinel. Never has a parent or children."""

    token: Token

    @property
    def first_token(self) -> Token:
        return self.token


# ============================================================
# ROOT
# ============================================================


@dataclass
class Document:
    """Top-level statements in source order."""

    nodes: list[Node]
    eof: EndOfInput
    errors: list[ParseError] = field(default_factory=list)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, index: int) -> Node:
        return self.nodes[index]


# ============================================================
# NAVIGATION
# ============================================================


def walk(node: Node) -> Iterator[Node]:
    """Yield `node` and all of its descendants, pre-order."""
    stack: list[Node] = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def ancestors(node: Node) -> Iterator[Node]:
    """Yield the parent chain of `node`, nearest first."""
    current = node.parent
    while current is not None:
        yield current
        current = current.parent


def depth(node: Node) -> int:
    """Number of ancestors; 0 for top-level nodes."""
    count = 0
    for _ in ancestors(node):
        count += 1
    return count
