"""Token definitions: the input contract with the lexer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


# Token kind constants
TK_SYMBOL = "SYMBOL"
TK_STRING = "STRING"
TK_INTEGER = "INTEGER"
TK_DECIMAL = "DECIMAL"
TK_ASSIGN = "ASSIGNMENT_OP"
TK_LBRACE = "OPEN_BRACE"
TK_RBRACE = "CLOSE_BRACE"
TK_LBRACKET = "OPEN_BRACKET"
TK_RBRACKET = "CLOSE_BRACKET"
TK_COMMA = "ARRAY_ITEM_SEPARATOR"
TK_HEREDOC = "HEREDOC"
TK_INDENTED_HEREDOC = "INDENTED_HEREDOC"
TK_NEWLINE = "LINE_SEPARATOR"
TK_EOF = "EOF"

TOKEN_KINDS: frozenset[str] = frozenset(
    {
        TK_SYMBOL,
        TK_STRING,
        TK_INTEGER,
        TK_DECIMAL,
        TK_ASSIGN,
        TK_LBRACE,
        TK_RBRACE,
        TK_LBRACKET,
        TK_RBRACKET,
        TK_COMMA,
        TK_HEREDOC,
        TK_INDENTED_HEREDOC,
        TK_NEWLINE,
        TK_EOF,
    }
)

# Human-readable spellings used in error messages
KIND_NAMES: dict[str, str] = {
    TK_SYMBOL: "name",
    TK_STRING: "string",
    TK_INTEGER: "integer",
    TK_DECIMAL: "decimal",
    TK_ASSIGN: "'='",
    TK_LBRACE: "'{'",
    TK_RBRACE: "'}'",
    TK_LBRACKET: "'['",
    TK_RBRACKET: "']'",
    TK_COMMA: "','",
    TK_HEREDOC: "heredoc",
    TK_INDENTED_HEREDOC: "indented heredoc",
    TK_NEWLINE: "line break",
    TK_EOF: "end of input",
}


@dataclass(frozen=True)
class Token:
    """A token with kind, value, and position."""

    kind: str
    value: str
    line: int
    col: int

    def describe(self) -> str:
        """Short description for diagnostics, e.g. `name 'foo'`."""
        name = KIND_NAMES.get(self.kind, self.kind)
        if self.kind in (TK_SYMBOL, TK_STRING, TK_INTEGER, TK_DECIMAL):
            return name + " " + repr(self.value)
        return name

    def __repr__(self) -> str:
        return (
            "Token("
            + self.kind
            + ", "
            + repr(self.value)
            + ", "
            + str(self.line)
            + ", "
            + str(self.col)
            + ")"
        )


class TokenSource(Protocol):
    """A lexer that hands out one token per call, ending with EOF."""

    def next_token(self) -> Token: ...


def drain(lexer: TokenSource) -> list[Token]:
    """Pull tokens from `lexer` until (and including) the EOF token."""
    tok = lexer.next_token()
    tokens: list[Token] = [tok]
    while tok.kind != TK_EOF:
        tok = lexer.next_token()
        tokens.append(tok)
    return tokens
