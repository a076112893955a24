"""Recursive descent parser for blockconf, one method per grammar production.

Cursor discipline: every production leaves the cursor resting on its own
last token (the literal, or the closing delimiter of a container). Loops
decide what comes next by looking one token ahead, so the advance that ends
a container loop lands exactly on its closing delimiter.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from .ast import (
    LIT_DECIMAL,
    LIT_HEREDOC,
    LIT_INDENTED_HEREDOC,
    LIT_INTEGER,
    LIT_STRING,
    Array,
    Attribute,
    Block,
    Dictionary,
    Document,
    EndOfInput,
    Literal,
    Node,
)
from .config import ParserConfig, load_config
from .errors import (
    InvalidValueType,
    MissingAssignment,
    MissingBlockBody,
    MissingTerminator,
    NestingTooDeep,
    ParseError,
    UnexpectedToken,
    UnterminatedContainer,
)
from .stream import TokenStream
from .tokens import (
    TK_ASSIGN,
    TK_COMMA,
    TK_DECIMAL,
    TK_EOF,
    TK_HEREDOC,
    TK_INDENTED_HEREDOC,
    TK_INTEGER,
    TK_LBRACE,
    TK_LBRACKET,
    TK_NEWLINE,
    TK_RBRACE,
    TK_RBRACKET,
    TK_STRING,
    TK_SYMBOL,
    Token,
    TokenSource,
    drain,
)

logger = logging.getLogger("blockconf.parse")

# Token kinds accepted as an attribute value, by literal kind produced
VALUE_LITERALS: dict[str, str] = {
    TK_STRING: LIT_STRING,
    TK_INTEGER: LIT_INTEGER,
    TK_DECIMAL: LIT_DECIMAL,
    TK_HEREDOC: LIT_HEREDOC,
    TK_INDENTED_HEREDOC: LIT_INDENTED_HEREDOC,
}

ARRAY_LITERALS: dict[str, str] = {
    TK_STRING: LIT_STRING,
    TK_INTEGER: LIT_INTEGER,
    TK_DECIMAL: LIT_DECIMAL,
}

OPENERS: set[str] = {TK_LBRACE, TK_LBRACKET}
CLOSERS: set[str] = {TK_RBRACE, TK_RBRACKET}


def link(parent: Node, children: Iterable[Node]) -> None:
    """Stamp `parent` onto each child. A child is linked at most once."""
    for child in children:
        if child.parent is not None:
            raise RuntimeError("node already has a parent: " + repr(child))
        child.parent = parent


class Parser:
    """Recursive descent parser for blockconf token streams."""

    def __init__(
        self,
        tokens: Iterable[Token],
        config: ParserConfig | Mapping[str, Any] | None = None,
    ):
        self.config: ParserConfig = load_config(config)
        self.stream: TokenStream = TokenStream(tokens)
        self.errors: list[ParseError] = []
        self.depth: int = 0
        self._document: Document | None = None

    @classmethod
    def from_lexer(
        cls,
        lexer: TokenSource,
        config: ParserConfig | Mapping[str, Any] | None = None,
    ) -> Parser:
        return cls(drain(lexer), config)

    # ── Helpers ──────────────────────────────────────────────

    def current(self) -> Token:
        return self.stream.current()

    def peek(self, offset: int = 1) -> Token:
        return self.stream.peek(offset)

    def advance(self) -> Token:
        return self.stream.advance()

    def at(self, kind: str) -> bool:
        return self.stream.at(kind)

    def skip_newlines(self) -> None:
        while self.at(TK_NEWLINE):
            self.advance()

    def skip_newlines_ahead(self) -> None:
        while self.peek().kind == TK_NEWLINE:
            self.advance()

    def expect_terminator(self, closer: str | None, context: str, allow_comma: bool = False) -> None:
        """Check that the statement just parsed is followed by a terminator."""
        nxt = self.peek()
        if nxt.kind == TK_NEWLINE or nxt.kind == TK_EOF or nxt.kind == closer:
            return
        if allow_comma and nxt.kind == TK_COMMA:
            return
        self.advance()
        raise MissingTerminator(nxt, context)

    def _enter(self, open_tok: Token) -> None:
        if self.depth >= self.config.max_depth:
            raise NestingTooDeep(open_tok, self.config.max_depth)
        self.depth += 1

    def _leave(self) -> None:
        self.depth -= 1

    # ── Top Level ────────────────────────────────────────────

    def parse(self) -> Document:
        """Parse the whole stream once; later calls return the same document."""
        if self._document is None:
            self._document = self.parse_document()
            logger.debug(
                "Parsed %d top-level nodes (%d errors)",
                len(self._document.nodes),
                len(self._document.errors),
            )
        return self._document

    def ast_root(self) -> list[Node]:
        return self.parse().nodes

    def parse_document(self) -> Document:
        nodes: list[Node] = []
        eof: EndOfInput | None = None
        while True:
            try:
                node = self.next_node("top level")
                if isinstance(node, EndOfInput):
                    eof = node
                    break
                self.expect_terminator(None, "top level")
            except ParseError as err:
                if not self.config.collect_errors:
                    raise
                self._record(err)
                if isinstance(err, UnterminatedContainer):
                    break
                self.synchronize(0, None)
                self.advance()
                continue
            nodes.append(node)
            self.advance()
        if eof is None:
            eof = EndOfInput(self.stream.tokens[-1])
        return Document(nodes, eof, self.errors)

    def next_node(self, context: str) -> Node:
        """Dispatch on the token at a statement position."""
        self.skip_newlines()
        tok = self.current()
        if tok.kind == TK_SYMBOL:
            return self.handle_symbol()
        if self.stream.at_end():
            return EndOfInput(tok)
        raise UnexpectedToken(tok, context, "a name")

    def handle_symbol(self) -> Node:
        """Attribute or block, decided by the token after the name."""
        nxt = self.peek()
        if nxt.kind == TK_ASSIGN:
            return self.parse_attribute()
        if nxt.kind == TK_STRING or nxt.kind == TK_LBRACE:
            return self.parse_block()
        if self.config.strict_symbols:
            name = self.current().value
            self.advance()
            raise UnexpectedToken(
                nxt, "statement " + repr(name), "'=', a block label, or '{'"
            )
        return self.parse_attribute()

    # ── Attributes and Values ────────────────────────────────

    def parse_attribute(self) -> Attribute:
        name_tok = self.advance()
        if not self.at(TK_ASSIGN):
            raise MissingAssignment(self.current(), name_tok)
        assign_tok = self.advance()
        value = self.parse_value()
        attr = Attribute(name_tok, assign_tok, value)
        link(attr, [value])
        return attr

    def parse_value(self) -> Node:
        tok = self.current()
        lit_kind = VALUE_LITERALS.get(tok.kind)
        if lit_kind is not None:
            return self.parse_literal(lit_kind)
        if tok.kind == TK_LBRACE:
            return self.parse_dictionary()
        if tok.kind == TK_LBRACKET:
            return self.parse_array()
        raise InvalidValueType(tok)

    def parse_literal(self, kind: str) -> Literal:
        """Wrap the current token. Does not advance."""
        return Literal(kind, self.current())

    def parse_dictionary(self) -> Dictionary:
        open_tok = self.current()
        self._enter(open_tok)
        entries: list[Attribute] = []
        self.skip_newlines_ahead()
        while self.peek().kind != TK_RBRACE:
            nxt = self.peek()
            self.advance()
            if nxt.kind == TK_EOF:
                raise UnterminatedContainer("dictionary", open_tok, nxt)
            if nxt.kind != TK_SYMBOL:
                raise UnexpectedToken(nxt, "dictionary", "an entry name")
            entries.append(self.parse_attribute())
            self.expect_terminator(TK_RBRACE, "dictionary", allow_comma=True)
            if self.peek().kind == TK_COMMA:
                self.advance()
            self.skip_newlines_ahead()
        self.advance()
        close_tok = self.current()
        self._leave()
        node = Dictionary(open_tok, close_tok, entries)
        link(node, entries)
        return node

    def parse_array(self) -> Array:
        open_tok = self.current()
        self._enter(open_tok)
        values: list[Node] = []
        self.skip_newlines_ahead()
        while self.peek().kind != TK_RBRACKET:
            nxt = self.peek()
            self.advance()
            if nxt.kind == TK_EOF:
                raise UnterminatedContainer("array", open_tok, nxt)
            values.append(self.parse_array_value())
            after = self.peek()
            if after.kind == TK_COMMA:
                self.advance()
            elif after.kind not in (TK_NEWLINE, TK_RBRACKET, TK_EOF):
                self.advance()
                raise UnexpectedToken(after, "array", "',' or ']'")
            self.skip_newlines_ahead()
        self.advance()
        close_tok = self.current()
        self._leave()
        node = Array(open_tok, close_tok, values)
        link(node, values)
        return node

    def parse_array_value(self) -> Node:
        tok = self.current()
        lit_kind = ARRAY_LITERALS.get(tok.kind)
        if lit_kind is not None:
            return self.parse_literal(lit_kind)
        if self.config.nested_array_values:
            if tok.kind == TK_LBRACE:
                return self.parse_dictionary()
            if tok.kind == TK_LBRACKET:
                return self.parse_array()
        raise UnexpectedToken(tok, "array", "a string, integer, or decimal")

    # ── Blocks ───────────────────────────────────────────────

    def parse_block(self) -> Block:
        name_tok = self.current()
        labels: list[Literal] = []
        while self.peek().kind == TK_STRING:
            self.advance()
            labels.append(self.parse_literal(LIT_STRING))
        self.advance()
        if not self.at(TK_LBRACE):
            raise MissingBlockBody(self.current(), name_tok)
        open_tok = self.current()
        self._enter(open_tok)
        body = self.parse_block_body(open_tok)
        # The body loop stops while resting before the closing brace
        self.advance()
        close_tok = self.current()
        self._leave()
        block = Block(name_tok, labels, open_tok, close_tok, body)
        link(block, labels)
        link(block, body)
        return block

    def parse_block_body(self, open_tok: Token) -> list[Node]:
        body: list[Node] = []
        statement_depth = self.depth
        self.skip_newlines_ahead()
        while self.peek().kind != TK_RBRACE:
            nxt = self.peek()
            self.advance()
            if nxt.kind == TK_EOF:
                raise UnterminatedContainer("block", open_tok, nxt)
            try:
                node = self.next_node("block body")
                self.expect_terminator(TK_RBRACE, "block body")
            except ParseError as err:
                if not self.config.collect_errors or isinstance(err, UnterminatedContainer):
                    raise
                self._record(err)
                self.synchronize(statement_depth, TK_RBRACE)
            else:
                body.append(node)
            self.skip_newlines_ahead()
        return body

    # ── Error Recovery ───────────────────────────────────────

    def _record(self, err: ParseError) -> None:
        logger.warning("Recorded parse error: %s", err)
        self.errors.append(err)

    def synchronize(self, statement_depth: int, closer: str | None) -> None:
        """Skip the rest of a failed statement.

        Stops resting before the next line break at `statement_depth`, before
        `closer` at that depth, or before end of input. The cursor starts on
        the offending token, which is not yet counted in `self.depth`. When
        that token is `closer` itself, the cursor steps back so the enclosing
        loop sees it again.
        """
        nesting = max(self.depth - statement_depth, 0)
        self.depth = statement_depth
        tok = self.current()
        if nesting == 0 and tok.kind == TK_NEWLINE:
            return
        if nesting == 0 and closer is not None and tok.kind == closer:
            self.stream.retreat()
            return
        nesting = _nesting_after(nesting, tok)
        while True:
            nxt = self.peek()
            if nxt.kind == TK_EOF:
                return
            if nesting == 0 and (nxt.kind == TK_NEWLINE or nxt.kind == closer):
                return
            self.advance()
            nesting = _nesting_after(nesting, nxt)


def _nesting_after(nesting: int, tok: Token) -> int:
    if tok.kind in OPENERS:
        return nesting + 1
    if tok.kind in CLOSERS and nesting > 0:
        return nesting - 1
    return nesting
