"""Buffered token cursor with clamped lookahead."""

from __future__ import annotations

import logging
from typing import Iterable

from .tokens import TK_EOF, TOKEN_KINDS, Token

logger = logging.getLogger("blockconf.stream")


class TokenStream:
    """Cursor over a fully materialized token sequence.

    The last buffered token is always EOF, and every access is clamped to
    it, so callers can branch on token kind without bounds checks.
    """

    def __init__(self, tokens: Iterable[Token]):
        buffered: list[Token] = []
        for tok in tokens:
            if tok.kind not in TOKEN_KINDS:
                raise ValueError(
                    "unknown token kind "
                    + repr(tok.kind)
                    + " at line "
                    + str(tok.line)
                    + " col "
                    + str(tok.col)
                )
            buffered.append(tok)
            if tok.kind == TK_EOF:
                break
        if len(buffered) == 0 or buffered[-1].kind != TK_EOF:
            raise ValueError("token sequence must end with an EOF token")
        self.tokens: list[Token] = buffered
        self.pos: int = 0
        logger.debug("Buffered %d tokens", len(buffered))

    def current(self) -> Token:
        return self.tokens[self.pos]

    def peek(self, offset: int = 1) -> Token:
        idx = self.pos + offset
        if idx >= len(self.tokens):
            return self.tokens[len(self.tokens) - 1]
        return self.tokens[idx]

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
        return tok

    def retreat(self) -> None:
        """Step back one token. Used by error recovery only."""
        if self.pos > 0:
            self.pos -= 1

    def at(self, kind: str) -> bool:
        return self.current().kind == kind

    def at_end(self) -> bool:
        return self.current().kind == TK_EOF
