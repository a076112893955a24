"""Parse errors. Every error carries the offending token and its position."""

from __future__ import annotations

from .tokens import Token


class ParseError(Exception):
    """Parse error with location info."""

    def __init__(self, msg: str, token: Token):
        self.msg: str = msg
        self.token: Token = token
        self.line: int = token.line
        self.col: int = token.col
        super().__init__(msg + " at line " + str(self.line) + " col " + str(self.col))


class UnexpectedToken(ParseError):
    """No production matches the token at a statement, entry, or element position."""

    def __init__(self, found: Token, context: str, expected: str = ""):
        self.found: Token = found
        self.context: str = context
        msg = "unexpected " + found.describe() + " in " + context
        if expected:
            msg += ", expected " + expected
        super().__init__(msg, found)


class InvalidValueType(ParseError):
    """An attribute's value token is not a literal, dictionary, or array."""

    def __init__(self, found: Token):
        self.found: Token = found
        super().__init__("invalid attribute value " + found.describe(), found)


class UnterminatedContainer(ParseError):
    """End of input reached inside a dictionary, array, or block.

    Positioned at the container's opening delimiter.
    """

    def __init__(self, container_kind: str, open_token: Token, found: Token):
        self.container_kind: str = container_kind
        self.open_token: Token = open_token
        self.found: Token = found
        super().__init__("unterminated " + container_kind, open_token)


class MissingAssignment(ParseError):
    """Attribute name not followed by '='."""

    def __init__(self, found: Token, name_token: Token):
        self.found: Token = found
        self.name_token: Token = name_token
        super().__init__(
            "expected '=' after " + repr(name_token.value) + ", got " + found.describe(),
            found,
        )


class MissingBlockBody(ParseError):
    """Block name and labels not followed by '{'."""

    def __init__(self, found: Token, name_token: Token):
        self.found: Token = found
        self.name_token: Token = name_token
        super().__init__(
            "expected '{' to open block "
            + repr(name_token.value)
            + ", got "
            + found.describe(),
            found,
        )


class MissingTerminator(ParseError):
    """Statement not followed by a line break, end of input, or closing delimiter."""

    def __init__(self, found: Token, context: str):
        self.found: Token = found
        self.context: str = context
        super().__init__(
            "expected end of statement in " + context + ", got " + found.describe(),
            found,
        )


class NestingTooDeep(ParseError):
    """Containers nested beyond the configured limit."""

    def __init__(self, found: Token, limit: int):
        self.found: Token = found
        self.limit: int = limit
        super().__init__("nesting deeper than " + str(limit) + " levels", found)
