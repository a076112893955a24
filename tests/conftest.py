"""Pytest configuration for the blockconf test suite."""

import re
import sys
from pathlib import Path

import pytest

# Add src directory to path so the suite runs from a plain checkout
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from blockconf.tokens import (  # noqa: E402
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
)

CASES_DIR = Path(__file__).parent / "cases"

# Test inputs are token pieces, not real source: quoted strings, <<TAG and
# <<-TAG heredoc markers, punctuation, numbers, and bare names.
PIECE_RE = re.compile(r'"[^"]*"|<<-?\w+|[{}\[\],=]|[^\s{}\[\],="]+')

PUNCTUATION: dict[str, str] = {
    "=": TK_ASSIGN,
    "{": TK_LBRACE,
    "}": TK_RBRACE,
    "[": TK_LBRACKET,
    "]": TK_RBRACKET,
    ",": TK_COMMA,
}


def _classify(piece: str) -> tuple[str, str]:
    if piece in PUNCTUATION:
        return PUNCTUATION[piece], piece
    if piece.startswith('"'):
        return TK_STRING, piece[1:-1]
    if piece.startswith("<<-"):
        return TK_INDENTED_HEREDOC, piece[3:]
    if piece.startswith("<<"):
        return TK_HEREDOC, piece[2:]
    if re.fullmatch(r"-?\d+", piece):
        return TK_INTEGER, piece
    if re.fullmatch(r"-?\d+\.\d+", piece):
        return TK_DECIMAL, piece
    return TK_SYMBOL, piece


def toks(text: str) -> list[Token]:
    """Build a token list from piece text, one line separator per line break."""
    tokens: list[Token] = []
    lines = text.split("\n")
    for lineno, line in enumerate(lines, 1):
        for m in PIECE_RE.finditer(line):
            kind, value = _classify(m.group(0))
            tokens.append(Token(kind, value, lineno, m.start() + 1))
        if lineno < len(lines):
            tokens.append(Token(TK_NEWLINE, "\n", lineno, len(line) + 1))
    tokens.append(Token(TK_EOF, "", len(lines), len(lines[-1]) + 1))
    return tokens


class ListLexer:
    """Lexer stand-in that hands out a prepared token list one at a time."""

    def __init__(self, tokens: list[Token]):
        self.tokens = tokens
        self.calls = 0

    def next_token(self) -> Token:
        tok = self.tokens[min(self.calls, len(self.tokens) - 1)]
        self.calls += 1
        return tok


def parse_case_file(path: Path) -> list[tuple[str, str, str]]:
    """Parse a .tests file into (name, input, expected) tuples.

    Expected is one of: 'ok', 'error: <ErrorClass>'
    """
    lines = path.read_text().split("\n")
    result: list[tuple[str, str, str]] = []
    i = 0
    while i < len(lines):
        line = lines[i]
        if line.startswith("=== "):
            test_name = line[4:].strip()
            i += 1
            input_lines: list[str] = []
            while i < len(lines) and not lines[i].startswith("---"):
                input_lines.append(lines[i])
                i += 1
            if i < len(lines) and lines[i] == "---":
                i += 1
            expected_lines: list[str] = []
            while i < len(lines) and not lines[i].startswith("---"):
                expected_lines.append(lines[i])
                i += 1
            if i < len(lines) and lines[i] == "---":
                i += 1
            result.append((test_name, "\n".join(input_lines), "\n".join(expected_lines).strip()))
        else:
            i += 1
    return result


def pytest_generate_tests(metafunc):
    """Parametrize tests over .tests case files."""
    if "case_input" in metafunc.fixturenames:
        params = []
        for case_file in sorted(CASES_DIR.glob("*.tests")):
            for name, input_text, expected in parse_case_file(case_file):
                params.append(
                    pytest.param(input_text, expected, id=f"{case_file.stem}/{name}")
                )
        metafunc.parametrize("case_input,case_expected", params)
