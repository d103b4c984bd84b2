"""Lexer/tokenizer for the SchemaForge schema DSL.

Converts schema source into a flat stream of tokens for the parser.

Token types:
- IDENT: field names, type names, keywords and quoted strings
- NUMBER: numeric literals, kept verbatim for the parser to interpret
- Punctuation: ( ) [ ] < > , : ? = |

Quoted strings ride the IDENT channel; the parser tells names, keywords,
regex patterns and enum labels apart by position.
"""

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator

from schemaforge.core.errors import LexerError


class TokenType(Enum):
    """Types of tokens in the schema DSL."""

    IDENT = auto()
    NUMBER = auto()

    LPAREN = auto()      # (
    RPAREN = auto()      # )
    LBRACKET = auto()    # [
    RBRACKET = auto()    # ]
    LT = auto()          # <
    GT = auto()          # >
    COMMA = auto()       # ,
    COLON = auto()       # :
    QUESTION = auto()    # ?
    EQUAL = auto()       # =
    PIPE = auto()        # |

    # End of input
    EOF = auto()


@dataclass(frozen=True)
class Token:
    """A single token from the lexer.

    Attributes:
        type: The token type
        value: Identifier text, unescaped string content or number literal
        position: Character position in the source string
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    type: TokenType
    value: str | None
    position: int
    line: int = 1
    column: int = 1

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, pos={self.position})"

    def describe(self) -> str:
        """Human-readable form used in parse errors."""
        if self.type == TokenType.EOF:
            return "end of input"
        if self.type == TokenType.IDENT:
            return f"identifier {self.value!r}"
        if self.type == TokenType.NUMBER:
            return f"number {self.value!r}"
        return f"'{self.value}'"


# Token patterns (order matters)
TOKEN_PATTERNS = [
    # Whitespace (skip)
    (r"\s+", None),

    # Punctuation
    (r"\(", TokenType.LPAREN),
    (r"\)", TokenType.RPAREN),
    (r"\[", TokenType.LBRACKET),
    (r"\]", TokenType.RBRACKET),
    (r"<", TokenType.LT),
    (r">", TokenType.GT),
    (r",", TokenType.COMMA),
    (r":", TokenType.COLON),
    (r"\?", TokenType.QUESTION),
    (r"=", TokenType.EQUAL),
    (r"\|", TokenType.PIPE),

    # Quoted strings are identifiers
    (r'"([^"\\]|\\.)*"', TokenType.IDENT),

    # Digit-led words that cannot be numbers (e.g. "2fa")
    (r"[0-9][0-9eE]*[A-DF-Za-df-z_][A-Za-z0-9_]*", TokenType.IDENT),

    # Numbers: greedy run of number characters, checked afterwards
    (r"[0-9.+\-][0-9.eE+\-]*", TokenType.NUMBER),

    # Identifiers and keywords
    (r"[A-Za-z0-9_]+", TokenType.IDENT),
]

ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    '"': '"',
    "\\": "\\",
}


class Lexer:
    """Tokenizer for the schema DSL.

    Usage:
        lexer = Lexer('(age:int[0,150]=30)')
        for token in lexer:
            print(token)
    """

    def __init__(self, source: str):
        self.source = source
        self.position = 0
        self.line = 1
        self.column = 1
        self._compiled_patterns = [
            (re.compile(pattern), token_type)
            for pattern, token_type in TOKEN_PATTERNS
        ]

    def __iter__(self) -> Iterator[Token]:
        """Iterate over all tokens in the source."""
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                break

    def next_token(self) -> Token:
        """Get the next token from the source."""
        while True:
            if self.position >= len(self.source):
                return Token(TokenType.EOF, None, self.position, self.line, self.column)

            for pattern, token_type in self._compiled_patterns:
                match = pattern.match(self.source, self.position)
                if match:
                    break
            else:
                self._raise_unexpected()

            value = match.group()
            start_pos = self.position
            start_line = self.line
            start_column = self.column
            self._advance(len(value))

            if token_type is None:
                continue

            if token_type == TokenType.NUMBER:
                try:
                    float(value)
                except ValueError:
                    raise LexerError(
                        f"Invalid number '{value}'", start_pos, start_line, start_column
                    )
            elif value.startswith('"'):
                value = self._unescape_string(value[1:-1])

            return Token(token_type, value, start_pos, start_line, start_column)

    def _raise_unexpected(self) -> None:
        char = self.source[self.position]
        if char == '"':
            raise LexerError("Unterminated string", self.position, self.line, self.column)
        raise LexerError(
            f"Unexpected character '{char}'", self.position, self.line, self.column
        )

    def _advance(self, count: int) -> None:
        """Advance position by count characters, updating line/column."""
        for _ in range(count):
            if self.position < len(self.source):
                if self.source[self.position] == "\n":
                    self.line += 1
                    self.column = 1
                else:
                    self.column += 1
                self.position += 1

    def _unescape_string(self, s: str) -> str:
        """Process escape sequences; unknown escapes yield the escaped char."""
        result = []
        i = 0
        while i < len(s):
            if s[i] == "\\" and i + 1 < len(s):
                next_char = s[i + 1]
                result.append(ESCAPES.get(next_char, next_char))
                i += 2
            else:
                result.append(s[i])
                i += 1
        return "".join(result)

    def tokenize(self) -> list[Token]:
        """Tokenize the entire source and return list of tokens."""
        return list(self)


def tokenize(source: str) -> list[Token]:
    """Convenience function returning the full token list (ending in EOF)."""
    return Lexer(source).tokenize()
