"""Schema DSL front end.

This module provides:
- Lexer: Tokenizes schema source
- Parser: Produces the rule tree from tokens
"""

from schemaforge.core.errors import LexerError, ParseError
from schemaforge.dsl.lexer import Lexer, Token, TokenType, tokenize
from schemaforge.dsl.parser import Parser, coerce_number, parse_rules

__all__ = [
    # Lexer
    "Lexer",
    "LexerError",
    "Token",
    "TokenType",
    "tokenize",
    # Parser
    "ParseError",
    "Parser",
    "coerce_number",
    "parse_rules",
]
