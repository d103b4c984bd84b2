"""Parser for the SchemaForge schema DSL.

Converts a stream of tokens into a rule tree (a list of FieldRule).
Uses recursive descent; the first error aborts the parse.

Grammar:
    program   := '(' [field (',' field)*] ')' EOF
    field     := NAME ['?'] ':' type-expr modifier*
    type-expr := type ('|' type)*
               | 'array' '<' nameless-field '>'
               | 'object' '(' [field (',' field)*] ')'
    modifier  := range | 'regex' '(' STRING ')' | 'enum' '(' IDENT (',' IDENT)* ')'
               | '=' default
    range     := ('[' | '(') NUMBER ',' NUMBER (']' | ')')
"""

import logging
from typing import Any

from schemaforge.core.errors import ParseError
from schemaforge.core.types import (
    Constraint,
    FieldRule,
    FieldType,
    RangeConstraint,
    RegexConstraint,
)
from schemaforge.core.values import INT64_MAX, INT64_MIN
from schemaforge.dsl.lexer import Lexer, Token, TokenType

logger = logging.getLogger(__name__)


def coerce_number(literal: str, field_type: FieldType) -> Any:
    """Interpret a number literal according to the declared field type.

    Args:
        literal: The NUMBER token text, e.g. "30", "-1.5e3"
        field_type: Type the literal is a bound or default for

    Returns:
        str for STRING, int for INT, float for FLOAT

    Raises:
        ValueError: If the literal does not fit the type, or the type does
            not take numbers
    """
    if field_type == FieldType.STRING:
        return literal

    if field_type == FieldType.INT:
        try:
            value = int(literal)
        except ValueError:
            raise ValueError(f"Invalid integer '{literal}'") from None
        if not INT64_MIN <= value <= INT64_MAX:
            raise ValueError(f"Integer '{literal}' out of 64-bit range")
        return value

    if field_type == FieldType.FLOAT:
        try:
            return float(literal)
        except ValueError:
            raise ValueError(f"Invalid float '{literal}'") from None

    raise ValueError(f"Field type {field_type.value} cannot parse number '{literal}'")


class Parser:
    """Recursive descent parser for the schema DSL.

    Usage:
        parser = Parser('(name:string[1,50], age?:int[0,150]=30)')
        rules = parser.parse()
    """

    def __init__(self, source: str):
        self.source = source
        self.lexer = Lexer(source)
        self.tokens = self.lexer.tokenize()
        self.position = 0

    def parse(self) -> list[FieldRule]:
        """Parse the program and return its top-level field rules."""
        self._consume(TokenType.LPAREN, "Expected '(' at start of schema")
        rules = self._parse_field_list("schema")

        if not self._is_at_end():
            raise self._error("Expected end of input after schema")

        logger.debug("Parsed %d top-level field rule(s)", len(rules))
        return rules

    # -------------------------------------------------------------------------
    # Helper methods
    # -------------------------------------------------------------------------

    def _current(self) -> Token:
        """Get current token."""
        if self.position >= len(self.tokens):
            return Token(TokenType.EOF, None, len(self.source))
        return self.tokens[self.position]

    def _is_at_end(self) -> bool:
        return self._current().type == TokenType.EOF

    def _advance(self) -> Token:
        """Consume and return current token."""
        token = self._current()
        self.position += 1
        return token

    def _match(self, *types: TokenType) -> bool:
        """Check if current token matches any of the given types."""
        return self._current().type in types

    def _match_keyword(self, keyword: str) -> bool:
        token = self._current()
        return token.type == TokenType.IDENT and token.value == keyword

    def _consume(self, token_type: TokenType, message: str) -> Token:
        """Consume a token of the expected type, or raise error."""
        if self._current().type == token_type:
            return self._advance()
        raise self._error(message)

    def _error(self, message: str, token: Token | None = None) -> ParseError:
        token = token or self._current()
        return ParseError(f"{message}, got {token.describe()}", token.position)

    # -------------------------------------------------------------------------
    # Fields
    # -------------------------------------------------------------------------

    def _parse_field_list(self, context: str) -> list[FieldRule]:
        """Parse fields up to and including the closing ')'.

        The opening '(' has already been consumed.
        """
        fields: list[FieldRule] = []

        if self._match(TokenType.RPAREN):
            self._advance()
            return fields

        while True:
            fields.append(self._parse_field())

            if self._match(TokenType.COMMA):
                self._advance()
                continue
            if self._match(TokenType.RPAREN):
                self._advance()
                return fields
            raise self._error(f"Expected ',' or ')' in {context}")

    def _parse_field(self, nameless: bool = False) -> FieldRule:
        """Parse one field declaration.

        In nameless mode (the element of ``array<...>``) there is no name,
        no optional marker and no colon; the rule is always required.
        """
        name = ""
        required = True

        if not nameless:
            name_token = self._consume(TokenType.IDENT, "Expected field name")
            name = str(name_token.value)

            if self._match(TokenType.QUESTION):
                self._advance()
                required = False

            self._consume(TokenType.COLON, f"Expected ':' after field name '{name}'")

        types = self._parse_type_union(nameless)
        field_type = types[0]

        element_rule = None
        children = None

        if field_type == FieldType.ARRAY and self._match(TokenType.LT):
            self._advance()
            element_rule = self._parse_field(nameless=True)
            self._consume(TokenType.GT, "Expected '>' after array element type")

        if field_type == FieldType.OBJECT and self._match(TokenType.LPAREN):
            self._advance()
            children = tuple(self._parse_field_list(f"object '{name}'"))

        constraints: list[Constraint] = []
        enum_values = None
        default = None

        while True:
            if self._match(TokenType.LBRACKET, TokenType.LPAREN):
                if field_type == FieldType.OBJECT:
                    raise self._error(f"Object field '{name}' does not accept a range")
                constraints.append(self._parse_range(field_type))

            elif self._match_keyword("regex"):
                constraints.append(self._parse_regex())

            elif self._match_keyword("enum"):
                enum_values = self._parse_enum()

            elif self._match(TokenType.EQUAL):
                self._advance()
                default = self._parse_default(field_type, name)

            else:
                break

        return FieldRule(
            field=name,
            field_type=field_type,
            required=required,
            default=default,
            enum_values=enum_values,
            union_types=tuple(types) if len(types) > 1 else None,
            constraints=tuple(constraints) if constraints else None,
            rule=element_rule,
            children=children,
        )

    def _parse_type_union(self, nameless: bool) -> list[FieldType]:
        """Parse ``type ('|' type)*``."""
        types = [self._parse_type_name()]

        while self._match(TokenType.PIPE):
            if nameless:
                raise self._error("Union types are not allowed inside array<...>")
            self._advance()
            types.append(self._parse_type_name())

        return types

    def _parse_type_name(self) -> FieldType:
        token = self._current()
        if token.type != TokenType.IDENT:
            raise self._error("Expected type")

        field_type = FieldType.from_name(str(token.value))
        if field_type is None:
            raise ParseError(f"Unknown type {token.value}", token.position)

        self._advance()
        return field_type

    # -------------------------------------------------------------------------
    # Modifiers
    # -------------------------------------------------------------------------

    def _parse_number(self, field_type: FieldType, what: str) -> Any:
        token = self._current()
        if token.type != TokenType.NUMBER:
            raise self._error(f"Expected {what} number")
        try:
            value = coerce_number(str(token.value), field_type)
        except ValueError as e:
            raise ParseError(str(e), token.position) from None
        self._advance()
        return value

    def _parse_range(self, field_type: FieldType) -> RangeConstraint:
        """Parse ``[a,b]``, ``[a,b)``, ``(a,b]`` or ``(a,b)``."""
        min_inclusive = self._advance().type == TokenType.LBRACKET

        minimum = self._parse_number(field_type, "min")
        self._consume(TokenType.COMMA, "Expected ',' between range bounds")
        maximum = self._parse_number(field_type, "max")

        if self._match(TokenType.RBRACKET):
            max_inclusive = True
        elif self._match(TokenType.RPAREN):
            max_inclusive = False
        else:
            raise self._error("Expected closing bracket or paren")
        self._advance()

        return RangeConstraint(minimum, maximum, min_inclusive, max_inclusive)

    def _parse_regex(self) -> RegexConstraint:
        """Parse ``regex("pattern")``; the pattern is not compiled here."""
        self._advance()
        self._consume(TokenType.LPAREN, "Expected '(' after regex")
        pattern = self._consume(TokenType.IDENT, "Expected pattern")
        self._consume(TokenType.RPAREN, "Expected ')' after regex pattern")
        return RegexConstraint(str(pattern.value))

    def _parse_enum(self) -> tuple[str, ...]:
        """Parse ``enum(a, "b", ...)``; values are kept as strings."""
        self._advance()
        self._consume(TokenType.LPAREN, "Expected '(' after enum")

        values = []
        while True:
            token = self._consume(TokenType.IDENT, "Expected enum value")
            values.append(str(token.value))

            if self._match(TokenType.COMMA):
                self._advance()
            elif self._match(TokenType.RPAREN):
                self._advance()
                return tuple(values)
            else:
                raise self._error("Expected ',' or ')' in enum")

    def _parse_default(self, field_type: FieldType, name: str) -> Any:
        """Parse the literal after '=' against the declared type."""
        token = self._current()

        if token.type not in (TokenType.IDENT, TokenType.NUMBER):
            raise self._error("Expected default value")

        if field_type == FieldType.BOOL:
            if token.value == "true":
                value: Any = True
            elif token.value == "false":
                value = False
            else:
                raise ParseError(f"Invalid bool '{token.value}'", token.position)

        elif field_type in (FieldType.INT, FieldType.FLOAT, FieldType.TIMESTAMP):
            if token.type != TokenType.NUMBER:
                raise ParseError(
                    f"Invalid default {token.value!r} for {field_type.value} field '{name}'",
                    token.position,
                )
            target = FieldType.INT if field_type == FieldType.TIMESTAMP else field_type
            return self._parse_number(target, "default")

        elif field_type.is_string_family:
            value = str(token.value)

        else:
            raise ParseError(
                f"Field type {field_type.value} does not accept a default", token.position
            )

        self._advance()
        return value


def parse_rules(source: str) -> list[FieldRule]:
    """Parse schema source into its rule tree.

    Args:
        source: DSL text, e.g. ``(age:int[0,150]=30)``

    Returns:
        Top-level field rules in declaration order

    Raises:
        LexerError: On malformed characters or numbers
        ParseError: On any grammar or type error
    """
    return Parser(source).parse()
