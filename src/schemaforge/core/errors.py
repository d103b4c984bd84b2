"""Exception hierarchy for SchemaForge.

Every error carries a single human-readable message; ``str(error)`` is the
canonical form callers compare against.
"""


class SchemaForgeError(Exception):
    """Base class for all SchemaForge errors."""


class LexerError(SchemaForgeError):
    """Error during lexical analysis of DSL source."""

    def __init__(self, message: str, position: int, line: int = 1, column: int = 1):
        self.position = position
        self.line = line
        self.column = column
        super().__init__(f"{message} at line {line}, column {column}")


class ParseError(SchemaForgeError):
    """Error while building the rule tree from tokens."""

    def __init__(self, message: str, position: int | None = None):
        self.position = position
        if position is None:
            super().__init__(message)
        else:
            super().__init__(f"{message} at position {position}")


class ValidationError(SchemaForgeError):
    """A value does not satisfy its rule tree."""


class DataError(SchemaForgeError):
    """A decoded value falls outside the supported data model."""


class SchemaFileError(SchemaForgeError):
    """A schema file could not be read or parsed."""

    def __init__(self, path, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")
