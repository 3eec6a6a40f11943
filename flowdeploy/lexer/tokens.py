"""
Token definitions for the Cadence lexer.

This module contains the TokenType enum, Token dataclass, and
constant mappings for keywords and delimiters.
"""

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    """Enumeration of all token types recognized by the Cadence lexer."""

    # Keywords
    IMPORT = auto()
    CONTRACT = auto()
    RESOURCE = auto()
    STRUCT = auto()
    EVENT = auto()
    ENUM = auto()
    ATTACHMENT = auto()
    TRANSACTION = auto()
    FUN = auto()
    LET = auto()
    VAR = auto()
    PUB = auto()
    PRIV = auto()
    ACCESS = auto()

    # Delimiters
    LPAREN = auto()
    RPAREN = auto()
    LBRACE = auto()
    RBRACE = auto()
    LBRACKET = auto()
    RBRACKET = auto()
    SEMICOLON = auto()
    COMMA = auto()
    DOT = auto()
    COLON = auto()

    # Any other punctuation (operators, move arrows, pragmas)
    OPERATOR = auto()

    # Literals
    NUMBER = auto()
    HEX_NUMBER = auto()
    STRING_LITERAL = auto()
    IDENTIFIER = auto()

    # Special
    EOF = auto()


@dataclass
class Token:
    """Represents a single token from the lexer."""
    type: TokenType
    value: str
    line: int
    column: int


# Keyword to TokenType mapping. Soft keywords such as 'from' and
# 'interface' stay identifiers and are matched by value in the parser.
KEYWORDS = {
    'import': TokenType.IMPORT,
    'contract': TokenType.CONTRACT,
    'resource': TokenType.RESOURCE,
    'struct': TokenType.STRUCT,
    'event': TokenType.EVENT,
    'enum': TokenType.ENUM,
    'attachment': TokenType.ATTACHMENT,
    'transaction': TokenType.TRANSACTION,
    'fun': TokenType.FUN,
    'let': TokenType.LET,
    'var': TokenType.VAR,
    'pub': TokenType.PUB,
    'priv': TokenType.PRIV,
    'access': TokenType.ACCESS,
}

# Declaration keywords that introduce a named composite at the top level
COMPOSITE_KEYWORDS = {
    TokenType.CONTRACT: 'contract',
    TokenType.RESOURCE: 'resource',
    TokenType.STRUCT: 'struct',
    TokenType.EVENT: 'event',
    TokenType.ENUM: 'enum',
    TokenType.ATTACHMENT: 'attachment',
}

# Single-character delimiters
DELIMITERS = {
    '(': TokenType.LPAREN,
    ')': TokenType.RPAREN,
    '{': TokenType.LBRACE,
    '}': TokenType.RBRACE,
    '[': TokenType.LBRACKET,
    ']': TokenType.RBRACKET,
    ';': TokenType.SEMICOLON,
    ',': TokenType.COMMA,
    '.': TokenType.DOT,
    ':': TokenType.COLON,
}

# Characters lexed as OPERATOR tokens
OPERATOR_CHARS = set('+-*/%&|^~<>!=?@#$')

# Opening delimiter -> matching closing delimiter
BRACKET_PAIRS = {
    TokenType.LPAREN: TokenType.RPAREN,
    TokenType.LBRACE: TokenType.RBRACE,
    TokenType.LBRACKET: TokenType.RBRACKET,
}
