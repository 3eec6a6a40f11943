"""
Lexer module for the Cadence import resolver.

This module provides tokenization of Cadence source code.
"""

from .tokens import TokenType, Token, KEYWORDS, COMPOSITE_KEYWORDS, DELIMITERS, BRACKET_PAIRS
from .lexer import Lexer

__all__ = [
    'TokenType',
    'Token',
    'KEYWORDS',
    'COMPOSITE_KEYWORDS',
    'DELIMITERS',
    'BRACKET_PAIRS',
    'Lexer',
]
