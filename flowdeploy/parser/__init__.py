"""
Parser module for the Cadence import resolver.

This module provides AST node definitions and the parser implementation.
"""

from .ast_nodes import (
    ASTNode,
    Program,
    ImportDeclaration,
    Declaration,
    Location,
    StringLocation,
    AddressLocation,
    IdentifierLocation,
)
from .parser import Parser

__all__ = [
    'ASTNode',
    'Program',
    'ImportDeclaration',
    'Declaration',
    'Location',
    'StringLocation',
    'AddressLocation',
    'IdentifierLocation',
    'Parser',
]
