"""
Cadence Contract Deployment Resolver

This package determines the order in which a set of Cadence contracts must
be deployed so that every contract is deployed after the contracts it
imports.

Module Structure:
- lexer/: Tokenization (TokenType, Token, Lexer)
- parser/: AST nodes and parsing of import declarations (Parser, Program)
- imports.py: Import extraction (ImportExtractor)
- loaders.py: Source loaders (FileLoader, HttpLoader, MemoryLoader, CompositeLoader)
- resolver/: Registry, dependency graph, sorting (Deployment)
- manifest.py: JSON manifest loading
- cli.py: Command line interface

Usage:
    from flowdeploy import Contract, Deployment, FileLoader

    contracts = [
        Contract('FungibleToken', 'FungibleToken.cdc'),
        Contract('Kibble', 'Kibble.cdc'),
    ]
    order = Deployment(contracts, FileLoader('./cadence')).sort()
"""

from .errors import (
    DeploymentError,
    LoadError,
    ParseError,
    UnresolvedImportError,
    CyclicImportError,
    ManifestError,
)
from .diagnostics import ResolverDiagnostics
from .imports import ImportExtractor, extract_imports
from .loaders import SourceLoader, FileLoader, HttpLoader, MemoryLoader, CompositeLoader
from .resolver import Contract, Deployment

__all__ = [
    'DeploymentError',
    'LoadError',
    'ParseError',
    'UnresolvedImportError',
    'CyclicImportError',
    'ManifestError',
    'ResolverDiagnostics',
    'ImportExtractor',
    'extract_imports',
    'SourceLoader',
    'FileLoader',
    'HttpLoader',
    'MemoryLoader',
    'CompositeLoader',
    'Contract',
    'Deployment',
]
