"""
AST node definitions for Cadence parsing.

Only the parts of a program that matter for deployment ordering are
modelled: import declarations with their locations, and the top-level
declarations a source file contributes.
"""

from dataclasses import dataclass, field
from typing import Dict, List


# =============================================================================
# BASE NODE
# =============================================================================

@dataclass
class ASTNode:
    """Base class for all AST nodes."""
    pass


# =============================================================================
# LOCATIONS
# =============================================================================

@dataclass
class Location(ASTNode):
    """Where an import is loaded from."""
    value: str

    @property
    def kind(self) -> str:
        return 'unknown'


@dataclass
class StringLocation(Location):
    """A location written as a string literal, e.g. "./Foo.cdc"."""

    @property
    def kind(self) -> str:
        return 'string'


@dataclass
class AddressLocation(Location):
    """An account address location, e.g. 0xf8d6e0586b0a20c7."""

    @property
    def kind(self) -> str:
        return 'address'


@dataclass
class IdentifierLocation(Location):
    """A bare identifier location, e.g. `import Crypto`."""

    @property
    def kind(self) -> str:
        return 'identifier'


# =============================================================================
# DECLARATIONS
# =============================================================================

@dataclass
class ImportDeclaration(ASTNode):
    """Represents an import declaration."""
    location: Location
    identifiers: List[str] = field(default_factory=list)
    aliases: Dict[str, str] = field(default_factory=dict)  # identifier -> alias
    line: int = 0
    column: int = 0


@dataclass
class Declaration(ASTNode):
    """A top-level declaration (composite, interface, or transaction)."""
    kind: str  # 'contract', 'resource', 'struct', 'event', 'enum', 'attachment', 'transaction'
    name: str = ''
    is_interface: bool = False
    line: int = 0


@dataclass
class Program(ASTNode):
    """Root node representing an entire Cadence source file."""
    imports: List[ImportDeclaration] = field(default_factory=list)
    declarations: List[Declaration] = field(default_factory=list)

    def import_declarations(self) -> List[ImportDeclaration]:
        """All import declarations in source order."""
        return list(self.imports)

    @property
    def contracts(self) -> List[Declaration]:
        """Top-level contract and contract interface declarations."""
        return [d for d in self.declarations if d.kind == 'contract']
