"""
Error types raised while resolving contract deployment order.

Every error derives from DeploymentError so callers can handle the whole
family with a single except clause.
"""

from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .resolver.registry import Contract


class DeploymentError(Exception):
    """Base class for all resolver errors."""
    pass


class LoadError(DeploymentError):
    """Raised when the source for a location could not be retrieved."""

    def __init__(self, location: str, reason: str):
        self.location = location
        self.reason = reason
        super().__init__(f"could not load contract source from {location}: {reason}")


class ParseError(DeploymentError):
    """Raised when source could not be parsed well enough to extract imports."""

    def __init__(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        location: str = '',
    ):
        self.message = message
        self.line = line
        self.column = column
        self.location = location
        super().__init__(self._format())

    def _format(self) -> str:
        position = self.location
        if self.line is not None:
            position = f'{position}:{self.line}:{self.column}' if position else f'{self.line}:{self.column}'
        if position:
            return f'{position}: {self.message}'
        return self.message

    def with_location(self, location: str) -> 'ParseError':
        """Return a copy of this error attributed to a source location."""
        return ParseError(self.message, self.line, self.column, location)


class UnresolvedImportError(DeploymentError):
    """Raised when an import does not match any registered contract location."""

    def __init__(self, contract_name: str, import_path: str):
        self.contract_name = contract_name
        self.import_path = import_path
        super().__init__(
            f"import from {contract_name} could not be found: {import_path}, "
            f"make sure import path is correct"
        )


class CyclicImportError(DeploymentError):
    """
    Raised when contracts import each other in a way that admits no
    deployment order.

    Carries every cycle found, each as the list of participating contracts,
    so all of them can be fixed in one pass.
    """

    def __init__(self, contracts: List[List['Contract']]):
        self.contracts = contracts
        super().__init__(
            f"contracts: import cycle(s) detected: {self._format_cycles()}"
        )

    @property
    def cycles(self) -> List[List[str]]:
        """Contract names of every cycle."""
        return [[contract.name for contract in cycle] for cycle in self.contracts]

    def _format_cycles(self) -> str:
        return '[' + ', '.join('[' + ', '.join(cycle) + ']' for cycle in self.cycles) + ']'


class ManifestError(DeploymentError):
    """Raised when a deployment manifest is missing or malformed."""
    pass
