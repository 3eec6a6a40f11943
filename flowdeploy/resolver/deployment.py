"""
Deployment ordering.

Deployment makes sure a contract containing imports is deployed after all
the contracts it imports, so every contract can be deployed without missing
imports. Contracts are loaded and parsed up front; each sort builds the
dependency graph and orders it.
"""

from typing import List, Optional, Sequence

from ..diagnostics import ResolverDiagnostics
from ..imports import ImportExtractor
from ..loaders import SourceLoader
from .graph import DependencyGraphBuilder
from .registry import Contract, ContractRegistry
from .topo import TopologicalSorter


class Deployment:
    """Resolves the deployment order of a set of contracts."""

    def __init__(
        self,
        contracts: Sequence[Contract],
        loader: SourceLoader,
        diagnostics: Optional[ResolverDiagnostics] = None,
        max_workers: Optional[int] = None,
    ):
        """
        Load and parse every contract.

        Args:
            contracts: Contracts to deploy; their order is the tie-break order
            loader: Loader used to fetch each contract's source by location
            diagnostics: Collector for non-fatal notices
            max_workers: Load sources concurrently with this many threads

        Raises:
            LoadError, ParseError: for the first contract that fails.
            ValueError: if two contracts share a location.
        """
        self.diagnostics = diagnostics or ResolverDiagnostics()
        self.registry = ContractRegistry(loader, ImportExtractor(self.diagnostics))
        self.registry.register_all(contracts, max_workers=max_workers)
        self.builder = DependencyGraphBuilder()
        self.sorter = TopologicalSorter()

    def sort(self) -> List[Contract]:
        """
        Sort contracts by deployment order.

        Any imported contract comes before the contract importing it.

        Raises:
            UnresolvedImportError: if an import matches no contract location.
            CyclicImportError: if contracts import each other in a cycle.
        """
        graph = self.builder.build(self.registry)
        return [registered.contract for registered in self.sorter.sort(graph)]

    def dependencies_of(self, location: str) -> List[Contract]:
        """
        Contracts the contract at `location` was resolved to depend on by the
        last sort, in import order.

        Raises:
            KeyError: if no contract is registered at `location`.
        """
        registered = self.registry.lookup(location)
        if registered is None:
            raise KeyError(location)
        return [dependency.contract for dependency in registered.dependencies.values()]
