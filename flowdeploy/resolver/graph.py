"""
Dependency graph construction.

The graph is an arena of registered contracts addressed by their index;
edges are stored index-to-index and run from a dependency to the contract
that imports it. A graph is built fresh for every sort and discarded after.
"""

from typing import Iterator, List, Set, Tuple

from ..errors import UnresolvedImportError
from .registry import ContractRegistry, RegisteredContract


class DependencyGraph:
    """Directed graph of contracts, with edges dependency -> dependent."""

    def __init__(self, nodes: List[RegisteredContract]):
        self.nodes = nodes
        self.successors: List[List[int]] = [[] for _ in nodes]
        self._edges: Set[Tuple[int, int]] = set()

    def __len__(self) -> int:
        return len(self.nodes)

    def add_edge(self, dependency: int, dependent: int) -> None:
        """Add an edge; adding the same edge twice has no effect."""
        if (dependency, dependent) in self._edges:
            return
        self._edges.add((dependency, dependent))
        self.successors[dependency].append(dependent)

    def has_edge(self, dependency: int, dependent: int) -> bool:
        return (dependency, dependent) in self._edges

    def edges(self) -> Iterator[Tuple[int, int]]:
        for dependency, dependents in enumerate(self.successors):
            for dependent in dependents:
                yield dependency, dependent

    def in_degrees(self) -> List[int]:
        """Number of distinct dependencies of every node."""
        degrees = [0] * len(self.nodes)
        for _, dependent in self.edges():
            degrees[dependent] += 1
        return degrees


class DependencyGraphBuilder:
    """Resolves every contract's imports against a registry."""

    def build(self, registry: ContractRegistry) -> DependencyGraph:
        """
        Build the dependency graph of all registered contracts.

        Resolved dependencies are also recorded on each contract's
        `dependencies` map, keyed by import location.

        Raises:
            UnresolvedImportError: for the first import that does not match
                any registered contract location.
        """
        contracts = registry.contracts
        graph = DependencyGraph(contracts)

        for contract in contracts:
            contract.dependencies.clear()

        for contract in contracts:
            for location in dict.fromkeys(contract.imports):
                dependency = registry.lookup(location)
                if dependency is None:
                    raise UnresolvedImportError(contract.name, location)

                contract.add_dependency(location, dependency)
                graph.add_edge(dependency.index, contract.index)

        return graph
