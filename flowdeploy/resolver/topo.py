"""
Stabilized topological sorting of the dependency graph.

Every dependency is placed before the contracts importing it. When several
contracts are ready at the same time the one registered first goes first,
so the same registration order always yields the same deployment order.
"""

import heapq
from typing import Dict, List, Set

from ..errors import CyclicImportError
from .graph import DependencyGraph
from .registry import RegisteredContract


def strongly_connected_components(graph: DependencyGraph) -> List[List[int]]:
    """
    Tarjan's algorithm over the graph, iterative to avoid recursion limits.

    Each node moves Unvisited -> InProgress (on the stack) -> Resolved
    (assigned to a component). Components are returned as lists of node
    indices in discovery-completion order.
    """
    order: Dict[int, int] = {}
    lowlink: Dict[int, int] = {}
    in_progress: Set[int] = set()
    stack: List[int] = []
    components: List[List[int]] = []

    for root in range(len(graph)):
        if root in order:
            continue

        # (node, position of the next successor to visit)
        work = [(root, 0)]
        while work:
            node, pos = work[-1]
            if node not in order:
                order[node] = lowlink[node] = len(order)
                stack.append(node)
                in_progress.add(node)

            successors = graph.successors[node]
            if pos < len(successors):
                work[-1] = (node, pos + 1)
                succ = successors[pos]
                if succ not in order:
                    work.append((succ, 0))
                elif succ in in_progress:
                    lowlink[node] = min(lowlink[node], order[succ])
                continue

            work.pop()
            if work:
                parent = work[-1][0]
                lowlink[parent] = min(lowlink[parent], lowlink[node])

            if lowlink[node] == order[node]:
                component = []
                while True:
                    member = stack.pop()
                    in_progress.discard(member)
                    component.append(member)
                    if member == node:
                        break
                components.append(component)

    return components


def find_cycles(graph: DependencyGraph) -> List[List[int]]:
    """
    All import cycles of the graph: components with more than one node, or
    a single node importing itself. Sorted by index within and across cycles.
    """
    cycles = []
    for component in strongly_connected_components(graph):
        if len(component) > 1 or graph.has_edge(component[0], component[0]):
            cycles.append(sorted(component))
    cycles.sort(key=lambda cycle: cycle[0])
    return cycles


class TopologicalSorter:
    """Orders contracts so each one follows all of its dependencies."""

    def sort(self, graph: DependencyGraph) -> List[RegisteredContract]:
        """
        Sort the graph by deployment order.

        Kahn's algorithm with a min-heap of ready node indices.

        Raises:
            CyclicImportError: with every cycle in the graph, if there is any.
        """
        in_degrees = graph.in_degrees()
        ready = [index for index, degree in enumerate(in_degrees) if degree == 0]
        heapq.heapify(ready)

        sorted_indices = []
        while ready:
            index = heapq.heappop(ready)
            sorted_indices.append(index)
            for dependent in graph.successors[index]:
                in_degrees[dependent] -= 1
                if in_degrees[dependent] == 0:
                    heapq.heappush(ready, dependent)

        if len(sorted_indices) < len(graph):
            raise CyclicImportError([
                [graph.nodes[index].contract for index in cycle]
                for cycle in find_cycles(graph)
            ])

        return [graph.nodes[index] for index in sorted_indices]
