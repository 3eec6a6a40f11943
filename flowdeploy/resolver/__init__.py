"""
Deployment order resolution.

This module registers contracts, builds their import dependency graph, and
sorts it into a deployment order.
"""

from .registry import Contract, RegisteredContract, ContractRegistry
from .graph import DependencyGraph, DependencyGraphBuilder
from .topo import TopologicalSorter, find_cycles, strongly_connected_components
from .deployment import Deployment

__all__ = [
    'Contract',
    'RegisteredContract',
    'ContractRegistry',
    'DependencyGraph',
    'DependencyGraphBuilder',
    'TopologicalSorter',
    'find_cycles',
    'strongly_connected_components',
    'Deployment',
]
