"""
Contract registry.

Holds the contracts of one deployment, assigns each a stable registration
index, and indexes them by location for dependency lookup.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from ..errors import ParseError
from ..imports import ImportExtractor
from ..loaders import SourceLoader
from ..parser import Program


@dataclass
class Contract:
    """A contract to deploy, as supplied by the caller."""
    name: str
    location: str  # Unique within a deployment
    target: Optional[str] = None  # Account the contract is deployed to
    args: List[Any] = field(default_factory=list)  # Initializer arguments


@dataclass(eq=False)
class RegisteredContract:
    """A contract together with its registration index and parsed imports."""
    index: int
    contract: Contract
    program: Program
    imports: Tuple[str, ...] = ()
    # import location -> contract it resolves to, filled by the graph builder
    dependencies: Dict[str, 'RegisteredContract'] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return self.contract.name

    @property
    def location(self) -> str:
        return self.contract.location

    def add_dependency(self, location: str, dependency: 'RegisteredContract') -> None:
        self.dependencies[location] = dependency

    def __repr__(self) -> str:
        return f'RegisteredContract({self.index}, {self.name!r}, {self.location!r})'


class ContractRegistry:
    """
    Registry of the contracts being resolved.

    Contracts are loaded and parsed when registered. If registration fails
    the registry is left in an unspecified state and must be discarded.
    """

    def __init__(self, loader: SourceLoader, extractor: Optional[ImportExtractor] = None):
        self.loader = loader
        self.extractor = extractor or ImportExtractor()
        self._contracts: List[RegisteredContract] = []
        self._by_location: Dict[str, RegisteredContract] = {}

    @property
    def contracts(self) -> List[RegisteredContract]:
        """Registered contracts in index order."""
        return list(self._contracts)

    def __len__(self) -> int:
        return len(self._contracts)

    def __iter__(self) -> Iterator[RegisteredContract]:
        return iter(self._contracts)

    def lookup(self, location: str) -> Optional[RegisteredContract]:
        """Find the registered contract with the given location."""
        return self._by_location.get(location)

    def register(self, contract: Contract) -> RegisteredContract:
        """
        Load, parse, and register a single contract.

        Raises:
            ValueError: if the location is already registered.
            LoadError: if the source could not be loaded.
            ParseError: if the source could not be parsed.
        """
        self._check_unique(contract)
        code = self.loader.load(contract.location)
        return self._add(contract, code)

    def register_all(
        self,
        contracts: Sequence[Contract],
        max_workers: Optional[int] = None,
    ) -> List[RegisteredContract]:
        """
        Register a batch of contracts, stopping at the first failure.

        With max_workers > 1 sources are loaded concurrently. Indices still
        follow the order of `contracts`, and the first failure in that order
        is the one raised.
        """
        if not max_workers or max_workers <= 1 or len(contracts) <= 1:
            return [self.register(contract) for contract in contracts]

        executor = ThreadPoolExecutor(max_workers=max_workers)
        try:
            # Duplicate locations are never loaded; they fail when reached
            futures = []
            submitted = set()
            for contract in contracts:
                if contract.location in self._by_location or contract.location in submitted:
                    futures.append(None)
                    continue
                submitted.add(contract.location)
                futures.append(executor.submit(self.loader.load, contract.location))

            registered = []
            for contract, future in zip(contracts, futures):
                self._check_unique(contract)
                registered.append(self._add(contract, future.result()))
            return registered
        finally:
            executor.shutdown(wait=True, cancel_futures=True)

    def _check_unique(self, contract: Contract) -> None:
        if contract.location in self._by_location:
            existing = self._by_location[contract.location]
            raise ValueError(
                f"contract {contract.name} has the same location as {existing.name}: "
                f"{contract.location}"
            )

    def _add(self, contract: Contract, code: bytes) -> RegisteredContract:
        try:
            program = self.extractor.parse(code)
        except ParseError as e:
            raise e.with_location(contract.location) from e

        if not program.contracts:
            self.extractor.diagnostics.warn_no_contract_declared(contract.location)

        registered = RegisteredContract(
            index=len(self._contracts),
            contract=contract,
            program=program,
            imports=tuple(self.extractor.imports(program, contract.location)),
        )
        self._contracts.append(registered)
        self._by_location[contract.location] = registered
        return registered
