"""
Source loaders.

A SourceLoader resolves a contract location to its raw source bytes. The
resolver only depends on the SourceLoader interface; which variant is used
depends on where the contracts live:

- FileLoader: paths on disk, relative to a base directory
- HttpLoader: http(s) URLs
- MemoryLoader: in-memory sources (tests, generated code)
- CompositeLoader: picks the first loader that supports a location
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Union
from urllib.parse import urlparse

import requests

from .errors import LoadError


def is_url(location: str) -> bool:
    """Check if a location is an http(s) URL."""
    return urlparse(location).scheme in ('http', 'https')


class SourceLoader(ABC):
    """Resolves a location identifier to raw source bytes."""

    @abstractmethod
    def load(self, location: str) -> bytes:
        """
        Load the source stored at `location`.

        Raises:
            LoadError: if the source could not be retrieved.
        """

    def supports(self, location: str) -> bool:
        """Check if this loader can handle the location format."""
        return True


class FileLoader(SourceLoader):
    """Loads sources from the filesystem."""

    def __init__(self, base_dir: str = '.'):
        self.base_dir = Path(base_dir)

    def supports(self, location: str) -> bool:
        return not is_url(location)

    def load(self, location: str) -> bytes:
        path = self.base_dir / location
        try:
            return path.read_bytes()
        except OSError as e:
            raise LoadError(location, e.strerror or str(e)) from e


class MemoryLoader(SourceLoader):
    """Serves sources from an in-memory mapping of location -> source."""

    def __init__(self, sources: Optional[Dict[str, Union[str, bytes]]] = None):
        self.sources: Dict[str, Union[str, bytes]] = dict(sources or {})

    def add(self, location: str, source: Union[str, bytes]) -> None:
        self.sources[location] = source

    def supports(self, location: str) -> bool:
        return location in self.sources

    def load(self, location: str) -> bytes:
        if location not in self.sources:
            raise LoadError(location, 'no source registered for this location')
        source = self.sources[location]
        if isinstance(source, str):
            return source.encode('utf-8')
        return source


class HttpLoader(SourceLoader):
    """Fetches sources over HTTP(S) with requests."""

    def __init__(self, timeout: float = 10, session: Optional[requests.Session] = None):
        self.timeout = timeout
        self.session = session

    def supports(self, location: str) -> bool:
        return is_url(location)

    def load(self, location: str) -> bytes:
        get = self.session.get if self.session is not None else requests.get
        try:
            response = get(location, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise LoadError(location, str(e)) from e
        return response.content


class CompositeLoader(SourceLoader):
    """
    Delegates to the first loader whose `supports()` accepts a location.

    Order matters: put specific loaders (e.g. HttpLoader) before
    catch-all ones (e.g. FileLoader).
    """

    def __init__(self, loaders: List[SourceLoader]):
        self.loaders = list(loaders)

    def supports(self, location: str) -> bool:
        return any(loader.supports(location) for loader in self.loaders)

    def load(self, location: str) -> bytes:
        for loader in self.loaders:
            if loader.supports(location):
                return loader.load(location)
        raise LoadError(location, 'no loader supports this location format')
