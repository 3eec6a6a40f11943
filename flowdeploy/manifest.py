"""
Deployment manifest loading.

A manifest is a JSON file listing the contracts of a project:

    {
        "sourceRoot": "./cadence",
        "contracts": {
            "FungibleToken": "./contracts/FungibleToken.cdc",
            "Kibble": {
                "source": "./contracts/Kibble.cdc",
                "target": "emulator-account",
                "args": []
            }
        }
    }

Contracts keep the order they are listed in, which is the tie-break order
of the deployment.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from .errors import ManifestError
from .loaders import CompositeLoader, FileLoader, HttpLoader, SourceLoader
from .resolver import Contract


@dataclass
class Manifest:
    """Contracts of a project and where their sources are read from."""
    source_root: str = '.'
    contracts: List[Contract] = field(default_factory=list)

    def loader(self) -> SourceLoader:
        """Loader for the manifest's locations: URLs over HTTP, the rest from disk."""
        return CompositeLoader([HttpLoader(), FileLoader(self.source_root)])


def parse_manifest(data: dict, base_dir: str = '.') -> Manifest:
    """
    Build a Manifest from decoded JSON.

    Relative source roots are resolved against `base_dir`.
    """
    if not isinstance(data, dict):
        raise ManifestError('manifest must be a JSON object')

    source_root = data.get('sourceRoot', '.')
    if not isinstance(source_root, str):
        raise ManifestError('"sourceRoot" must be a string')

    entries = data.get('contracts', {})
    if not isinstance(entries, dict):
        raise ManifestError('"contracts" must be an object of name -> source')

    contracts = []
    for name, entry in entries.items():
        if isinstance(entry, str):
            contracts.append(Contract(name=name, location=entry))
            continue

        if not isinstance(entry, dict) or not isinstance(entry.get('source'), str):
            raise ManifestError(f'contract {name} must be a source path or an object with "source"')

        args = entry.get('args', [])
        if not isinstance(args, list):
            raise ManifestError(f'contract {name}: "args" must be a list')

        contracts.append(Contract(
            name=name,
            location=entry['source'],
            target=entry.get('target'),
            args=args,
        ))

    return Manifest(source_root=str(Path(base_dir) / source_root), contracts=contracts)


def load_manifest(path: str) -> Manifest:
    """Load a manifest file; relative paths in it are relative to the file."""
    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ManifestError(f'manifest not found: {path}')
    except json.JSONDecodeError as e:
        raise ManifestError(f'failed to parse {path}: {e}')

    return parse_manifest(data, base_dir=str(Path(path).parent))
