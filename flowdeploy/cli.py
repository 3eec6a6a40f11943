#!/usr/bin/env python3
"""
Print the order in which a project's Cadence contracts must be deployed.

Usage:
    flowdeploy flow-deploy.json
    flowdeploy flow-deploy.json --json
    python -m flowdeploy.cli flow-deploy.json -v -j 8
"""

import argparse
import json
import sys
from typing import List, Optional

from .diagnostics import ResolverDiagnostics
from .errors import DeploymentError
from .manifest import load_manifest
from .resolver import Contract, Deployment


def format_order(contracts: List[Contract]) -> str:
    """One numbered line per contract."""
    return '\n'.join(
        f'{position}. {contract.name} ({contract.location})'
        for position, contract in enumerate(contracts, start=1)
    )


def format_json(contracts: List[Contract]) -> str:
    """Contract name -> deployment target, in deployment order."""
    return json.dumps({contract.name: contract.target for contract in contracts}, indent=2)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description='Resolve the deployment order of Cadence contracts')
    parser.add_argument('manifest', help='Path to the deployment manifest (JSON)')
    parser.add_argument('--json', action='store_true', help='Print the order as JSON')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='List every diagnostic, not just a summary')
    parser.add_argument('-j', '--jobs', type=int, default=1, metavar='N',
                        help='Load contract sources with N concurrent workers')

    args = parser.parse_args(argv)
    diagnostics = ResolverDiagnostics(verbose=args.verbose)

    try:
        manifest = load_manifest(args.manifest)
        deployment = Deployment(
            manifest.contracts,
            manifest.loader(),
            diagnostics=diagnostics,
            max_workers=args.jobs,
        )
        contracts = deployment.sort()
    except (DeploymentError, ValueError) as e:
        diagnostics.print_summary()
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(format_json(contracts))
    else:
        print(f"Deployment order ({len(contracts)} contracts):")
        if contracts:
            print(format_order(contracts))

    diagnostics.print_summary()
    return 0


if __name__ == '__main__':
    sys.exit(main())
