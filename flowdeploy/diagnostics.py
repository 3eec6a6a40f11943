"""
Diagnostic/warning system for the resolver.

Collects non-fatal notices about contract sources: imports that were not
considered when ordering, duplicate imports, and sources that declare
nothing deployable. Errors are never reported here; those are raised.
"""

import sys
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional


class DiagnosticSeverity(Enum):
    """Severity levels for resolver diagnostics."""
    WARNING = 'warning'
    INFO = 'info'


@dataclass
class Diagnostic:
    """A single diagnostic message."""
    severity: DiagnosticSeverity
    code: str
    message: str
    file_path: str = ''
    line: Optional[int] = None
    construct: str = ''  # e.g., 'import', 'declaration'

    def __str__(self) -> str:
        location = self.file_path
        if self.line:
            location = f'{location}:{self.line}'
        if location:
            return f'[{self.severity.value}] {location}: {self.message} ({self.code})'
        return f'[{self.severity.value}] {self.message} ({self.code})'


class ResolverDiagnostics:
    """
    Collects resolver diagnostics while contracts are registered.

    Usage:
        diag = ResolverDiagnostics()
        deployment = Deployment(contracts, loader, diagnostics=diag)
        diag.print_summary()
    """

    def __init__(self, verbose: bool = False):
        self._diagnostics: List[Diagnostic] = []
        self._verbose = verbose

    @property
    def diagnostics(self) -> List[Diagnostic]:
        """Get all collected diagnostics."""
        return list(self._diagnostics)

    @property
    def warnings(self) -> List[Diagnostic]:
        """Get only warning-level diagnostics."""
        return [d for d in self._diagnostics if d.severity == DiagnosticSeverity.WARNING]

    @property
    def infos(self) -> List[Diagnostic]:
        return [d for d in self._diagnostics if d.severity == DiagnosticSeverity.INFO]

    @property
    def count(self) -> int:
        return len(self._diagnostics)

    def clear(self) -> None:
        self._diagnostics.clear()

    # =========================================================================
    # SPECIFIC DIAGNOSTIC METHODS
    # =========================================================================

    def info_import_skipped(
        self,
        kind: str,
        value: str,
        file_path: str = '',
        line: Optional[int] = None,
    ) -> None:
        """Note that an import with a non-string location was not resolved."""
        self._diagnostics.append(Diagnostic(
            severity=DiagnosticSeverity.INFO,
            code='I001',
            message=f'Import from {kind} location "{value}" is not a contract '
                    f'in this deployment and was skipped.',
            file_path=file_path,
            line=line,
            construct='import',
        ))

    def warn_duplicate_import(
        self,
        import_path: str,
        file_path: str = '',
        line: Optional[int] = None,
    ) -> None:
        """Warn that the same location is imported more than once."""
        self._diagnostics.append(Diagnostic(
            severity=DiagnosticSeverity.WARNING,
            code='W001',
            message=f'"{import_path}" is imported more than once.',
            file_path=file_path,
            line=line,
            construct='import',
        ))

    def warn_no_contract_declared(self, file_path: str = '') -> None:
        """Warn that a source declares no contract or contract interface."""
        self._diagnostics.append(Diagnostic(
            severity=DiagnosticSeverity.WARNING,
            code='W002',
            message='Source declares no contract; nothing will be deployed from it.',
            file_path=file_path,
            construct='declaration',
        ))

    # =========================================================================
    # REPORTING
    # =========================================================================

    def print_summary(self, file=None) -> None:
        """Print a summary of all diagnostics to stderr (or specified file)."""
        if file is None:
            file = sys.stderr

        if not self._diagnostics:
            return

        warnings = self.warnings
        infos = self.infos

        if warnings:
            print(f'\nResolver warnings ({len(warnings)}):', file=file)
            by_construct: Dict[str, List[Diagnostic]] = {}
            for w in warnings:
                by_construct.setdefault(w.construct or 'other', []).append(w)

            for construct, diags in sorted(by_construct.items()):
                print(f'  {construct}: {len(diags)} occurrence(s)', file=file)
                if self._verbose:
                    for d in diags:
                        print(f'    {d}', file=file)

        if infos and self._verbose:
            print(f'\nResolver info ({len(infos)}):', file=file)
            for d in infos:
                print(f'  {d}', file=file)

    def get_summary(self) -> str:
        """Get a summary string of all warnings."""
        warnings = self.warnings
        if not warnings:
            return 'No resolver warnings.'

        by_construct: Dict[str, int] = {}
        for w in warnings:
            key = w.construct or 'other'
            by_construct[key] = by_construct.get(key, 0) + 1

        parts = [f'{count} {construct}' for construct, count in sorted(by_construct.items())]
        return f'Resolver warnings: {", ".join(parts)}'
