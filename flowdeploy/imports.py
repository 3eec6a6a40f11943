"""
Import extraction for Cadence contract sources.

Parses just enough of a source file to enumerate its import declarations
and returns the string-literal locations, which are the ones that can name
another contract of the same deployment. Address and identifier imports
refer to contracts that already live on chain (or are built in) and are
skipped, with an info diagnostic for each.
"""

from typing import List, Optional, Set, Union

from .diagnostics import ResolverDiagnostics
from .errors import ParseError
from .lexer import Lexer
from .parser import Parser, Program, StringLocation


class ImportExtractor:
    """Extracts import locations from raw contract source."""

    def __init__(self, diagnostics: Optional[ResolverDiagnostics] = None):
        self.diagnostics = diagnostics or ResolverDiagnostics()

    def parse(self, code: Union[bytes, str]) -> Program:
        """
        Parse raw source into a Program.

        Raises:
            ParseError: if the source is not valid UTF-8 or is malformed.
        """
        if isinstance(code, bytes):
            try:
                code = code.decode('utf-8-sig')
            except UnicodeDecodeError as e:
                raise ParseError(f'source is not valid UTF-8: {e.reason}') from e

        tokens = Lexer(code).tokenize()
        return Parser(tokens).parse()

    def imports(self, program: Program, file_path: str = '') -> List[str]:
        """
        Return the string-literal import locations of a parsed program.

        Source order is kept and duplicates are preserved.
        """
        locations: List[str] = []
        seen: Set[str] = set()

        for declaration in program.import_declarations():
            location = declaration.location
            if not isinstance(location, StringLocation):
                self.diagnostics.info_import_skipped(
                    location.kind, location.value, file_path, declaration.line
                )
                continue

            if location.value in seen:
                self.diagnostics.warn_duplicate_import(location.value, file_path, declaration.line)
            seen.add(location.value)
            locations.append(location.value)

        return locations

    def extract_imports(self, code: Union[bytes, str], file_path: str = '') -> List[str]:
        """Parse raw source and return its string-literal import locations."""
        return self.imports(self.parse(code), file_path)


def extract_imports(code: Union[bytes, str]) -> List[str]:
    """Return the string-literal import locations declared by `code`."""
    return ImportExtractor().extract_imports(code)
