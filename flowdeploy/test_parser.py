#!/usr/bin/env python3
"""
Unit tests for the Cadence lexer, parser, and import extraction.

Run with: python3 -m pytest flowdeploy/test_parser.py
   or: python3 flowdeploy/test_parser.py
"""

import sys
import os
# Add parent directory to path so the package imports when run as a script
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import unittest
from flowdeploy.diagnostics import ResolverDiagnostics
from flowdeploy.errors import ParseError
from flowdeploy.imports import ImportExtractor, extract_imports
from flowdeploy.lexer import Lexer, TokenType
from flowdeploy.parser import (
    Parser,
    StringLocation,
    AddressLocation,
    IdentifierLocation,
)


KIBBLE = '''
import FungibleToken from "./FungibleToken.cdc"
import Crypto

/* Kibble is the token used in /* nested */ examples */
pub contract Kibble: FungibleToken {
    pub var totalSupply: UFix64

    pub resource Vault: FungibleToken.Provider {
        pub var balance: UFix64

        init(balance: UFix64) {
            self.balance = balance
        }
    }

    init() {
        self.totalSupply = 0.0
        let vault <- create Vault(balance: self.totalSupply)
        destroy vault
    }
}
'''


def parse(source: str):
    return Parser(Lexer(source).tokenize()).parse()


class TestLexer(unittest.TestCase):
    """Test tokenization of Cadence source."""

    def test_keywords_and_literals(self):
        tokens = Lexer('import Foo from 0x01\nimport "Bar.cdc"').tokenize()
        types = [t.type for t in tokens]
        self.assertEqual(types, [
            TokenType.IMPORT, TokenType.IDENTIFIER, TokenType.IDENTIFIER, TokenType.HEX_NUMBER,
            TokenType.IMPORT, TokenType.STRING_LITERAL, TokenType.EOF,
        ])
        self.assertEqual(tokens[5].value, '"Bar.cdc"')
        self.assertEqual((tokens[4].line, tokens[4].column), (2, 1))

    def test_comments_are_skipped(self):
        source = '// line comment\n/* outer /* inner */ still comment */ contract'
        tokens = Lexer(source).tokenize()
        self.assertEqual([t.type for t in tokens], [TokenType.CONTRACT, TokenType.EOF])

    def test_fixed_point_number(self):
        tokens = Lexer('1_000.50').tokenize()
        self.assertEqual(tokens[0].type, TokenType.NUMBER)
        self.assertEqual(tokens[0].value, '1_000.50')

    def test_unterminated_string(self):
        with self.assertRaises(ParseError) as ctx:
            Lexer('import "Foo.cdc\npub contract Foo {}').tokenize()
        self.assertEqual(ctx.exception.line, 1)
        self.assertEqual(ctx.exception.column, 8)
        self.assertIn('unterminated string', str(ctx.exception))

    def test_unterminated_block_comment(self):
        with self.assertRaises(ParseError) as ctx:
            Lexer('contract Foo {}\n/* /* */').tokenize()
        self.assertEqual(ctx.exception.line, 2)

    def test_unexpected_character(self):
        with self.assertRaises(ParseError):
            Lexer('contract Foo { ` }').tokenize()


class TestParserImports(unittest.TestCase):
    """Test parsing of the supported import declaration forms."""

    def test_string_import(self):
        program = parse('import "Foo.cdc"')
        self.assertEqual(len(program.imports), 1)
        self.assertEqual(program.imports[0].location, StringLocation('Foo.cdc'))
        self.assertEqual(program.imports[0].identifiers, [])

    def test_identifiers_from_string(self):
        program = parse('import A, B from "./AB.cdc";')
        declaration = program.imports[0]
        self.assertEqual(declaration.identifiers, ['A', 'B'])
        self.assertEqual(declaration.location, StringLocation('./AB.cdc'))

    def test_address_import(self):
        program = parse('import FungibleToken from 0xee82856bf20e2aa6')
        location = program.imports[0].location
        self.assertIsInstance(location, AddressLocation)
        self.assertEqual(location.value, '0xee82856bf20e2aa6')
        self.assertEqual(location.kind, 'address')

    def test_bare_address_import(self):
        program = parse('import 0x01')
        self.assertEqual(program.imports[0].location, AddressLocation('0x01'))

    def test_identifier_import(self):
        program = parse('import Crypto\npub contract Foo {}')
        self.assertEqual(program.imports[0].location, IdentifierLocation('Crypto'))
        self.assertEqual(program.imports[0].identifiers, [])

    def test_import_line_numbers(self):
        program = parse('\n\nimport "A.cdc"\nimport "B.cdc"')
        self.assertEqual([i.line for i in program.imports], [3, 4])

    def test_string_escapes(self):
        program = parse('import "dir\\\\A\\u{42}.cdc"')
        self.assertEqual(program.imports[0].location.value, 'dir\\AB.cdc')

    def test_invalid_escape(self):
        with self.assertRaises(ParseError):
            parse('import "A\\q.cdc"')

    def test_missing_from(self):
        with self.assertRaises(ParseError) as ctx:
            parse('import A, B "AB.cdc"')
        self.assertIn("'from'", str(ctx.exception))

    def test_aliased_import(self):
        program = parse('import Foo as Bar, Baz from "B.cdc"\npub contract A {}')
        declaration = program.imports[0]
        self.assertEqual(declaration.location, StringLocation('B.cdc'))
        self.assertEqual(declaration.identifiers, ['Foo', 'Baz'])
        self.assertEqual(declaration.aliases, {'Foo': 'Bar'})

    def test_alias_requires_from(self):
        with self.assertRaises(ParseError) as ctx:
            parse('import Foo as Bar\npub contract A {}')
        self.assertIn("'from'", str(ctx.exception))

    def test_single_identifier_missing_from(self):
        with self.assertRaises(ParseError) as ctx:
            parse('import Foo "B.cdc"')
        self.assertIn("'from'", str(ctx.exception))

    def test_identifiers_without_comma(self):
        with self.assertRaises(ParseError):
            parse('import Foo Bar from "B.cdc"')

    def test_two_locations_in_one_import(self):
        with self.assertRaises(ParseError):
            parse('import "A.cdc" "B.cdc"')

    def test_trailing_token_after_import(self):
        with self.assertRaises(ParseError):
            parse('import X from "A.cdc" pub contract C {}')

    def test_import_continued_on_next_line(self):
        program = parse('import A,\n    B from "AB.cdc"\nimport Crypto; import "C.cdc"')
        self.assertEqual(program.imports[0].identifiers, ['A', 'B'])
        self.assertEqual(program.imports[1].location, IdentifierLocation('Crypto'))
        self.assertEqual(program.imports[2].location, StringLocation('C.cdc'))

    def test_missing_location(self):
        with self.assertRaises(ParseError):
            parse('import ;')

    def test_missing_location_after_from(self):
        with self.assertRaises(ParseError):
            parse('import A from {}')

    def test_import_inside_contract(self):
        with self.assertRaises(ParseError):
            parse('pub contract Foo {\n import "Bar.cdc"\n}')


class TestParserStructure(unittest.TestCase):
    """Test bracket matching and top-level declarations."""

    def test_full_contract(self):
        program = parse(KIBBLE)
        self.assertEqual(
            [i.location for i in program.imports],
            [StringLocation('./FungibleToken.cdc'), IdentifierLocation('Crypto')],
        )
        self.assertEqual([(d.kind, d.name) for d in program.declarations], [('contract', 'Kibble')])
        self.assertEqual(program.contracts[0].line, 6)

    def test_contract_interface(self):
        program = parse('access(all) contract interface Provider {\n access(contract) fun f()\n}')
        declaration = program.declarations[0]
        self.assertEqual(declaration.kind, 'contract')
        self.assertEqual(declaration.name, 'Provider')
        self.assertTrue(declaration.is_interface)

    def test_top_level_declarations(self):
        source = '''
        pub struct Point { pub let x: Int; init() { self.x = 0 } }
        pub event Minted(amount: UFix64)
        pub enum Color: UInt8 { pub case red }
        transaction(amount: UFix64) { execute {} }
        '''
        program = parse(source)
        self.assertEqual(
            [(d.kind, d.name) for d in program.declarations],
            [('struct', 'Point'), ('event', 'Minted'), ('enum', 'Color'), ('transaction', '')],
        )
        self.assertEqual(program.contracts, [])

    def test_unclosed_brace(self):
        with self.assertRaises(ParseError) as ctx:
            parse('pub contract Foo {\n  fun f() {\n}')
        self.assertIn('unclosed', str(ctx.exception))
        self.assertEqual(ctx.exception.line, 1)

    def test_unexpected_closing(self):
        with self.assertRaises(ParseError) as ctx:
            parse('pub contract Foo {}\n}')
        self.assertEqual(ctx.exception.line, 2)

    def test_mismatched_brackets(self):
        with self.assertRaises(ParseError) as ctx:
            parse('pub contract Foo { fun f(] }')
        self.assertIn('mismatched', str(ctx.exception))

    def test_composite_without_name(self):
        with self.assertRaises(ParseError):
            parse('pub contract {}')


class TestImportExtractor(unittest.TestCase):
    """Test that only string-literal imports are extracted."""

    def test_extract_string_imports_in_order(self):
        source = b'import "B.cdc"\nimport X from "A.cdc"\npub contract C {}'
        self.assertEqual(extract_imports(source), ['B.cdc', 'A.cdc'])

    def test_non_string_imports_skipped(self):
        diagnostics = ResolverDiagnostics()
        extractor = ImportExtractor(diagnostics)
        imports = extractor.extract_imports(KIBBLE.encode(), 'Kibble.cdc')

        self.assertEqual(imports, ['./FungibleToken.cdc'])
        self.assertEqual(len(diagnostics.infos), 1)
        info = diagnostics.infos[0]
        self.assertEqual(info.code, 'I001')
        self.assertEqual(info.file_path, 'Kibble.cdc')
        self.assertEqual(info.line, 3)
        self.assertIn('Crypto', info.message)

    def test_aliased_import_extracted(self):
        source = 'import Foo as Bar from "B.cdc"\npub contract A {}'
        self.assertEqual(extract_imports(source), ['B.cdc'])

    def test_invalid_utf8_keeps_cause(self):
        with self.assertRaises(ParseError) as ctx:
            extract_imports(b'\xc3\x28')
        self.assertIsInstance(ctx.exception.__cause__, UnicodeDecodeError)

    def test_address_import_skipped(self):
        source = 'import FungibleToken from 0xee82856bf20e2aa6\npub contract C {}'
        self.assertEqual(extract_imports(source), [])

    def test_duplicates_preserved(self):
        diagnostics = ResolverDiagnostics()
        extractor = ImportExtractor(diagnostics)
        source = 'import "A.cdc"\nimport A from "A.cdc"\npub contract C {}'

        self.assertEqual(extractor.extract_imports(source, 'C.cdc'), ['A.cdc', 'A.cdc'])
        self.assertEqual([d.code for d in diagnostics.warnings], ['W001'])
        self.assertEqual(diagnostics.warnings[0].line, 2)

    def test_byte_order_mark(self):
        self.assertEqual(extract_imports(b'\xef\xbb\xbfimport "A.cdc"'), ['A.cdc'])

    def test_invalid_utf8(self):
        with self.assertRaises(ParseError) as ctx:
            extract_imports(b'import "\xff.cdc"')
        self.assertIn('UTF-8', str(ctx.exception))

    def test_malformed_source(self):
        with self.assertRaises(ParseError):
            extract_imports(b'import "A.cdc"\npub contract C {')


if __name__ == '__main__':
    unittest.main(verbosity=2)
