"""
Cadence parser implementation.

The Parser walks the token stream from the Lexer and builds a Program
holding the import declarations and top-level declarations. Bodies are
not parsed; they are skipped with bracket matching, which is enough to
catch unbalanced source.
"""

from typing import Dict, List, Optional, Tuple

from ..errors import ParseError
from ..lexer import Token, TokenType, COMPOSITE_KEYWORDS, BRACKET_PAIRS
from .ast_nodes import (
    Program,
    ImportDeclaration,
    Declaration,
    Location,
    StringLocation,
    AddressLocation,
    IdentifierLocation,
)


ESCAPES = {
    '0': '\0',
    '\\': '\\',
    't': '\t',
    'n': '\n',
    'r': '\r',
    '"': '"',
    "'": "'",
}


class Parser:
    """
    Parser for the top level of Cadence source code.

    Recognizes import declarations and named top-level declarations, and
    checks that every bracket is closed by its matching counterpart.
    """

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0
        # Open brackets as (token, expected closing type)
        self.brackets: List[Tuple[Token, TokenType]] = []

    def peek(self, offset: int = 0) -> Token:
        """Look ahead in the token stream without consuming."""
        pos = self.pos + offset
        if pos >= len(self.tokens):
            return self.tokens[-1]  # Return EOF
        return self.tokens[pos]

    def current(self) -> Token:
        """Return the current token."""
        return self.peek()

    def advance(self) -> Token:
        """Consume and return the current token."""
        token = self.current()
        self.pos += 1
        return token

    def match(self, *types: TokenType) -> bool:
        """Check if current token matches any of the given types."""
        return self.current().type in types

    def error(self, message: str, token: Optional[Token] = None) -> ParseError:
        token = token or self.current()
        return ParseError(message, token.line, token.column)

    def expect(self, token_type: TokenType, message: str = '') -> Token:
        """Consume the current token if it matches, otherwise raise a ParseError."""
        if self.current().type != token_type:
            found = self.current().value or self.current().type.name
            raise self.error(f"expected {token_type.name} but got {found!r}: {message}")
        return self.advance()

    @property
    def depth(self) -> int:
        return len(self.brackets)

    # =========================================================================
    # TOP-LEVEL PARSING
    # =========================================================================

    def parse(self) -> Program:
        """Parse the entire source file into a Program."""
        program = Program()

        while not self.match(TokenType.EOF):
            token = self.current()
            if token.type == TokenType.IMPORT:
                if self.depth:
                    raise self.error('import declarations are only allowed at the top level')
                program.imports.append(self.parse_import())
            elif token.type in BRACKET_PAIRS:
                self.brackets.append((self.advance(), BRACKET_PAIRS[token.type]))
            elif token.type in (TokenType.RPAREN, TokenType.RBRACE, TokenType.RBRACKET):
                self.close_bracket()
            elif self.depth == 0 and token.type in COMPOSITE_KEYWORDS:
                program.declarations.append(self.parse_composite())
            elif self.depth == 0 and token.type == TokenType.TRANSACTION:
                self.advance()
                program.declarations.append(Declaration(kind='transaction', line=token.line))
            else:
                self.advance()

        if self.brackets:
            opener, _ = self.brackets[-1]
            raise self.error(f"unclosed {opener.value!r}", opener)

        return program

    def close_bracket(self) -> None:
        token = self.advance()
        if not self.brackets:
            raise self.error(f"unexpected {token.value!r}", token)
        opener, closing = self.brackets.pop()
        if token.type != closing:
            raise self.error(
                f"mismatched {token.value!r}, {opener.value!r} opened at line {opener.line}",
                token,
            )

    # =========================================================================
    # IMPORT PARSING
    # =========================================================================

    def parse_import(self) -> ImportDeclaration:
        """
        Parse an import declaration.

        Forms:
            import "Location"
            import 0x01
            import Crypto
            import A, B from <location>
            import A as X, B from <location>
        """
        start = self.expect(TokenType.IMPORT)
        identifiers: List[str] = []
        aliases: Dict[str, str] = {}

        if self.match(TokenType.IDENTIFIER):
            while True:
                name = self.expect(TokenType.IDENTIFIER, 'imported identifier').value
                identifiers.append(name)
                if self.current().type == TokenType.IDENTIFIER and self.current().value == 'as':
                    self.advance()
                    aliases[name] = self.expect(TokenType.IDENTIFIER, 'import alias').value
                if not self.match(TokenType.COMMA):
                    break
                self.advance()

            if self.current().type == TokenType.IDENTIFIER and self.current().value == 'from':
                self.advance()
                location = self.parse_location()
            elif len(identifiers) == 1 and not aliases and self.at_statement_end():
                # `import Crypto` names the location itself
                location = IdentifierLocation(identifiers.pop())
            else:
                raise self.error("expected 'from' after imported identifiers")
        else:
            location = self.parse_location()

        if self.match(TokenType.SEMICOLON):
            self.advance()
        elif not self.at_statement_end():
            raise self.error('unexpected token after import declaration')

        return ImportDeclaration(
            location=location,
            identifiers=identifiers,
            aliases=aliases,
            line=start.line,
            column=start.column,
        )

    def at_statement_end(self) -> bool:
        """Check if the current token starts a new statement or ends this one."""
        token = self.current()
        if token.type in (TokenType.SEMICOLON, TokenType.EOF):
            return True
        return token.line > self.peek(-1).line

    def parse_location(self) -> Location:
        """Parse an import location: string literal, address, or identifier."""
        token = self.current()
        if token.type == TokenType.STRING_LITERAL:
            self.advance()
            return StringLocation(self.unquote(token))
        if token.type == TokenType.HEX_NUMBER:
            self.advance()
            return AddressLocation(token.value)
        if token.type == TokenType.IDENTIFIER:
            self.advance()
            return IdentifierLocation(token.value)
        raise self.error('expected import location')

    def unquote(self, token: Token) -> str:
        """Strip quotes from a string literal token and resolve escapes."""
        raw = token.value[1:-1]
        result = ''
        i = 0
        while i < len(raw):
            ch = raw[i]
            if ch != '\\':
                result += ch
                i += 1
                continue

            escape = raw[i + 1] if i + 1 < len(raw) else ''
            if escape in ESCAPES:
                result += ESCAPES[escape]
                i += 2
            elif escape == 'u' and raw[i + 2:i + 3] == '{':
                end = raw.find('}', i + 3)
                if end == -1:
                    raise self.error('unterminated unicode escape', token)
                try:
                    result += chr(int(raw[i + 3:end], 16))
                except ValueError:
                    raise self.error(f"invalid unicode escape {raw[i:end + 1]!r}", token)
                i = end + 1
            else:
                raise self.error(f"invalid escape sequence '\\{escape}'", token)
        return result

    # =========================================================================
    # DECLARATION PARSING
    # =========================================================================

    def parse_composite(self) -> Declaration:
        """Parse the head of a composite declaration, e.g. `contract interface Foo`."""
        keyword = self.advance()
        is_interface = False
        if self.current().type == TokenType.IDENTIFIER and self.current().value == 'interface':
            self.advance()
            is_interface = True

        name = self.expect(TokenType.IDENTIFIER, f'{keyword.value} name').value
        return Declaration(
            kind=COMPOSITE_KEYWORDS[keyword.type],
            name=name,
            is_interface=is_interface,
            line=keyword.line,
        )
