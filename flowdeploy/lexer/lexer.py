"""
Lexer implementation for Cadence source code.

The Lexer tokenizes Cadence source code into a stream of tokens
that can be consumed by the parser. Comments and whitespace are dropped.
"""

from typing import List, Tuple

from ..errors import ParseError
from .tokens import Token, TokenType, KEYWORDS, DELIMITERS, OPERATOR_CHARS


class Lexer:
    """
    Lexer for Cadence source code.

    Converts source text into a list of tokens for parsing.
    """

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []

    def peek(self, offset: int = 0) -> str:
        """Look ahead in the source without consuming."""
        pos = self.pos + offset
        if pos >= len(self.source):
            return ''
        return self.source[pos]

    def advance(self) -> str:
        """Consume and return the current character."""
        ch = self.peek()
        self.pos += 1
        if ch == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return ch

    def error(self, message: str, line: int, column: int) -> ParseError:
        return ParseError(message, line, column)

    def skip_whitespace(self) -> None:
        """Skip over whitespace characters."""
        ch = self.peek()
        while ch and ch in ' \t\r\n\f\v':
            self.advance()
            ch = self.peek()

    def skip_comment(self) -> None:
        """Skip over line comments and (nested) block comments."""
        if self.peek() == '/' and self.peek(1) == '/':
            while self.peek() and self.peek() != '\n':
                self.advance()
            return

        start_line, start_col = self.line, self.column
        self.advance()  # skip /
        self.advance()  # skip *
        depth = 1
        while depth > 0:
            if not self.peek():
                raise self.error('unterminated block comment', start_line, start_col)
            if self.peek() == '/' and self.peek(1) == '*':
                self.advance()
                self.advance()
                depth += 1
            elif self.peek() == '*' and self.peek(1) == '/':
                self.advance()
                self.advance()
                depth -= 1
            else:
                self.advance()

    def read_string(self) -> str:
        """Read a string literal including its quotes."""
        start_line, start_col = self.line, self.column
        result = self.advance()
        while self.peek() != '"':
            ch = self.peek()
            if not ch or ch == '\n':
                raise self.error('unterminated string literal', start_line, start_col)
            if ch == '\\':
                result += self.advance()
                if not self.peek():
                    raise self.error('unterminated string literal', start_line, start_col)
            result += self.advance()
        result += self.advance()
        return result

    def read_number(self) -> Tuple[str, TokenType]:
        """Read a numeric literal (decimal, fixed-point, or prefixed)."""
        result = ''
        token_type = TokenType.NUMBER

        if self.peek() == '0' and self.peek(1) in ('x', 'X', 'b', 'B', 'o', 'O'):
            prefix = self.peek(1).lower()
            token_type = TokenType.HEX_NUMBER if prefix == 'x' else TokenType.NUMBER
            result += self.advance()
            result += self.advance()
            while self.peek() and (self.peek().isalnum() or self.peek() == '_'):
                result += self.advance()
        else:
            while self.peek() and (self.peek().isdigit() or self.peek() == '_'):
                result += self.advance()
            # Fixed-point literal
            if self.peek() == '.' and self.peek(1).isdigit():
                result += self.advance()
                while self.peek() and (self.peek().isdigit() or self.peek() == '_'):
                    result += self.advance()

        return result, token_type

    def read_identifier(self) -> str:
        """Read an identifier or keyword."""
        result = ''
        while self.peek() and (self.peek().isalnum() or self.peek() == '_'):
            result += self.advance()
        return result

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire source and return a list of tokens.

        Returns:
            List of Token objects, ending with an EOF token.

        Raises:
            ParseError: on unterminated strings or comments and on
                characters that cannot start any token.
        """
        while self.pos < len(self.source):
            self.skip_whitespace()

            if self.pos >= len(self.source):
                break

            if self.peek() == '/' and self.peek(1) in ('/', '*'):
                self.skip_comment()
                continue

            start_line = self.line
            start_col = self.column
            ch = self.peek()

            if ch == '"':
                value = self.read_string()
                self.tokens.append(Token(TokenType.STRING_LITERAL, value, start_line, start_col))
                continue

            if ch.isdigit():
                value, token_type = self.read_number()
                self.tokens.append(Token(token_type, value, start_line, start_col))
                continue

            if ch.isalpha() or ch == '_':
                value = self.read_identifier()
                token_type = KEYWORDS.get(value, TokenType.IDENTIFIER)
                self.tokens.append(Token(token_type, value, start_line, start_col))
                continue

            if ch in DELIMITERS:
                self.advance()
                self.tokens.append(Token(DELIMITERS[ch], ch, start_line, start_col))
                continue

            if ch in OPERATOR_CHARS:
                self.advance()
                self.tokens.append(Token(TokenType.OPERATOR, ch, start_line, start_col))
                continue

            raise self.error(f'unexpected character {ch!r}', start_line, start_col)

        self.tokens.append(Token(TokenType.EOF, '', self.line, self.column))
        return self.tokens
