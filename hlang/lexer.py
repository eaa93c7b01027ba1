"""Tokenizer for hlang.

Scanning is driven by a Lark terminal grammar used purely as a lexer.
The terminal priorities mirror the order in which the scanner looks at
the input:

1. whitespace and ``//`` line comments (ignored),
2. string literals delimited by ``"`` or ``'``,
3. number literals (a digit followed by digits and dots),
4. words, where ``ya``, ``aage`` and ``wapas`` greedily absorb a
   following ``fir``, ``badho`` or ``bhejo`` to form a compound keyword,
5. two-character operators, then single-character operators and
   punctuation.

The lexer never fails. Any character that does not start a token is
matched by a lowest-priority catch-all terminal and dropped.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from lark import Lark


class TokenKind(Enum):
    KEYWORD = 'KEYWORD'
    IDENTIFIER = 'IDENTIFIER'
    NUMBER = 'NUMBER'
    STRING = 'STRING'
    OPERATOR = 'OPERATOR'
    LEFT_PAREN = 'LEFT_PAREN'
    RIGHT_PAREN = 'RIGHT_PAREN'
    LEFT_BRACE = 'LEFT_BRACE'
    RIGHT_BRACE = 'RIGHT_BRACE'
    COMMA = 'COMMA'
    COLON = 'COLON'
    SEMICOLON = 'SEMICOLON'


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str
    line: int = 0
    column: int = 0

    def __repr__(self) -> str:
        return f'<Token {self.kind.value} {self.text!r}>'


# Reserved words. ``bol`` is deliberately absent: it is the name of the
# built-in print function and lexes as an ordinary identifier.
KEYWORDS = frozenset({
    'ye',            # declare
    'agar',          # if
    'ya',            # else
    'fir',
    'ya fir',        # else if
    'firseKaro',     # function
    'jabtak',        # while
    'dohraye',       # repeat
    'roko',          # break
    'aage',
    'badho',
    'aage badho',    # continue
    'wapas',
    'bhejo',
    'wapas bhejo',   # return
})


HLANG_LEXER_GRAMMAR = r"""
    start: _token*
    _token: STRING | NUMBER | COMPOUND_KEYWORD | WORD | OPERATOR
          | LPAR | RPAR | LBRACE | RBRACE | COMMA | COLON | SEMICOLON
          | UNKNOWN

    WS.6: /[ \t\r\n]+/
    COMMENT.6: /\/\/[^\n]*/

    // An unterminated string runs to the end of the input
    STRING.5: /"(?:\\[\s\S]|[^"\\])*(?:"|\\?\Z)/
            | /'(?:\\[\s\S]|[^'\\])*(?:'|\\?\Z)/
    NUMBER.5: /[0-9][0-9.]*/

    // Only whitespace may separate the two halves, never a comment
    COMPOUND_KEYWORD.5: /(?:ya[ \t\r\n]+fir|aage[ \t\r\n]+badho|wapas[ \t\r\n]+bhejo)(?![A-Za-z0-9_])/
    WORD.4: /[A-Za-z_][A-Za-z0-9_]*/

    OPERATOR.3: /==|!=|<=|>=|&&|\|\||[=+\-*\/%<>]/
    LPAR.3: "("
    RPAR.3: ")"
    LBRACE.3: "{"
    RBRACE.3: "}"
    COMMA.3: ","
    COLON.3: ":"
    SEMICOLON.3: ";"

    UNKNOWN.1: /./s

    %ignore WS
    %ignore COMMENT
"""


HLANG_LEXER = Lark(
    HLANG_LEXER_GRAMMAR,
    parser='lalr',
    lexer='basic',
)


_PUNCTUATION: Dict[str, TokenKind] = {
    'OPERATOR': TokenKind.OPERATOR,
    'LPAR': TokenKind.LEFT_PAREN,
    'RPAR': TokenKind.RIGHT_PAREN,
    'LBRACE': TokenKind.LEFT_BRACE,
    'RBRACE': TokenKind.RIGHT_BRACE,
    'COMMA': TokenKind.COMMA,
    'COLON': TokenKind.COLON,
    'SEMICOLON': TokenKind.SEMICOLON,
}


def decode_string(raw: str) -> str:
    """Return the content of a matched string literal.

    ``raw`` includes the opening delimiter. A backslash makes the next
    character literal; the first unescaped delimiter closes the string.
    """
    quote = raw[0]
    chars: List[str] = []
    i = 1
    length = len(raw)
    while i < length:
        ch = raw[i]
        if ch == '\\' and i + 1 < length:
            chars.append(raw[i + 1])
            i += 2
            continue
        if ch == quote:
            break
        chars.append(ch)
        i += 1
    return ''.join(chars)


def classify_word(word: str) -> TokenKind:
    return TokenKind.KEYWORD if word in KEYWORDS else TokenKind.IDENTIFIER


def convert_token(tok) -> Optional[Token]:
    """Map a Lark token onto an hlang token, or None for dropped input."""
    kind = tok.type
    line = tok.line or 0
    column = tok.column or 0
    if kind == 'UNKNOWN':
        return None
    if kind == 'STRING':
        return Token(TokenKind.STRING, decode_string(str(tok)), line, column)
    if kind == 'NUMBER':
        return Token(TokenKind.NUMBER, str(tok), line, column)
    if kind == 'COMPOUND_KEYWORD':
        return Token(TokenKind.KEYWORD, ' '.join(str(tok).split()), line, column)
    if kind == 'WORD':
        word = str(tok)
        return Token(classify_word(word), word, line, column)
    return Token(_PUNCTUATION[kind], str(tok), line, column)


def tokenize(source: str) -> List[Token]:
    """Convert source code into a list of tokens.

    Whitespace and comments are not emitted. Unrecognized characters are
    skipped one at a time, so this function never raises on bad input.
    """
    tokens: List[Token] = []
    for tok in HLANG_LEXER.lex(source):
        converted = convert_token(tok)
        if converted is not None:
            tokens.append(converted)
    return tokens
