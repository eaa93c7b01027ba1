"""Recursive-descent parser for hlang.

The parser never raises. Malformed constructs produce ``None`` (which the
statement loop drops) or are skipped one token at a time. Expressions
are parsed from their leading token only: an operator that starts an
expression reads its two operands after it (prefix form, ``+ a b``),
while an operand followed by an infix operator is left as just the
operand, and the remaining tokens fall through to the statement loop.

Blocks are not parsed in place. The tokens between a ``{`` and its
matching ``}`` are collected into a separate window and handed to a
fresh parser, so a block body uses exactly the same statement grammar as
the program itself.
"""

from __future__ import annotations

from typing import Callable, List, Optional

from .ast import (
    Program, Node, Declaration, Assignment, Identifier, Literal,
    BinaryExpr, FunctionDecl, FunctionCall, ElseIfClause, IfStmt,
    WhileLoop, RepeatLoop, Break, Continue, Return,
)
from .lexer import Token, TokenKind, tokenize


OPERATORS = frozenset({
    '+', '-', '*', '/', '%',
    '==', '!=', '<', '>', '<=', '>=',
    '&&', '||', '=',
})


class Parser:
    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0

    def peek(self, offset: int = 0) -> Optional[Token]:
        index = self.pos + offset
        if index < len(self.tokens):
            return self.tokens[index]
        return None

    def advance(self) -> None:
        self.pos += 1

    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def match(self, kind: TokenKind, text: Optional[str] = None, offset: int = 0) -> bool:
        token = self.peek(offset)
        if token is None or token.kind is not kind:
            return False
        return text is None or token.text == text

    def parse_program(self) -> Program:
        statements: List[Node] = []
        while not self.at_end():
            token = self.peek()
            if token.kind is TokenKind.KEYWORD:
                handler = self.statement_handler(token.text)
                if handler is None:
                    # unrecognized keyword
                    self.advance()
                    continue
                node = handler()
            elif token.kind is TokenKind.IDENTIFIER and self.match(TokenKind.OPERATOR, '=', offset=1):
                node = self.parse_assignment()
            elif token.kind is TokenKind.IDENTIFIER:
                node = self.parse_expression()
            else:
                self.advance()
                continue
            if node is not None:
                statements.append(node)
        return Program(statements)

    def statement_handler(self, keyword: str) -> Optional[Callable[[], Optional[Node]]]:
        return {
            'firseKaro': self.parse_function_decl,
            'ye': self.parse_declaration,
            'agar': self.parse_if_stmt,
            'jabtak': self.parse_while_loop,
            'dohraye': self.parse_repeat_loop,
            'roko': self.parse_break,
            'aage badho': self.parse_continue,
            'wapas bhejo': self.parse_return,
        }.get(keyword)

    # Statements

    def parse_function_decl(self) -> Optional[FunctionDecl]:
        self.advance()
        if not self.match(TokenKind.IDENTIFIER):
            return None
        name = self.peek().text
        self.advance()

        params: List[str] = []
        if self.match(TokenKind.LEFT_PAREN):
            self.advance()
            while not self.at_end() and not self.match(TokenKind.RIGHT_PAREN):
                if self.match(TokenKind.IDENTIFIER):
                    params.append(self.peek().text)
                    self.advance()
                elif self.match(TokenKind.COMMA):
                    self.advance()
                else:
                    # not a parameter name
                    self.advance()
            if self.match(TokenKind.RIGHT_PAREN):
                self.advance()

        return_type_name: Optional[str] = None
        if self.match(TokenKind.COLON):
            self.advance()
            if self.match(TokenKind.IDENTIFIER) or self.match(TokenKind.KEYWORD):
                return_type_name = self.peek().text
                self.advance()

        body = self.parse_block()
        return FunctionDecl(name, params, return_type_name, body)

    def parse_declaration(self) -> Optional[Declaration]:
        self.advance()
        if not self.match(TokenKind.IDENTIFIER):
            return None
        name = self.peek().text
        self.advance()
        if not self.match(TokenKind.OPERATOR, '='):
            return None
        self.advance()
        return Declaration(name, self.parse_expression())

    def parse_assignment(self) -> Assignment:
        name = self.peek().text
        self.advance()
        # the caller has already seen the '='
        self.advance()
        return Assignment(name, self.parse_expression())

    def parse_if_stmt(self) -> IfStmt:
        self.advance()
        condition = self.parse_expression()
        consequent = self.parse_block()
        else_ifs: List[ElseIfClause] = []
        alternate: Optional[List[Node]] = None
        while not self.at_end():
            if self.match(TokenKind.KEYWORD, 'ya fir'):
                self.advance()
                clause_condition = self.parse_expression()
                else_ifs.append(ElseIfClause(clause_condition, self.parse_block()))
            elif self.match(TokenKind.KEYWORD, 'ya'):
                self.advance()
                alternate = self.parse_block()
                break
            else:
                break
        return IfStmt(condition, consequent, else_ifs, alternate)

    def parse_while_loop(self) -> WhileLoop:
        self.advance()
        condition = self.parse_expression()
        return WhileLoop(condition, self.parse_block())

    def parse_repeat_loop(self) -> RepeatLoop:
        self.advance()
        return RepeatLoop(self.parse_block())

    def parse_break(self) -> Break:
        self.advance()
        return Break()

    def parse_continue(self) -> Continue:
        self.advance()
        return Continue()

    def parse_return(self) -> Return:
        self.advance()
        token = self.peek()
        if token is None or token.kind in (TokenKind.SEMICOLON, TokenKind.RIGHT_BRACE):
            return Return(None)
        return Return(self.parse_expression())

    def parse_block(self) -> List[Node]:
        """Parse a braced block into its statement list.

        Without an opening brace nothing is consumed and the block is
        empty. A missing closing brace makes the block run to the end of
        the current token window.
        """
        if not self.match(TokenKind.LEFT_BRACE):
            return []
        self.advance()
        window: List[Token] = []
        depth = 1
        while not self.at_end():
            token = self.peek()
            if token.kind is TokenKind.LEFT_BRACE:
                depth += 1
            elif token.kind is TokenKind.RIGHT_BRACE:
                depth -= 1
                if depth == 0:
                    break
            window.append(token)
            self.advance()
        if self.match(TokenKind.RIGHT_BRACE):
            self.advance()
        return Parser(window).parse_program().body

    # Expressions

    def parse_expression(self) -> Optional[Node]:
        token = self.peek()
        if token is None:
            return None
        if token.kind in (TokenKind.NUMBER, TokenKind.STRING):
            self.advance()
            return Literal(token.text)
        if token.kind is TokenKind.IDENTIFIER:
            self.advance()
            if self.match(TokenKind.LEFT_PAREN):
                self.advance()
                args = self.parse_arguments()
                if self.match(TokenKind.RIGHT_PAREN):
                    self.advance()
                return FunctionCall(token.text, args)
            return Identifier(token.text)
        if token.kind is TokenKind.OPERATOR and token.text in OPERATORS:
            self.advance()
            left = self.parse_expression()
            right = self.parse_expression()
            return BinaryExpr(token.text, left, right)
        self.advance()
        return None

    def parse_arguments(self) -> List[Node]:
        args: List[Node] = []
        while not self.at_end() and not self.match(TokenKind.RIGHT_PAREN):
            arg = self.parse_expression()
            if arg is not None:
                args.append(arg)
            if self.match(TokenKind.COMMA):
                self.advance()
        return args


def parse(tokens: List[Token]) -> Program:
    """Parse a token sequence into a Program AST."""
    return Parser(tokens).parse_program()


def parse_program(source: str) -> Program:
    """Tokenize and parse hlang source code into a Program AST."""
    return parse(tokenize(source))
