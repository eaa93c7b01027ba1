# hlang language package
# This package provides the lexer, parser and tree-walking interpreter
# for HindiScript (.hlang) programs.
from .errors import HlangError
from .lexer import Token, TokenKind, tokenize
from .parser import parse, parse_program
from .interpreter import Interpreter, run, run_program

__all__ = [
    'HlangError',
    'Token',
    'TokenKind',
    'tokenize',
    'parse',
    'parse_program',
    'Interpreter',
    'run',
    'run_program',
]
