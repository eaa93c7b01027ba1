"""CLI entry point for the hlang interpreter.

Usage:
    python -m hlang [-v|-vv|-vvv|-vvvv] run <program_file>
    python -m hlang version
    python -m hlang help
    python -m hlang --emit-ast <program_file>
    python -m hlang [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated). This is not a
                version flag; use `version` or `--version` for that.
  --emit-ast    Parse the given .hlang file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero.
"""

import argparse
import json
import sys
from pathlib import Path
from .interpreter import Interpreter, run
from .parser import parse_program
from .ast_json import ast_to_obj, load_program
from .errors import HlangError

VERSION = 'HindiScript v1.0.0'
SOURCE_SUFFIX = '.hlang'

USAGE = """HindiScript - A programming language in Hindi

Usage:
  hlang run <filename.hlang>       Run a .hlang file
  hlang --emit-ast <filename>      Write the parsed AST as JSON
  hlang --ast <filename.ast.json>  Run a previously emitted AST
  hlang version                    Show version information
  hlang help                       Show this help message

Options:
  -v, -vv, ...                     Raise the debug level (trace in debug.txt);
                                   use --version to show the version
"""


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file '{path}' not found", file=sys.stderr)
        sys.exit(1)
    if path.suffix != SOURCE_SUFFIX:
        print(f"Warning: file '{path}' does not have {SOURCE_SUFFIX} extension", file=sys.stderr)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog='hlang', description="HindiScript language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--version', action='store_true', help='show version information')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='HLANG_FILE', help='emit AST JSON for the given .hlang file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('command', nargs='?', choices=['run', 'version', 'help'], help='command to execute')
    parser.add_argument('program', nargs='?', help='hlang program file (.hlang) to run')
    args = parser.parse_args(argv)

    if args.version or args.command == 'version':
        print(VERSION)
        print("A programming language in Hindi")
        return

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        ast_program = parse_program(read_source(program_file))
        obj = ast_to_obj(ast_program)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(obj, out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    # Execute from AST JSON
    if args.ast:
        ast_path = Path(args.ast)
        if not ast_path.exists():
            print(f"Error: file '{ast_path}' not found", file=sys.stderr)
            sys.exit(1)
        with open(ast_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        ast_program = load_program(data)
        interpreter = Interpreter(debug_level=args.v)
        try:
            interpreter.run(ast_program)
        except HlangError as e:
            print(f"Runtime Error: {e.message}", file=sys.stderr)
            sys.exit(1)
        return

    if args.command == 'run':
        if not args.program:
            print("Error: Please provide a .hlang file to run", file=sys.stderr)
            print(USAGE, file=sys.stderr)
            sys.exit(1)
        source = read_source(Path(args.program))
        if run(source, debug_level=args.v) is not None:
            sys.exit(1)
        return

    print(USAGE)
    if args.command != 'help':
        sys.exit(1)


if __name__ == '__main__':
    main()
