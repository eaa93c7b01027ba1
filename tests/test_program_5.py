from pathlib import Path
from hlang.parser import parse_program
from hlang.interpreter import Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_5_string_concatenation(capsys):
    with open(EXAMPLES / 'program_5.hlang', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out = capsys.readouterr().out.strip()
    assert out == 'hi!'
