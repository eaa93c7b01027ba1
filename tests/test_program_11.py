from pathlib import Path
from hlang.parser import parse_program
from hlang.interpreter import Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_11_recursive_factorial(capsys):
    with open(EXAMPLES / 'program_11.hlang', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ['120', '3628800']
