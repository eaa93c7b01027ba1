from pathlib import Path
from hlang.parser import parse_program
from hlang.interpreter import Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_program_3_repeat_runs_once(capsys):
    """Test program 3: a dohraye loop whose body ends in roko.

    The body prints once and the loop is left immediately; execution
    then carries on after the loop.
    """
    with open(EXAMPLES / 'program_3.hlang', 'r', encoding='utf-8') as f:
        source = f.read()
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    out_lines = capsys.readouterr().out.strip().split('\n')
    assert out_lines == ['ek baar', 'bahar']
