import pytest

from hlang.__main__ import VERSION, main


def write_program(tmp_path, name, source):
    path = tmp_path / name
    path.write_text(source, encoding='utf-8')
    return path


def test_run_command(tmp_path, capsys):
    path = write_program(tmp_path, 'namaste.hlang', 'bol("Namaste")')
    main(['run', str(path)])
    captured = capsys.readouterr()
    assert captured.out == 'Namaste\n'
    assert captured.err == ''


def test_run_warns_about_extension(tmp_path, capsys):
    path = write_program(tmp_path, 'namaste.txt', 'bol(1)')
    main(['run', str(path)])
    captured = capsys.readouterr()
    assert captured.out == '1\n'
    assert 'does not have .hlang extension' in captured.err


def test_run_missing_file_exits(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(['run', str(tmp_path / 'nahi.hlang')])
    assert excinfo.value.code == 1
    assert 'not found' in capsys.readouterr().err


def test_run_without_file_exits(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(['run'])
    assert excinfo.value.code == 1
    assert 'Please provide a .hlang file' in capsys.readouterr().err


def test_runtime_error_exits(tmp_path, capsys):
    path = write_program(tmp_path, 'galat.hlang', 'bol("pehle") bol(/ 1 0)')
    with pytest.raises(SystemExit) as excinfo:
        main(['run', str(path)])
    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert captured.out == 'pehle\n'
    assert captured.err == 'Runtime Error: division by zero\n'


def test_version(capsys):
    main(['version'])
    assert capsys.readouterr().out.split('\n')[0] == VERSION
    main(['--version'])
    assert VERSION in capsys.readouterr().out


def test_help(capsys):
    main(['help'])
    assert 'Usage:' in capsys.readouterr().out


def test_no_command_shows_usage_and_fails(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 1
    assert 'Usage:' in capsys.readouterr().out


def test_emit_ast_then_run_it(tmp_path, capsys):
    path = write_program(tmp_path, 'jodo.hlang', 'firseKaro jodo(a, b) { wapas bhejo + a b } bol(jodo(2, 3))')
    main(['--emit-ast', str(path)])
    ast_path = capsys.readouterr().out.strip()
    assert ast_path == str(tmp_path / 'jodo.hlang.ast.json')
    main(['--ast', ast_path])
    assert capsys.readouterr().out == '5\n'


def test_ast_runtime_error_exits(tmp_path, capsys):
    path = write_program(tmp_path, 'nahi.hlang', 'bol(nahi)')
    main(['--emit-ast', str(path)])
    ast_path = capsys.readouterr().out.strip()
    with pytest.raises(SystemExit) as excinfo:
        main(['--ast', ast_path])
    assert excinfo.value.code == 1
    assert capsys.readouterr().err == 'Runtime Error: undefined variable: nahi\n'


def test_v_flag_is_verbosity_not_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(['-v'])
    assert excinfo.value.code == 1
    out = capsys.readouterr().out
    assert VERSION not in out
    assert 'use --version to show the version' in out
