import io
import json
import sys

from glang.__main__ import main


def write(tmp_path, name, source):
    path = tmp_path / name
    path.write_text(source, encoding='utf-8')
    return path


def test_run_file(tmp_path, capsys):
    path = write(tmp_path, 'hello.gl', 'let who = "world"; print ("hello " + who);')
    assert main([str(path)]) == 0
    assert capsys.readouterr().out.strip() == 'hello world'


def test_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / 'nope.gl')]) == 1
    assert 'not found' in capsys.readouterr().err


def test_parse_error_is_reported(tmp_path, capsys):
    path = write(tmp_path, 'bad.gl', 'let x 1;')
    assert main([str(path)]) == 1
    assert "parse error at 1:7: expected '='" in capsys.readouterr().err


def test_runtime_error_is_reported(tmp_path, capsys):
    path = write(tmp_path, 'bad.gl', 'print "before"; 1 + true; print "after";')
    assert main([str(path)]) == 1
    captured = capsys.readouterr()
    assert captured.out.strip() == 'before'
    assert 'runtime error: type error: expected Num, found Bool' in captured.err


def test_unbounded_recursion_is_reported(tmp_path, capsys):
    path = write(tmp_path, 'loop.gl', 'let f(x) = f x; f 1;')
    assert main([str(path)]) == 1
    assert 'maximum recursion depth' in capsys.readouterr().err


def test_tokens(tmp_path, capsys):
    path = write(tmp_path, 'toks.gl', 'let x = 1;')
    assert main(['--tokens', str(path)]) == 0
    lines = capsys.readouterr().out.strip().split('\n')
    assert lines[0] == "LET('let') at 1:1"
    assert len(lines) == 5


def test_emit_ast_then_run_it(tmp_path, capsys):
    path = write(tmp_path, 'prog.gl', 'let f(x) = x * 2; print (f 21);')
    assert main(['--emit-ast', str(path)]) == 0
    out_path = tmp_path / 'prog.gl.ast.json'
    assert capsys.readouterr().out.strip() == str(out_path)
    data = json.loads(out_path.read_text(encoding='utf-8'))
    assert data['type'] == 'Program'
    assert main(['--ast', str(out_path)]) == 0
    assert capsys.readouterr().out.strip() == '42'


def test_repl(monkeypatch, capsys):
    session = '\n'.join([
        'let x = 2;',
        'x * 21',
        '"text"',
        'print "side effect"',
        'oops',
        ':env',
    ]) + '\n'
    monkeypatch.setattr(sys, 'stdin', io.StringIO(session))
    assert main([]) == 0
    captured = capsys.readouterr()
    out_lines = captured.out.strip().split('\n')
    assert out_lines[0] == '42'
    assert out_lines[1] == '"text"'
    assert out_lines[2] == 'side effect'
    assert 'x' in out_lines[3].split()
    assert 'print' in out_lines[3].split()
    assert "undefined identifier 'oops'" in captured.err
    assert captured.err.startswith('glang v0.1.0')
    assert captured.err.rstrip().endswith('Goodbye! o/')


def test_repl_skips_comment_only_lines(monkeypatch, capsys):
    session = '// just a note\nlet x = 1; // trailing note\nx + 1 // and here\n'
    monkeypatch.setattr(sys, 'stdin', io.StringIO(session))
    assert main([]) == 0
    captured = capsys.readouterr()
    assert captured.out.strip() == '2'
    assert 'error' not in captured.err


def test_ast_mode_reports_malformed_json(tmp_path, capsys):
    path = write(tmp_path, 'broken.ast.json', '{"type": "Program", ')
    assert main(['--ast', str(path)]) == 1
    assert 'invalid AST file' in capsys.readouterr().err


def test_ast_mode_reports_unknown_nodes(tmp_path, capsys):
    path = write(tmp_path, 'odd.ast.json', json.dumps({'type': 'Loop'}))
    assert main(['--ast', str(path)]) == 1
    assert 'Unknown AST node type: Loop' in capsys.readouterr().err
    path = write(tmp_path, 'short.ast.json', json.dumps({'type': 'Let'}))
    assert main(['--ast', str(path)]) == 1
    assert 'invalid AST file' in capsys.readouterr().err


def test_unreadable_file_is_a_runtime_error(tmp_path, capsys):
    (tmp_path / 'bad.bin').write_bytes(b'\xff\xfe\xfa')
    data = (tmp_path / 'bad.bin').as_posix()
    path = write(tmp_path, 'read.gl', f'print (read_file "{data}");')
    assert main([str(path)]) == 1
    assert 'runtime error: I/O error' in capsys.readouterr().err
