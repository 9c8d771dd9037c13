import builtins

import pytest

from glang.errors import DiagnosticType, GlangIOError, GlangTypeError
from glang.interpreter import Interpreter, parse_program
from glang.types import NIL, ListVal


def evaluate(source):
    interp = Interpreter()
    value = NIL
    for stmt in parse_program(source).statements:
        value = interp.execute(stmt)
    return value


def test_print_joins_arguments(capsys):
    assert evaluate('print "a" 1 2.5 true nil;') is NIL
    assert capsys.readouterr().out == 'a 1 2.5 true nil\n'


def test_print_without_arguments(capsys):
    evaluate('print();')
    assert capsys.readouterr().out == '\n'


def test_list_and_len():
    assert evaluate('list 1 "b";') == ListVal((1.0, 'b'))
    assert evaluate('list();') == ListVal(())
    assert evaluate('len (list 1 2 3);') == 3.0
    assert evaluate('len "four";') == 4.0
    with pytest.raises(GlangTypeError) as info:
        evaluate('len 5;')
    assert info.value.expected is DiagnosticType.List


def test_str_and_num():
    assert evaluate('str 42;') == '42'
    assert evaluate('str (list "a" 1);') == '["a", 1]'
    assert evaluate('num "12.5";') == 12.5
    assert evaluate('num "twelve";') is NIL
    assert evaluate('num 3;') == 3.0
    with pytest.raises(GlangTypeError) as info:
        evaluate('num true;')
    assert info.value.expected is DiagnosticType.Str


def test_read_line(monkeypatch):
    monkeypatch.setattr(builtins, 'input', lambda prompt='': 'typed')
    assert evaluate('read_line();') == 'typed'


def test_read_file(tmp_path):
    path = tmp_path / 'data.txt'
    path.write_text('contents', encoding='utf-8')
    assert evaluate(f'read_file "{path.as_posix()}";') == 'contents'
    assert evaluate(f'file_exists "{path.as_posix()}";') is True


def test_read_missing_file_is_an_io_error(tmp_path):
    missing = (tmp_path / 'missing.txt').as_posix()
    assert evaluate(f'file_exists "{missing}";') is False
    with pytest.raises(GlangIOError) as info:
        evaluate(f'read_file "{missing}";')
    assert str(info.value).startswith('runtime error: I/O error')


def test_natives_can_be_shadowed_by_user_bindings():
    assert evaluate('let len(x) = "mine"; len 1;') == 'mine'


def test_read_file_with_invalid_utf8_is_an_io_error(tmp_path):
    path = tmp_path / 'bad.bin'
    path.write_bytes(b'\xff\xfe\xfa')
    with pytest.raises(GlangIOError) as info:
        evaluate(f'read_file "{path.as_posix()}";')
    assert 'not valid UTF-8' in str(info.value)
