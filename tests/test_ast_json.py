import json

from glang.ast import Identifier, Literal, Program, ExprStmt
from glang.ast_json import ast_to_obj, ast_from_obj
from glang.interpreter import parse_program, Interpreter
from glang.types import NIL

SOURCE = '''
let sign(n) = if n < 0 { "neg" } else if n == 0 { nil } else { !false };
let x = -(1 + 2) * 3 / 4;
print (sign x) { let y = 2; y } (sign 0);
'''


def test_round_trip_through_json_preserves_the_tree():
    program = parse_program(SOURCE)
    restored = ast_from_obj(json.loads(json.dumps(ast_to_obj(program))))
    assert restored == program


def test_restored_program_runs(capsys):
    program = ast_from_obj(json.loads(json.dumps(ast_to_obj(parse_program(SOURCE)))))
    Interpreter().run(program)
    assert capsys.readouterr().out.strip() == 'neg 2 nil'


def test_nil_marker_and_identifier_slot():
    program = Program([ExprStmt(Literal(NIL)), ExprStmt(Identifier('x').resolve(4))])
    obj = ast_to_obj(program)
    assert obj['statements'][0]['expr']['value'] == {'__type__': 'Nil'}
    restored = ast_from_obj(obj)
    assert restored.statements[0].expr.value is NIL
    assert restored.statements[1].expr.slot == 4


def test_integer_literals_come_back_as_numbers():
    node = ast_from_obj({'type': 'Literal', 'value': 3})
    assert node == Literal(3.0)
    assert isinstance(node.value, float)
