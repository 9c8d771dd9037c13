from glang.ast import Identifier, Literal
from glang.environment import Environment, GLOBAL
from glang.interpreter import UserFunction
from glang.types import NIL, ListVal


def test_define_and_get():
    env = Environment()
    env.define('a', 1.0)
    assert env.get('a') == 1.0
    assert env.get('missing') is None


def test_redefinition_overwrites():
    env = Environment()
    env.define('a', 1.0)
    env.define('a', 'two')
    assert env.get('a') == 'two'


def test_child_scope_shadows_without_mutating_parent():
    env = Environment()
    env.define('x', 'outer')
    child = env.push_scope(GLOBAL)
    env.define('x', 'inner', child)
    env.define('y', 'only inner', child)
    assert env.get('x', child) == 'inner'
    assert env.get('x') == 'outer'
    env.pop_scope(child)
    assert env.get('y') is None
    assert len(env) == 1


def test_lookup_walks_parents():
    env = Environment()
    env.define('g', 1.0)
    a = env.push_scope(GLOBAL)
    b = env.push_scope(a)
    env.define('a', 2.0, a)
    assert env.get('g', b) == 1.0
    assert env.get('a', b) == 2.0
    assert env.names(b) == ['a', 'g']


def test_captured_scopes_survive_pop_while_referenced():
    env = Environment()
    a = env.push_scope(GLOBAL)
    env.define('n', 5.0, a)
    closure = UserFunction('f', [], Identifier('n'), a)
    env.capture(a)
    env.pop_scope(a, closure)
    assert len(env) == 2
    assert env.get('n', a) == 5.0
    # frames pushed later do not reuse a retained index
    b = env.push_scope(GLOBAL)
    assert b != a
    env.pop_scope(b)
    assert len(env) == 2
    env.define('f', closure)
    env.collect()
    assert len(env) == 2
    env.define('f', 1.0)
    env.collect()
    assert len(env) == 1


def test_captured_scope_without_references_is_freed():
    env = Environment()
    a = env.push_scope(GLOBAL)
    env.define('g', UserFunction('g', [], Identifier('g'), a), a)
    env.capture(a)
    env.pop_scope(a, NIL)
    assert len(env) == 1


def test_held_values_keep_their_scopes():
    env = Environment()
    a = env.push_scope(GLOBAL)
    closure = UserFunction('f', [], Identifier('n'), a)
    env.capture(a)
    with env.holding([closure]):
        env.pop_scope(a)
        assert len(env) == 2
        env.collect()
        assert len(env) == 2
    env.collect()
    assert len(env) == 1


def test_closures_inside_lists_are_reachable():
    env = Environment()
    a = env.push_scope(GLOBAL)
    env.capture(a)
    env.pop_scope(a, ListVal((1.0, ListVal((UserFunction('f', [], Literal(NIL), a),)))))
    assert len(env) == 2


def test_freed_slots_are_reused():
    env = Environment()
    a = env.push_scope(GLOBAL)
    b = env.push_scope(GLOBAL)
    env.pop_scope(a)
    assert len(env) == 2
    c = env.push_scope(GLOBAL)
    assert c == a
    env.pop_scope(b)
    env.pop_scope(c)
    assert len(env) == 1
    assert len(env.scopes) == 1



def test_global_scope_is_never_released():
    env = Environment()
    env.define('keep', True)
    env.pop_scope(GLOBAL)
    assert env.get('keep') is True
