import pytest

from frothy.errors import FrothyStackUnderflow, FrothyTypeMismatch, FrothyUnboundName
from frothy.reader.lexer import lex
from frothy.types.environment import Environment
from frothy.types.stack import Stack
from frothy.types.values import Block, DeferredRef, Function


def test_environment_set_get_overwrite():
    env = Environment()
    env.set("x", 1.0)
    assert env.get("x") == 1.0
    env.set("x", 2.0)
    assert env.get("x") == 2.0
    assert "x" in env and "y" not in env
    assert len(env) == 1


def test_environment_unbound():
    env = Environment({"a": 1.0})
    with pytest.raises(FrothyUnboundName) as info:
        env.get("b")
    assert info.value.name == "b"
    assert info.value.kind == "UnboundName"


def test_environment_rejects_bad_bindings():
    env = Environment()
    with pytest.raises(FrothyTypeMismatch):
        env.set(DeferredRef("x"), 1.0)
    with pytest.raises(FrothyTypeMismatch):
        env.set("x", DeferredRef("y"))


def test_environment_update_names_and_repr():
    env = Environment()
    env.update({"b": 2.0, "a": 1.0})
    assert env.names() == ["a", "b"]
    assert str(env) == "{b: 2.0, a: 1.0}"
    assert repr(env) == "<Environment {b: 2.0, a: 1.0}>"


def test_stack_push_pop_order():
    s = Stack()
    for v in (1.0, 2.0, 3.0):
        s.push(v)
    assert s.peek() == 3.0
    assert s.pop_n(2) == [2.0, 3.0]
    assert s.pop() == 1.0
    assert len(s) == 0


def test_stack_underflow_leaves_contents():
    s = Stack([1.0])
    with pytest.raises(FrothyStackUnderflow) as info:
        s.pop_n(3)
    assert (info.value.expected, info.value.got) == (3, 1)
    assert s.snapshot() == [1.0]
    s.clear()
    with pytest.raises(FrothyStackUnderflow):
        s.pop()
    with pytest.raises(FrothyStackUnderflow):
        s.peek()
    assert s.pop_n(0) == []


def test_deferred_ref_identity():
    assert DeferredRef("a") == DeferredRef("a")
    assert DeferredRef("a") != DeferredRef("b")
    assert DeferredRef("a") != "a"
    assert hash(DeferredRef("a")) == hash(DeferredRef("a"))
    assert repr(DeferredRef("a")) == "DeferredRef('a')"


def test_block_and_function_equality():
    b1 = Block(lex("1 2 +"))
    b2 = Block(lex("1  2\n+"))
    assert b1 == b2
    assert Function(b1) == Function(b2)
    assert Function(b1) != b1
    assert repr(Function(b1)) == "Function('{ 1 2 + }')"
    assert Function(b1).tokens == b1.tokens
