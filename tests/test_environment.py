import pytest

from archscript.types import Integer
from archscript.types.errors import ArchError, ArchUnboundSymbol


def test_define_and_lookup(env):
    env.define("x", Integer(1))
    assert env.lookup("x") == Integer(1)


def test_lookup_unbound(env):
    with pytest.raises(ArchUnboundSymbol) as exc:
        env.lookup("nope")
    assert exc.value.message == "unbound symbol [nope]"


def test_set_creates_global_when_unbound(env):
    env.push()
    env.set("g", Integer(3))
    env.pop()
    assert env.lookup("g") == Integer(3)


def test_set_updates_nearest_binding(env):
    env.define("x", Integer(0))
    env.push({"x": Integer(1)})
    env.push()
    env.set("x", Integer(2))
    assert env.frames[0]["x"] == Integer(2)
    assert env.globals["x"] == Integer(0)


def test_set_local_shadows(env):
    env.define("x", Integer(1))
    with env.scope():
        env.set_local("x", Integer(2))
        assert env.lookup("x") == Integer(2)
    assert env.lookup("x") == Integer(1)


def test_set_local_without_frames_is_global(env):
    env.set_local("x", Integer(5))
    assert env.globals["x"] == Integer(5)


def test_push_copies_the_frame(env):
    frame = {"a": Integer(1)}
    env.push(frame)
    env.set_local("a", Integer(2))
    assert frame["a"] == Integer(1)


def test_pop_underflow(env):
    with pytest.raises(ArchError) as exc:
        env.pop()
    assert exc.value.message == "frame stack underflow"


def test_scope_pops_on_error(env):
    with pytest.raises(ArchError):
        with env.scope({"a": Integer(1)}):
            assert env.depth == 1
            raise ArchError("x")
    assert env.depth == 0


def test_find_prefers_innermost(env):
    env.define("x", Integer(0))
    env.push({"x": Integer(1)})
    env.push({"x": Integer(2)})
    assert env.find("x") is env.frames[-1]
    assert env.find("y") is None


def test_str_and_repr(env):
    env.define("x", Integer(1))
    env.push({"a": Integer(1)})
    assert str(env) == "{a: 1} -> 0 frames + globals"
    assert repr(env) == "<Environment frames: {a: 1} -> <1 globals>>"
