# tests/test_container_invocation.py
from typing import Optional
from unittest import mock

import pytest

from wirebox import (
    ArgumentError,
    Container,
    InstantiationError,
    InvalidReferenceError,
    UnresolvedDependencyError,
)
from wirebox_samples import helpers
from wirebox_samples.helpers import BarClass, BizClass, FooClass

FN = "wirebox_samples.helpers.ioc_function"
FN_RESOLVE = "wirebox_samples.helpers.ioc_function_resolve"


def verify_callable(ioc, method, fn, fn_resolve):
    invoke = getattr(ioc, method)
    assert invoke(fn) == "ioc:"
    assert invoke(fn, "foo", "bar") == "foo:foo_bar"
    assert invoke(fn, "foo", "bar", "biz") == "foo:foo_bar_biz"

    assert invoke(fn_resolve) == "iocResolve_foo"
    assert invoke(fn_resolve, "foo") == "foo_foo"
    assert invoke(fn_resolve, "foo", None) == "foo"
    assert invoke(fn_resolve, "foo", None, "bar", "biz") == "foobar_biz"

    foo = FooClass()
    foo.foo = "fooClass"
    assert invoke(fn_resolve, "foo", foo) == "foo_fooClass"
    assert invoke(fn_resolve, "foo", foo, "bar", "biz") == "foo_fooClassbar_biz"


def check_callable(ioc, fn, fn_resolve, bound=None, bound_resolve=None):
    verify_callable(ioc, "load", fn, fn_resolve)
    verify_callable(ioc, "call", fn, fn_resolve)
    if bound and bound_resolve:
        verify_callable(ioc, "load", bound, bound_resolve)
        with pytest.raises(InstantiationError):
            verify_callable(ioc, "call", bound, bound_resolve)


def test_closures():
    def fn(*args):
        name = args[0] if args else "ioc"
        return name + ":" + "_".join(args)

    def fn_resolve(name="iocResolve", foo: Optional[FooClass] = None, *args):
        return helpers.ioc_function_resolve(name, foo, *args)

    ioc = Container()
    ioc.bind("f", fn)
    ioc.bind("fr", fn_resolve)
    check_callable(ioc, fn, fn_resolve, "f", "fr")


def test_function_names():
    ioc = Container()
    ioc.bind("f", FN)
    ioc.bind("fr", FN_RESOLVE)
    check_callable(ioc, FN, FN_RESOLVE, "f", "fr")


def test_bound_method_references():
    ioc = Container()
    ioc.bind("f", BarClass)
    bar = "wirebox_samples.helpers.BarClass"
    check_callable(
        ioc,
        f"{bar}@ioc_function",
        f"{bar}@ioc_function_resolve",
        "f@ioc_function",
        "f@ioc_function_resolve",
    )


def test_bound_method_reference_uses_shared_instance():
    ioc = Container()
    ioc.bind_shared("kv", "wirebox_samples.factory.SimpleKv")
    ioc.load("kv").set("a", 1)
    assert ioc.load("kv@get", "a") == 1


def test_object_method_tuples():
    ioc = Container()
    bar = BarClass()
    check_callable(ioc, (bar, "ioc_function"), (bar, "ioc_function_resolve"))
    check_callable(ioc, bar.ioc_function, bar.ioc_function_resolve)


def test_static_method_tuples():
    ioc = Container()
    check_callable(ioc, (BizClass, "ioc_function"), (BizClass, "ioc_function_resolve"))
    biz = "wirebox_samples.helpers.BizClass"
    check_callable(ioc, (biz, "ioc_function"), (biz, "ioc_function_resolve"))


def test_static_method_strings():
    ioc = Container()
    biz = "wirebox_samples.helpers.BizClass"
    check_callable(ioc, f"{biz}::ioc_function", f"{biz}::ioc_function_resolve")


def test_static_reference_bypasses_bindings():
    ioc = Container()
    ioc.bind("wirebox_samples.helpers.BizClass", BarClass)
    assert ioc.load("wirebox_samples.helpers.BizClass::ioc_function") == "ioc:"


@pytest.mark.parametrize("reference", [
    "wirebox_samples.helpers.BizClass::",
    "::ioc_function",
    "a::b::c",
    "wirebox_samples.helpers.BarClass@",
    "a@b@c",
])
def test_malformed_references(reference):
    ioc = Container()
    with pytest.raises(InvalidReferenceError):
        ioc.load(reference)


def test_missing_method():
    ioc = Container()
    with pytest.raises(InvalidReferenceError, match="missing"):
        ioc.call("wirebox_samples.helpers.BizClass::missing")
    with pytest.raises(InvalidReferenceError):
        ioc.call((BizClass(), "missing"))


def test_missing_static_owner():
    ioc = Container()
    with pytest.raises(InstantiationError, match="not found"):
        ioc.call("nowhere.Missing::run")


def test_invalid_reference_values():
    ioc = Container()
    with pytest.raises(ArgumentError):
        ioc.load("")
    with pytest.raises(ArgumentError):
        ioc.call(42)
    with pytest.raises(ArgumentError):
        ioc.bind("x", 42)


def test_defaults_only_invokes_without_arguments():
    def target(a=1, b=2):
        return a + b

    spy = mock.create_autospec(target, return_value="called")
    ioc = Container()
    assert ioc.call(spy) == "called"
    spy.assert_called_once_with()


def test_explicit_argument_passes_every_positional():
    def target(a=1, b=2):
        return a + b

    spy = mock.create_autospec(target, return_value="called")
    ioc = Container()
    ioc.call(spy, b=5)
    spy.assert_called_once_with(1, 5)


def test_extra_arguments_reach_var_positional():
    ioc = Container()
    assert ioc.call(lambda *args: args, 1, 2, 3) == (1, 2, 3)


def test_extra_arguments_are_dropped_without_var_positional(captured_logs):
    ioc = Container()
    assert ioc.call(lambda a: a, 1, 2, 3) == 1
    assert any("Dropping 2 extra argument(s)" in line for line in captured_logs)


def test_keyword_arguments():
    def target(a, *, flag=False, **rest):
        return a, flag, rest

    ioc = Container()
    assert ioc.call(target, 1, flag=True, other="x") == (1, True, {"other": "x"})


def test_duplicate_and_unknown_keywords():
    ioc = Container()
    with pytest.raises(ArgumentError, match="multiple values"):
        ioc.call(lambda a: a, 1, a=2)
    with pytest.raises(ArgumentError, match="Unexpected keyword"):
        ioc.call(lambda a: a, b=2)


def test_missing_required_parameter():
    def target(value):
        return value

    ioc = Container()
    with pytest.raises(UnresolvedDependencyError) as exc:
        ioc.call(target)
    assert exc.value.parameter == "value"
    assert exc.value.owner is target


def test_unbuildable_dependency_is_wrapped():
    from wirebox_samples.factory import SimpleKvInterface

    def target(kv: SimpleKvInterface):
        return kv

    ioc = Container()
    with pytest.raises(UnresolvedDependencyError) as exc:
        ioc.call(target)
    assert isinstance(exc.value.cause, InstantiationError)
    assert exc.value.__cause__ is exc.value.cause


def test_optional_dependency_falls_back_to_default(captured_logs):
    from wirebox_samples.factory import SimpleKvInterface

    def target(kv: Optional[SimpleKvInterface] = None):
        return kv

    ioc = Container()
    assert ioc.call(target) is None
    assert any("Using default for parameter 'kv'" in line for line in captured_logs)


def test_builtin_annotations_are_not_auto_resolved():
    def target(name: str = "x", count: int = 2):
        return name * count

    ioc = Container()
    assert ioc.call(target) == "xx"


def test_class_without_initializer_ignores_arguments():
    class Plain:
        pass

    ioc = Container()
    assert isinstance(ioc.call(Plain, 1, 2, key="value"), Plain)


def test_target_exceptions_propagate():
    def boom():
        raise RuntimeError("boom")

    ioc = Container()
    with pytest.raises(RuntimeError, match="boom"):
        ioc.call(boom)


def test_builtin_without_signature_gets_arguments_unchanged():
    ioc = Container()
    with mock.patch("wirebox.resolution.analyze_callable", return_value=None):
        assert ioc.call(max, 3, 9, 4) == 9


def test_container_parameter_is_injected():
    def target(container: Container):
        return container

    ioc = Container()
    assert ioc.call(target) is ioc
