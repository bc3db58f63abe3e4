from typing import Optional


class SimpleClass:
    def __init__(self, *args):
        self.name = args[0] if args else "foo"
        self.args = list(args)


class FooClass:
    def __init__(self):
        self.foo = "foo"


def ioc_function(*args):
    name = args[0] if args else "ioc"
    return name + ":" + "_".join(args)


def ioc_function_resolve(name="iocResolve", foo: Optional[FooClass] = None, *args):
    rs = name
    if foo:
        rs += "_" + foo.foo
    if args:
        rs += "_".join(args)
    return rs


class BarClass:
    def ioc_function(self, *args):
        return ioc_function(*args)

    def ioc_function_resolve(self, name="iocResolve", foo: Optional[FooClass] = None, *args):
        return ioc_function_resolve(name, foo, *args)


class BizClass:
    @staticmethod
    def ioc_function(*args):
        return ioc_function(*args)

    @staticmethod
    def ioc_function_resolve(name="iocResolve", foo: Optional[FooClass] = None, *args):
        return ioc_function_resolve(name, foo, *args)


def make_callback_function(obj):
    obj.set("c", "c")
