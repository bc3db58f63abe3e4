from abc import ABC, abstractmethod


class FooInterface(ABC):
    @abstractmethod
    def name(self): ...


class Foo(FooInterface):
    __shared__ = True

    def name(self):
        return "foo"


class Bar:
    pass


class Biz:
    @classmethod
    def __shared__(cls):
        return True
