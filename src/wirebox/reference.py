"""Reference kinds accepted by ``load`` and ``call``, and locating types by path.

A reference is parsed once into one of the tagged kinds below instead of
being re-inspected at every step:

- :class:`FunctionRef` -- a callable that is not a class.
- :class:`ConstructorRef` -- a class object to instantiate.
- :class:`NamedRef` -- a dotted path, located to a class or a callable.
- :class:`StaticMethodRef` -- ``"pkg.mod.Type::method"``; the type is located
  directly, bypassing the container.
- :class:`BoundMethodRef` -- ``"pkg.mod.Type@method"``; the type is produced
  first, then the method is called on that instance.
"""

import importlib
import inspect
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Union

from .constants import BOUND_CALL, PATH_SEPARATOR, STATIC_CALL
from .exceptions import ArgumentError, InvalidReferenceError


@dataclass(frozen=True)
class FunctionRef:
    func: Callable[..., Any]


@dataclass(frozen=True)
class ConstructorRef:
    cls: type


@dataclass(frozen=True)
class NamedRef:
    name: str


@dataclass(frozen=True)
class StaticMethodRef:
    owner: Union[str, type]
    method: str


@dataclass(frozen=True)
class BoundMethodRef:
    owner: str
    method: str


Reference = Union[FunctionRef, ConstructorRef, NamedRef, StaticMethodRef, BoundMethodRef]


def normalize(name: str) -> str:
    """Strip leading path separators from *name*."""
    return name.lstrip(PATH_SEPARATOR)


def type_name(cls: type) -> str:
    """Return the dotted path naming *cls*."""
    return f"{cls.__module__}{PATH_SEPARATOR}{cls.__qualname__}"


def _split(reference: str, separator: str):
    segments = reference.split(separator)
    if len(segments) != 2 or not segments[0] or not segments[1]:
        raise InvalidReferenceError(reference)
    return normalize(segments[0]), segments[1]


def parse_reference(reference: Any) -> Reference:
    """Classify *reference* into one of the reference kinds.

    Raises:
        InvalidReferenceError: For malformed ``"::"`` / ``"@"`` strings.
        ArgumentError: For empty names and values that are not references.
    """
    if isinstance(reference, str):
        if STATIC_CALL in reference:
            owner, method = _split(reference, STATIC_CALL)
            return StaticMethodRef(owner, method)
        if BOUND_CALL in reference:
            owner, method = _split(reference, BOUND_CALL)
            return BoundMethodRef(owner, method)
        name = normalize(reference)
        if not name:
            raise ArgumentError("Reference name can not be empty.")
        return NamedRef(name)
    if isinstance(reference, tuple):
        if len(reference) != 2 or not isinstance(reference[1], str) or not reference[1]:
            raise InvalidReferenceError(reference, "expected an (owner, 'method') pair")
        owner, method = reference
        if isinstance(owner, str) or inspect.isclass(owner):
            return StaticMethodRef(owner, method)
        try:
            return FunctionRef(getattr(owner, method))
        except AttributeError:
            raise InvalidReferenceError(reference, f"'{type(owner).__name__}' has no method '{method}'") from None
    if inspect.isclass(reference):
        return ConstructorRef(reference)
    if callable(reference):
        return FunctionRef(reference)
    raise ArgumentError(f"Invalid reference {reference!r}: expected a name, a type or a callable.")


def _within(module_name: str, package: str) -> bool:
    return module_name == package or module_name.startswith(package + PATH_SEPARATOR)


def locate(name: str, known: Optional[Mapping[str, Any]] = None) -> Any:
    """Find the object a dotted path names, importing modules as needed.

    *known* is consulted first so that types which cannot be imported by path
    (for instance classes defined inside a function) can still be found.
    Single-segment names are only looked up in *known*.

    Returns:
        The located object, or ``None`` when nothing matches.

    Raises:
        ImportError: If a module on the path exists but fails to import.
    """
    if known and name in known:
        return known[name]
    parts = name.split(PATH_SEPARATOR)
    if len(parts) < 2 or not all(parts):
        return None
    for i in range(len(parts) - 1, 0, -1):
        module_name = PATH_SEPARATOR.join(parts[:i])
        try:
            obj = importlib.import_module(module_name)
        except ModuleNotFoundError as exc:
            # Only a missing candidate module means "try a shorter path".
            if exc.name is None or not _within(module_name, exc.name):
                raise
            continue
        for attr in parts[i:]:
            obj = getattr(obj, attr, None)
            if obj is None:
                return None
        return obj
    return None
