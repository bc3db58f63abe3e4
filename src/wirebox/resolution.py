import inspect
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from .analysis import CallableSpec, ParameterSpec, analyze_callable
from .constants import LOGGER
from .exceptions import (
    ArgumentError,
    CircularDependencyError,
    InstantiationError,
    InvalidReferenceError,
    UnresolvedDependencyError,
)
from .reference import (
    BoundMethodRef,
    ConstructorRef,
    FunctionRef,
    NamedRef,
    StaticMethodRef,
    locate,
    parse_reference,
)


def _owner_name(owner: Any) -> str:
    return getattr(owner, "__qualname__", None) or getattr(owner, "__name__", None) or repr(owner)


class _ResolutionMixin:
    """Reflective argument resolution and invocation.

    Expects the host class to provide ``_load(reference, args, kwargs, once)``
    for auto-resolving typed dependencies and a ``_types`` mapping of known
    type names.
    """

    _types: Dict[str, type]

    def _locate(self, name: str) -> Any:
        return locate(name, self._types)

    def _invoke(self, reference: Any, args: Tuple[Any, ...] = (), kwargs: Optional[Mapping[str, Any]] = None, routed: bool = False) -> Any:
        """Invoke or construct *reference* with the supplied arguments.

        With *routed* set, the type segment of a ``"Type@method"`` reference
        is produced through ``load`` (aliases, bindings and sharing apply);
        otherwise it is constructed directly.
        """
        kwargs = dict(kwargs or {})
        ref = parse_reference(reference)

        if isinstance(ref, FunctionRef):
            return self._call_function(ref.func, args, kwargs)
        if isinstance(ref, ConstructorRef):
            return self._construct(ref.cls, args, kwargs)
        if isinstance(ref, NamedRef):
            return self._build_named(ref.name, args, kwargs)
        if isinstance(ref, StaticMethodRef):
            owner = ref.owner if inspect.isclass(ref.owner) else self._locate(ref.owner)
            if owner is None:
                raise InstantiationError(ref.owner, "not found")
            return self._call_function(self._method_of(owner, ref), args, kwargs)
        if isinstance(ref, BoundMethodRef):
            if routed:
                target = self._load(ref.owner, (), {}, once=False)
            else:
                target = self._build_named(ref.owner, (), {})
            return self._call_function(self._method_of(target, ref), args, kwargs)
        raise ArgumentError(f"Unsupported reference: {reference!r}")

    @staticmethod
    def _method_of(owner: Any, ref: Any) -> Callable[..., Any]:
        method = getattr(owner, ref.method, None)
        if not callable(method):
            raise InvalidReferenceError(f"{_owner_name(owner)}.{ref.method}", f"no callable method '{ref.method}'")
        return method

    def _build_named(self, name: str, args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> Any:
        target = self._locate(name)
        if inspect.isclass(target):
            return self._construct(target, args, kwargs)
        if callable(target):
            return self._call_function(target, args, kwargs)
        raise InstantiationError(name)

    def _construct(self, cls: type, args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> Any:
        if inspect.isabstract(cls) or getattr(cls, "_is_protocol", False):
            raise InstantiationError(cls)
        # No initializer of its own: supplied arguments are ignored.
        if cls.__init__ is object.__init__ and cls.__new__ is object.__new__:
            return cls()
        positional, keywords = self._resolve_args(analyze_callable(cls), cls, args, kwargs)
        return cls(*positional, **keywords)

    def _call_function(self, fn: Callable[..., Any], args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> Any:
        positional, keywords = self._resolve_args(analyze_callable(fn), fn, args, kwargs)
        return fn(*positional, **keywords)

    def _resolve_args(
        self,
        spec: Optional[CallableSpec],
        owner: Any,
        args: Tuple[Any, ...],
        kwargs: Dict[str, Any],
    ) -> Tuple[List[Any], Dict[str, Any]]:
        if spec is None:
            return list(args), dict(kwargs)

        positional = spec.positional
        supplied: Dict[str, Any] = {}
        extras: List[Any] = []
        for index, value in enumerate(args):
            if index < len(positional):
                supplied[positional[index].name] = value
            else:
                extras.append(value)

        names = spec.names()
        passthrough: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if key in names:
                if key in supplied:
                    raise ArgumentError(f"Got multiple values for parameter '{key}' of '{_owner_name(owner)}'")
                supplied[key] = value
            elif spec.var_keyword:
                passthrough[key] = value
            else:
                raise ArgumentError(f"Unexpected keyword argument '{key}' for '{_owner_name(owner)}'")

        use_args = bool(extras or passthrough)
        values: Dict[str, Any] = {}
        for param in spec.parameters:
            if param.name in supplied:
                values[param.name] = supplied[param.name]
                use_args = True
            else:
                values[param.name], resolved = self._resolve_parameter(param, owner)
                use_args = use_args or resolved

        # Only defaults in play: invoke bare so the target sees no arguments.
        if not use_args:
            return [], {}

        out_args = [values[p.name] for p in positional]
        out_kwargs = {p.name: values[p.name] for p in spec.parameters if not p.is_positional}
        out_kwargs.update(passthrough)
        if extras:
            if spec.var_positional:
                out_args.extend(extras)
            else:
                LOGGER.debug("Dropping %d extra argument(s) not accepted by %s", len(extras), _owner_name(owner))
        return out_args, out_kwargs

    def _resolve_parameter(self, param: ParameterSpec, owner: Any) -> Tuple[Any, bool]:
        if param.dependency is not None:
            try:
                return self._load(param.dependency, (), {}, once=False), True
            except Exception as e:
                if param.has_default:
                    LOGGER.debug(
                        "Using default for parameter '%s' of %s; %s could not be resolved: %s",
                        param.name, _owner_name(owner), param.dependency.__name__, e,
                    )
                    return param.default, False
                if isinstance(e, (UnresolvedDependencyError, CircularDependencyError)):
                    raise
                raise UnresolvedDependencyError(param.name, owner, e) from e
        if param.has_default:
            return param.default, False
        raise UnresolvedDependencyError(param.name, owner)
