import inspect
import typing
import weakref
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple, Union, get_args, get_origin

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)

_specs: "weakref.WeakKeyDictionary[Any, Optional[CallableSpec]]" = weakref.WeakKeyDictionary()


@dataclass(frozen=True)
class ParameterSpec:
    """One formal parameter of an analysed target.

    Attributes:
        name: Parameter name.
        kind: The :class:`inspect.Parameter` kind.
        dependency: Class to auto-resolve when no value is supplied, if the
            declared type is a non-builtin class.
        default: Declared default, or :data:`inspect.Parameter.empty`.
    """

    name: str
    kind: Any
    dependency: Optional[type] = None
    default: Any = inspect.Parameter.empty

    @property
    def has_default(self) -> bool:
        return self.default is not inspect.Parameter.empty

    @property
    def is_positional(self) -> bool:
        return self.kind in _POSITIONAL


@dataclass(frozen=True)
class CallableSpec:
    """Signature descriptor built once per target."""

    parameters: Tuple[ParameterSpec, ...]
    var_positional: bool = False
    var_keyword: bool = False

    @property
    def positional(self) -> Tuple[ParameterSpec, ...]:
        return tuple(p for p in self.parameters if p.is_positional)

    def names(self) -> Tuple[str, ...]:
        return tuple(p.name for p in self.parameters)


def _check_optional(ann: Any) -> Any:
    origin = get_origin(ann)
    if origin is Union:
        args = [a for a in get_args(ann) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return ann


def dependency_type(ann: Any) -> Optional[type]:
    """Return the class an annotation asks to auto-resolve, or ``None``.

    Builtin types (``str``, ``int``, ``list`` ...) and typing constructs are
    never auto-resolved.
    """
    if ann is inspect.Parameter.empty:
        return None
    base = _check_optional(ann)
    if not inspect.isclass(base):
        return None
    if base.__module__ in ("builtins", "typing") or get_origin(base) is not None:
        return None
    return base


def _hints_for(target: Any) -> Dict[str, Any]:
    obj = target.__init__ if inspect.isclass(target) else target
    try:
        return typing.get_type_hints(obj)
    except Exception:
        return {}


def _analyze(target: Callable[..., Any]) -> Optional[CallableSpec]:
    try:
        sig = inspect.signature(target)
    except (ValueError, TypeError):
        return None

    hints = _hints_for(target)
    params = []
    var_positional = var_keyword = False

    for name, param in sig.parameters.items():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            var_positional = True
            continue
        if param.kind is inspect.Parameter.VAR_KEYWORD:
            var_keyword = True
            continue
        ann = hints.get(name, param.annotation)
        params.append(
            ParameterSpec(
                name=name,
                kind=param.kind,
                dependency=dependency_type(ann),
                default=param.default,
            )
        )

    return CallableSpec(parameters=tuple(params), var_positional=var_positional, var_keyword=var_keyword)


def analyze_callable(target: Callable[..., Any]) -> Optional[CallableSpec]:
    """Describe the formal parameters of *target*.

    Functions and classes are analysed once and the descriptor is cached for
    as long as the target lives. Returns ``None`` when the target has no
    introspectable signature (some builtins), in which case supplied arguments
    are passed through untouched.
    """
    cacheable = inspect.isfunction(target) or inspect.isclass(target)
    if cacheable:
        try:
            return _specs[target]
        except KeyError:
            pass
    spec = _analyze(target)
    if cacheable:
        _specs[target] = spec
    return spec
