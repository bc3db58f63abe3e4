# src/wirebox/container.py
import inspect
import threading
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from .aliases import AliasRegistry
from .bindings import Binding, BindingRegistry
from .callbacks import CallbackRegistry
from .config import ContainerConfig
from .constants import BOUND_CALL, LOGGER, STATIC_CALL
from .exceptions import ArgumentError, CircularDependencyError
from .instances import InstanceCache
from .reference import normalize, type_name
from .resolution import _ResolutionMixin

KeyT = Union[str, type]
AbstractT = Union[KeyT, Mapping[str, KeyT]]


class Container(_ResolutionMixin):
    """Binding/alias registry, shared-instance cache and dependency resolver.

    Names are dotted paths; a class may be given wherever a name is expected.
    ``load`` resolves a name through aliases and bindings, builds it (auto-
    resolving typed constructor parameters), fires ``on_make`` callbacks and
    caches the result of shared bindings. ``call`` invokes or constructs a
    target ad hoc, without consulting bindings for the target itself.

    Args:
        config: Optional :class:`~wirebox.config.ContainerConfig`.
    """

    def __init__(self, config: Optional[ContainerConfig] = None) -> None:
        self.config = config or ContainerConfig()
        self._reserved = self.config.reserved_name
        self._lock = threading.RLock()
        self._aliases = AliasRegistry(self._reserved)
        self._bindings = BindingRegistry()
        self._instances = InstanceCache()
        self._callbacks = CallbackRegistry()
        self._types: Dict[str, type] = {}
        self._building: List[str] = []
        self._alias_identity()

    def _alias_identity(self) -> None:
        for klass in type(self).__mro__:
            if issubclass(klass, Container):
                self._set_alias(self._key(klass), self._reserved)

    # ---------------- names ----------------

    def _key(self, abstract: KeyT) -> str:
        if inspect.isclass(abstract):
            name = type_name(abstract)
            self._types[name] = abstract
            return name
        if isinstance(abstract, str):
            name = normalize(abstract)
            if name:
                return name
        raise ArgumentError(f"Argument abstract can not be empty or {type(abstract).__name__}.")

    def _split_abstract(self, abstract: AbstractT) -> Tuple[str, Optional[str]]:
        if not isinstance(abstract, Mapping):
            return self._key(abstract), None
        if len(abstract) != 1:
            raise ArgumentError("Alias form expects exactly one {alias: abstract} item.")
        ((alias, target),) = abstract.items()
        name = self._key(target)
        alias_key = self._key(alias) if alias else None
        return name, (None if alias_key == name else alias_key)

    def _abstract_set(self, abstract: AbstractT) -> str:
        name, alias = self._split_abstract(abstract)
        if alias:
            self._set_alias(alias, name)
        return name

    def _concrete(self, concrete: Any) -> Any:
        if concrete is None or concrete == "":
            return None
        if isinstance(concrete, str):
            return normalize(concrete) or None
        if inspect.isclass(concrete):
            return self._key(concrete)
        if callable(concrete) or isinstance(concrete, tuple):
            return concrete
        raise ArgumentError(f"Concrete must be a name, a type or a callable, got {type(concrete).__name__}.")

    # ---------------- alias hooks ----------------

    def _set_alias(self, alias: str, target: str) -> None:
        self._aliases.set(alias, target)

    def _remove_alias(self, alias: str) -> None:
        self._aliases.remove(alias)

    def _clear_aliases(self) -> None:
        self._aliases.clear()

    def _canonical(self, name: str) -> str:
        return self._aliases.resolve(name)

    # ---------------- registration ----------------

    def bind(self, abstract: AbstractT, concrete: Any = None, *, shared: bool = False, on_make: Any = None) -> "Container":
        """Register how *abstract* is produced.

        Args:
            abstract: Name or type to bind, or ``{alias: abstract}`` to also
                register an alias.
            concrete: ``None`` to build *abstract* itself, another name or type
                to forward to, or a callable factory.
            shared: Cache the produced instance and reuse it.
            on_make: Callback run before any other callback of *abstract*.

        Returns:
            The container, for chaining.
        """
        with self._lock:
            name, alias = self._split_abstract(abstract)
            self._instances.remove(name)
            self._remove_alias(name)
            if alias:
                self._set_alias(alias, name)
            if on_make is not None:
                self._callbacks.register(name, on_make, prepend=True)
            binding = self._bindings.register(name, self._concrete(concrete), shared)
            LOGGER.debug("Bound %s -> %r (shared=%s)", name, binding.concrete, binding.shared)
            return self

    def bind_shared(self, abstract: AbstractT, concrete: Any = None, *, on_make: Any = None) -> "Container":
        return self.bind(abstract, concrete, shared=True, on_make=on_make)

    def bind_if(self, abstract: AbstractT, concrete: Any = None, shared: bool = False) -> "Container":
        """Bind *abstract* unless it is already an alias or already bound.

        With the ``{alias: abstract}`` form nothing happens when *alias* is
        already an alias; otherwise the alias is always set and the binding is
        only added when *abstract* is not bound yet.
        """
        with self._lock:
            if not isinstance(abstract, Mapping):
                name = self._key(abstract)
                if not self._aliases.has(name) and not self._have_bound(name):
                    self.bind(name, concrete, shared=shared)
                return self
            name, alias = self._split_abstract(abstract)
            if alias and self._aliases.has(alias):
                return self
            if alias:
                self._set_alias(alias, name)
            if not self._have_bound(name):
                self._bindings.register(name, self._concrete(concrete), shared)
            return self

    def extend(self, abstract: AbstractT, obj: Any) -> "Container":
        """Store *obj* as the cached instance of *abstract*.

        The binding and aliases of *abstract* are left untouched, so a later
        ``clear`` falls back to them.
        """
        with self._lock:
            name = self._abstract_set(abstract)
            self.clear(name)
            self._instances.put(name, obj)
            return self

    def alias(self, target: Optional[KeyT], alias: KeyT) -> "Container":
        """Make *alias* resolve to *target*; an empty *target* removes *alias*.

        Raises:
            ReservedNameError: If *alias* is the reserved container name.
            CyclicAliasError: If *target* already resolves to *alias*.
        """
        with self._lock:
            if not alias or (isinstance(alias, str) and not normalize(alias)):
                return self
            key = self._key(alias)
            if not target:
                self._remove_alias(key)
            else:
                self._set_alias(key, self._key(target))
            return self

    def on_make(self, abstract: Any, callback: Any = None) -> "Container":
        """Register a post-construction callback.

        ``on_make(callback)`` applies to every object built by ``load``;
        ``on_make(name, callback)`` only to *name* (resolved through aliases).
        Callbacks receive ``(instance, container)``.
        """
        with self._lock:
            if callback is None:
                self._callbacks.register(None, abstract)
            else:
                self._callbacks.register(self.alias_name(abstract), callback)
            return self

    # ---------------- queries ----------------

    def _have_bound(self, name: str) -> bool:
        return self._instances.has(name) or self._bindings.has(name)

    def _check_if_have(self, abstract: KeyT, check: Callable[[str], bool]) -> bool:
        with self._lock:
            name = self._key(abstract)
            if check(name):
                return True
            target = self._aliases.resolve(name)
            return target != name and check(target)

    def is_bound(self, abstract: KeyT) -> bool:
        return self._check_if_have(abstract, self._have_bound)

    def is_shared(self, abstract: KeyT) -> bool:
        return self._check_if_have(abstract, lambda n: self._instances.has(n) or self._bindings.is_shared(n))

    def is_make(self, abstract: KeyT) -> bool:
        return self._check_if_have(abstract, self._instances.has)

    def is_alias(self, name: KeyT) -> bool:
        with self._lock:
            return self._aliases.has(self._key(name))

    def alias_name(self, name: KeyT) -> str:
        with self._lock:
            return self._aliases.resolve(self._key(name))

    def binds(self) -> Dict[str, Binding]:
        with self._lock:
            return self._bindings.items()

    def aliases(self) -> Dict[str, str]:
        with self._lock:
            return self._aliases.items()

    def makes(self) -> Dict[str, Any]:
        with self._lock:
            return self._instances.items()

    # ---------------- resolution ----------------

    def load(self, reference: Any, *args: Any, **kwargs: Any) -> Any:
        """Produce *reference* using the container's aliases and bindings.

        Callables and ``"Type::method"`` / ``"Type@method"`` references are
        invoked ad hoc. Names (and types) are resolved to their canonical
        name, built or taken from the shared cache, passed through the
        ``on_make`` callbacks and cached when shared.
        """
        return self._load(reference, args, kwargs, once=False)

    def once(self, reference: Any, *args: Any, **kwargs: Any) -> Any:
        """Like :meth:`load`, but never reads or writes the shared cache for *reference*.

        Shared dependencies built along the way are still cached.
        """
        return self._load(reference, args, kwargs, once=True)

    def call(self, reference: Any, *args: Any, **kwargs: Any) -> Any:
        """Invoke a callable or construct a type, auto-resolving typed parameters.

        Bindings, cache and callbacks are not consulted for *reference*
        itself; typed dependencies are still resolved through :meth:`load`.
        """
        with self._lock:
            return self._invoke(reference, args, kwargs, routed=False)

    def _load(self, reference: Any, args: Tuple[Any, ...], kwargs: Mapping[str, Any], once: bool) -> Any:
        with self._lock:
            if inspect.isclass(reference):
                reference = self._key(reference)
            if not isinstance(reference, str) or STATIC_CALL in reference or BOUND_CALL in reference:
                return self._invoke(reference, args, kwargs, routed=True)

            name = normalize(reference)
            if not name:
                raise ArgumentError("Reference name can not be empty.")
            name = self._canonical(name)
            if name == self._reserved:
                return self

            if not once and self._instances.has(name):
                return self._reuse(name, args, kwargs)

            instance = self._build(name, args, kwargs, once)
            self._callbacks.fire(name, instance, self._fire_callback)
            if not once and self._bindings.is_shared(name):
                self._instances.put(name, instance)
            return instance

    def _reuse(self, name: str, args: Tuple[Any, ...], kwargs: Mapping[str, Any]) -> Any:
        instance = self._instances.get(name)
        hook = getattr(instance, self.config.reinit_hook, None)
        if (args or kwargs) and callable(hook):
            LOGGER.debug("Re-initializing cached instance of %s", name)
            self._invoke(hook, args, kwargs)
        else:
            LOGGER.debug("Reusing cached instance of %s", name)
        return instance

    def _build(self, name: str, args: Tuple[Any, ...], kwargs: Mapping[str, Any], once: bool) -> Any:
        if name in self._building:
            raise CircularDependencyError(self._building + [name])
        self._building.append(name)
        try:
            binding = self._bindings.get(name)
            if binding is not None and binding.forwards:
                return self._load(binding.concrete, args, kwargs, once)
            return self._invoke(self._bindings.concrete_for(name), args, kwargs)
        finally:
            self._building.pop()

    def _fire_callback(self, callback: Any, instance: Any) -> Any:
        return self._invoke(callback, (instance, self))

    # ---------------- removal ----------------

    def clear(self, abstract: Optional[KeyT] = None) -> "Container":
        """Drop cached instance(s); bindings and aliases survive.

        For an alias with no instance cached under it, the instance of its
        target is dropped instead.
        """
        with self._lock:
            if abstract is None:
                self._instances.clear()
                return self
            name = self._key(abstract)
            if not self._instances.remove(name):
                target = self._aliases.resolve(name)
                if target != name:
                    self._instances.remove(target)
            return self

    def flush(self, abstract: Optional[KeyT] = None) -> "Container":
        """Remove the binding, cached instance and alias chain rooted at *abstract*.

        Without an argument the container returns to its initial state.
        """
        with self._lock:
            if abstract is None:
                self._bindings.clear()
                self._instances.clear()
                self._clear_aliases()
                self._alias_identity()
                return self
            name: Optional[str] = self._key(abstract)
            seen = set()
            while name is not None and name not in seen:
                seen.add(name)
                self._bindings.remove(name)
                self._instances.remove(name)
                target = self._aliases.target_of(name)
                self._remove_alias(name)
                name = target
            return self
