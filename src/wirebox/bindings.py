"""Binding descriptors and the name-to-binding registry.

This module defines :class:`Binding` (the immutable recipe for producing the
instance of a canonical name) and :class:`BindingRegistry`, which stores at
most one binding per name.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Union

Concrete = Union[str, Callable[..., Any]]


@dataclass(frozen=True)
class Binding:
    """Immutable recipe registered for a canonical name.

    Attributes:
        name: The canonical name the binding is registered under.
        concrete: Either a name (constructed, or forwarded through the full
            load path when it differs from *name*) or a callable factory.
        shared: Whether the produced instance is cached and reused.
    """

    name: str
    concrete: Concrete
    shared: bool = False

    @property
    def forwards(self) -> bool:
        """``True`` when the concrete is another name rather than the binding's own."""
        return isinstance(self.concrete, str) and self.concrete != self.name


class BindingRegistry:
    """Simple name-to-binding registry.

    Registering a binding overwrites any previous one. Callers are responsible
    for invalidating cached instances and stale aliases of the same name.
    """

    def __init__(self) -> None:
        self._bindings: Dict[str, Binding] = {}

    def register(self, name: str, concrete: Optional[Concrete] = None, shared: bool = False) -> Binding:
        """Bind *concrete* to *name*, replacing any previous binding.

        Args:
            name: The canonical name.
            concrete: A name or a callable; ``None`` binds the name to itself.
            shared: Whether the produced instance should be cached.

        Returns:
            The stored :class:`Binding`.
        """
        if concrete is None or concrete == "":
            concrete = name
        binding = Binding(name=name, concrete=concrete, shared=bool(shared))
        self._bindings[name] = binding
        return binding

    def get(self, name: str) -> Optional[Binding]:
        return self._bindings.get(name)

    def has(self, name: str) -> bool:
        return name in self._bindings

    def is_shared(self, name: str) -> bool:
        binding = self._bindings.get(name)
        return binding is not None and binding.shared

    def concrete_for(self, name: str) -> Concrete:
        """Return the concrete bound to *name*, or *name* itself when unbound."""
        binding = self._bindings.get(name)
        return binding.concrete if binding is not None else name

    def remove(self, name: str) -> None:
        self._bindings.pop(name, None)

    def clear(self) -> None:
        self._bindings.clear()

    def items(self) -> Dict[str, Binding]:
        return dict(self._bindings)
