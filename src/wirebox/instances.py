"""Cache of already built shared instances, keyed by canonical name."""

from typing import Any, Dict


class InstanceCache:
    """Stores instances of shared bindings and objects injected via ``extend``.

    ``None`` is a valid instance, so presence is tested with :meth:`has`
    rather than by the value returned from :meth:`get`.
    """

    def __init__(self) -> None:
        self._instances: Dict[str, Any] = {}

    def get(self, name: str) -> Any:
        return self._instances.get(name)

    def put(self, name: str, value: Any) -> None:
        self._instances[name] = value

    def has(self, name: str) -> bool:
        return name in self._instances

    def remove(self, name: str) -> bool:
        """Drop the instance cached under *name*; return whether one was present."""
        if name in self._instances:
            del self._instances[name]
            return True
        return False

    def clear(self) -> None:
        self._instances.clear()

    def items(self) -> Dict[str, Any]:
        return dict(self._instances)
