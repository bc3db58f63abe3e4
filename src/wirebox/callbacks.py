"""Post-construction hooks, global and per name."""

from typing import Any, Callable, Dict, List, Optional

Invoke = Callable[[Any, Any], Any]


class CallbackRegistry:
    """Ordered callback queues fired after a named construction.

    Global callbacks apply to every object the container builds through
    ``load``; filtering by type is left to the callback itself.
    """

    def __init__(self) -> None:
        self._global: List[Any] = []
        self._by_name: Dict[str, List[Any]] = {}

    def register(self, name: Optional[str], callback: Any, prepend: bool = False) -> None:
        """Add *callback* for *name*, or globally when *name* is ``None``.

        Args:
            name: Canonical name the callback is scoped to, or ``None``.
            callback: Any reference the container can invoke.
            prepend: Run before the callbacks already registered for *name*.
        """
        if name is None:
            self._global.append(callback)
            return
        queue = self._by_name.setdefault(name, [])
        if prepend:
            queue.insert(0, callback)
        else:
            queue.append(callback)

    def has(self, name: str) -> bool:
        return bool(self._by_name.get(name))

    def move(self, source: str, target: Optional[str]) -> None:
        """Append the queue registered under *source* to that of *target*.

        With no *target* the queue is dropped.
        """
        queue = self._by_name.pop(source, None)
        if queue and target:
            self._by_name.setdefault(target, []).extend(queue)

    def fire(self, name: str, instance: Any, invoke: Invoke) -> None:
        """Run global callbacks, then those of *name*, through *invoke*."""
        for callback in list(self._global):
            invoke(callback, instance)
        for callback in list(self._by_name.get(name, ())):
            invoke(callback, instance)

    def global_callbacks(self) -> List[Any]:
        return list(self._global)

    def items(self) -> Dict[str, List[Any]]:
        return {k: list(v) for k, v in self._by_name.items()}
