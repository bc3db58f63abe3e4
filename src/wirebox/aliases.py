"""Alias registry: alternate names that resolve, transitively, to a canonical name."""

from typing import Dict, List, Optional

from .exceptions import CyclicAliasError, ReservedNameError


class AliasRegistry:
    """Mapping of alias -> target name, where a target may itself be an alias.

    Args:
        reserved: Name that may never be used as an alias key.
    """

    def __init__(self, reserved: str) -> None:
        self._reserved = reserved
        self._aliases: Dict[str, str] = {}

    def set(self, alias: str, target: str) -> None:
        """Map *alias* to *target*.

        A self-mapping is silently dropped.

        Raises:
            ReservedNameError: If *alias* is the reserved name.
            CyclicAliasError: If *target* already resolves back to *alias*.
        """
        if alias == self._reserved:
            raise ReservedNameError(alias)
        if alias == target:
            return
        chain = self._chain(target)
        if alias in chain:
            raise CyclicAliasError([alias] + chain[: chain.index(alias) + 1])
        self._aliases[alias] = target

    def _chain(self, name: str) -> List[str]:
        chain = [name]
        seen = {name}
        while name in self._aliases:
            name = self._aliases[name]
            chain.append(name)
            if name in seen:
                raise CyclicAliasError(chain)
            seen.add(name)
        return chain

    def resolve(self, name: str) -> str:
        """Follow the chain starting at *name* and return its terminal name."""
        return self._chain(name)[-1]

    def target_of(self, name: str) -> Optional[str]:
        """Return the name *name* directly points to, or ``None``."""
        return self._aliases.get(name)

    def has(self, name: str) -> bool:
        return name in self._aliases

    def remove(self, name: str) -> None:
        self._aliases.pop(name, None)

    def clear(self) -> None:
        self._aliases.clear()

    def items(self) -> Dict[str, str]:
        return dict(self._aliases)
