# src/wirebox/conventions.py
"""Container that infers bindings from naming conventions.

With a rule ``{"acme": ":"}`` and ``default_prefix="acme"``:

- ``load("mailer")`` -> ``acme.mailer.Mailer``
- ``load("mailer:smtp")`` -> ``acme.mailer.Smtp``
- ``load("mailer:smtp:pool")`` -> ``acme.mailer.smtp.Pool``
- ``load("acme.mailer.MailerInterface")`` -> ``acme.mailer.Mailer``

When the conventional interface sibling (``<Type>Interface``) exists and the
concrete type implements it, the interface is bound to the concrete type and
the short name becomes an alias of the interface. A type may declare itself
shared with a ``__shared__`` static method or boolean class attribute.
"""

import inspect
from typing import Any, Dict, Optional, Set

from .config import ContainerConfig, validate_rule
from .constants import LOGGER, PATH_SEPARATOR
from .container import Container


def _lcfirst(s: str) -> str:
    return s[:1].lower() + s[1:]


def _ucfirst(s: str) -> str:
    return s[:1].upper() + s[1:]


def _implements(cls: type, iface: Any) -> bool:
    if not inspect.isclass(iface) or iface is cls:
        return False
    try:
        return issubclass(cls, iface)
    except TypeError:
        return False


class ConventionContainer(Container):
    """:class:`~wirebox.container.Container` with convention-based inference.

    Inference runs for a name that has no alias, binding or cached instance,
    that was never removed as an alias, and that was not examined before.
    Its outcome is memoized per container.
    """

    def __init__(self, config: Optional[ContainerConfig] = None) -> None:
        self._solved: Set[str] = set()
        self._flushed: Set[str] = set()
        super().__init__(config)
        self._rules: Dict[str, str] = dict(self.config.convention_rules)
        self._default_prefix = self.config.default_prefix
        self._suffix = self.config.interface_suffix

    def set_convention_rule(self, prefix: str, separator: str) -> "ConventionContainer":
        """Add the rule ``prefix -> separator``; an empty *separator* removes it."""
        with self._lock:
            prefix = prefix.strip(PATH_SEPARATOR)
            if separator:
                validate_rule(prefix, separator)
                self._rules[prefix] = separator
            else:
                self._rules.pop(prefix, None)
            return self

    def flush(self, abstract=None) -> "ConventionContainer":
        with self._lock:
            if abstract is None:
                self._solved.clear()
            return super().flush(abstract)

    # ---------------- alias hooks ----------------

    def _set_alias(self, alias: str, target: str) -> None:
        self._flushed.discard(alias)
        super()._set_alias(alias, target)

    def _remove_alias(self, alias: str) -> None:
        self._flushed.add(alias)
        super()._remove_alias(alias)

    def _clear_aliases(self) -> None:
        self._flushed.clear()
        super()._clear_aliases()

    # ---------------- inference ----------------

    def _canonical(self, name: str) -> str:
        target = self._aliases.resolve(name)
        if target != name or name == self._reserved:
            return target
        if self._instances.has(name) or self._bindings.has(name):
            return name
        if name in self._flushed or name in self._solved:
            return name
        if PATH_SEPARATOR in name:
            return self._infer_from_path(name)
        return self._infer_from_alias(name)

    def _prefix_of(self, path: str) -> Optional[str]:
        matches = [p for p in self._rules if path.startswith(p + PATH_SEPARATOR)]
        return max(matches, key=len) if matches else None

    def _infer_from_path(self, path: str) -> str:
        prefix = self._prefix_of(path)
        segments = path.split(PATH_SEPARATOR)
        if len(segments) < 3 or prefix is None:
            self._solved.add(path)
            return path
        rest = path[len(prefix) + 1:].split(PATH_SEPARATOR)
        if len(rest) < 2:
            self._solved.add(path)
            return path

        is_interface = rest[-1].endswith(self._suffix)
        abstract = path
        if is_interface:
            abstract = path[: -len(self._suffix)]
            rest[-1] = rest[-1][: -len(self._suffix)]
            if not rest[-1]:
                self._solved.add(path)
                return path

        if prefix == self._default_prefix and len(rest) == 2 and rest[0] == _lcfirst(rest[1]):
            alias = rest[0]
        else:
            alias = self._rules[prefix].join(_lcfirst(s) for s in rest)
        self._fix_convention(alias, abstract, is_interface)
        return path

    def _infer_from_alias(self, alias: str) -> str:
        path = None
        if alias.isidentifier():
            if self._default_prefix:
                path = PATH_SEPARATOR.join((self._default_prefix, alias, _ucfirst(alias)))
        else:
            for prefix, separator in self._rules.items():
                if separator in alias:
                    segments = alias.split(separator)
                    if all(s.isidentifier() for s in segments):
                        segments[-1] = _ucfirst(segments[-1])
                        path = PATH_SEPARATOR.join([prefix] + segments)
                    break
        if path is None:
            self._solved.add(alias)
            return alias
        self._fix_convention(alias, path, None)
        return self._aliases.resolve(alias)

    def _fix_convention(self, alias: str, abstract: str, is_interface: Optional[bool]) -> None:
        interface = abstract + self._suffix
        if is_interface is not False and self._bindings.has(interface):
            self._mark_fixed(alias, interface, None, interface)
            return

        cls = self._locate(abstract)
        if not inspect.isclass(cls):
            self._mark_fixed(alias, interface, abstract, None)
            return

        shared = self._is_conventionally_shared(cls)
        if _implements(cls, self._locate(interface)):
            if not self._bindings.has(interface):
                self.bind(interface, abstract, shared=shared)
            elif shared:
                self.bind_shared(abstract)
            self._mark_fixed(alias, interface, abstract, interface)
            return

        # Interface sibling present but unrelated to the concrete type.
        if is_interface is True:
            self._solved.update((interface, abstract))
            return
        if shared:
            self.bind_shared(abstract)
        self._mark_fixed(alias, None, abstract, abstract)

    def _mark_fixed(self, alias: str, interface: Optional[str], abstract: Optional[str], concrete: Optional[str]) -> None:
        self._solved.update(n for n in (alias, interface, abstract) if n)
        if concrete is None or alias == self._reserved or self._aliases.has(alias):
            return
        self._set_alias(alias, concrete)
        self._callbacks.move(alias, concrete)
        LOGGER.debug("Convention resolved %s -> %s", alias, concrete)

    def _is_conventionally_shared(self, cls: type) -> bool:
        marker = self.config.shared_marker
        try:
            attr = inspect.getattr_static(cls, marker)
        except AttributeError:
            return False
        if isinstance(attr, bool):
            return attr
        if isinstance(attr, (staticmethod, classmethod)):
            return bool(getattr(cls, marker)())
        return False
