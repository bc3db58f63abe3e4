"""Exception hierarchy for wirebox.

All package-specific exceptions inherit from :class:`WiringError`, making it
easy to catch any wirebox error with a single ``except WiringError`` clause.
Exceptions raised by user code while a target is being invoked are not wrapped
and propagate unchanged.
"""

from typing import Any, Iterable, Optional


def _fmt(key: Any) -> str:
    return getattr(key, "__name__", str(key))


class WiringError(Exception):
    """Base exception for all wirebox errors."""

    pass


class ArgumentError(WiringError, ValueError):
    """Raised when a name or argument handed to the container is empty or invalid."""

    def __init__(self, msg: str):
        super().__init__(msg)


class ReservedNameError(WiringError):
    """Raised when the container's own reserved name is used as an alias key.

    Attributes:
        name: The reserved name that was rejected.
    """

    def __init__(self, name: str):
        super().__init__(f"'{name}' is reserved and cannot be used as an alias")
        self.name = name


class InvalidReferenceError(WiringError):
    """Raised for a malformed ``"Type::method"`` or ``"Type@method"`` reference.

    Attributes:
        reference: The offending reference.
    """

    def __init__(self, reference: Any, reason: str = "method not provided"):
        super().__init__(f"Invalid reference '{reference}': {reason}")
        self.reference = reference


class InstantiationError(WiringError):
    """Raised when a target type does not exist or is not concretely constructible.

    Attributes:
        key: The name or type that could not be instantiated.
    """

    def __init__(self, key: Any, reason: str = "not instantiable"):
        super().__init__(f"Target '{_fmt(key)}' is {reason}.")
        self.key = key


class UnresolvedDependencyError(WiringError):
    """Raised when a required parameter has no value, no default and no resolvable type.

    Attributes:
        parameter: Name of the parameter that could not be supplied.
        owner: The callable or type that declared the parameter.
        cause: The failure raised while auto-resolving the parameter, if any.
    """

    def __init__(self, parameter: str, owner: Any, cause: Optional[BaseException] = None):
        msg = f"Unresolvable dependency resolving parameter '{parameter}' of '{_fmt(owner)}'"
        if cause is not None:
            msg += f"; cause: {cause.__class__.__name__}: {cause}"
        super().__init__(msg)
        self.parameter = parameter
        self.owner = owner
        self.cause = cause


class CyclicAliasError(WiringError):
    """Raised when an alias chain loops back on itself.

    Attributes:
        chain: The names visited, ending with the repeated one.
    """

    def __init__(self, chain: Iterable[str]):
        self.chain = tuple(chain)
        super().__init__("Cyclic alias detected: " + " -> ".join(self.chain))


class CircularDependencyError(WiringError):
    """Raised when building a name requires building that same name again.

    Attributes:
        chain: The names being built, ending with the repeated one.
    """

    def __init__(self, chain: Iterable[str]):
        self.chain = tuple(chain)
        super().__init__("Circular dependency detected: " + " -> ".join(self.chain))


class ConfigurationError(WiringError):
    """Raised for invalid container configuration (bad rules, empty names)."""

    def __init__(self, msg: str):
        super().__init__(msg)
