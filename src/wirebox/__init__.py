# wirebox/__init__.py
try:
    from ._version import __version__
except Exception:
    __version__ = "0.0.0"

from .api import instance, reset, set_instance
from .bindings import Binding
from .config import ContainerConfig, configuration
from .container import Container
from .conventions import ConventionContainer
from .exceptions import (
    ArgumentError,
    CircularDependencyError,
    ConfigurationError,
    CyclicAliasError,
    InstantiationError,
    InvalidReferenceError,
    ReservedNameError,
    UnresolvedDependencyError,
    WiringError,
)

__all__ = [
    "__version__",
    "Container",
    "ConventionContainer",
    "Binding",
    "ContainerConfig",
    "configuration",
    "instance",
    "set_instance",
    "reset",
    "WiringError",
    "ArgumentError",
    "ReservedNameError",
    "InvalidReferenceError",
    "InstantiationError",
    "UnresolvedDependencyError",
    "CyclicAliasError",
    "CircularDependencyError",
    "ConfigurationError",
]
