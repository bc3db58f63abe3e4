# wirebox/api.py
"""Process-wide default container.

Containers are ordinary objects and can be passed around explicitly; this
module only provides a single lazily created default for code that wants one.
"""

from typing import Optional

from . import _state
from .constants import LOGGER
from .container import Container


def instance() -> Container:
    """Return the default container, creating a plain :class:`Container` on first use."""
    with _state._lock:
        if _state._container is None:
            _state._container = Container()
            LOGGER.debug("Created default container")
        return _state._container


def set_instance(container: Optional[Container]) -> Optional[Container]:
    """Install *container* as the default and return the previous one."""
    if container is not None and not isinstance(container, Container):
        raise TypeError(f"Expected a Container, got {type(container).__name__}")
    with _state._lock:
        previous = _state._container
        _state._container = container
        return previous


def reset() -> None:
    """Forget the default container; the next :func:`instance` call creates a new one."""
    with _state._lock:
        _state._container = None
