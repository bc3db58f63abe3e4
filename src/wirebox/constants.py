"""Constants used throughout the wirebox package.

This module defines the framework logger and the default names the container
looks up on types and instances (the reserved container name, the
re-initialization hook and the conventional sharing marker).
"""

import logging

LOGGER_NAME: str = "wirebox"
"""Default logger name for the wirebox package."""

LOGGER: logging.Logger = logging.getLogger(LOGGER_NAME)
"""Pre-configured logger instance for wirebox internal diagnostics."""

PATH_SEPARATOR: str = "."
"""Separator between the segments of a dotted type path."""

STATIC_CALL: str = "::"
"""Separator of ``"Type::method"`` references (type located directly)."""

BOUND_CALL: str = "@"
"""Separator of ``"Type@method"`` references (type produced by ``load``)."""

RESERVED_NAME: str = "container"
"""Canonical name that always resolves to the container itself."""

REINIT_HOOK: str = "__reset__"
"""Method called on a cached shared instance that is re-requested with arguments."""

SHARED_MARKER: str = "__shared__"
"""Static capability a type may expose to be bound as shared by convention."""

INTERFACE_SUFFIX: str = "Interface"
"""Suffix of the conventional interface sibling of a concrete type."""

DEFAULT_RULE_SEPARATOR: str = ":"
"""Short-name separator used for the default convention prefix."""
