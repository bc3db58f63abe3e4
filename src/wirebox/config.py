"""Container configuration.

Provides the immutable :class:`ContainerConfig` and the :func:`configuration`
builder that validates its values. The configuration only covers names the
container looks up and the naming conventions used by
:class:`~wirebox.conventions.ConventionContainer`; the container does not read
configuration files.
"""

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from .constants import (
    DEFAULT_RULE_SEPARATOR,
    INTERFACE_SUFFIX,
    PATH_SEPARATOR,
    REINIT_HOOK,
    RESERVED_NAME,
    SHARED_MARKER,
)
from .exceptions import ConfigurationError


@dataclass(frozen=True)
class ContainerConfig:
    """Immutable configuration object passed to a container.

    Created by the :func:`configuration` builder.

    Attributes:
        reserved_name: Name that always resolves to the container itself and
            can never be used as an alias key.
        reinit_hook: Method name called on a cached shared instance when it is
            re-requested with arguments.
        shared_marker: Static capability consulted by convention inference to
            decide whether a type is bound as shared.
        interface_suffix: Suffix of the conventional interface sibling of a
            concrete type path.
        default_prefix: Package prefix used for single-segment short names
            (``"mailer"`` -> ``"<prefix>.mailer.Mailer"``).
        convention_rules: Mapping of package prefix to short-name separator.
    """

    reserved_name: str = RESERVED_NAME
    reinit_hook: str = REINIT_HOOK
    shared_marker: str = SHARED_MARKER
    interface_suffix: str = INTERFACE_SUFFIX
    default_prefix: Optional[str] = None
    convention_rules: Mapping[str, str] = field(default_factory=dict)


def validate_rule(prefix: str, separator: str) -> None:
    """Check a single convention rule.

    Raises:
        ConfigurationError: If *prefix* is not a dotted identifier path or
            *separator* is empty or equal to the path separator.
    """
    if not prefix or not all(part.isidentifier() for part in prefix.split(PATH_SEPARATOR)):
        raise ConfigurationError(f"Invalid convention prefix: '{prefix}'")
    if not separator:
        raise ConfigurationError(f"Empty separator for convention prefix '{prefix}'")
    if PATH_SEPARATOR in separator:
        raise ConfigurationError(
            f"Separator '{separator}' for prefix '{prefix}' clashes with the path separator '{PATH_SEPARATOR}'"
        )


def configuration(
    *,
    reserved_name: str = RESERVED_NAME,
    reinit_hook: str = REINIT_HOOK,
    shared_marker: str = SHARED_MARKER,
    interface_suffix: str = INTERFACE_SUFFIX,
    default_prefix: Optional[str] = None,
    rules: Optional[Mapping[str, str]] = None,
) -> ContainerConfig:
    """Build a validated :class:`ContainerConfig`.

    A *default_prefix* without a matching entry in *rules* is registered with
    the ``":"`` separator.

    Returns:
        An immutable :class:`ContainerConfig`.

    Raises:
        ConfigurationError: If any name is empty or a rule is invalid.

    Example:
        >>> cfg = configuration(default_prefix="acme", rules={"kit": "/"})
        >>> cfg.convention_rules["acme"]
        ':'
    """
    for label, value in (
        ("reserved_name", reserved_name),
        ("reinit_hook", reinit_hook),
        ("shared_marker", shared_marker),
        ("interface_suffix", interface_suffix),
    ):
        if not value:
            raise ConfigurationError(f"'{label}' must be a non-empty string")

    merged: Dict[str, str] = {}
    for prefix, separator in (rules or {}).items():
        prefix = prefix.strip(PATH_SEPARATOR)
        validate_rule(prefix, separator)
        merged[prefix] = separator

    if default_prefix is not None:
        default_prefix = default_prefix.strip(PATH_SEPARATOR)
        merged.setdefault(default_prefix, DEFAULT_RULE_SEPARATOR)
        validate_rule(default_prefix, merged[default_prefix])

    return ContainerConfig(
        reserved_name=reserved_name,
        reinit_hook=reinit_hook,
        shared_marker=shared_marker,
        interface_suffix=interface_suffix,
        default_prefix=default_prefix,
        convention_rules=merged,
    )
