"""
Arguments

Tagged variants for the argument reference grammar used in definitions.

Raw definition arguments are parsed once into one of four variants:

- ``#id``                    -> SelfId
- ``@name`` / ``@name/a/b``  -> ServiceRef(service_id, path)
- ``\\pkg\\mod\\Class``      -> NewInstance(type_name)
- anything else              -> Literal

Only strings are inspected. Lists, dicts and other values are literals
and are never parsed recursively.

Example::

    parse_argument("@config/cache/adapter")
    # ServiceRef(text='@config/cache/adapter', service_id='config',
    #            path=('cache', 'adapter'))
"""

from dataclasses import dataclass
from typing import Any, List, Sequence, Tuple, Union

SELF_ID_MARKER = "#id"
SERVICE_REF_PREFIX = "@"
NEW_INSTANCE_PREFIX = "\\"
PATH_SEPARATOR = "/"


@dataclass(frozen=True)
class Literal:
    """Value passed through unchanged"""
    value: Any


@dataclass(frozen=True)
class SelfId:
    """Id of the service currently being built"""
    text: str


@dataclass(frozen=True)
class ServiceRef:
    """Reference to another service, optionally descending into it"""
    text: str
    service_id: str
    path: Tuple[str, ...] = ()


@dataclass(frozen=True)
class NewInstance:
    """Fresh, uncached instance of a class built with no arguments"""
    text: str
    type_name: str


Argument = Union[Literal, SelfId, ServiceRef, NewInstance]


def parse_argument(value: Any) -> Argument:
    """Parse a single raw argument into its variant.

    Args:
        value: Raw argument as written in a definition

    Returns:
        The parsed Argument variant
    """
    if not isinstance(value, str):
        return Literal(value)

    if value.startswith(SELF_ID_MARKER):
        return SelfId(value)

    if value.startswith(SERVICE_REF_PREFIX):
        name = value[len(SERVICE_REF_PREFIX):]
        if PATH_SEPARATOR in name:
            service_id, *path = name.split(PATH_SEPARATOR)
            return ServiceRef(value, service_id, tuple(path))
        return ServiceRef(value, name)

    if value.startswith(NEW_INSTANCE_PREFIX):
        return NewInstance(value, value[len(NEW_INSTANCE_PREFIX):])

    return Literal(value)


def parse_arguments(values: Sequence[Any]) -> List[Argument]:
    """Parse every raw argument, preserving order."""
    return [parse_argument(value) for value in values]
