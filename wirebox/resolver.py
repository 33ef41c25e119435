"""
ArgumentResolver

Turns parsed definition arguments into live values.

Resolution rules (see ``wirebox.arguments`` for the grammar):

- ``#id``          -> id of the service currently being built
- ``@name``        -> ``container.get("name")``
- ``@name/a/b``    -> ``container.get("name")["a"]["b"]``, or None when a
                      key is missing (best effort, never raises); digit
                      segments index lists and tuples
- ``\\pkg\\Class`` -> ``pkg.Class()``, uncached and unregistered
- anything else    -> unchanged

A dangling ``@name`` is an error, a dangling path below an existing service
is not. Whole references must exist; path descent is best effort.
"""

from collections import abc
from typing import Any, List, Optional, Sequence, TYPE_CHECKING

from .arguments import Argument, Literal, NewInstance, SelfId, ServiceRef, parse_argument
from .exceptions import InvalidReferenceError
from .loader import import_object

if TYPE_CHECKING:
    from .container import ServiceContainer


def supports_keyed_access(value: Any) -> bool:
    """True for mappings and other non-string objects with ``__getitem__``."""
    if isinstance(value, abc.Mapping):
        return True
    return hasattr(value, "__getitem__") and not isinstance(value, (str, bytes, bytearray))


def _path_key(value: Any, segment: str) -> Any:
    """Digit segments index into sequences (``@servers/0/host``)."""
    if isinstance(value, abc.Sequence) and segment.isdigit():
        return int(segment)
    return segment


class ArgumentResolver:
    """Resolves definition arguments against a container.

    Attributes:
        container: The ServiceContainer used to look up ``@`` references

    Example::

        resolver = ArgumentResolver(container)
        resolver.resolve("@config/mail/host")   # "smtp.local"
        resolver.resolve("#id", "mailer")       # "mailer"
        resolver.resolve(42)                    # 42
    """

    def __init__(self, container: 'ServiceContainer'):
        self.container = container

    def resolve(self, value: Any, service_id: Optional[str] = None) -> Any:
        """Parse and resolve a single raw argument.

        Args:
            value: Raw argument as written in a definition
            service_id: Id of the service being built, if any

        Returns:
            The resolved value

        Raises:
            InvalidReferenceError: When an ``@name`` reference names a
                service that does not exist
        """
        return self.resolve_parsed(parse_argument(value), service_id)

    def resolve_all(self, values: Sequence[Any], service_id: Optional[str] = None) -> List[Any]:
        """Resolve each raw argument independently, preserving order."""
        return [self.resolve(value, service_id) for value in values]

    def resolve_parsed(self, argument: Argument, service_id: Optional[str] = None) -> Any:
        """Resolve an already parsed argument."""
        if isinstance(argument, Literal):
            return argument.value
        if isinstance(argument, SelfId):
            return service_id
        if isinstance(argument, ServiceRef):
            return self._resolve_reference(argument)
        if isinstance(argument, NewInstance):
            return import_object(argument.type_name)()
        raise TypeError(f"Unsupported argument variant: {argument!r}")

    def resolve_parsed_all(
        self,
        arguments: Sequence[Argument],
        service_id: Optional[str] = None
    ) -> List[Any]:
        return [self.resolve_parsed(argument, service_id) for argument in arguments]

    def _resolve_reference(self, ref: ServiceRef) -> Any:
        if not self.container.has(ref.service_id):
            raise InvalidReferenceError(
                f'Not possible to resolve argument "{ref.text}", service does not exist.',
                ref.text,
            )

        value = self.container.get(ref.service_id)

        # Services that are not keyed are returned whole, path ignored
        if not ref.path or not supports_keyed_access(value):
            return value

        for segment in ref.path:
            if not supports_keyed_access(value):
                return None
            try:
                value = value[_path_key(value, segment)]
            except (KeyError, IndexError, TypeError):
                return None
            if value is None:
                return None
        return value
