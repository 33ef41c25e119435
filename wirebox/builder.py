"""
ServiceBuilder

Builds live services from definitions.

For a given id and Definition the builder:

1. Validates the definition has a factory or a class
2. Resolves the arguments (scoped to the id, so ``#id`` works)
3. Calls the factory, or instantiates the class with or without arguments
4. Runs the method calls in declaration order
5. Caches the instance in the container when the definition is shared

Exceptions raised by factories, constructors and called methods propagate
unmodified.
"""

import logging
from typing import Any, Callable, TYPE_CHECKING

from .arguments import SERVICE_REF_PREFIX, parse_argument
from .definition import Definition, FactoryRef
from .definition_kind import DefinitionKind
from .exceptions import InvalidDefinitionError
from .loader import import_object
from .resolver import ArgumentResolver

if TYPE_CHECKING:
    from .container import ServiceContainer

logger = logging.getLogger(__name__)


class ServiceBuilder:
    """Turns a Definition into a service instance.

    Attributes:
        container: The container that owns the instance cache
        resolver: ArgumentResolver bound to the same container

    Note:
        This class is used internally by ServiceContainer.get().
        Building through it directly bypasses the per-id build lock.
    """

    def __init__(self, container: 'ServiceContainer', resolver: ArgumentResolver):
        self.container = container
        self.resolver = resolver

    def build(self, service_id: str, definition: Definition) -> Any:
        """Build the service registered under ``service_id``.

        Args:
            service_id: Id the definition is registered under
            definition: The recipe to build

        Returns:
            The built service

        Raises:
            InvalidDefinitionError: When neither factory nor class is set, or
                a method call names a missing method
            InvalidReferenceError: When an argument references a missing service
        """
        kind = definition.validate(service_id)
        logger.debug("Building service %r (%s, shared=%s)", service_id, kind.value, definition.shared)

        if kind is DefinitionKind.FACTORY:
            factory = self._resolve_factory(service_id, definition.factory)
            arguments = self.resolver.resolve_parsed_all(definition.parsed_arguments(), service_id)
            service = factory(*arguments)
        elif kind is DefinitionKind.CLASS_WITH_ARGS:
            cls = self._resolve_class(service_id, definition.cls)
            arguments = self.resolver.resolve_parsed_all(definition.parsed_arguments(), service_id)
            service = cls(*arguments)
        else:
            # No arguments; method calls may still follow
            cls = self._resolve_class(service_id, definition.cls)
            service = cls()

        for method_name, arguments in definition.parsed_method_calls():
            method = getattr(service, method_name, None)
            if not callable(method):
                raise InvalidDefinitionError(
                    f'Service "{service_id}" ({type(service).__name__}) has no '
                    f'callable method "{method_name}".',
                    service_id,
                )
            method(*self.resolver.resolve_parsed_all(arguments, service_id))

        if definition.shared:
            self.container.set(service_id, service)

        return service

    def _resolve_class(self, service_id: str, cls: Any) -> Callable[..., Any]:
        if isinstance(cls, str):
            cls = import_object(cls)
        if not callable(cls):
            raise InvalidDefinitionError(
                f'Class of definition "{service_id}" is not instantiable: {cls!r}',
                service_id,
            )
        return cls

    def _resolve_factory(self, service_id: str, factory: FactoryRef) -> Callable[..., Any]:
        """Turn a factory reference into a callable.

        Supported forms:
            - a callable
            - ``"pkg.mod.func"`` or ``"pkg.mod:Class.create"``
            - ``"@service"`` for a callable service
            - ``(target, "method")`` where target is an object, a class name
              or an ``@service`` reference
        """
        if isinstance(factory, (tuple, list)):
            if len(factory) != 2:
                raise InvalidDefinitionError(
                    f'Factory of definition "{service_id}" must be a (target, method) pair, '
                    f'got {factory!r}',
                    service_id,
                )
            target, method_name = factory
            factory = getattr(self._resolve_target(service_id, target), method_name, None)
        elif isinstance(factory, str):
            factory = self._resolve_target(service_id, factory)

        if not callable(factory):
            raise InvalidDefinitionError(
                f'Factory of definition "{service_id}" is not callable: {factory!r}',
                service_id,
            )
        return factory

    def _resolve_target(self, service_id: str, target: Any) -> Any:
        if isinstance(target, str):
            if target.startswith(SERVICE_REF_PREFIX):
                return self.resolver.resolve_parsed(parse_argument(target), service_id)
            return import_object(target)
        return target
