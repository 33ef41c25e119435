"""
ServiceContainer

This module provides the service registry. It is the entry point of the
wirebox package, responsible for:

- Storing pre-built instances and not-yet-built definitions by id
- Dispatching get() to the instance cache or the ServiceBuilder
- Rejecting duplicate definitions, atomically for batches
- Handing itself to providers at bootstrap

Thread safety:
    Registration is serialized by a single lock. Each shared id is built
    under its own re-entrant lock with a second look at the instance cache,
    so concurrent first access builds a shared service at most once.

Example::

    container = ServiceContainer()
    container.set_definitions({
        "db": {"class": "app.db.Connection", "arguments": ["localhost"]},
        "repo": {"class": "app.repo.Repo", "arguments": ["@db"]},
    })

    repo = container.get("repo")
    assert repo.db is container.get("db")
"""

import logging
import threading
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .builder import ServiceBuilder
from .definition import Definition
from .exceptions import DuplicateDefinitionError, InvalidProviderError, ServiceNotFoundError
from .loader import import_object
from .resolver import ArgumentResolver

logger = logging.getLogger(__name__)

# Well-known id the container is set under when register_self=True
CONTAINER_ID = "container"


class ServiceContainer:
    """Registry of services and the definitions used to build them.

    Attributes:
        _instances: Built or directly set services, checked first by get()
        _definitions: Definitions by id, write-once and never removed

    Example::

        container = ServiceContainer(register_self=True)
        container.set("logger", logging.getLogger("app"))
        container.set_definition("mailer", {
            "factory": "app.mail.create_mailer",
            "arguments": ["@container", "#id"],
            "shared": False,
        })
    """

    def __init__(
        self,
        definitions: Optional[Mapping[str, Any]] = None,
        providers: Optional[Iterable[Any]] = None,
        register_self: bool = False,
    ):
        """Create a container.

        Args:
            definitions: Initial definitions, registered with set_definitions()
            providers: Providers registered after the initial definitions
            register_self: Set the container itself under CONTAINER_ID so
                definitions can reference it as ``@container``
        """
        self._instances: Dict[str, Any] = {}
        self._definitions: Dict[str, Definition] = {}
        self._lock = threading.RLock()
        self._build_locks: Dict[str, threading.RLock] = {}
        self._resolver = ArgumentResolver(self)
        self._builder = ServiceBuilder(self, self._resolver)

        if register_self:
            self.set(CONTAINER_ID, self)
        if definitions:
            self.set_definitions(definitions)
        for provider in providers or ():
            self.register(provider)

    def get(self, service_id: str) -> Any:
        """Get a service, building it from its definition if needed.

        Args:
            service_id: Id of the service

        Returns:
            The cached instance if present, otherwise a service built from
            the definition (cached when the definition is shared)

        Raises:
            ServiceNotFoundError: When the id has no instance and no definition
            InvalidDefinitionError: When the definition cannot be built
            InvalidReferenceError: When an argument references a missing service
        """
        if service_id in self._instances:
            return self._instances[service_id]

        definition = self._definitions.get(service_id)
        if definition is None:
            # Built shared ids live in both stores
            known = dict.fromkeys(self.definition_ids() + self.instance_ids())
            registered = ", ".join(known) or "None"
            raise ServiceNotFoundError(
                f'Service "{service_id}" does not exist.\n'
                f"Registered services: {registered}",
                service_id,
            )

        if not definition.shared:
            return self._builder.build(service_id, definition)

        with self._build_lock(service_id):
            # Another thread may have finished the build while we waited
            if service_id in self._instances:
                return self._instances[service_id]
            return self._builder.build(service_id, definition)

    def has(self, service_id: str) -> bool:
        """True when the id has an instance or a definition."""
        return service_id in self._instances or service_id in self._definitions

    def set(self, service_id: str, service: Any) -> 'ServiceContainer':
        """Store a service instance, overwriting any previous instance.

        Instances always take precedence over definitions with the same id.
        """
        with self._lock:
            self._instances[service_id] = service
        return self

    def set_definition(self, service_id: str, definition: Any) -> 'ServiceContainer':
        """Register a definition for an id.

        Args:
            service_id: Id to register under
            definition: A Definition, raw definition data or a factory callable

        Raises:
            DuplicateDefinitionError: When the id already has a definition
            InvalidDefinitionError: When the definition has neither factory
                nor class, or the raw data is malformed
        """
        definition = self._normalize(service_id, definition)
        with self._lock:
            if service_id in self._definitions:
                raise DuplicateDefinitionError(
                    f"A definition for {service_id} already exists",
                    [service_id],
                )
            self._definitions[service_id] = definition
        logger.debug("Registered definition %r", service_id)
        return self

    def set_definitions(self, definitions: Mapping[str, Any]) -> 'ServiceContainer':
        """Register several definitions at once.

        Either every definition is registered or none is.

        Raises:
            DuplicateDefinitionError: Listing every id that already has a
                definition
            InvalidDefinitionError: When any entry is malformed
        """
        normalized = {
            service_id: self._normalize(service_id, definition)
            for service_id, definition in definitions.items()
        }
        with self._lock:
            existing = [service_id for service_id in normalized if service_id in self._definitions]
            if existing:
                raise DuplicateDefinitionError(
                    "The following definitions already existed within the Container: "
                    + ", ".join(existing),
                    existing,
                )
            self._definitions.update(normalized)
        logger.debug("Registered %d definitions", len(normalized))
        return self

    def get_definition(self, service_id: str) -> Definition:
        """Get the registered Definition for an id.

        Raises:
            ServiceNotFoundError: When the id has no definition
        """
        try:
            return self._definitions[service_id]
        except KeyError:
            raise ServiceNotFoundError(
                f'No definition for service "{service_id}".', service_id
            ) from None

    def register(self, provider: Any) -> 'ServiceContainer':
        """Hand the container to a provider.

        Args:
            provider: A provider instance, a provider class (instantiated with
                no arguments) or the fully-qualified name of a provider class

        Raises:
            InvalidProviderError: When the provider cannot be imported or has
                no register() method
        """
        if isinstance(provider, str):
            try:
                provider = import_object(provider)
            except ImportError as e:
                raise InvalidProviderError(f"Provider {provider!r} cannot be imported: {e}") from e
        if isinstance(provider, type):
            provider = provider()

        if not callable(getattr(provider, "register", None)):
            raise InvalidProviderError(
                f"Provider must implement register(container), got {type(provider).__name__}."
            )

        logger.debug("Registering provider %s", type(provider).__name__)
        provider.register(self)
        return self

    def resolve_argument(self, argument: Any, service_id: Optional[str] = None) -> Any:
        """Resolve a single definition argument (see ArgumentResolver)."""
        return self._resolver.resolve(argument, service_id)

    def resolve_arguments(self, arguments: Iterable[Any], service_id: Optional[str] = None) -> List[Any]:
        """Resolve a list of definition arguments, preserving order."""
        return self._resolver.resolve_all(list(arguments), service_id)

    def definition_ids(self) -> List[str]:
        return list(self._definitions)

    def instance_ids(self) -> List[str]:
        return list(self._instances)

    def _normalize(self, service_id: str, definition: Any) -> Definition:
        definition = Definition.from_data(definition, service_id)
        definition.validate(service_id)
        return definition

    def _build_lock(self, service_id: str) -> threading.RLock:
        with self._lock:
            lock = self._build_locks.get(service_id)
            if lock is None:
                lock = self._build_locks[service_id] = threading.RLock()
            return lock

    def __contains__(self, service_id: str) -> bool:
        return self.has(service_id)

    def __getitem__(self, service_id: str) -> Any:
        return self.get(service_id)

    def __setitem__(self, service_id: str, service: Any) -> None:
        self.set(service_id, service)
