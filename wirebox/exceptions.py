"""
Wirebox Exceptions

Custom exception hierarchy for the wirebox service container
"""

from typing import Iterable, Optional


class WireboxError(Exception):
    """
    Base exception for all wirebox errors.

    All wirebox-specific exceptions inherit from this class.
    You can catch this to handle any container error generically.

    Example:
        >>> try:
        ...     service = container.get("mailer")
        ... except WireboxError as e:
        ...     print(f"DI error: {e}")
    """

    pass


class InvalidArgumentError(WireboxError, ValueError):
    """
    Raised when a container or definition operation receives a bad argument.

    Common causes:
        - Adding a method call with an empty method name
        - Any of the more specific subclasses below
    """

    pass


class ServiceNotFoundError(InvalidArgumentError):
    """
    Raised when a requested id has neither an instance nor a definition.

    Common causes:
        - Forgetting to register the definition
        - Typo in the service id
        - Provider holding the definition not registered

    Solution:
        Register the service before requesting it::

            container.set_definition("db", {"class": "app.db.Connection"})
            db = container.get("db")

    Note:
        The error message includes the registered ids to help
        identify available services.
    """

    def __init__(self, message: str, service_id: Optional[str] = None):
        super().__init__(message)
        self.service_id = service_id


class DuplicateDefinitionError(InvalidArgumentError):
    """
    Raised when a definition is registered for an id that already has one.

    Definitions are write-once. There is no replace path; use
    ``container.set()`` to inject a pre-built instance instead.

    Common causes:
        - Registering the same id in two providers
        - Registering the same config mapping twice
    """

    def __init__(self, message: str, service_ids: Iterable[str] = ()):
        super().__init__(message)
        self.service_ids = list(service_ids)


class InvalidProviderError(InvalidArgumentError):
    """
    Raised when a value registered as a provider has no ``register`` method.

    Solution:
        Subclass ``Provider`` or expose a ``register(container)`` method::

            class MailProvider(Provider):
                def register(self, container):
                    container.set_definition("mailer", {...})
    """

    pass


class InvalidDefinitionError(WireboxError):
    """
    Raised when a definition cannot be used to build a service.

    Common causes:
        - Neither ``class`` nor ``factory`` specified
        - Unknown keys in raw definition data
        - A method call naming a method the built service does not have
    """

    def __init__(self, message: str, service_id: Optional[str] = None):
        super().__init__(message)
        self.service_id = service_id


class InvalidReferenceError(WireboxError):
    """
    Raised when an ``@name`` argument references a service that does not exist.

    The message and the ``reference`` attribute carry the original
    argument text (e.g. ``"@mailer/transport"``).
    """

    def __init__(self, message: str, reference: Optional[str] = None):
        super().__init__(message)
        self.reference = reference


class ArgumentIndexError(WireboxError, IndexError):
    """
    Raised on positional access outside a definition's argument list.

    Valid indices are ``0`` to ``len(arguments) - 1``. Negative indices
    are always out of range.
    """

    def __init__(self, message: str, index: Optional[int] = None):
        super().__init__(message)
        self.index = index


class ContainerNotSetError(WireboxError, RuntimeError):
    """
    Raised by ``ContainerAware.get_container()`` before a container was set.
    """

    pass
