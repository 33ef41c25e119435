"""
ContainerAware

Mixin for services that need the container itself, typically set through
a method call in their definition::

    container = ServiceContainer(register_self=True)
    container.set_definition("dispatcher", {
        "class": "app.events.Dispatcher",
        "method_calls": [["set_container", ["@container"]]],
    })
"""

from typing import Optional, TYPE_CHECKING

from .exceptions import ContainerNotSetError

if TYPE_CHECKING:
    from .container import ServiceContainer


class ContainerAware:
    """Holds a reference to a ServiceContainer."""

    _container: Optional['ServiceContainer'] = None

    def set_container(self, container: 'ServiceContainer') -> None:
        self._container = container

    def get_container(self) -> 'ServiceContainer':
        """Get the container.

        Raises:
            ContainerNotSetError: When set_container() was never called
        """
        if self._container is None:
            raise ContainerNotSetError("No container has been set.")
        return self._container
