"""
Providers

A provider is handed the container once, at bootstrap, and may register
definitions and instances into it.

Example::

    class MailProvider(Provider):
        def register(self, container):
            container.set_definition("mailer", {
                "class": "app.mail.Mailer",
                "arguments": ["@config/mail/host"],
            })

    container.register(MailProvider())
"""

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .container import ServiceContainer

logger = logging.getLogger(__name__)

# Id of the service holding the definitions mapping read by ConfigProvider
DEFAULT_CONFIG_ID = "di.config"


class Provider(ABC):
    """Interface for providers.

    Subclassing is optional; the container accepts any object with a
    ``register(container)`` method.
    """

    @abstractmethod
    def register(self, container: 'ServiceContainer') -> None:
        """Register services from this provider with the container.

        Args:
            container: The container being bootstrapped
        """
        pass


class ConfigProvider(Provider):
    """Registers the definitions held by a configuration service.

    The configuration service is expected to resolve to a mapping of
    id to definition data. When it is not registered nothing happens.

    Attributes:
        config_id: Id of the configuration service

    Example::

        container.set("di.config", {
            "db": {"class": "app.db.Connection", "arguments": ["localhost"]},
        })
        container.register(ConfigProvider())
    """

    def __init__(self, config_id: str = DEFAULT_CONFIG_ID):
        self.config_id = config_id

    def register(self, container: 'ServiceContainer') -> None:
        # Only an absent config service is a no-op; build errors propagate
        if not container.has(self.config_id):
            logger.debug("No %r service, nothing to register", self.config_id)
            return

        container.set_definitions(container.get(self.config_id))
