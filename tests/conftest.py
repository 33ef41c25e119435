"""
Test Configuration and Utilities

Common base classes and helper functions for wirebox tests
"""

import unittest
from typing import Any, Mapping

from wirebox import ServiceContainer


class WireboxTestCase(unittest.TestCase):
    """
    Base test case class for wirebox tests.

    Creates a fresh, empty container before each test.
    """

    def setUp(self):
        """Fresh container before each test"""
        self.container = ServiceContainer()


def create_container(definitions: Mapping[str, Any], **services: Any) -> ServiceContainer:
    """
    Create a container with the given definitions and pre-set instances.

    Args:
        definitions: Mapping of id to definition data
        **services: Instances to set by id

    Returns:
        A ServiceContainer with the registrations

    Example:
        >>> container = create_container(
        ...     {"db": {"class": Connection, "arguments": ["localhost"]}},
        ...     config={"timeout": 30},
        ... )
    """
    container = ServiceContainer()
    for service_id, service in services.items():
        container.set(service_id, service)
    container.set_definitions(definitions)
    return container
