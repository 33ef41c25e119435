"""
Test Fixtures

Common test classes used across test modules. Referenced by name
(``fixtures.Connection``) in definition data, so keep them module level.
"""

import itertools
import threading
import time

_counter = itertools.count()


class Connection:
    """Test database connection"""

    def __init__(self, host="localhost", port=5432):
        self.host = host
        self.port = port
        self.options = {}

    def set_option(self, name, value):
        self.options[name] = value


class Repo:
    """Test repository with a connection dependency"""

    def __init__(self, connection):
        self.connection = connection


class Mailer:
    """Service configured through method calls"""

    def __init__(self):
        self.timeout = None
        self.calls = []

    def set_timeout(self, timeout):
        self.timeout = timeout
        self.calls.append("set_timeout")
        return "ignored"

    def add_header(self, name, value):
        self.calls.append(("add_header", name, value))


class Named:
    """Remembers which service id it was built for"""

    def __init__(self, service_id):
        self.service_id = service_id


class Helper:
    """Stateless helper built with no arguments"""

    def __init__(self):
        self.serial = next(_counter)


class Broken:
    """Constructor always fails"""

    def __init__(self, *args):
        raise RuntimeError("broken constructor")


class SlowService:
    """Counts constructions; sleeps to widen race windows"""

    instances = 0
    lock = threading.Lock()

    def __init__(self):
        with SlowService.lock:
            SlowService.instances += 1
        time.sleep(0.05)


class ConnectionFactory:
    """Factory object with creation methods"""

    def __init__(self):
        self.created = []

    def create(self, host):
        self.created.append(host)
        return Connection(host)

    @staticmethod
    def create_default():
        return Connection("default")


def make_named(service_id):
    return Named(service_id)


def make_connection(host, port=5432):
    return Connection(host, port)


class RecordingProvider:
    """Provider registering one definition, counts its calls"""

    calls = 0

    def register(self, container):
        RecordingProvider.calls += 1
        container.set_definition("recorded", {"class": Helper})
