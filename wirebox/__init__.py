# Public API
from .arguments import Argument, Literal, NewInstance, SelfId, ServiceRef, parse_argument
from .builder import ServiceBuilder
from .container import CONTAINER_ID, ServiceContainer
from .container_aware import ContainerAware
from .definition import Definition
from .definition_kind import DefinitionKind
from .exceptions import (
    ArgumentIndexError,
    ContainerNotSetError,
    DuplicateDefinitionError,
    InvalidArgumentError,
    InvalidDefinitionError,
    InvalidProviderError,
    InvalidReferenceError,
    ServiceNotFoundError,
    WireboxError,
)
from .provider import DEFAULT_CONFIG_ID, ConfigProvider, Provider
from .resolver import ArgumentResolver

__all__ = [
    "ServiceContainer",
    "CONTAINER_ID",
    "Definition",
    "DefinitionKind",
    "ServiceBuilder",
    "ArgumentResolver",
    "ContainerAware",
    # Providers
    "Provider",
    "ConfigProvider",
    "DEFAULT_CONFIG_ID",
    # Argument grammar
    "Argument",
    "Literal",
    "SelfId",
    "ServiceRef",
    "NewInstance",
    "parse_argument",
    # Exceptions
    "WireboxError",
    "InvalidArgumentError",
    "ServiceNotFoundError",
    "DuplicateDefinitionError",
    "InvalidProviderError",
    "InvalidDefinitionError",
    "InvalidReferenceError",
    "ArgumentIndexError",
    "ContainerNotSetError",
]

try:
    from ._version import __version__
except ImportError:
    # Fallback for development
    __version__ = '0.0.0'
