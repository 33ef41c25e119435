"""
Definition

Recipe describing how to build one service
"""

from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from .arguments import Argument, parse_arguments
from .definition_kind import DefinitionKind
from .exceptions import ArgumentIndexError, InvalidArgumentError, InvalidDefinitionError

# Class object or fully-qualified name
ClassRef = Union[type, str]
# Callable, fully-qualified name of a callable, or (target, method_name)
FactoryRef = Union[Callable[..., Any], str, Tuple[Any, str]]
MethodCall = Tuple[str, Tuple[Any, ...]]

DATA_KEYS = frozenset({"class", "factory", "arguments", "method_calls", "shared"})


def _is_set(value: Any) -> bool:
    return value is not None and not (isinstance(value, str) and not value)


def _as_list(arguments: Optional[Iterable[Any]], label: str) -> List[Any]:
    """Copy an argument list; strings and mappings are not argument lists."""
    if arguments is None:
        return []
    if isinstance(arguments, (str, bytes, bytearray, Mapping)):
        raise InvalidArgumentError(
            f"{label} must be a list, got {type(arguments).__name__} {arguments!r}."
        )
    return list(arguments)


class Definition:
    """Declarative recipe for building one service.

    A definition names either a class to instantiate or a factory to call,
    the positional arguments to pass, the methods to call on the built
    instance, and whether the instance is shared (cached by the container).

    Presence of a class or a factory is not checked here. Definitions may be
    assembled step by step; ``validate()`` is called by the container when
    the definition is registered and again right before it is built.

    Attributes:
        cls: Class or fully-qualified class name (read-only, use set_class)
        factory: Factory reference (read-only, use set_factory)
        arguments: Raw arguments as a tuple (use the argument mutators)
        method_calls: Tuple of (method_name, arguments) pairs
        shared: Whether the built instance is cached

    Example::

        definition = (
            Definition(cls="app.db.Connection", arguments=["localhost"])
            .add_method_call("set_option", ["@config/timeout"])
            .set_shared(True)
        )
    """

    def __init__(
        self,
        cls: Optional[ClassRef] = None,
        factory: Optional[FactoryRef] = None,
        arguments: Optional[Iterable[Any]] = None,
        method_calls: Optional[Iterable[Sequence[Any]]] = None,
        shared: bool = True,
    ):
        self._cls = cls
        self._factory = factory
        self._arguments: List[Any] = _as_list(arguments, "Arguments")
        self._method_calls: List[MethodCall] = []
        self._shared = bool(shared)
        # Memoized parse results, reset by every mutator
        self._parsed_arguments: Optional[List[Argument]] = None
        self._parsed_method_calls: Optional[List[Tuple[str, List[Argument]]]] = None

        if method_calls is not None:
            self.set_method_calls(method_calls)

    @classmethod
    def from_data(cls, data: Any, service_id: Optional[str] = None) -> 'Definition':
        """Normalize raw definition data into a Definition.

        Args:
            data: A Definition (returned unchanged), a callable (used as the
                factory) or a mapping with the keys ``class``, ``factory``,
                ``arguments``, ``method_calls`` and ``shared``
            service_id: Id the data is registered under, used in error messages

        Returns:
            The normalized Definition

        Raises:
            InvalidDefinitionError: When the data has an unsupported type
                or contains unknown keys

        Example::

            Definition.from_data({
                "class": "app.repo.Repo",
                "arguments": ["@db"],
                "method_calls": [["set_logger", ["@logger"]]],
            })
        """
        if isinstance(data, Definition):
            return data

        label = f'"{service_id}"' if service_id is not None else "service"

        if isinstance(data, Mapping):
            unknown = sorted(str(key) for key in data if key not in DATA_KEYS)
            if unknown:
                raise InvalidDefinitionError(
                    f"Unknown keys in definition of {label}: {', '.join(unknown)}. "
                    f"Allowed keys: {', '.join(sorted(DATA_KEYS))}",
                    service_id,
                )
            calls = data.get("method_calls")
            if isinstance(calls, Mapping):
                calls = list(calls.items())
            return cls(
                cls=data.get("class"),
                factory=data.get("factory"),
                arguments=data.get("arguments"),
                method_calls=calls,
                shared=True if data.get("shared") is None else data["shared"],
            )

        if callable(data):
            return cls(factory=data)

        raise InvalidDefinitionError(
            f"Definition of {label} must be a Definition, a mapping or a callable, "
            f"got {type(data).__name__}",
            service_id,
        )

    def _invalidate(self) -> None:
        self._parsed_arguments = None
        self._parsed_method_calls = None

    # Class / factory / shared

    @property
    def cls(self) -> Optional[ClassRef]:
        return self._cls

    def set_class(self, cls: Optional[ClassRef]) -> 'Definition':
        self._cls = cls
        return self

    @property
    def factory(self) -> Optional[FactoryRef]:
        return self._factory

    def set_factory(self, factory: Optional[FactoryRef]) -> 'Definition':
        self._factory = factory
        return self

    @property
    def shared(self) -> bool:
        return self._shared

    def set_shared(self, shared: bool = True) -> 'Definition':
        self._shared = bool(shared)
        return self

    @property
    def kind(self) -> Optional[DefinitionKind]:
        """Construction path, or None when neither factory nor class is set.

        A factory always wins over a class.
        """
        if _is_set(self._factory):
            return DefinitionKind.FACTORY
        if _is_set(self._cls):
            if self.has_arguments():
                return DefinitionKind.CLASS_WITH_ARGS
            return DefinitionKind.CLASS_NO_ARGS
        return None

    def validate(self, service_id: Optional[str] = None) -> DefinitionKind:
        """Return the construction path or fail.

        Raises:
            InvalidDefinitionError: When neither a factory nor a class is set
        """
        kind = self.kind
        if kind is None:
            raise InvalidDefinitionError(
                f'No factory or class is specified for definition of "{service_id}".',
                service_id,
            )
        return kind

    # Arguments

    @property
    def arguments(self) -> Tuple[Any, ...]:
        return tuple(self._arguments)

    def set_arguments(self, arguments: Iterable[Any]) -> 'Definition':
        self._arguments = _as_list(arguments, "Arguments")
        self._invalidate()
        return self

    def has_arguments(self) -> bool:
        return len(self._arguments) > 0

    def add_argument(self, argument: Any) -> 'Definition':
        self._arguments.append(argument)
        self._invalidate()
        return self

    def _check_index(self, index: int) -> None:
        if index < 0 or index > len(self._arguments) - 1:
            raise ArgumentIndexError(
                f'The index "{index}" is not in the range [0, {len(self._arguments) - 1}].',
                index,
            )

    def get_argument(self, index: int) -> Any:
        """Get the raw argument at ``index``.

        Raises:
            ArgumentIndexError: When index is outside [0, len(arguments) - 1]
        """
        self._check_index(index)
        return self._arguments[index]

    def replace_argument(self, index: int, argument: Any) -> 'Definition':
        """Replace the raw argument at ``index``.

        Raises:
            ArgumentIndexError: When index is outside [0, len(arguments) - 1]
        """
        self._check_index(index)
        self._arguments[index] = argument
        self._invalidate()
        return self

    # Method calls

    @property
    def method_calls(self) -> Tuple[MethodCall, ...]:
        return tuple(self._method_calls)

    def set_method_calls(self, calls: Iterable[Sequence[Any]]) -> 'Definition':
        """Replace all method calls.

        Args:
            calls: Iterable of (method_name, arguments) pairs. The arguments
                part may be omitted for calls without arguments.
        """
        self._method_calls = []
        self._invalidate()
        for call in calls:
            if isinstance(call, str):
                self.add_method_call(call)
            else:
                self.add_method_call(*call)
        return self

    def add_method_call(self, method: str, arguments: Iterable[Any] = ()) -> 'Definition':
        """Add a method to call after the service is built.

        Raises:
            InvalidArgumentError: When the method name is empty
        """
        if not method:
            raise InvalidArgumentError("Method name cannot be empty.")
        arguments = _as_list(arguments, f"Arguments of {method}()")
        self._method_calls.append((method, tuple(arguments)))
        self._invalidate()
        return self

    def remove_method_call(self, method: str) -> 'Definition':
        """Remove the first call to ``method``. Later calls are kept."""
        for i, (name, _) in enumerate(self._method_calls):
            if name == method:
                del self._method_calls[i]
                self._invalidate()
                break
        return self

    def has_method_call(self, method: str) -> bool:
        return any(name == method for name, _ in self._method_calls)

    # Parsed views used by the builder

    def parsed_arguments(self) -> List[Argument]:
        if self._parsed_arguments is None:
            self._parsed_arguments = parse_arguments(self._arguments)
        return self._parsed_arguments

    def parsed_method_calls(self) -> List[Tuple[str, List[Argument]]]:
        if self._parsed_method_calls is None:
            self._parsed_method_calls = [
                (name, parse_arguments(arguments))
                for name, arguments in self._method_calls
            ]
        return self._parsed_method_calls

    def to_data(self) -> Dict[str, Any]:
        """Raw data form accepted by ``from_data()``."""
        return {
            "class": self._cls,
            "factory": self._factory,
            "arguments": list(self._arguments),
            "method_calls": [[name, list(args)] for name, args in self._method_calls],
            "shared": self._shared,
        }

    def __repr__(self) -> str:
        return (
            f"Definition(cls={self._cls!r}, factory={self._factory!r}, "
            f"arguments={self._arguments!r}, method_calls={self._method_calls!r}, "
            f"shared={self._shared!r})"
        )
