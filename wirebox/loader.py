"""
Loader

Imports classes and callables referenced by name in definition data.
"""

import builtins
import importlib
from typing import Any


def normalize_path(path: str) -> str:
    """Turn ``\\pkg\\mod\\Class`` into ``pkg.mod.Class``.

    Dotted paths are returned unchanged.
    """
    return path.lstrip("\\").replace("\\", ".")


def import_object(path: str) -> Any:
    """Import an object from its fully-qualified name.

    Accepts dotted names (``collections.OrderedDict``), the ``module:attr``
    form (``app.factories:make_cache``) and backslash separated names
    (``\\collections\\OrderedDict``). A name without a module part is
    looked up in ``builtins``.

    Args:
        path: Fully-qualified name of the object

    Returns:
        The imported object

    Raises:
        ImportError: When the module or the attribute cannot be found

    Example::

        import_object("collections.OrderedDict")   # OrderedDict
        import_object("\\\\dict")                   # dict
    """
    name = normalize_path(path)
    if not name:
        raise ImportError(f"Cannot import an empty name (from {path!r})")

    if ":" in name:
        module_name, _, attr_path = name.partition(":")
    elif "." in name:
        module_name, _, attr_path = name.rpartition(".")
    else:
        try:
            return getattr(builtins, name)
        except AttributeError:
            raise ImportError(f"{path!r} is not a builtin name") from None

    module = importlib.import_module(module_name)
    obj: Any = module
    try:
        for attr in attr_path.split("."):
            obj = getattr(obj, attr)
    except AttributeError:
        raise ImportError(
            f"Module {module_name!r} has no attribute {attr_path!r} (from {path!r})"
        ) from None
    return obj
