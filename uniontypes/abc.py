"""
Runtime value introspection: type tags and diagnostic representations.

The type tag of a value is one of the canonical union types
`'int'`, `'float'`, `'string'`, `'bool'`, `'array'`, `'null'`, `'resource'`
or the fully-qualified class name of the value, e.g. `'decimal.Decimal'`.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import io
import mmap
import selectors
import socket

from typing import Any

# Local ----------------------------------------------------------------------------------------------------------------
from .utils import class_name, quote

__all__ = ["get_type", "stringify", "is_array", "is_resource", "UNKNOWN_TYPE", "UNKNOWN_VALUE_TYPE"]

# Constants ------------------------------------------------------------------------------------------------------------

UNKNOWN_TYPE = "Unknown type"
UNKNOWN_VALUE_TYPE = "Unknown value type"

ARRAY_TYPES = (list, tuple, dict)

# Opaque OS-level handles
RESOURCE_TYPES = (io.IOBase, socket.socket, mmap.mmap, selectors.BaseSelector)


# Methods --------------------------------------------------------------------------------------------------------------

def is_array(value: Any) -> bool:
    """True for ordered or keyed builtin containers: list, tuple, dict and their subclasses."""
    return isinstance(value, ARRAY_TYPES)


def is_resource(value: Any) -> bool:
    """True for file objects, sockets, memory maps and selectors."""
    return isinstance(value, RESOURCE_TYPES)


def get_type(value: Any) -> str:
    """
    Get the type tag of a given value.

    Possible return values:
        - `'int'` for int
        - `'float'` for float
        - `'string'` for str
        - `'bool'` for bool
        - `'array'` for list, tuple and dict
        - `'null'` for None
        - `'resource'` for file objects, sockets and other OS handles,
          e.g. `get_type(open('file.txt'))` returns `'resource'`
        - The class name for any other object, e.g. `get_type(Decimal(1))` returns `'decimal.Decimal'`,
          `get_type(lambda: 0)` returns `'function'`, `get_type(Decimal)` returns `'type'`
        - `'Unknown type'` if the class name of the value cannot be read

    Args:
        value: Any value, e.g. `'my string'`.

    Returns:
        str: The type tag, e.g. `'string'`.

    Examples:
        >>> get_type(1.2)
        'float'
        >>> get_type([1, 2, "k"])
        'array'
        >>> get_type(None)
        'null'
    """
    # bool is a subclass of int
    if isinstance(value, bool):
        return "bool"

    if isinstance(value, int):
        return "int"

    if isinstance(value, float):
        return "float"

    if isinstance(value, str):
        return "string"

    if is_array(value):
        return "array"

    if value is None:
        return "null"

    if is_resource(value):
        return "resource"

    try:
        return class_name(type(value))
    except AttributeError:
        return UNKNOWN_TYPE


def stringify(value: Any) -> str:
    """
    Convert any value to a short string for exception messages.

    Container contents are never rendered, so messages stay bounded for any input.

    Return examples:
        - `'1'` for `1`, `'1.2'` for `1.2`
        - `'null'` for `None`
        - `"'my string'"` for `'my string'`, wrapped with quotes
        - `'true'` / `'false'` for `True` / `False`
        - `'Array'` for any list, tuple or dict
        - `'object(decimal.Decimal)'` for any object, `'object(function)'` for functions,
          `'object(type)'` for classes
        - `'Resource id #3'` for OS handles, the number being the file descriptor when available
        - `'Unknown value type'` if the class name of the value cannot be read

    Args:
        value: Any value.

    Returns:
        str: The value representation.
    """
    if isinstance(value, bool):
        return "true" if value else "false"

    if isinstance(value, (int, float)):
        return str(value)

    if value is None:
        return "null"

    if isinstance(value, str):
        return quote(value)

    if is_array(value):
        return "Array"

    if is_resource(value):
        return f"Resource id #{_resource_id(value)}"

    try:
        return f"object({class_name(type(value))})"
    except AttributeError:
        return UNKNOWN_VALUE_TYPE


# Private Methods ------------------------------------------------------------------------------------------------------

def _resource_id(value: Any) -> int:
    """File descriptor of an OS handle, or its identity when closed or not backed by a descriptor."""
    try:
        fd = value.fileno()
    except (AttributeError, OSError, ValueError):
        return id(value)
    return fd if isinstance(fd, int) and fd >= 0 else id(value)
