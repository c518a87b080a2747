"""
Utilities shared across the package.

Contains functions used by multiple modules to avoid circular imports.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any, Iterable


# Methods --------------------------------------------------------------------------------------------------------------


def class_name(obj: Any, fully_qualified: bool = True) -> str:
    """
    Get the class name of an object or a class.

    Returns class name whether given an instance or the class itself. Builtin classes are never
    module-qualified, nested classes keep their qualified name.

    Parameters:
        obj (Any): An object or a class.
        fully_qualified (bool): If true, prefix user classes with their module name.

    Returns:
        str: The class name.

    Raises:
        AttributeError: If the class name cannot be read from the object's class.

    Examples:
        >>> class_name(10)
        'int'
        >>> class_name(lambda: None)
        'function'
        >>> from decimal import Decimal
        >>> class_name(Decimal)
        'decimal.Decimal'
        >>> class_name(Decimal, fully_qualified=False)
        'Decimal'
    """
    cls = obj if isinstance(obj, type) else type(obj)

    name = getattr(cls, "__qualname__", None) or cls.__name__
    module = getattr(cls, "__module__", None)

    if not fully_qualified or not module or module == "builtins":
        return name
    return f"{module}.{name}"


def quote(value: str) -> str:
    """Wrap a string with single quotes, e.g. `'a'`."""
    return f"'{value}'"


def quote_join(values: Iterable[str], separator: str = ", ") -> str:
    """
    Quote every value and join them.

    Examples:
        >>> quote_join(["a", "b"])
        "'a', 'b'"
    """
    return separator.join(quote(v) for v in values)
