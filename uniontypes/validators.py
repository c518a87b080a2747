"""
Union type vocabulary validation.

A union type is a non-empty list of type names, each being one of:
    - `'int'` (not `'integer'` or `'double'`)
    - `'float'` (not `'decimal'`)
    - `'string'` (not `'str'`)
    - `'bool'` (not `'boolean'`)
    - `'array'` (not `'list'`, `'tuple'` or `'dict'`)
    - `'null'` (not `'NULL'` or `'NoneType'`)
    - `'resource'`
    - A class name string, e.g. `'decimal.Decimal'`, `'datetime.date'`, `'ValueError'` or `'bytes'`,
      or the class itself
    - `'types.SimpleNamespace'` for generic objects

Builtin classes of the valid types stand for the type name: `str` for `'string'`, `list`, `tuple`
and `dict` for `'array'`, `type(None)` for `'null'`.

Every class name produced by `uniontypes.abc.get_type()` is a valid type, including the names of
interpreter types such as `'function'`, `'method'` or `'NoneType'`, resolved from the `types` module.

These validators check the **names** of the declared types, not values.
For value validation, see the typing module.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import builtins
import importlib
import re
import types as _types

from typing import Iterable, Sequence

# Local ----------------------------------------------------------------------------------------------------------------
from .errors import ClassNotFoundError, InvalidUnionTypeError
from .frames import StackFrame, capture_stack
from .utils import class_name

__all__ = [
    "CLASSNAME_PATTERN",
    "GENERIC_OBJECT",
    "UNION_TYPES",
    "FULL_UNION_TYPES",
    "assert_types",
    "check_types",
    "is_class_name",
    "resolve_class",
    "type_names",
]

# Constants ------------------------------------------------------------------------------------------------------------

CLASSNAME_PATTERN = "{module}.{ClassName}"
"""Placeholder of the class name type, replaced by any valid class name, e.g. `decimal.Decimal`."""

GENERIC_OBJECT = "types.SimpleNamespace"
"""Generic object type, always valid."""

UNION_TYPES = ("int", "float", "string", "bool", "array", "null", "resource")
"""The valid type names, without the class name type."""

# Builtin classes accepted in place of the valid type names
CANONICAL_CLASSES = {
    bool: "bool",
    int: "int",
    float: "float",
    str: "string",
    type(None): "null",
    list: "array",
    tuple: "array",
    dict: "array",
}

CLASSNAME_REGEX = re.compile(r"^(?:[A-Za-z_][A-Za-z0-9_]*\.)*[A-Z][A-Za-z0-9_]*$")

# Interpreter types reported under their builtins name but not exposed in builtins, e.g. `function`
INTERPRETER_TYPES = {
    cls.__name__: cls
    for cls in vars(_types).values()
    if isinstance(cls, type) and cls.__module__ == "builtins"
}

# Legacy spellings and their replacement
ALIASES = {
    "integer": "int",
    "double": "int",
    "decimal": "float",
    "boolean": "bool",
}


# Methods --------------------------------------------------------------------------------------------------------------

def FULL_UNION_TYPES() -> tuple[str, ...]:
    """The valid type names, including the class name type placeholder."""
    return (*UNION_TYPES, CLASSNAME_PATTERN)


def assert_types(*types: str | type) -> None:
    """
    Assert the union type names.

    Args:
        *types: The type names to assert, e.g. `'int'`, `'float'`, `Decimal`.

    Raises:
        InvalidUnionTypeError: If a type isn't one of UNION_TYPES nor a class name.
        ClassNotFoundError: If the class of a type given as class name doesn't exist.

    Examples:
        >>> assert_types("int", "float", "decimal.Decimal")
        >>> assert_types("integer")
        Traceback (most recent call last):
        ...
        InvalidUnionTypeError: Invalid union type `integer`, use `int` instead, called in #0 `...`
    """
    check_types(types, capture_stack(limit=2))


def check_types(types: Iterable[str | type], frames: Sequence[StackFrame]) -> None:
    """
    Assert the union type names, reporting errors against an already captured stack.

    Names are checked in order and the first invalid one raises.
    """
    types = list(types)
    if not types:
        raise InvalidUnionTypeError("[]", *FULL_UNION_TYPES(), frames=frames)

    for type_ in types:
        if isinstance(type_, type) or type_ == GENERIC_OBJECT:
            continue

        if not isinstance(type_, str):
            raise InvalidUnionTypeError(repr(type_), *FULL_UNION_TYPES(), frames=frames)

        # 'NULL' must be checked before the class name pattern, which it matches
        if type_ == "NULL":
            raise InvalidUnionTypeError(type_, "null", frames=frames)

        if is_class_name(type_):
            cls = resolve_class(type_)
            if cls is None:
                raise ClassNotFoundError(type_, frames=frames)
            _check_not_canonical(type_, cls, frames)
            continue

        if type_ in ALIASES:
            raise InvalidUnionTypeError(type_, ALIASES[type_], frames=frames)

        if type_ == "object":
            raise InvalidUnionTypeError(
                type_, f"{{ClassName}} class or '{CLASSNAME_PATTERN}' format", frames=frames
            )

        if type_ in UNION_TYPES:
            continue

        # Lowercase class names, e.g. 'datetime.date', 'bytes' or 'function'
        cls = resolve_class(type_)
        if cls is None:
            raise InvalidUnionTypeError(type_, *FULL_UNION_TYPES(), frames=frames)
        _check_not_canonical(type_, cls, frames)


def is_class_name(name: object) -> bool:
    """
    True if name is written as a class name: dotted path ending with a capitalized name.

    Examples:
        >>> is_class_name("decimal.Decimal")
        True
        >>> is_class_name("decimal")
        False
    """
    return isinstance(name, str) and CLASSNAME_REGEX.match(name) is not None


def resolve_class(name: str | type) -> type | None:
    """
    Resolve a class name to the class.

    Names without module are looked up in builtins, e.g. `'ValueError'`, then among the
    interpreter types of the `types` module, e.g. `'function'`. Dotted names are resolved by
    importing the longest importable module prefix and walking the remaining attributes,
    so nested classes like `'pkg.module.Outer.Inner'` are supported.

    Returns:
        type | None: The class, None if it doesn't exist or isn't a class.
    """
    if isinstance(name, type):
        return name

    parts = name.split(".")
    if len(parts) == 1:
        obj = getattr(builtins, name, None)
        if isinstance(obj, type):
            return obj
        return INTERPRETER_TYPES.get(name)

    for split in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:split])
        try:
            obj = importlib.import_module(module_name)
        except (ImportError, TypeError, ValueError):
            # Not a module, a relative name or an empty segment
            continue

        for attr in parts[split:]:
            obj = getattr(obj, attr, None)
            if obj is None:
                break
        if isinstance(obj, type):
            return obj

    return None


def type_names(types: Iterable[str | type]) -> list[str]:
    """
    Type names as used in diagnostics and tag comparison.

    Builtin classes of the valid types are replaced by the type name, other classes by their class name.

    Examples:
        >>> type_names(["int", str, Decimal])
        ['int', 'string', 'decimal.Decimal']
    """
    names = []
    for t in types:
        if isinstance(t, type):
            names.append(CANONICAL_CLASSES.get(t) or class_name(t))
        else:
            names.append(t)
    return names


# Private Methods ------------------------------------------------------------------------------------------------------

def _check_not_canonical(type_: str, cls: type, frames: Sequence[StackFrame]) -> None:
    """Builtin classes of the valid types must be spelled with the type name, e.g. `'string'` for `'str'`."""
    if cls in CANONICAL_CLASSES:
        raise InvalidUnionTypeError(type_, CANONICAL_CLASSES[cls], frames=frames)
