"""
Runtime union type validation of values and function arguments.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import inspect

from typing import Any, Sequence

# Local ----------------------------------------------------------------------------------------------------------------
from .abc import get_type, stringify
from .errors import FatalError, UnionTypeError
from .formatters import func_args_ellipsis, the_func
from .frames import InspectSignatures, Parameter, SignatureBackend, StackFrame, capture_stack
from .sentinels import NO_DEFAULT
from .utils import quote_join
from .validators import CANONICAL_CLASSES, UNION_TYPES, check_types, resolve_class, type_names

# Public API -----------------------------------------------------------------------------------------------------------
__all__ = ["is_of_union", "assert_of_union", "assert_argument"]


# Methods --------------------------------------------------------------------------------------------------------------

def is_of_union(value: Any, types: Sequence[str | type], *, instance_of: bool = True) -> bool:
    """
    Check if the value type is one of the union types.

    Args:
        value: The value to check, e.g. `1.2`.
        types: The union types to check against, e.g. `['int', 'float']`.
        instance_of: Also match class name types with isinstance(), so subclass
                     instances are accepted. If False, only the exact class matches.

    Returns:
        bool: True if the value type is one of the union types, False otherwise.

    Raises:
        InvalidUnionTypeError: If a type isn't a valid type name nor a class name.
        ClassNotFoundError: If the class of a type given as class name doesn't exist.

    Examples:
        >>> is_of_union(1.2, ["int", "float"])
        True
        >>> is_of_union("1.2", ["int", "float"])
        False
        >>> is_of_union("1.2", ["int", "float", "string"])
        True
        >>> is_of_union(datetime.now(), ["datetime.date"])
        True
        >>> is_of_union(datetime.now(), ["datetime.date"], instance_of=False)
        False
    """
    check_types(types, capture_stack(limit=2))
    return _is_of_union(value, types, instance_of)


def assert_of_union(value: Any, types: Sequence[str | type], *, instance_of: bool = True) -> None:
    """
    Raise a UnionTypeError if the value isn't of the union type.

    Args:
        value: The value to check.
        types: The union types to check against, e.g. `['int', 'float']`.
        instance_of: Also match class name types with isinstance().

    Raises:
        UnionTypeError: If the value isn't of the union type.
        InvalidUnionTypeError: If a type isn't a valid type name nor a class name.
        ClassNotFoundError: If the class of a type given as class name doesn't exist.

    Examples:
        >>> assert_of_union("1.2", ["int", "float"])
        Traceback (most recent call last):
        ...
        UnionTypeError: `'1.2'` must be of the union type `int|float`, `string` given, called in #0 `...`
    """
    frames = capture_stack(limit=2)
    check_types(types, frames)

    if not _is_of_union(value, types, instance_of):
        raise UnionTypeError(
            f"`{stringify(value)}` must be of the union type `{'|'.join(type_names(types))}`, "
            f"`{get_type(value)}` given",
            frames,
        )


def assert_argument(
        arg_name: str,
        types: Sequence[str | type],
        *,
        instance_of: bool = True,
        backend: SignatureBackend | None = None,
) -> None:
    """
    Raise a UnionTypeError if the value of an argument of the calling function isn't of the union type.

    Must be called directly inside the function whose argument is checked: the function and its
    arguments are found from the calling frame. The argument value is the one bound in the calling
    frame when assert_argument() is invoked, or the declared default value.

    Args:
        arg_name: The argument name, e.g. `'data'`.
        types: The union types, e.g. `['string', 'array']`.
        instance_of: Also match class name types with isinstance().
        backend: Signature reflection backend, InspectSignatures() if None.

    Raises:
        UnionTypeError: If the argument value isn't of the union type. Located at the call of the
                        checked function.
        FatalError: If not invoked inside a function or method, if the function doesn't accept any
                    argument or if the argument name is invalid.
        InvalidUnionTypeError: If a type isn't a valid type name nor a class name.
        ClassNotFoundError: If the class of a type given as class name doesn't exist.

    Examples:
        >>> class Controller:
        ...     def set_and_render(self, view_vars: dict, template=None, layout=None):
        ...         assert_argument("template", ["string", "array"])
        ...
        >>> Controller().set_and_render({"posts": []})
        Traceback (most recent call last):
        ...
        UnionTypeError: Argument `2` passed to `__main__.Controller::set_and_render(..., string|array $template, ...)`
        must be of the union type `string|array`, `null` given, called in #1 `...`
    """
    frames = capture_stack(limit=2)
    check_types(types, frames)

    if len(frames) < 2:
        raise FatalError(f"The `{the_func(frames[0])}` must be invoked **INSIDE** a function or method", frames)

    callee = frames[1]
    backend = InspectSignatures() if backend is None else backend

    frame = inspect.currentframe()
    try:
        params = backend.list_parameters(frame.f_back)
    finally:
        # Clean up frame references to avoid reference cycles
        del frame

    if not params:
        raise FatalError(
            f"The `{the_func(callee)}` {'method' if callee.cls else 'function'} doesn't accept any argument",
            frames,
            1,
        )

    func_args = [p.name for p in params]
    if arg_name not in func_args:
        raise FatalError(
            f"Invalid argument name `{arg_name}` for `{the_func(callee)}`, "
            f"try one of those values `{quote_join(func_args)}`",
            frames,
        )

    arg_index = func_args.index(arg_name)
    arg_value = _get_arg_value(callee, params[arg_index], frames)

    if not _is_of_union(arg_value, types, instance_of):
        names = type_names(types)
        raise UnionTypeError(
            f"Argument `{arg_index + 1}` passed to "
            f"`{the_func(callee, parentheses=False)}({func_args_ellipsis(arg_name, func_args, *names)})` "
            f"must be of the union type `{'|'.join(names)}`, `{get_type(arg_value)}` given",
            frames,
            1,
        )


# Private Methods ------------------------------------------------------------------------------------------------------

def _is_of_union(value: Any, types: Sequence[str | type], instance_of: bool) -> bool:
    """Membership test for already validated union types."""
    if get_type(value) in type_names(types):
        return True

    if not instance_of:
        return False

    for type_ in types:
        if isinstance(type_, type):
            cls = None if type_ in CANONICAL_CLASSES else type_
        elif type_ in UNION_TYPES:
            cls = None
        else:
            cls = resolve_class(type_)

        if cls is not None and isinstance(value, cls):
            return True

    return False


def _get_arg_value(callee: StackFrame, param: Parameter, frames: list[StackFrame]) -> Any:
    """
    The value bound to a parameter in the callee frame, or the parameter default value.

    Example:
        For `def set_and_render(self, view_vars, template=None, layout=None)` invoked as
        `controller.set_and_render({'posts': posts})`, the value of `template` is its default `None`
        unless it was rebound or deleted.

    Raises:
        FatalError: If the parameter is neither bound nor has a default value.
    """
    if param.name in callee.args:
        return callee.args[param.name]

    if param.default is NO_DEFAULT:
        raise FatalError(f"Argument `{param.name}` of `{the_func(callee)}` has no value nor default value", frames)

    return param.default
