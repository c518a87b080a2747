"""
Errors raised by the union types assertions.

Every error message ends with the location of the offending call, computed from the stack
captured by the public entry point, e.g.

    InvalidUnionTypeError: Invalid union type `integer`, use `int` instead, called in #0 `src/models.py:12`

Each error also derives from the closest builtin exception, so that callers can keep catching
TypeError, ValueError, LookupError or RuntimeError.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Sequence

# Local ----------------------------------------------------------------------------------------------------------------
from .formatters import called_in
from .frames import StackFrame
from .utils import quote_join

__all__ = [
    "UnionTypesError",
    "InvalidUnionTypeError",
    "ClassNotFoundError",
    "UnionTypeError",
    "FatalError",
]


# Classes --------------------------------------------------------------------------------------------------------------

class UnionTypesError(Exception):
    """
    Base class for all union types errors.

    Args:
        reason: The error message without location, e.g. `Class `models.Tablr` not found`.
        frames: The stack captured by the public entry point, see `uniontypes.frames.capture_stack()`.
        index: The stack frame index reported as location. If the stack is shallower,
               the outermost captured frame is reported instead.

    Attributes:
        reason: The error message without location.
        frames: The captured stack.
        index: The stack frame index actually reported, None if no frame was captured.
    """
    default_index: int = 0

    def __init__(self, reason: str, frames: Sequence[StackFrame], index: int | None = None) -> None:
        self.reason = reason
        self.frames = list(frames)

        index = self.default_index if index is None else index
        if not self.frames:
            self.index = None
            super().__init__(reason)
            return

        self.index = min(index, len(self.frames) - 1)
        super().__init__(f"{reason}, {called_in(self.frames, self.index)}")


class InvalidUnionTypeError(UnionTypesError, ValueError):
    """
    The union type name is not one of the valid types nor a class name.

    Args:
        invalid_type: The invalid type, e.g. `'integer'`, `'boolean'`, `'object'`.
        *use: The types to use instead, e.g. `'int'`, `'bool'`.
        frames: The captured stack.
    """

    def __init__(self, invalid_type: str, *use: str, frames: Sequence[StackFrame]) -> None:
        self.invalid_type = invalid_type
        self.use = use

        if len(use) > 1:
            suggestion = f"one of those types `{quote_join(use)}`"
        else:
            suggestion = f"`{use[0]}`"

        super().__init__(f"Invalid union type `{invalid_type}`, use {suggestion} instead", frames)


class ClassNotFoundError(UnionTypesError, LookupError):
    """
    The class of a type given as class name does not exist.

    Reported one frame further up than other errors: the faulty type list is written by the
    caller of the asserting function.
    """
    default_index = 1

    def __init__(self, class_name: str, frames: Sequence[StackFrame]) -> None:
        self.class_name = class_name
        super().__init__(f"Class `{class_name}` not found", frames)


class UnionTypeError(UnionTypesError, TypeError):
    """
    The value is not of the union type, e.g.

        Argument `2` passed to `fixtures.Math::add(..., int|float $b)` must be of the union type
        `int|float`, `string` given
    """


class FatalError(UnionTypesError, RuntimeError):
    """
    The argument assertion is misused: invoked outside a function, for a function without
    arguments or with an invalid argument name.
    """
