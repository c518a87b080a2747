#
# Test Fixtures: classes and functions asserting their own arguments
#

# Standard library -----------------------------------------------------------------------------------------------------
import inspect
import random

from datetime import datetime

# Local ----------------------------------------------------------------------------------------------------------------
from uniontypes.frames import InspectSignatures
from uniontypes.typing import assert_argument


# Classes --------------------------------------------------------------------------------------------------------------

class Math:

    @staticmethod
    def random():
        """Return a random integer between 0 and 10, asserting an argument it doesn't have."""
        assert_argument("no_args_found", ["int", "float"])
        return random.randint(0, 10)

    @staticmethod
    def add(a, b):
        """Return the sum of a and b, both int or float."""
        assert_argument("a", ["int", "float"])
        assert_argument("b", ["int", "float"])
        return a + b

    def mul(self, a, b=2):
        assert_argument("a", ["int", "float"])
        assert_argument("b", ["int", "float"])
        return a * b

    @classmethod
    def neg(cls, a):
        assert_argument("a", ["int", "float"])
        return -a


class View:

    def render(self, view_vars, template=None, layout=None):
        """Render a template, which must be given by name or as a list of candidate names."""
        assert_argument("view_vars", ["array"])
        assert_argument("template", ["string", "array"])
        assert_argument("layout", ["string", "null"])
        return template

    def clear(self):
        assert_argument("anything", ["string"])


class Time(datetime):
    """A datetime subclass, for instance checks of class name types."""


# Methods --------------------------------------------------------------------------------------------------------------

def lineno() -> int:
    """Line number of the caller."""
    return inspect.currentframe().f_back.f_lineno


def caller_parameters(backend=None):
    """Parameters of the calling function, as resolved by a signature backend."""
    frame = inspect.currentframe().f_back
    try:
        return (backend or InspectSignatures()).list_parameters(frame)
    finally:
        del frame


def scale(value, factor=1.0, *, unit=None):
    assert_argument("factor", ["int", "float"])
    assert_argument("unit", ["string", "null"])
    return value * factor
