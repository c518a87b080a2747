"""
Sentinel objects for distinguishing unprovided arguments and undeclared defaults from None.

Sentinels:
    UNSET: An optional argument that was not provided (None is a meaningful value for it)
    NO_DEFAULT: A parameter that declares no default value (None is a valid default)

Example:
    >>> def relative_path(file: str, path_prefix: str | None | UnsetType = UNSET) -> str:
    ...     if path_prefix is UNSET:
    ...         path_prefix = get_config().path_prefix
"""

from typing import Any, Final

__all__ = [
    'UNSET',
    'NO_DEFAULT',
    'UnsetType',
    'NoDefaultType',
]


# Base Sentinel --------------------------------------------------------------------------------------------------------

class _SentinelBase:
    """
    Base class for singleton sentinels compared by identity.
    """
    __slots__ = ('_name',)
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, name: str) -> None:
        self._name = name

    def __repr__(self) -> str:
        return f'<{self._name}>'

    def __eq__(self, other: Any) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> tuple:
        """Ensure pickling returns the singleton instance."""
        return (self.__class__, ())


# Sentinel Types -----------------------------------------------------------------------------------------------------

class UnsetType(_SentinelBase):
    """
    Sentinel type for UNSET.

    Marks an optional argument as 'not provided', as opposed to 'explicitly set to None'.
    """
    __slots__ = ()

    def __init__(self) -> None:
        super().__init__("UNSET")


class NoDefaultType(_SentinelBase):
    """
    Sentinel type for NO_DEFAULT.

    Marks a callable parameter which declares no default value.
    """
    __slots__ = ()

    def __init__(self) -> None:
        super().__init__("NO_DEFAULT")


# Sentinel Objects -----------------------------------------------------------------------------------------------------

UNSET: Final[UnsetType] = UnsetType()
"""
Sentinel representing an unprovided optional argument.

Use with identity check: `if arg is UNSET:`
"""

NO_DEFAULT: Final[NoDefaultType] = NoDefaultType()
"""
Sentinel representing a parameter without declared default value.

A parameter declared as `template=None` has default `None`, a parameter declared as `template`
has default `NO_DEFAULT`.
"""
