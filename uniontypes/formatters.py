"""
Diagnostics formatting of captured stack frames.

Renders short, editor-friendly location strings for exception messages:

    >>> called_in(frames, 0)
    'called in #0 `src/models.py:10`'
    >>> the_func(frames[1])
    'models.Math::add()'
    >>> func_args_ellipsis("b", ["a", "b"], "int", "float")
    '..., int|float $b'
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any, Sequence

# Local ----------------------------------------------------------------------------------------------------------------
from .config import DiagnosticsConfig, get_config
from .frames import StackFrame
from .sentinels import UNSET

__all__ = ["relative_path", "the_func", "func_args_ellipsis", "find_frame", "called_in"]


# Methods --------------------------------------------------------------------------------------------------------------

def relative_path(file: str, path_prefix: Any = UNSET) -> str:
    """
    Return a file name relative to the workspace, e.g. `src/models.py`.

    A friendly editor format, without the `/path/to/app/` prefix. The prefix is taken from
    the process-wide configuration unless given explicitly, see `uniontypes.config.configure()`.

    Args:
        file: The full file path, e.g. `/path/to/app/src/models.py`.
        path_prefix: The prefix to remove, e.g. `/path/to/app/`. Non-string values leave `file` unchanged.

    Returns:
        str: File name relative to the workspace, e.g. `src/models.py`,
             or `file` unchanged if no prefix is configured.
    """
    if path_prefix is UNSET:
        path_prefix = get_config().path_prefix

    if isinstance(path_prefix, str) and path_prefix:
        file = file.replace(path_prefix, "")

    return file


def the_func(frame: StackFrame, *, parentheses: bool = True, config: DiagnosticsConfig | None = None) -> str:
    """
    Return the function of a stack frame as `Class::function()`, e.g. `models.Math::add()`.

    Plain functions are located by their call site instead: `src/index.py:25::add()`.

    Args:
        frame: The stack frame.
        parentheses: Add `()` after the function name.
        config: Diagnostics configuration, the process-wide one if None.

    Returns:
        str: The function string.
    """
    owner = frame.cls
    if owner is None:
        owner = f"{_relative_path(frame.file, config)}:{frame.line}"

    return f"{owner}::{frame.function}{'()' if parentheses else ''}"


def func_args_ellipsis(arg_name: str, func_args: Sequence[str], *types: str) -> str:
    """
    Return the argument declaration surrounded by ellipses for the other arguments.

    Args:
        arg_name: The argument name, e.g. `data`.
        func_args: All argument names of the function, e.g. `['id', 'data']`.
        *types: The union type names, e.g. `'string'`, `'array'`.

    Returns:
        str: The declaration, e.g. `'..., string|array $data'`.

    Raises:
        ValueError: If arg_name is not one of func_args.

    Examples:
        >>> func_args_ellipsis("x", ["x"], "int", "float")
        'int|float $x'
        >>> func_args_ellipsis("a", ["a", "b"], "int", "float")
        'int|float $a, ...'
        >>> func_args_ellipsis("b", ["a", "b", "c"], "int", "float")
        '..., int|float $b, ...'
    """
    func_args = list(func_args)
    if arg_name not in func_args:
        raise ValueError(f"argument name '{arg_name}' not found in {func_args}")

    the_arg = f"{'|'.join(types)} ${arg_name}"
    args_count = len(func_args)

    # unique arg
    if args_count == 1:
        return the_arg

    arg_offset = func_args.index(arg_name) + 1

    # first arg
    if arg_offset == 1:
        return f"{the_arg}, ..."

    # last arg
    if arg_offset == args_count:
        return f"..., {the_arg}"

    return f"..., {the_arg}, ..."


def find_frame(frames: Sequence[StackFrame], index: int, config: DiagnosticsConfig | None = None) -> dict | None:
    """
    Find a stack frame by index, with its computed location strings.

    Return example:
        {
            'file': '/path/to/app/src/models.py',
            'line': 22,
            'function': 'add',
            'cls': 'models.Math',
            'call_type': '->',
            'args': {'a': 1, 'b': '2'},
            'relative_path': 'src/models.py',
            'the_func': 'models.Math::add()',
        }

    Returns:
        dict | None: The frame fields, None if the index is not found.
    """
    if not 0 <= index < len(frames):
        return None

    frame = frames[index]
    return {
        "file": frame.file,
        "line": frame.line,
        "function": frame.function,
        "cls": frame.cls,
        "call_type": frame.call_type,
        "args": frame.args,
        "relative_path": _relative_path(frame.file, config),
        "the_func": the_func(frame, config=config),
    }


def called_in(frames: Sequence[StackFrame], index: int, config: DiagnosticsConfig | None = None) -> str:
    """
    Return the `called in` location string, e.g. `called in #0 `src/models.py:10``.

    Raises:
        IndexError: If the frame index is not found in frames.
    """
    found = find_frame(frames, index, config)
    if found is None:
        raise IndexError(f"stack frame #{index} not found, {len(frames)} frames captured")

    return f"called in #{index} `{found['relative_path']}:{found['line']}`"


# Private Methods ------------------------------------------------------------------------------------------------------

def _relative_path(file: str, config: DiagnosticsConfig | None) -> str:
    if config is None:
        return relative_path(file)
    return relative_path(file, config.path_prefix)
