"""
Call stack capture and callable signature reflection.

A captured stack is a list of StackFrame records ordered from the innermost call outwards.
Each record describes one pending invocation: the function being called, the class owning it,
the arguments bound to its parameters and the file/line of the *call site*. Index 0 is the
function which captured the stack, index 1 its immediate caller, and so on:

    def add(self, a, b=0):                          # frames[1]: function='add', cls='fixtures.Math',
        assert_argument("a", ["int", "float"])      #            file/line of the `math.add(...)` call
                                                    # frames[0]: function='assert_argument',
                                                    #            file/line of this line

Module-level code is not a function invocation, so the stack ends at the first module frame.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import inspect
import warnings

from dataclasses import dataclass, field
from types import CodeType, FrameType
from typing import Any, Callable, Literal, Protocol, runtime_checkable

# Local ----------------------------------------------------------------------------------------------------------------
from .sentinels import NO_DEFAULT

__all__ = [
    "StackFrame",
    "Parameter",
    "SignatureBackend",
    "InspectSignatures",
    "capture_stack",
    "owner_name",
]

MODULE_CODE_NAME = "<module>"


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class StackFrame:
    """
    One pending function or method invocation.

    Attributes:
        file: File name of the call site, e.g. `/path/to/app/src/models.py`.
        line: Line number of the call site.
        function: Name of the called function, e.g. `add`.
        cls: Fully-qualified name of the class owning the function, None for plain functions.
        call_type: `'->'` for instance methods, `'::'` for class and static methods, None for functions.
        args: Values bound to the function parameters, in declaration order.
    """
    file: str
    line: int
    function: str
    cls: str | None = None
    call_type: Literal["->", "::"] | None = None
    args: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_frame(cls, frame: FrameType) -> "StackFrame":
        """
        Build the record of the invocation running in `frame`.

        Raises:
            ValueError: If the frame has no caller, so no call site exists.
        """
        caller = frame.f_back
        if caller is None:
            raise ValueError(f"frame of {frame.f_code.co_name}() has no call site")

        code = frame.f_code
        owner = owner_name(code, frame.f_globals.get("__name__"))
        call_type = None
        if owner is not None:
            call_type = "->" if code.co_argcount and code.co_varnames[0] == "self" else "::"

        return cls(
            file=caller.f_code.co_filename,
            line=caller.f_lineno,
            function=code.co_name,
            cls=owner,
            call_type=call_type,
            args=_bound_args(frame),
        )


@dataclass(frozen=True)
class Parameter:
    """
    A callable parameter.

    Attributes:
        name: The parameter name, e.g. `template`.
        kind: The inspect.Parameter kind, e.g. `inspect.Parameter.POSITIONAL_OR_KEYWORD`.
        default: The declared default value, NO_DEFAULT when none is declared.
    """
    name: str
    kind: Any = inspect.Parameter.POSITIONAL_OR_KEYWORD
    default: Any = NO_DEFAULT

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT

    @classmethod
    def from_inspect(cls, param: inspect.Parameter) -> "Parameter":
        default = NO_DEFAULT if param.default is inspect.Parameter.empty else param.default
        return cls(name=param.name, kind=param.kind, default=default)


@runtime_checkable
class SignatureBackend(Protocol):
    """
    Reflection capability resolving the parameters of the function running in a frame.

    Implementations return parameters in declaration order, without the implicit
    receiver parameter of methods and class methods (usually `self` or `cls`).
    """

    def list_parameters(self, frame: FrameType) -> list[Parameter]: ...


class InspectSignatures:
    """
    SignatureBackend based on `inspect.signature()` of the function object running in a frame.

    The function object is searched with several strategies, in order:
        1. Caller's globals
        2. Class attributes of the owner class, resolved by qualified name from the globals
        3. Class attributes of `self`/`cls` (with descriptor unwrapping)
        4. Locals of the frame and of the enclosing frames
        5. Classes defined in the enclosing frames

    Functions are matched by code object identity, decorated functions are unwrapped.
    When no function object is found the parameter names are read from the code object;
    declared defaults are then unavailable and a RuntimeWarning is emitted.
    """

    def list_parameters(self, frame: FrameType) -> list[Parameter]:
        code = frame.f_code
        func, has_receiver = self.locate_function(frame)

        if func is None:
            warnings.warn(
                f"Cannot find function object of {code.co_qualname}() to read its signature, "
                f"default values are unavailable",
                RuntimeWarning,
                stacklevel=3,
            )
            params = _code_parameters(code)
        else:
            params = [Parameter.from_inspect(p) for p in inspect.signature(func).parameters.values()]

        if params and has_receiver:
            params = params[1:]
        return params

    def find_function(self, frame: FrameType) -> Callable[..., Any] | None:
        """
        Find the function object running in `frame`.

        Returns:
            The function object, or None if not found.
        """
        return self.locate_function(frame)[0]

    def locate_function(self, frame: FrameType) -> tuple[Callable[..., Any] | None, bool]:
        """
        Find the function object running in `frame` and whether it receives an implicit first argument.

        For functions found in a class, the receiver is decided by the class attribute: plain
        functions, class methods and properties receive the instance or the class, static methods
        receive nothing. Otherwise a function is taken as a method when it belongs to a class and
        its first parameter is named `self` or `cls`.

        Returns:
            tuple: The function object or None if not found, and the receiver flag.
        """
        code = frame.f_code
        func_name = code.co_name

        # Strategy 1: Caller's globals
        func = _match_code(frame.f_globals.get(func_name), code)
        if func is not None:
            return func, _is_method(code)

        # Strategy 2: Owner class resolved by qualified name
        owner = _resolve_owner(frame)
        if owner is not None:
            found = _search_class(owner, func_name, code)
            if found is not None:
                return found

        # Strategy 3: Methods, from the class of self/cls
        if _is_method(code):
            bound = frame.f_locals.get(code.co_varnames[0])
            owner = bound if isinstance(bound, type) else type(bound)
            found = _search_class(owner, func_name, code)
            if found is not None:
                return found

        # Strategy 4: Locals of this frame and of the enclosing frames
        search_frame = frame
        while search_frame is not None:
            for obj in list(search_frame.f_locals.values()):
                func = _match_code(obj, code)
                if func is not None:
                    return func, _is_method(code)
            search_frame = search_frame.f_back

        # Strategy 5: Classes defined in the enclosing frames
        search_frame = frame.f_back
        while search_frame is not None:
            for obj in list(search_frame.f_locals.values()):
                if inspect.isclass(obj):
                    found = _search_class(obj, func_name, code)
                    if found is not None:
                        return found
            search_frame = search_frame.f_back

        return None, _is_method(code)


# Methods --------------------------------------------------------------------------------------------------------------

def capture_stack(skip: int = 1, limit: int | None = None) -> list[StackFrame]:
    """
    Capture the current call stack.

    Args:
        skip: Number of frames to skip above capture_stack() itself. With the default `1`,
              index 0 is the function which called capture_stack().
        limit: Maximum number of frames to capture, None for all.

    Returns:
        list[StackFrame]: The invocations, innermost first. The list stops at module-level code.

    Raises:
        ValueError: If skip is negative.
    """
    if skip < 0:
        raise ValueError(f"skip must be 0 or greater, but got {skip}")

    frame = inspect.currentframe()
    try:
        for _ in range(skip):
            frame = frame.f_back if frame is not None else None

        frames = []
        while frame is not None and frame.f_back is not None and frame.f_code.co_name != MODULE_CODE_NAME:
            if limit is not None and len(frames) >= limit:
                break
            frames.append(StackFrame.from_frame(frame))
            frame = frame.f_back
        return frames
    finally:
        # Clean up frame references to avoid reference cycles
        del frame


def owner_name(code: CodeType, module: str | None = None) -> str | None:
    """
    Fully-qualified name of the class owning a function code, None for plain and nested functions.

    Examples:
        >>> owner_name(Math.add.__code__, "fixtures")
        'fixtures.Math'
    """
    prefix, _, _ = code.co_qualname.rpartition(".")
    if not prefix or prefix.endswith("<locals>"):
        return None
    return f"{module}.{prefix}" if module else prefix


# Private Methods ------------------------------------------------------------------------------------------------------

def _bound_args(frame: FrameType) -> dict[str, Any]:
    """Values bound to the parameters of the function running in `frame`, in declaration order."""
    arg_info = inspect.getargvalues(frame)
    names = list(arg_info.args)
    if arg_info.varargs:
        names.append(arg_info.varargs)
    if arg_info.keywords:
        names.append(arg_info.keywords)
    return {name: arg_info.locals[name] for name in names if name in arg_info.locals}


def _code_parameters(code: CodeType) -> list[Parameter]:
    """Parameters read from a code object, in declaration order and without defaults."""
    kind = inspect.Parameter
    names = code.co_varnames
    n_pos = code.co_argcount
    n_kw = code.co_kwonlyargcount

    params = [
        Parameter(name, kind.POSITIONAL_ONLY if i < code.co_posonlyargcount else kind.POSITIONAL_OR_KEYWORD)
        for i, name in enumerate(names[:n_pos])
    ]
    index = n_pos + n_kw
    if code.co_flags & inspect.CO_VARARGS:
        params.append(Parameter(names[index], kind.VAR_POSITIONAL))
        index += 1
    params.extend(Parameter(name, kind.KEYWORD_ONLY) for name in names[n_pos:n_pos + n_kw])
    if code.co_flags & inspect.CO_VARKEYWORDS:
        params.append(Parameter(names[index], kind.VAR_KEYWORD))
    return params


def _is_method(code: CodeType) -> bool:
    """True if the code belongs to a class and receives `self` or `cls` first."""
    return (
            owner_name(code) is not None
            and code.co_argcount > 0
            and code.co_varnames[0] in ("self", "cls")
    )


def _match_code(obj: Any, code: CodeType) -> Callable[..., Any] | None:
    """Return obj (unwrapped) if it is a function running `code`."""
    if isinstance(obj, (staticmethod, classmethod)):
        obj = obj.__func__
    if not callable(obj):
        return None
    try:
        func = inspect.unwrap(obj)
    except ValueError:
        return None
    func = getattr(func, "__func__", func)
    if getattr(func, "__code__", None) is code:
        return func
    return None


def _resolve_owner(frame: FrameType) -> type | None:
    """Class owning the code running in `frame`, looked up by qualified name from the frame globals."""
    prefix, _, _ = frame.f_code.co_qualname.rpartition(".")
    if not prefix or "<locals>" in prefix:
        return None

    head, *tail = prefix.split(".")
    obj = frame.f_globals.get(head)
    for part in tail:
        obj = getattr(obj, part, None)
    return obj if inspect.isclass(obj) else None


def _search_class(owner: type, func_name: str, code: CodeType) -> tuple[Callable[..., Any], bool] | None:
    """
    Search the MRO of `owner` for a function named `func_name` running `code`.

    Returns the function and whether it receives the instance or the class, None if not found.
    """
    for klass in getattr(owner, "__mro__", ()):
        attr = klass.__dict__.get(func_name)
        if attr is None:
            continue
        if isinstance(attr, property):
            candidates = (attr.fget, attr.fset, attr.fdel)
        else:
            candidates = (attr,)
        for candidate in candidates:
            func = _match_code(candidate, code)
            if func is not None:
                return func, not isinstance(attr, staticmethod)
    return None
