#
# uniontypes - Formatters Tests
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from uniontypes.config import DiagnosticsConfig, configure
from uniontypes.formatters import called_in, find_frame, func_args_ellipsis, relative_path, the_func
from uniontypes.frames import StackFrame

POSTS_TABLE = "/path/to/app/src/Table/posts_table.py"

FRAMES = [
    StackFrame(file=POSTS_TABLE, line=12, function="assert_argument"),
    StackFrame(
        file="/path/to/app/src/index.py",
        line=25,
        function="add",
        cls="models.Math",
        call_type="::",
        args={"a": 1, "b": "2"},
    ),
    StackFrame(file="/path/to/app/src/index.py", line=40, function="main"),
]


# Tests ----------------------------------------------------------------------------------------------------------------

class TestRelativePath:

    def test_no_prefix_configured(self):
        assert relative_path(POSTS_TABLE) == POSTS_TABLE

    def test_configured_prefix(self):
        configure(path_prefix="/path/to/app/")
        assert relative_path(POSTS_TABLE) == "src/Table/posts_table.py"

    def test_explicit_prefix_overrides_config(self):
        configure(path_prefix="/other/")
        assert relative_path(POSTS_TABLE, "/path/to/app/src/") == "Table/posts_table.py"

    @pytest.mark.parametrize(
        "prefix",
        [
            pytest.param(None, id="none"),
            pytest.param("", id="empty"),
            pytest.param(42, id="int"),
            pytest.param(["/path/to/app/"], id="list"),
        ],
    )
    def test_prefix_ignored(self, prefix):
        assert relative_path(POSTS_TABLE, prefix) == POSTS_TABLE

    def test_prefix_not_found(self):
        assert relative_path(POSTS_TABLE, "/srv/") == POSTS_TABLE


class TestTheFunc:

    def test_method(self):
        assert the_func(FRAMES[1]) == "models.Math::add()"
        assert the_func(FRAMES[1], parentheses=False) == "models.Math::add"

    def test_function_located_by_call_site(self):
        config = DiagnosticsConfig(path_prefix="/path/to/app/")
        assert the_func(FRAMES[2], config=config) == "src/index.py:40::main()"
        assert the_func(FRAMES[2]) == "/path/to/app/src/index.py:40::main()"

    def test_uses_configured_prefix(self):
        configure(path_prefix="/path/to/app/")
        assert the_func(FRAMES[0], parentheses=False) == "src/Table/posts_table.py:12::assert_argument"


class TestFuncArgsEllipsis:

    @pytest.mark.parametrize(
        "arg_name, func_args, types, expected",
        [
            pytest.param("x", ["x"], ("int", "float"), "int|float $x", id="sole"),
            pytest.param("a", ["a", "b"], ("int", "float"), "int|float $a, ...", id="first"),
            pytest.param("b", ["a", "b"], ("int", "float"), "..., int|float $b", id="last"),
            pytest.param("b", ["a", "b", "c"], ("string",), "..., string $b, ...", id="middle"),
            pytest.param("data", ("id", "data"), ("string", "array"), "..., string|array $data", id="tuple"),
        ],
    )
    def test_positions(self, arg_name, func_args, types, expected):
        assert func_args_ellipsis(arg_name, func_args, *types) == expected

    def test_missing_argument(self):
        with pytest.raises(ValueError, match=r"argument name 'z' not found"):
            func_args_ellipsis("z", ["a", "b"], "int")


class TestFindFrame:

    def test_found(self):
        config = DiagnosticsConfig(path_prefix="/path/to/app/")
        assert find_frame(FRAMES, 1, config) == {
            "file": "/path/to/app/src/index.py",
            "line": 25,
            "function": "add",
            "cls": "models.Math",
            "call_type": "::",
            "args": {"a": 1, "b": "2"},
            "relative_path": "src/index.py",
            "the_func": "models.Math::add()",
        }

    @pytest.mark.parametrize("index", [3, 10, -1], ids=["past-end", "far", "negative"])
    def test_not_found(self, index):
        assert find_frame(FRAMES, index) is None

    def test_empty_stack(self):
        assert find_frame([], 0) is None


class TestCalledIn:

    def test_called_in(self):
        configure(path_prefix="/path/to/app/")
        assert called_in(FRAMES, 0) == "called in #0 `src/Table/posts_table.py:12`"
        assert called_in(FRAMES, 1) == "called in #1 `src/index.py:25`"

    def test_explicit_config(self):
        config = DiagnosticsConfig(path_prefix="/path/to/app/src/")
        assert called_in(FRAMES, 2, config) == "called in #2 `index.py:40`"

    def test_index_not_found(self):
        with pytest.raises(IndexError, match=r"stack frame #3 not found, 3 frames captured"):
            called_in(FRAMES, 3)
