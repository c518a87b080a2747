#
# Pytest Fixtures
#

# Standard library -----------------------------------------------------------------------------------------------------
import pathlib

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from uniontypes.config import PATH_TO_APP_ENV, configure


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    """Run every test with absolute paths in diagnostics, then restore the environment default."""
    monkeypatch.delenv(PATH_TO_APP_ENV, raising=False)
    configure()
    yield
    monkeypatch.undo()
    configure()


@pytest.fixture
def tests_prefix() -> str:
    """Configure the tests directory as path prefix and return it."""
    prefix = str(pathlib.Path(__file__).parent) + "/"
    configure(path_prefix=prefix)
    return prefix


@pytest.fixture
def text_file(tmp_path: pathlib.Path):
    """An open text file, closed after the test."""
    path = tmp_path / "file.txt"
    path.write_text("content")
    with open(path) as f:
        yield f
