#
# uniontypes - Config Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import dataclasses

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from uniontypes.config import PATH_TO_APP_ENV, DiagnosticsConfig, configure, get_config


# Tests ----------------------------------------------------------------------------------------------------------------

class TestDiagnosticsConfig:

    def test_default_has_no_prefix(self):
        assert DiagnosticsConfig().path_prefix is None

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            DiagnosticsConfig().path_prefix = "/app/"

    @pytest.mark.parametrize("prefix", [1, [], b"/app/"], ids=["int", "list", "bytes"])
    def test_invalid_prefix_type(self, prefix):
        with pytest.raises(TypeError, match=r"path_prefix must be of the union type `string\|null`"):
            DiagnosticsConfig(path_prefix=prefix)

    def test_merge(self):
        config = DiagnosticsConfig(path_prefix="/app/")
        assert config.merge() == config
        assert config.merge(path_prefix=None).path_prefix is None
        assert config.merge(path_prefix="/srv/").path_prefix == "/srv/"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv(PATH_TO_APP_ENV, "/path/to/app/")
        assert DiagnosticsConfig.from_env().path_prefix == "/path/to/app/"

    def test_from_env_empty_value(self, monkeypatch):
        monkeypatch.setenv(PATH_TO_APP_ENV, "")
        assert DiagnosticsConfig.from_env().path_prefix is None


class TestConfigure:

    def test_configure_replaces_config(self):
        config = configure(path_prefix="/path/to/app/")
        assert get_config() is config
        assert get_config().path_prefix == "/path/to/app/"

    def test_configure_without_arguments_resets_to_env(self, monkeypatch):
        configure(path_prefix="/path/to/app/")
        monkeypatch.setenv(PATH_TO_APP_ENV, "/srv/")
        assert configure().path_prefix == "/srv/"

    def test_configure_none_disables_prefix(self):
        configure(path_prefix="/path/to/app/")
        assert configure(path_prefix=None).path_prefix is None

    def test_configure_invalid_keeps_previous(self):
        configure(path_prefix="/path/to/app/")
        with pytest.raises(TypeError):
            configure(path_prefix=42)
        assert get_config().path_prefix == "/path/to/app/"
