import pytest

from . import config as cfg


@pytest.fixture(autouse=True)
def no_user_config(tmp_path_factory, monkeypatch):
    """Keep configuration files in the working or home directory out of
    the tests; tests that need a file point PATHS elsewhere."""
    monkeypatch.setattr(
        cfg, "PATHS", [str(tmp_path_factory.mktemp("no_config"))])
