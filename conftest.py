import pytest
from monosplit.test_utils import SpyBus, WorkspaceFactory


@pytest.fixture
def workspace_factory(tmp_path, monkeypatch):
    # A clean workspace per test, with cwd pointing at it for CLI runs
    root = tmp_path / "workspace"
    root.mkdir()
    monkeypatch.chdir(root)
    return WorkspaceFactory(root)


@pytest.fixture
def spy_bus(monkeypatch):
    spy = SpyBus()
    with spy.patch(monkeypatch):
        yield spy
