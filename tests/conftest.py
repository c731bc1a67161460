import pytest

from lineup import configuration
from lineup.repository.configuration import CONFIGURATION_REPO
from lineup.repository.item import ITEM_REPO
from lineup.repository.view import VIEW_REPO


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Point every configuration and data path into a temporary directory."""
    monkeypatch.setattr(configuration, "CONFIG_PATH", tmp_path / "config")
    monkeypatch.setattr(
        configuration, "APP_CONFIG_PATH", tmp_path / "config" / "config.yaml"
    )
    monkeypatch.setattr(configuration, "DATA_PATH", tmp_path / "data")
    monkeypatch.setattr(configuration, "DATA_ITEMS_DIR", tmp_path / "data" / "items")
    monkeypatch.setattr(configuration, "DATA_VIEW_PATH", tmp_path / "data" / "view.yaml")
    return tmp_path


@pytest.fixture
def repositories(data_dir, monkeypatch):
    """Empty the shared repositories the commands read and write."""
    monkeypatch.setattr(CONFIGURATION_REPO, "_config", None)
    monkeypatch.setattr(CONFIGURATION_REPO, "is_dirty", False)
    monkeypatch.setattr(ITEM_REPO, "_items", None)
    monkeypatch.setattr(ITEM_REPO, "is_dirty", False)
    monkeypatch.setattr(ITEM_REPO, "_dirty_ids", set())
    monkeypatch.setattr(ITEM_REPO, "_deleted_ids", set())
    monkeypatch.setattr(VIEW_REPO, "_window", None)
    monkeypatch.setattr(VIEW_REPO, "_loaded", False)
    monkeypatch.setattr(VIEW_REPO, "is_dirty", False)
    return data_dir
