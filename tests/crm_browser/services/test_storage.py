import pytest

from crm_browser.services.storage import LocalFileSystemStorage


def test_write_and_read_bytes(tmp_path):
    storage = LocalFileSystemStorage(tmp_path / "data")
    storage.write_bytes("customers.json", b"{}")
    assert storage.exists("customers.json")
    assert storage.read_bytes("customers.json") == b"{}"


def test_paths_outside_root_are_rejected(tmp_path):
    storage = LocalFileSystemStorage(tmp_path / "data")
    with pytest.raises(ValueError):
        storage.write_bytes("../escape.json", b"{}")
