import json

import pytest

from crm_browser.config.loader import load_global_config
from crm_browser.config.model import DEFAULT_COUNTS, GlobalConfig
from crm_browser.core.exceptions import ConfigError


def _write(root, data):
    root.mkdir(parents=True, exist_ok=True)
    (root / "global.json").write_text(json.dumps(data) if not isinstance(data, str) else data)
    return root


def test_missing_file_gives_defaults(tmp_path):
    cfg = load_global_config(tmp_path, env={})
    defaults = GlobalConfig()
    assert cfg.ui_title == defaults.ui_title
    assert cfg.default_source == "demo"
    assert cfg.generator.counts == DEFAULT_COUNTS
    assert cfg.data_root == (tmp_path / "data").resolve()


def test_values_are_read_and_data_root_resolved(tmp_path):
    root = _write(
        tmp_path / "config",
        {
            "ui_title": "Acme CRM",
            "data_root": "../store",
            "default_source": "real",
            "request_timeout": 5,
            "generator": {"seed": 9, "counts": {"tasks": 4}},
        },
    )
    cfg = load_global_config(root, env={})
    assert cfg.ui_title == "Acme CRM"
    assert cfg.data_root == (tmp_path / "store").resolve()
    assert cfg.default_source == "real"
    assert cfg.request_timeout == 5.0
    assert cfg.generator.seed == 9
    assert cfg.generator.counts["tasks"] == 4
    assert cfg.generator.counts["customers"] == DEFAULT_COUNTS["customers"]


def test_env_overrides(tmp_path):
    root = _write(tmp_path, {"api_base_url": "http://a/api", "default_source": "demo"})
    cfg = load_global_config(
        root,
        env={"CRM_API_BASE_URL": "http://b/api", "CRM_DATA_SOURCE": "real"},
    )
    assert cfg.api_base_url == "http://b/api"
    assert cfg.default_source == "real"


@pytest.mark.parametrize(
    "data",
    [
        "{not json",
        "[1, 2]",
        {"default_source": "mongo"},
        {"request_timeout": 0},
        {"generator": {"seed": "x"}},
        {"generator": {"counts": {"invoices": 3}}},
        {"generator": {"counts": {"tasks": -1}}},
    ],
)
def test_invalid_config_raises(tmp_path, data):
    root = _write(tmp_path, data)
    with pytest.raises(ConfigError):
        load_global_config(root, env={})
