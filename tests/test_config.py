import pytest

from epic7_catalog.config import CatalogConfig


def test_defaults():
    c = CatalogConfig()
    assert c.base_url == "https://epic7db.com"
    assert c.proxy_prefix == "https://r.jina.ai/http://"
    assert c.sitemap_url == "https://epic7db.com/sitemap.xml"
    assert c.index_url("heroes") == "https://epic7db.com/heroes"
    assert c.low_water_mark("heroes") == 200
    assert c.low_water_mark("artifacts") == 150
    assert c.out_dir == "data"


def test_from_env_overrides():
    c = CatalogConfig.from_env({
        "EPIC7_BASE_URL": "http://localhost:8000/",
        "EPIC7_PROXY_PREFIX": "",
        "EPIC7_MIN_HEROES": "3",
        "EPIC7_OUT_DIR": "/tmp/catalog",
    })
    assert c.base_url == "http://localhost:8000"
    assert c.proxy_prefix is None
    assert c.min_heroes == 3
    assert c.min_artifacts == 150
    assert c.out_dir == "/tmp/catalog"


def test_from_env_rejects_bad_int():
    with pytest.raises(ValueError):
        CatalogConfig.from_env({"EPIC7_MIN_ARTIFACTS": "lots"})


def test_with_overrides_ignores_none():
    c = CatalogConfig().with_overrides(base_url=None, min_heroes=5, proxy_prefix="")
    assert c.base_url == "https://epic7db.com"
    assert c.min_heroes == 5
    assert c.proxy_prefix is None


def test_from_env_loads_dotenv_and_process_env_wins(tmp_path, monkeypatch):
    from epic7_catalog import config as config_module

    env_file = tmp_path / ".env"
    env_file.write_text(
        "# local overrides\n"
        "EPIC7_BASE_URL = 'http://fixtures.test'\n"
        'EPIC7_MIN_HEROES="7"\n'
        "EPIC7_OUT_DIR=from-dotenv\n"
        "not a pair\n",
        encoding="utf-8",
    )
    monkeypatch.setattr(config_module, "ENV_FILE", str(env_file))
    monkeypatch.setattr(config_module.os, "environ", {"EPIC7_OUT_DIR": "from-process"})

    c = CatalogConfig.from_env()
    assert c.base_url == "http://fixtures.test"
    assert c.min_heroes == 7
    assert c.out_dir == "from-process"
    assert config_module.os.environ["EPIC7_BASE_URL"] == "http://fixtures.test"


def test_from_env_without_dotenv_uses_defaults(tmp_path, monkeypatch):
    from epic7_catalog import config as config_module

    monkeypatch.setattr(config_module, "ENV_FILE", str(tmp_path / "missing.env"))
    monkeypatch.setattr(config_module.os, "environ", {})
    assert CatalogConfig.from_env() == CatalogConfig()
