import json

import pytest

from lead_scout.config import BotConfig
from lead_scout.models import SourceConfig
from lead_scout.sources import TARGET_SITES


def test_defaults(monkeypatch):
    for key in ("SCRAPE_INTERVAL_MINUTES", "DATA_DIR", "MAX_CONCURRENT_TABS", "SOURCES_FILE", "BACKOFF_MINUTES"):
        monkeypatch.delenv(key, raising=False)
    config = BotConfig()
    assert config.cycle_interval_minutes == 30
    assert config.max_concurrent_tabs == 3
    assert config.backoff_minutes == 5
    assert config.data_dir == "data"
    assert config.leads_file.endswith("leads_database.json")
    assert config.load_sources() == TARGET_SITES


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("SCRAPE_INTERVAL_MINUTES", "10")
    monkeypatch.setenv("MAX_CONCURRENT_TABS", "5")
    monkeypatch.setenv("DATA_DIR", str(tmp_path))
    monkeypatch.setenv("HEADLESS", "false")
    config = BotConfig()
    assert config.cycle_interval_minutes == 10
    assert config.max_concurrent_tabs == 5
    assert config.headless is False
    assert config.log_file == str(tmp_path / "scraper.log")


def test_bad_integer_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("SCRAPE_INTERVAL_MINUTES", "soon")
    assert BotConfig().cycle_interval_minutes == 30


def test_sources_file_accepts_site_table_keys(monkeypatch, tmp_path):
    path = tmp_path / "sources.json"
    path.write_text(
        json.dumps(
            [
                {
                    "name": "Jiji Kenya",
                    "url": "https://jiji.co.ke/search?query=cyber",
                    "waitForSelector": ".wrapper",
                    "itemSelector": ".wrapper",
                    "textSelector": ".qa-advert-title",
                    "linkSelector": "a",
                    "scrollToLoad": True,
                    "maxItems": 15,
                }
            ]
        ),
        encoding="utf-8",
    )
    monkeypatch.setenv("SOURCES_FILE", str(path))
    [source] = BotConfig().load_sources()
    assert source.name == "Jiji Kenya"
    assert source.scroll_to_load is True
    assert source.max_items == 15
    assert source.needs_login is False


def test_source_config_validation():
    with pytest.raises(ValueError):
        SourceConfig(name="", url="https://x", item_selector="div")
    with pytest.raises(ValueError):
        SourceConfig(name="A", url="https://x", item_selector="div", max_items=0)
    assert SourceConfig(name="A", url="https://x", item_selector="div").wait_for_selector == "div"


def test_registry_is_ordered_and_valid():
    names = [s.name for s in TARGET_SITES]
    assert names[0] == "TikTok"
    assert len(names) == len(set(names)) == 7
    assert {s.name for s in TARGET_SITES if s.needs_login} == {"Facebook", "Instagram"}


def test_zero_interval_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("SCRAPE_INTERVAL_MINUTES", "0")
    monkeypatch.setenv("BACKOFF_MINUTES", "-2")
    config = BotConfig()
    assert config.cycle_interval_minutes == 30
    assert config.backoff_minutes == 5
