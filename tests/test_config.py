# tests/test_config.py
import pytest

from catalog_sdk.config import DEFAULT_ESTIMATED_SALES, DEFAULT_RATE, load_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in (
        "CATALOG_TIMEOUT",
        "CATALOG_DEFAULT_RATE",
        "CATALOG_ESTIMATED_SALES",
        "CATALOG_EXCHANGE_RATE",
    ):
        monkeypatch.delenv(key, raising=False)


def test_numbers_are_read_from_env(monkeypatch):
    monkeypatch.setenv("CATALOG_TIMEOUT", "2.5")
    monkeypatch.setenv("CATALOG_DEFAULT_RATE", "80")
    monkeypatch.setenv("CATALOG_ESTIMATED_SALES", "100")
    monkeypatch.setenv("CATALOG_EXCHANGE_RATE", "90")
    s = load_settings()
    assert (s.timeout, s.default_rate, s.estimated_sales, s.exchange_rate) == (2.5, 80.0, 100.0, 90.0)


@pytest.mark.parametrize("bad", ["abc", "1,5", "nan", "inf"])
def test_malformed_numbers_fall_back_to_defaults(monkeypatch, bad):
    monkeypatch.setenv("CATALOG_TIMEOUT", bad)
    monkeypatch.setenv("CATALOG_DEFAULT_RATE", bad)
    monkeypatch.setenv("CATALOG_ESTIMATED_SALES", bad)
    monkeypatch.setenv("CATALOG_EXCHANGE_RATE", bad)
    s = load_settings()
    assert s.timeout is None
    assert s.default_rate == DEFAULT_RATE
    assert s.estimated_sales == DEFAULT_ESTIMATED_SALES
    assert s.exchange_rate is None


def test_non_positive_rate_is_ignored(monkeypatch):
    monkeypatch.setenv("CATALOG_DEFAULT_RATE", "-3")
    monkeypatch.setenv("CATALOG_EXCHANGE_RATE", "0")
    s = load_settings()
    assert s.default_rate == DEFAULT_RATE
    assert s.exchange_rate is None
