import pytest

from app.settings import DEFAULT_API_BASE_URL, Settings


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("http://shop.example.com", "http://shop.example.com/api"),
        ("http://shop.example.com/", "http://shop.example.com/api"),
        ("http://shop.example.com/api/", "http://shop.example.com/api"),
        ("  https://kits.example.org/api  ", "https://kits.example.org/api"),
        ("", DEFAULT_API_BASE_URL),
    ],
)
def test_api_base_url_is_normalized(raw, expected):
    assert Settings(api_base_url=raw).api_base_url == expected


def test_defaults(monkeypatch):
    for var in ("APP_API_BASE_URL", "APP_AUTH_TOKEN", "APP_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    s = Settings(_env_file=None)
    assert s.api_base_url == DEFAULT_API_BASE_URL
    assert s.token() is None
    assert s.auto_close_delay == 1.0
    assert s.language == "en"
    assert s.log_level == "INFO"


def test_token_is_secret_but_retrievable():
    s = Settings(auth_token="abc123")
    assert "abc123" not in repr(s)
    assert s.token() == "abc123"


def test_log_level_is_upper_cased():
    assert Settings(log_level=" debug ").log_level == "DEBUG"


def test_env_prefix_loading_overrides(monkeypatch):
    # Ensure env vars with APP_ prefix are honored
    monkeypatch.setenv("APP_API_BASE_URL", "http://backend:5001")
    monkeypatch.setenv("APP_AUTH_TOKEN", "from-env")
    monkeypatch.setenv("APP_REQUEST_TIMEOUT", "5")
    monkeypatch.setenv("APP_CATALOG_LIMIT", "250")

    s = Settings()
    assert s.api_base_url == "http://backend:5001/api"
    assert s.token() == "from-env"
    assert s.request_timeout == 5.0
    assert s.catalog_limit == 250


def test_rejects_non_positive_timeout():
    with pytest.raises(ValueError):
        Settings(request_timeout=0)
