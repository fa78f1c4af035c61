import pytest

from hetzner_ddns.config import Settings

_SETTINGS_ENV = [
    "API_TOKEN",
    "HETZNER_API_TOKEN",
    "DNS_FQDN",
    "IPV6",
    "API_BASE_URL",
    "IPV4_LOOKUP_URL",
    "IPV6_LOOKUP_URL",
    "REQUEST_TIMEOUT",
    "UPDATE_TTL",
    "LOG_LEVEL",
    "LOGS_DIR",
]


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Run every test away from any real .env/config.toml and settings env vars"""
    monkeypatch.chdir(tmp_path)
    for name in _SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_settings():
    def factory(**overrides) -> Settings:
        values = {
            "api_token": "test-token",
            "dns_fqdn": "dyn.example.com",
            "_env_file": None,
        }
        values.update(overrides)
        return Settings(**values)

    return factory
