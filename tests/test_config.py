"""
Tests for settings loading and FQDN splitting
"""

import pytest

from hetzner_ddns.config import HETZNER_API_URL, load_settings, split_fqdn
from hetzner_ddns.dns.types import Target
from hetzner_ddns.errors import ConfigError


class TestSplitFqdn:
    @pytest.mark.parametrize(
        "fqdn,record_name,zone_name",
        [
            ("dyn.example.com", "dyn", "example.com"),
            ("home.example", "home", "example"),
            ("vpn.office.example.co.uk", "vpn", "office.example.co.uk"),
            ("  dyn.example.com\n", "dyn", "example.com"),
        ],
    )
    def test_valid(self, fqdn, record_name, zone_name):
        target = split_fqdn(fqdn)

        assert target == Target(record_name=record_name, zone_name=zone_name)
        assert ".".join([target.record_name, target.zone_name]) == fqdn.strip()

    @pytest.mark.parametrize(
        "fqdn", ["", "localhost", "dyn..example.com", ".example.com", "example."]
    )
    def test_invalid(self, fqdn):
        with pytest.raises(ConfigError):
            split_fqdn(fqdn)


class TestLoadSettings:
    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("API_TOKEN", "secret")
        monkeypatch.setenv("DNS_FQDN", "dyn.example.com")

        settings = load_settings()

        assert settings.api_token == "secret"
        assert settings.dns_fqdn == "dyn.example.com"
        assert settings.ipv6 is False
        assert settings.target == Target("dyn", "example.com")

    def test_defaults(self, monkeypatch):
        monkeypatch.setenv("API_TOKEN", "secret")
        monkeypatch.setenv("DNS_FQDN", "dyn.example.com")

        settings = load_settings()

        assert settings.api_base_url == HETZNER_API_URL
        assert settings.ipv4_lookup_url == "https://ipv4.icanhazip.com"
        assert settings.ipv6_lookup_url == "https://ipv6.icanhazip.com"
        assert settings.request_timeout == 10.0
        assert settings.update_ttl == 60
        assert settings.log_level == "INFO"
        assert settings.logs_dir is None

    def test_ipv6_flag(self, monkeypatch):
        monkeypatch.setenv("API_TOKEN", "secret")
        monkeypatch.setenv("DNS_FQDN", "dyn.example.com")

        assert load_settings(ipv6=True).ipv6 is True

    def test_hetzner_token_alias(self, monkeypatch):
        monkeypatch.setenv("HETZNER_API_TOKEN", "legacy-secret")
        monkeypatch.setenv("DNS_FQDN", "dyn.example.com")

        assert load_settings().api_token == "legacy-secret"

    def test_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("API_TOKEN=from-dotenv\nDNS_FQDN=home.example.org\n")

        settings = load_settings()

        assert settings.api_token == "from-dotenv"
        assert settings.target == Target("home", "example.org")

    def test_toml_file(self, tmp_path):
        (tmp_path / "config.toml").write_text(
            'api_token = "from-toml"\n'
            'dns_fqdn = "dyn.example.com"\n'
            "request_timeout = 5\n"
        )

        settings = load_settings()

        assert settings.api_token == "from-toml"
        assert settings.request_timeout == 5

    def test_environment_overrides_toml(self, tmp_path, monkeypatch):
        (tmp_path / "config.toml").write_text(
            'api_token = "from-toml"\ndns_fqdn = "dyn.example.com"\n'
        )
        monkeypatch.setenv("API_TOKEN", "from-env")

        assert load_settings().api_token == "from-env"

    def test_token_not_in_repr(self, make_settings):
        assert "test-token" not in repr(make_settings())

    @pytest.mark.parametrize(
        "present,missing",
        [
            ({"DNS_FQDN": "dyn.example.com"}, "API_TOKEN"),
            ({"API_TOKEN": "secret"}, "DNS_FQDN"),
        ],
    )
    def test_missing_required(self, monkeypatch, present, missing):
        for name, value in present.items():
            monkeypatch.setenv(name, value)

        with pytest.raises(ConfigError) as exc_info:
            load_settings()

        assert missing in str(exc_info.value)

    def test_invalid_fqdn(self, monkeypatch):
        monkeypatch.setenv("API_TOKEN", "secret")
        monkeypatch.setenv("DNS_FQDN", "localhost")

        with pytest.raises(ConfigError):
            load_settings()

    @pytest.mark.parametrize(
        "name,value",
        [("LOG_LEVEL", "chatty"), ("REQUEST_TIMEOUT", "0"), ("UPDATE_TTL", "-1")],
    )
    def test_invalid_values(self, monkeypatch, name, value):
        monkeypatch.setenv("API_TOKEN", "secret")
        monkeypatch.setenv("DNS_FQDN", "dyn.example.com")
        monkeypatch.setenv(name, value)

        with pytest.raises(ConfigError):
            load_settings()

    def test_log_level_is_normalized(self, make_settings):
        assert make_settings(log_level="debug").log_level == "DEBUG"
