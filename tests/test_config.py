"""Unit tests for configuration loading."""

import json
import pytest
from pydantic import ValidationError

from telemetry_cli.config import AppConfig, ConfigError, HubConfig, load_config, load_config_file


@pytest.fixture
def toml_config(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('api-key = "secret"\nhub-url = "https://hub.example.com/"\n')
    return path


class TestHubConfig:
    """Test HubConfig validation."""

    def test_accepts_wire_aliases(self):
        config = HubConfig.model_validate({"api-key": "k", "hub-url": "http://hub.local:8080"})

        assert config.api_key == "k"
        assert config.hub_url == "http://hub.local:8080"
        assert config.request_timeout == 30
        assert config.max_retries == 0

    @pytest.mark.parametrize("url", ["", "hub.example.com", "ftp://hub.example.com", "https://"])
    def test_rejects_bad_urls(self, url):
        with pytest.raises(ValidationError):
            HubConfig(api_key="k", hub_url=url)

    def test_rejects_blank_api_key(self):
        with pytest.raises(ValidationError):
            HubConfig(api_key="  ", hub_url="https://hub.example.com")

    @pytest.mark.parametrize("timeout", [0, -1, 301])
    def test_rejects_unreasonable_timeout(self, timeout):
        with pytest.raises(ValidationError):
            HubConfig(api_key="k", hub_url="https://hub.example.com", request_timeout=timeout)


class TestLoadConfig:
    """Test loading configuration from files and environment."""

    def test_load_toml(self, toml_config):
        config = load_config(toml_config)

        assert isinstance(config, AppConfig)
        assert config.hub.api_key == "secret"
        assert config.hub.hub_url == "https://hub.example.com"
        assert config.log_level == "WARNING"

    def test_load_nested_hub_table(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('log_level = "DEBUG"\n[hub]\napi-key = "k"\nhub-url = "https://h.example.com"\nmax_retries = 2\n')

        config = load_config(path)

        assert config.hub.max_retries == 2
        assert config.log_level == "DEBUG"

    def test_load_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"api-key": "k", "hub-url": "https://h.example.com"}))

        assert load_config(path).hub.api_key == "k"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path / "absent.toml")

        assert "Failed to load configuration" in str(exc_info.value)

    def test_malformed_toml(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("api-key = \n")

        with pytest.raises(ConfigError):
            load_config(path)

    @pytest.mark.parametrize("payload", [["api-key"], "api-key", 42])
    def test_non_mapping_top_level(self, tmp_path, payload):
        path = tmp_path / "config.json"
        path.write_text(json.dumps(payload))

        with pytest.raises(ConfigError) as exc_info:
            load_config(path)

        assert "top-level must be a table/mapping" in str(exc_info.value)

    def test_missing_required_key(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('api-key = "k"\n')

        with pytest.raises(ConfigError) as exc_info:
            load_config(path)

        assert "hub-url" in str(exc_info.value)

    def test_environment_overrides_file(self, toml_config, monkeypatch):
        monkeypatch.setenv("TELEMETRY_API_KEY", "from-env")
        monkeypatch.setenv("TELEMETRY_REQUEST_TIMEOUT", "5")
        monkeypatch.setenv("LOG_LEVEL", "INFO")

        config = load_config(toml_config)

        assert config.hub.api_key == "from-env"
        assert config.hub.request_timeout == 5
        assert config.log_level == "INFO"

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "config.ini"
        path.write_text("[hub]\n")

        with pytest.raises(ValueError):
            load_config_file(path)
