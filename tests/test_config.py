"""Configuration tests."""

import json
import logging

import pytest
from roadrouter_core.utils.config import (
    ConfigSource,
    RouterConfig,
    configure_logging,
    load_config,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    import os

    for key in list(os.environ):
        if key.startswith("ROUTER_"):
            monkeypatch.delenv(key)


class TestRouterConfig:
    """Test RouterConfig."""

    def test_defaults(self):
        """Test default values."""
        config = RouterConfig()
        assert config.base_path is None
        assert config.namespace == ""
        assert config.override_methods == ["PUT", "DELETE", "PATCH"]
        assert config.head_as_get is True
        assert config.source == ConfigSource.DEFAULT

    def test_from_dict_ignores_unknown(self):
        """Test unknown keys are dropped."""
        config = RouterConfig.from_dict({"namespace": "app", "bogus": 1})
        assert config.namespace == "app"
        assert config.source == ConfigSource.DICT

    def test_override_methods_string(self):
        """Test pipe-delimited override methods."""
        config = RouterConfig.from_dict({"override_methods": "PUT|DELETE"})
        assert config.override_methods == ["PUT", "DELETE"]

    def test_from_json(self, tmp_path):
        """Test JSON files."""
        path = tmp_path / "router.json"
        path.write_text(json.dumps({"base_path": "/app/", "port": 9000}))

        config = RouterConfig.from_json(str(path))
        assert config.base_path == "/app/"
        assert config.port == 9000
        assert config.source == ConfigSource.FILE

    def test_from_yaml(self, tmp_path):
        """Test YAML files."""
        path = tmp_path / "router.yaml"
        path.write_text("namespace: app.controllers\nmethod_override: false\n")

        config = RouterConfig.from_yaml(str(path))
        assert config.namespace == "app.controllers"
        assert config.method_override is False

    def test_empty_yaml(self, tmp_path):
        """Test an empty YAML file gives defaults."""
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert RouterConfig.from_yaml(str(path)).to_dict() == RouterConfig().to_dict()

    def test_from_env(self, monkeypatch):
        """Test environment variables."""
        monkeypatch.setenv("ROUTER_PORT", "9100")
        monkeypatch.setenv("ROUTER_HEAD_AS_GET", "false")
        monkeypatch.setenv("ROUTER_UNRELATED", "x")

        config = RouterConfig.from_env()
        assert config.port == 9100
        assert config.head_as_get is False

    def test_to_dict(self):
        """Test conversion to dict."""
        data = RouterConfig(namespace="x").to_dict()
        assert data["namespace"] == "x"
        assert "source" not in data


class TestLoadConfig:
    """Test load_config."""

    def test_defaults_without_file(self):
        """Test no file, no env."""
        assert load_config().to_dict() == RouterConfig().to_dict()

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        """Test precedence env > file > defaults."""
        path = tmp_path / "router.yml"
        path.write_text("namespace: from_file\nport: 7000\n")
        monkeypatch.setenv("ROUTER_PORT", "7100")

        config = load_config(str(path))
        assert config.namespace == "from_file"
        assert config.port == 7100

    def test_missing_file(self, tmp_path):
        """Test a missing file falls back to defaults."""
        config = load_config(str(tmp_path / "absent.yaml"))
        assert config.to_dict() == RouterConfig().to_dict()


class TestConfigureLogging:
    """Test logging setup."""

    def test_sets_level(self):
        """Test the package logger level."""
        configure_logging(RouterConfig(log_level="debug"))
        assert logging.getLogger("roadrouter_core").level == logging.DEBUG
