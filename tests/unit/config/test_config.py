"""Unit tests for configuration loading."""

import logging

import pytest

from dehug.config import Config, LoggingConfig, configure_logging
from dehug.domain.registry.contract import DEPLOYED_CONTENT_UPLOADED_TOPIC
from dehug.domain.shared.error import ConfigurationError


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Run each test in an empty directory with no DEHUG_ variables set."""
    monkeypatch.chdir(tmp_path)
    for name in ("DEHUG_CONFIG_FILE", "DEHUG_LOG_FILE", "DEHUG_REGISTRY__ADDRESS", "DEHUG_REGISTRY__CONTENT_UPLOADED_TOPIC"):
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    def test_target_network(self):
        config = Config()

        assert config.network.chain_id == 42101
        assert config.network.rpc_url == "https://evm.rpc-testnet-donut-node1.push.org"
        assert config.network.explorer_url == "https://donut.push.network"
        assert config.network.strict_chain_check is False
        assert config.network.confirmation_timeout is None
        assert config.storage.gateway_url == "https://ipfs.io/ipfs/"

    def test_discovery_and_registry(self):
        config = Config()

        assert config.discovery.limit == 10
        assert config.discovery.max_scan == 50
        assert config.registry.address is None
        assert config.registry.id_offset == 1
        assert config.registry.content_uploaded_topic == DEPLOYED_CONTENT_UPLOADED_TOPIC


class TestSources:
    def test_nested_env_override(self, monkeypatch):
        monkeypatch.setenv("DEHUG_REGISTRY__ADDRESS", "0xabc")
        monkeypatch.setenv("DEHUG_DISCOVERY__LIMIT", "3")

        config = Config()

        assert config.registry.address == "0xabc"
        assert config.discovery.limit == 3

    def test_content_uploaded_topic_override(self, monkeypatch):
        monkeypatch.setenv("DEHUG_REGISTRY__CONTENT_UPLOADED_TOPIC", "0x" + "22" * 32)

        assert Config().registry.content_uploaded_topic == "0x" + "22" * 32

    def test_yaml_file(self, monkeypatch, tmp_path):
        path = tmp_path / "dehug.yaml"
        path.write_text(
            "registry:\n  address: '0xfeed'\n  id_offset: 0\n"
            "network:\n  strict_chain_check: true\n"
        )
        monkeypatch.setenv("DEHUG_CONFIG_FILE", str(path))

        config = Config()

        assert config.registry.address == "0xfeed"
        assert config.registry.id_offset == 0
        assert config.network.strict_chain_check is True

    def test_env_beats_yaml(self, monkeypatch, tmp_path):
        path = tmp_path / "dehug.yaml"
        path.write_text("registry:\n  address: '0xfeed'\n")
        monkeypatch.setenv("DEHUG_CONFIG_FILE", str(path))
        monkeypatch.setenv("DEHUG_REGISTRY__ADDRESS", "0xbeef")

        assert Config().registry.address == "0xbeef"

    def test_yaml_must_be_a_mapping(self, monkeypatch, tmp_path):
        path = tmp_path / "dehug.yaml"
        path.write_text("- just\n- a list\n")
        monkeypatch.setenv("DEHUG_CONFIG_FILE", str(path))

        with pytest.raises(ConfigurationError, match="YAML mapping"):
            Config()

    def test_missing_yaml_file_is_ignored(self, monkeypatch, tmp_path):
        monkeypatch.setenv("DEHUG_CONFIG_FILE", str(tmp_path / "absent.yaml"))

        assert Config().registry.address is None


class TestConfigureLogging:
    def test_writes_to_log_file(self, monkeypatch, tmp_path):
        log_file = tmp_path / "logs" / "dehug.log"
        monkeypatch.setenv("DEHUG_LOG_FILE", str(log_file))
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level

        try:
            configure_logging(LoggingConfig(level="DEBUG"))
            logging.getLogger("dehug.test").info("hello from test")
            for handler in root.handlers:
                handler.flush()

            assert "hello from test" in log_file.read_text()
            assert logging.getLogger("web3").level == logging.WARNING
        finally:
            for handler in root.handlers[:]:
                root.removeHandler(handler)
                handler.close()
            for handler in saved_handlers:
                root.addHandler(handler)
            root.setLevel(saved_level)
