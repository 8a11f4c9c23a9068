"""Tests for configuration loading and rollout inputs."""

import pytest
import yaml

from aml_rollout.config import ConfigManager, RolloutInputs


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in list(ConfigManager.ENV_MAPPINGS) + ["AML_ROLLOUT_CONFIG_PATH"]:
        monkeypatch.delenv(var, raising=False)
    for name in RolloutInputs.model_fields:
        monkeypatch.delenv(f"INPUT_{name.upper()}", raising=False)


class TestConfigManager:
    """Test cases for ConfigManager."""

    def test_defaults_without_file(self, tmp_path):
        config_path = tmp_path / "aml-rollout.yaml"

        config_manager = ConfigManager(config_path=config_path)

        assert not config_path.exists()
        assert config_manager.azure_cli.executable == "az"
        assert config_manager.azure_cli.extra_args == []
        assert config_manager.logging.level == "INFO"
        assert config_manager.logging.format == "console"

    def test_loading_from_file(self, tmp_path):
        config_path = tmp_path / "aml-rollout.yaml"
        config_path.write_text(
            yaml.dump(
                {
                    "azure_cli": {
                        "executable": "/usr/local/bin/az",
                        "extra_args": ["--subscription", "sub-1"],
                    },
                    "logging": {"level": "DEBUG", "format": "json", "max_output_chars": 100},
                }
            )
        )

        config_manager = ConfigManager(config_path=config_path)

        assert config_manager.azure_cli.executable == "/usr/local/bin/az"
        assert config_manager.azure_cli.extra_args == ["--subscription", "sub-1"]
        assert config_manager.logging.level == "DEBUG"
        assert config_manager.logging.format == "json"
        assert config_manager.logging.max_output_chars == 100

    def test_environment_variable_overrides(self, tmp_path, monkeypatch):
        config_path = tmp_path / "aml-rollout.yaml"
        config_path.write_text(yaml.dump({"logging": {"level": "WARNING"}}))
        monkeypatch.setenv("AML_ROLLOUT_LOG_LEVEL", "debug")
        monkeypatch.setenv("AML_ROLLOUT_AZ_EXECUTABLE", "az.cmd")
        monkeypatch.setenv("AML_ROLLOUT_MAX_OUTPUT_CHARS", "50")

        config_manager = ConfigManager(config_path=config_path)

        assert config_manager.logging.level == "DEBUG"
        assert config_manager.azure_cli.executable == "az.cmd"
        assert config_manager.logging.max_output_chars == 50

    def test_config_path_from_environment(self, tmp_path, monkeypatch):
        config_path = tmp_path / "custom.yaml"
        config_path.write_text(yaml.dump({"logging": {"format": "json"}}))
        monkeypatch.setenv("AML_ROLLOUT_CONFIG_PATH", str(config_path))

        config_manager = ConfigManager()

        assert config_manager.config_path == config_path
        assert config_manager.logging.format == "json"

    def test_invalid_yaml(self, tmp_path):
        config_path = tmp_path / "aml-rollout.yaml"
        config_path.write_text("logging: [unclosed")

        with pytest.raises(ValueError, match="Invalid YAML"):
            ConfigManager(config_path=config_path)

    def test_invalid_log_level(self, tmp_path):
        config_path = tmp_path / "aml-rollout.yaml"
        config_path.write_text(yaml.dump({"logging": {"level": "LOUD"}}))

        with pytest.raises(ValueError):
            ConfigManager(config_path=config_path)

    def test_invalid_integer_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv("AML_ROLLOUT_MAX_OUTPUT_CHARS", "lots")

        with pytest.raises(ValueError, match="must be an integer"):
            ConfigManager(config_path=tmp_path / "aml-rollout.yaml")


class TestRolloutInputs:
    """Test cases for RolloutInputs."""

    def test_from_github_actions_environment(self, monkeypatch):
        monkeypatch.setenv("INPUT_ENDPOINT_NAME", "my-endpoint")
        monkeypatch.setenv("INPUT_RESOURCE_GROUP", "rg-ml")
        monkeypatch.setenv("INPUT_TRAFFIC", '{"blue": 100}')
        monkeypatch.setenv("INPUT_REGISTRY_NAME", "")

        inputs = RolloutInputs.from_env()

        assert inputs.endpoint_name == "my-endpoint"
        assert inputs.resource_group == "rg-ml"
        assert inputs.traffic == '{"blue": 100}'
        assert inputs.registry_name is None
        assert inputs.uses_registry is False

    def test_blank_values_are_absent(self):
        inputs = RolloutInputs(endpoint_name="  ", model_name="m")

        assert inputs.endpoint_name is None
        assert inputs.model_name == "m"

    def test_summary_excludes_traffic(self):
        inputs = RolloutInputs(endpoint_name="ep", traffic='{"blue": 100}')

        summary = inputs.summary()

        assert summary["endpoint_name"] == "ep"
        assert "traffic" not in summary
