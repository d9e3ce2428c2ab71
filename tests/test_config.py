"""配置管理测试"""

import pytest

from optifine_dl.config import ConfigManager, build_config, check_environment
from optifine_dl.exceptions import ConfigurationError


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """隔离环境变量和 .env 文件"""
    monkeypatch.chdir(tmp_path)
    for key in list(check_environment()):
        monkeypatch.delenv(key)
    return monkeypatch


class TestBuildConfig:
    def test_overrides_applied(self):
        config = build_config({"timeout": 30}, chunk_size=1024)
        assert config.timeout == 30
        assert config.chunk_size == 1024

    def test_none_overrides_ignored(self):
        config = build_config({"timeout": None, "listing_url": None}, timeout=15)
        assert config.timeout == 15
        assert config.listing_url == "https://optifine.net/downloads"

    def test_invalid_value_raises_configuration_error(self):
        with pytest.raises(ConfigurationError) as exc_info:
            build_config({"chunk_size": 0})

        assert exc_info.value.config_key == "chunk_size"
        assert exc_info.value.config_value == 0


class TestConfigManager:
    def test_defaults_without_environment(self, clean_env):
        config = ConfigManager().get_config()
        assert config.timeout is None
        assert config.base_endpoint == "https://optifine.net"

    def test_environment_variables(self, clean_env):
        clean_env.setenv("OPTIFINE_DL_TIMEOUT", "60")
        clean_env.setenv("OPTIFINE_DL_BASE_ENDPOINT", "https://mirror.example")

        config = ConfigManager().get_config()

        assert config.timeout == 60
        assert config.base_endpoint == "https://mirror.example"

    def test_dotenv_file(self, clean_env, tmp_path):
        (tmp_path / ".env").write_text("OPTIFINE_DL_CHUNK_SIZE=4096\n", encoding="utf-8")
        assert ConfigManager().get_config().chunk_size == 4096

    def test_invalid_environment_value(self, clean_env):
        clean_env.setenv("OPTIFINE_DL_CHUNK_SIZE", "0")

        with pytest.raises(ConfigurationError) as exc_info:
            ConfigManager().get_config()

        assert exc_info.value.config_key == "chunk_size"

    def test_unparseable_environment_value(self, clean_env):
        clean_env.setenv("OPTIFINE_DL_TIMEOUT", "soon")

        with pytest.raises(ConfigurationError, match="Failed to load settings"):
            ConfigManager().get_config()

    def test_cached_until_reset(self, clean_env):
        manager = ConfigManager()
        first = manager.get_config()
        assert manager.get_config() is first

        clean_env.setenv("OPTIFINE_DL_TIMEOUT", "5")
        assert manager.get_config().timeout is None

        manager.reset()
        assert manager.get_config().timeout == 5

    def test_check_environment(self, clean_env):
        clean_env.setenv("OPTIFINE_DL_TIMEOUT", "5")
        clean_env.setenv("UNRELATED", "x")

        assert check_environment() == {"OPTIFINE_DL_TIMEOUT": "5"}
