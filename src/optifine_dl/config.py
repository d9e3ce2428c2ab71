"""配置管理模块

支持从环境变量、.env 文件等多种来源加载配置
"""

import os
from typing import Any, Dict, Optional

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError
from .models import DEFAULT_BASE_ENDPOINT, DEFAULT_LISTING_URL, Config

ENV_PREFIX = "OPTIFINE_DL_"


class Settings(BaseSettings):
    """应用设置类，继承自 Pydantic BaseSettings"""

    # 站点配置
    optifine_dl_listing_url: str = DEFAULT_LISTING_URL
    optifine_dl_base_endpoint: str = DEFAULT_BASE_ENDPOINT

    # 网络配置
    optifine_dl_timeout: Optional[int] = None
    optifine_dl_chunk_size: int = 8192

    # 用户代理
    optifine_dl_user_agent: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )

    # 文件设置
    optifine_dl_file_extension: str = ".jar"
    optifine_dl_max_filename_length: int = 200

    optifine_dl_debug_mode: bool = False

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False
    )


def _strip_prefix(values: Dict[str, Any]) -> Dict[str, Any]:
    """移除 optifine_dl_ 前缀"""
    prefix = ENV_PREFIX.lower()
    clean_config = {}
    for key, value in values.items():
        if key.startswith(prefix):
            clean_config[key[len(prefix):]] = value
        else:
            clean_config[key] = value
    return clean_config


def build_config(overrides: Optional[Dict[str, Any]] = None, **base: Any) -> Config:
    """构建并验证配置对象

    Args:
        overrides: 覆盖项，值为 None 的项会被忽略
        **base: 基础配置值

    Raises:
        ConfigurationError: 配置验证失败
    """
    values = dict(base)
    for key, value in (overrides or {}).items():
        if value is not None:
            values[key] = value

    try:
        return Config(**values)
    except ValidationError as e:
        first = e.errors()[0]
        key = ".".join(str(part) for part in first.get("loc", ()))
        raise ConfigurationError(
            f"Invalid configuration: {first.get('msg', e)}",
            config_key=key or None,
            config_value=first.get("input"),
        )


class ConfigManager:
    """配置管理器"""

    def __init__(self):
        self._config: Optional[Config] = None

    def get_config(self) -> Config:
        """获取配置，优先环境变量，然后使用默认值"""
        if self._config is not None:
            return self._config

        try:
            settings = Settings()
        except ValidationError as e:
            raise ConfigurationError(f"Failed to load settings: {e}")

        self._config = build_config(**_strip_prefix(settings.model_dump()))
        return self._config

    def reset(self) -> None:
        """清除缓存的配置"""
        self._config = None


# 全局配置管理器实例
config_manager = ConfigManager()


def get_config() -> Config:
    """获取全局配置"""
    return config_manager.get_config()


def check_environment() -> Dict[str, Any]:
    """检查环境变量配置"""
    return {key: value for key, value in os.environ.items() if key.startswith(ENV_PREFIX)}
