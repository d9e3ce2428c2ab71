"""数据模型定义

使用 Pydantic 进行类型安全的数据验证和模型定义
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_LISTING_URL = "https://optifine.net/downloads"
DEFAULT_BASE_ENDPOINT = "https://optifine.net"


class ReleaseStub(BaseModel):
    """未解析的发布条目（文件名 + 镜像页面URL）"""

    filename: str = Field(default="", description="文件名，无法解析时为空")
    mirror_url: str = Field(..., description="镜像页面URL（绝对或相对）")


class VersionEntry(BaseModel):
    """Minecraft 版本及其下属的发布条目"""

    identifier: str = Field(..., description="版本号，例如 1.16.5")
    releases: List[ReleaseStub] = Field(
        default_factory=list, description="按文档顺序排列的发布条目"
    )

    @property
    def release_count(self) -> int:
        """发布条目数量"""
        return len(self.releases)


class ResolvedDownload(BaseModel):
    """镜像页面解析后的最终下载地址"""

    url: str = Field(..., description="绝对下载URL")

    model_config = ConfigDict(frozen=True)


class DownloadProgress(BaseModel):
    """下载进度模型"""

    filename: str = Field(..., description="文件名")
    downloaded: int = Field(default=0, description="已下载字节数")
    total: int = Field(default=0, description="总字节数，0 表示未知")

    @property
    def is_complete(self) -> bool:
        """是否下载完成"""
        return self.total > 0 and self.downloaded >= self.total

    model_config = ConfigDict(extra="forbid")


class Config(BaseModel):
    """应用配置模型"""

    # 站点配置
    listing_url: str = Field(
        default=DEFAULT_LISTING_URL, description="下载列表页面URL"
    )
    base_endpoint: str = Field(
        default=DEFAULT_BASE_ENDPOINT, description="用于补全相对URL的站点根地址"
    )

    # 网络配置
    timeout: Optional[int] = Field(
        default=None, description="请求超时时间(秒)，None 表示不限制"
    )
    chunk_size: int = Field(default=8192, description="下载块大小")

    # 用户代理
    user_agent: str = Field(
        default="Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
        description="HTTP用户代理",
    )

    # 文件设置
    file_extension: str = Field(default=".jar", description="下载文件扩展名")
    max_filename_length: int = Field(default=200, description="文件名最大长度")

    debug_mode: bool = Field(default=False, description="调试模式，显示详细错误信息")

    @field_validator("chunk_size", "max_filename_length")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """验证必须为正数"""
        if v <= 0:
            raise ValueError("Value must be positive")
        return v

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v <= 0:
            raise ValueError("Timeout must be positive")
        return v

    @field_validator("base_endpoint")
    @classmethod
    def validate_base_endpoint(cls, v: str) -> str:
        """站点根地址不能以 / 结尾"""
        if not v.startswith(("http://", "https://")):
            raise ValueError("Base endpoint must be an http(s) URL")
        if v.endswith("/"):
            raise ValueError("Base endpoint must not end with '/'")
        return v

    @field_validator("file_extension")
    @classmethod
    def validate_file_extension(cls, v: str) -> str:
        if not v.startswith(".") or len(v) < 2:
            raise ValueError("File extension must look like '.jar'")
        return v

    model_config = ConfigDict(extra="forbid")
