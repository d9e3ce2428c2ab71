"""optifine-dl - OptiFine 下载器

现代化的异步Python包：抓取 OptiFine 下载列表，按 Minecraft 版本选择发布，
解析镜像页面并流式下载安装包
"""

# 版本信息
__version__ = "1.0.0"
__title__ = "optifine-dl"
__description__ = "OptiFine 下载器 - 异步版本"
__license__ = "MIT"

from .catalog import CatalogExtractor, find_version, select_release
from .client import OptifineDL
from .config import get_config
from .downloader import StreamDownloader
from .exceptions import (
    ConfigurationError,
    DownloadError,
    DownloadErrorKind,
    ExtractError,
    ExtractErrorKind,
    FetchError,
    OptifineDlException,
    ResolveError,
    ResolveErrorKind,
)
from .fetcher import PageFetcher
from .models import (
    Config,
    DownloadProgress,
    ReleaseStub,
    ResolvedDownload,
    VersionEntry,
)
from .resolver import MirrorResolver, qualify_url
from .cli import main

# 公共API
__all__ = [
    # 核心类
    "OptifineDL",
    "PageFetcher",
    "CatalogExtractor",
    "MirrorResolver",
    "StreamDownloader",
    # 数据模型
    "VersionEntry",
    "ReleaseStub",
    "ResolvedDownload",
    "DownloadProgress",
    "Config",
    # 便捷函数
    "find_version",
    "select_release",
    "qualify_url",
    "get_config",
    # 异常类
    "OptifineDlException",
    "FetchError",
    "ExtractError",
    "ExtractErrorKind",
    "ResolveError",
    "ResolveErrorKind",
    "DownloadError",
    "DownloadErrorKind",
    "ConfigurationError",
    # 命令行入口
    "main",
    # 元数据
    "__version__",
]
