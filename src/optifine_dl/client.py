"""下载器主模块

实现 OptifineDL 主类，把页面获取、目录提取、镜像解析和流式下载串联起来
"""

import logging
from pathlib import Path
from typing import Any, List, Optional, Union

from .catalog import CatalogExtractor
from .config import get_config
from .downloader import ProgressCallback, StreamDownloader
from .fetcher import PageFetcher
from .models import Config, ReleaseStub, ResolvedDownload, VersionEntry
from .resolver import MirrorResolver

logger = logging.getLogger(__name__)


class OptifineDL:
    """OptiFine 下载器 - 异步版本

    支持依赖注入，所有组件共用一个HTTP会话
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        fetcher: Optional[PageFetcher] = None,
        extractor: Optional[CatalogExtractor] = None,
    ):
        """初始化下载器

        Args:
            config: 配置对象，如果为None则使用全局配置
            fetcher: 页面获取器，如果为None则按配置创建
            extractor: 目录提取器，如果为None则使用默认选择器
        """
        self.config = config or get_config()
        self.fetcher = fetcher or PageFetcher(self.config)
        self.extractor = extractor or CatalogExtractor()
        self.resolver = MirrorResolver(self.fetcher, self.config.base_endpoint)
        self.downloader = StreamDownloader(self.fetcher, self.config)

    async def __aenter__(self) -> "OptifineDL":
        await self.fetcher.__aenter__()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.fetcher.close()

    async def load_catalog(self) -> List[VersionEntry]:
        """获取下载列表页面并构建完整目录"""
        doc = await self.fetcher.fetch(self.config.listing_url)
        catalog = self.extractor.extract(doc)
        logger.info(
            "Catalog built: %d versions, %d releases",
            len(catalog),
            sum(entry.release_count for entry in catalog),
        )
        return catalog

    async def resolve(self, stub: ReleaseStub) -> ResolvedDownload:
        """解析发布条目的最终下载地址（每次都重新获取）"""
        return await self.resolver.resolve(stub)

    async def download(
        self,
        stub: ReleaseStub,
        destination: Union[str, Path],
        on_progress: Optional[ProgressCallback] = None,
    ) -> int:
        """解析并下载发布条目

        Returns:
            写入的字节数
        """
        resolved = await self.resolve(stub)
        return await self.downloader.download(resolved.url, destination, on_progress)
