"""镜像页面解析模块

从发布条目的镜像页面中取出最终的下载地址
"""

import logging

from .exceptions import ResolveError, ResolveErrorKind
from .fetcher import PageFetcher
from .models import ReleaseStub, ResolvedDownload

logger = logging.getLogger(__name__)

# https://optifine.net/adloadx?f=...
DOWNLOAD_ANCHOR = ".downloadButton a"


def qualify_url(href: str, base_endpoint: str) -> str:
    """把镜像页面上的链接补全为绝对URL

    已经以站点根地址开头的链接原样返回，其余视为相对链接，
    以恰好一个 "/" 拼接到根地址之后。
    """
    if href.startswith(base_endpoint):
        return href
    return base_endpoint.rstrip("/") + "/" + href.lstrip("/")


class MirrorResolver:
    """镜像页面解析器

    每次调用都重新获取镜像页面，不做缓存。
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        base_endpoint: str,
        download_anchor: str = DOWNLOAD_ANCHOR,
    ):
        """初始化镜像解析器

        Args:
            fetcher: 页面获取器
            base_endpoint: 用于补全相对链接的站点根地址
            download_anchor: 下载按钮选择器
        """
        self.fetcher = fetcher
        self.base_endpoint = base_endpoint
        self.download_anchor = download_anchor

    async def resolve(self, stub: ReleaseStub) -> ResolvedDownload:
        """解析发布条目的最终下载地址

        Raises:
            FetchError: 镜像页面获取失败
            ResolveError: 页面上找不到下载按钮或链接
        """
        doc = await self.fetcher.fetch(stub.mirror_url)

        anchor = doc.select_one(self.download_anchor)
        if anchor is None:
            raise ResolveError(
                "Download anchor not found in mirror page",
                kind=ResolveErrorKind.ANCHOR_NOT_FOUND,
                url=stub.mirror_url,
            )

        href = anchor.get("href")
        if href is None:
            raise ResolveError(
                "Download anchor has no href attribute",
                kind=ResolveErrorKind.HREF_MISSING,
                url=stub.mirror_url,
            )

        resolved = ResolvedDownload(url=qualify_url(href, self.base_endpoint))
        logger.debug("Resolved %s -> %s", stub.filename or stub.mirror_url, resolved.url)
        return resolved
