"""页面获取模块

负责HTTP请求和HTML解析，列表页面、镜像页面和文件下载共用同一个会话
"""

import asyncio
import logging
import urllib.parse
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

import aiohttp
from bs4 import BeautifulSoup

from .models import Config
from .exceptions import FetchError

logger = logging.getLogger(__name__)

HTML_PARSER = "html.parser"


def _sanitize_url_for_logging(url: str) -> str:
    """清理URL中的查询参数用于日志记录

    Args:
        url: 原始URL

    Returns:
        清理后的URL
    """
    try:
        parsed = urllib.parse.urlparse(url)
        return f"{parsed.scheme}://{parsed.hostname}{parsed.path}"
    except Exception:
        return "[URL]"


class PageFetcher:
    """页面获取器

    负责:
    - 创建和关闭 aiohttp 会话
    - 单次 GET 并解析为 BeautifulSoup 文档
    - 为流式下载打开响应
    不做重试和缓存，重定向按 aiohttp 默认行为处理。
    """

    def __init__(
        self, config: Config, session: Optional[aiohttp.ClientSession] = None
    ):
        """初始化页面获取器

        Args:
            config: 配置对象
            session: 外部传入的会话，由调用方负责关闭
        """
        self.config = config
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "PageFetcher":
        await self._create_session()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def _create_session(self) -> None:
        """创建HTTP会话"""
        if self._session is not None:
            return

        self._session = aiohttp.ClientSession(
            timeout=self._create_timeout_config(),
            headers=self._create_headers(),
            raise_for_status=False,
        )
        self._owns_session = True

    def _create_timeout_config(self) -> aiohttp.ClientTimeout:
        """创建超时配置，默认不限制"""
        return aiohttp.ClientTimeout(total=self.config.timeout)

    def _create_headers(self) -> Dict[str, str]:
        return {"User-Agent": self.config.user_agent}

    async def close(self) -> None:
        """关闭HTTP会话"""
        if self._session and self._owns_session:
            await self._session.close()
        self._session = None

    async def fetch(self, url: str) -> BeautifulSoup:
        """获取页面并解析为文档树

        Args:
            url: 页面URL

        Returns:
            解析后的文档

        Raises:
            FetchError: 网络错误、非2xx状态或内容无法解码
        """
        if self._session is None:
            await self._create_session()

        logger.debug("Fetching %s", _sanitize_url_for_logging(url))
        try:
            async with self._session.get(url) as response:
                self._check_status(response, url)
                html_content = await response.text()
        except FetchError:
            raise
        except UnicodeDecodeError as e:
            raise FetchError(f"Failed to decode page body: {e}", url=url)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise FetchError(f"Network error: {e}", url=url)

        return BeautifulSoup(html_content, HTML_PARSER)

    @asynccontextmanager
    async def stream(self, url: str) -> AsyncIterator[aiohttp.ClientResponse]:
        """打开流式GET响应

        建立连接时的错误以 FetchError 抛出；响应体读取过程中的错误
        原样交给调用方处理。
        """
        if self._session is None:
            await self._create_session()

        logger.debug("Opening stream %s", _sanitize_url_for_logging(url))
        try:
            response = await self._session.get(url)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise FetchError(f"Network error: {e}", url=url)

        try:
            self._check_status(response, url)
            yield response
        finally:
            response.close()

    @staticmethod
    def _check_status(response: aiohttp.ClientResponse, url: str) -> None:
        if not 200 <= response.status < 300:
            raise FetchError(
                f"HTTP {response.status}: {response.reason}",
                url=url,
                status_code=response.status,
            )
