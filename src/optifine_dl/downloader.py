"""流式下载器实现

按块读取响应体写入本地文件，并在每个块之后回调进度
"""

import asyncio
import logging
from pathlib import Path
from typing import Callable, Optional, Union

import aiofiles
import aiohttp

from .exceptions import DownloadError, DownloadErrorKind
from .fetcher import PageFetcher
from .models import Config

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


def declared_length(response: aiohttp.ClientResponse) -> int:
    """读取响应声明的长度，未提供或无法解析时返回 0"""
    content_length = response.headers.get("content-length")
    try:
        return max(int(content_length), 0) if content_length else 0
    except ValueError:
        return 0


class StreamDownloader:
    """流式下载器

    Features:
    - 独占创建目标文件，已存在时报错而不覆盖
    - 按块写入，内存占用与文件大小无关
    - 每个块之后回调 (已写入字节数, 声明总长度)
    - 中途失败时保留不完整的文件，由调用方清理
    """

    def __init__(self, fetcher: PageFetcher, config: Config):
        """初始化流式下载器

        Args:
            fetcher: 页面获取器，提供流式GET
            config: 应用配置
        """
        self.fetcher = fetcher
        self.config = config

    async def download(
        self,
        url: str,
        destination: Union[str, Path],
        on_progress: Optional[ProgressCallback] = None,
    ) -> int:
        """下载文件

        Args:
            url: 已解析的绝对下载地址
            destination: 目标文件路径
            on_progress: 进度回调函数 (downloaded, total)

        Returns:
            写入的字节数

        Raises:
            FetchError: 请求在响应体开始前失败
            DownloadError: 文件创建失败或传输中断
        """
        async with self.fetcher.stream(url) as response:
            return await self.write_stream(response, destination, on_progress, url=url)

    async def write_stream(
        self,
        response: aiohttp.ClientResponse,
        destination: Union[str, Path],
        on_progress: Optional[ProgressCallback] = None,
        url: Optional[str] = None,
    ) -> int:
        """把已打开的响应体写入目标文件"""
        total = declared_length(response)
        file_path = str(destination)

        try:
            f = await aiofiles.open(file_path, "xb")
        except OSError as e:
            raise DownloadError(
                f"Cannot create destination file: {e}",
                kind=DownloadErrorKind.CREATE_FAILED,
                url=url,
                file_path=file_path,
            )

        written = 0
        try:
            async for chunk in response.content.iter_chunked(self.config.chunk_size):
                await f.write(chunk)
                written += len(chunk)
                if on_progress:
                    on_progress(written, total)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise DownloadError(
                f"Download stream interrupted: {e}",
                kind=DownloadErrorKind.STREAM_INTERRUPTED,
                url=url,
                file_path=file_path,
                bytes_written=written,
            )
        except OSError as e:
            raise DownloadError(
                f"Write to destination failed: {e}",
                kind=DownloadErrorKind.WRITE_FAILED,
                url=url,
                file_path=file_path,
                bytes_written=written,
            )
        finally:
            await f.close()

        logger.debug("Wrote %d bytes (declared %d) to %s", written, total, file_path)
        return written
