"""下载目录提取模块

把下载列表页面转换为 版本 -> 发布条目 的有序索引。

页面中下载行和版本标题之间没有显式的关联键，唯一的关联信号是镜像URL
中嵌入的版本号子串。页面保证按版本自上而下分组，因此只需要一个单调前进的
游标即可在线性时间内完成关联；游标越界说明页面违反了分组顺序，立即报错。

注意：子串匹配在一个版本号是另一个版本号子串时存在歧义（例如 "1.1" 和
"1.16.5"），这里保留原有的子串语义，不做边界锚定。
"""

import logging
from functools import reduce
from typing import Iterable, List, NamedTuple, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

from .exceptions import ExtractError, ExtractErrorKind
from .models import ReleaseStub, VersionEntry

logger = logging.getLogger(__name__)

# https://optifine.net/downloads
VERSION_HEADER = "span.downloads h2"
DOWNLOAD_ROW = "tr.downloadLine"
DOWNLOAD_FILENAME = "td.colFile"
DOWNLOAD_MIRROR = "td.colMirror a"


class AssociationState(NamedTuple):
    """行关联折叠的状态：当前游标和正在构建的目录"""

    cursor: int
    catalog: List[VersionEntry]


def parse_version_identifier(header_text: str) -> str:
    """从版本标题中取出版本号

    标题形如 "Minecraft 1.16.5"，去掉首尾空白后，第一个空白前的标签被丢弃，
    其余部分原样保留。

    Raises:
        ExtractError: 标题中没有空白分隔
    """
    parts = header_text.strip().split(None, 1)
    if len(parts) < 2:
        raise ExtractError(
            f"Version header has no label/identifier separator: {header_text!r}",
            kind=ExtractErrorKind.MALFORMED_HEADER,
        )
    return parts[1]


def advance_cursor(catalog: List[VersionEntry], cursor: int, mirror_url: str) -> int:
    """把游标前移到第一个版本号是 mirror_url 子串的版本

    Raises:
        ExtractError: 游标越过版本列表末尾
    """
    while cursor < len(catalog) and catalog[cursor].identifier not in mirror_url:
        cursor += 1

    if cursor >= len(catalog):
        raise ExtractError(
            "Download row does not belong to any remaining version header",
            kind=ExtractErrorKind.ASSOCIATION_OVERRUN,
            context={"mirror_url": mirror_url},
        )
    return cursor


class CatalogExtractor:
    """下载目录提取器"""

    def __init__(
        self,
        version_header: str = VERSION_HEADER,
        download_row: str = DOWNLOAD_ROW,
        download_filename: str = DOWNLOAD_FILENAME,
        download_mirror: str = DOWNLOAD_MIRROR,
    ):
        self.version_header = version_header
        self.download_row = download_row
        self.download_filename = download_filename
        self.download_mirror = download_mirror

    def extract(self, doc: BeautifulSoup) -> List[VersionEntry]:
        """遍历文档一次，构建版本目录

        Args:
            doc: 下载列表页面文档

        Returns:
            按标题顺序排列的版本列表

        Raises:
            ExtractError: 页面结构不符合预期
        """
        catalog = self.extract_versions(doc)
        rows = doc.select(self.download_row)
        logger.debug("Found %d version headers, %d download rows", len(catalog), len(rows))

        state = reduce(self._associate_row, rows, AssociationState(0, catalog))
        return state.catalog

    def extract_versions(self, doc: BeautifulSoup) -> List[VersionEntry]:
        """按文档顺序提取所有版本标题"""
        return [
            VersionEntry(identifier=parse_version_identifier(header.get_text()))
            for header in doc.select(self.version_header)
        ]

    def _associate_row(self, state: AssociationState, row: Tag) -> AssociationState:
        """折叠步骤：把一个下载行挂到游标所指的版本下"""
        mirror_link = row.select_one(self.download_mirror)
        if mirror_link is None:
            # 分隔行等非下载行
            return state

        mirror_url = mirror_link.get("href")
        if mirror_url is None:
            raise ExtractError(
                "Mirror link has no href attribute",
                kind=ExtractErrorKind.MIRROR_HREF_MISSING,
            )

        cursor = advance_cursor(state.catalog, state.cursor, mirror_url)

        filename_cell = row.select_one(self.download_filename)
        filename = filename_cell.get_text().strip() if filename_cell is not None else ""

        state.catalog[cursor].releases.append(
            ReleaseStub(filename=filename, mirror_url=mirror_url)
        )
        return AssociationState(cursor, state.catalog)


def find_version(
    catalog: Iterable[VersionEntry], identifier: str
) -> Optional[VersionEntry]:
    """按版本号精确查找（忽略输入两端空白）"""
    wanted = identifier.strip()
    for entry in catalog:
        if entry.identifier == wanted:
            return entry
    return None


def select_release(entry: VersionEntry, index: int) -> Optional[ReleaseStub]:
    """按从 1 开始的序号选择发布条目，越界返回 None"""
    if 1 <= index <= len(entry.releases):
        return entry.releases[index - 1]
    return None
