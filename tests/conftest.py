"""pytest配置文件"""

import pytest
from bs4 import BeautifulSoup

from optifine_dl.models import Config

from .utils.page_builder import (
    BASE_ENDPOINT,
    download_row,
    listing_page,
    mirror_url,
    separator_row,
    version_rows,
)


def parse(html: str) -> BeautifulSoup:
    """按运行时相同的解析器解析HTML"""
    return BeautifulSoup(html, "html.parser")


@pytest.fixture
def config():
    """测试配置"""
    return Config(
        listing_url=f"{BASE_ENDPOINT}/downloads",
        base_endpoint=BASE_ENDPOINT,
        chunk_size=256,
    )


@pytest.fixture
def listing_html():
    """两个版本、每个版本两个下载行，外加分隔行"""
    return listing_page(
        [
            ("Version 1.16.5", version_rows("1.16.5", 2) + [separator_row()]),
            ("Version 1.17", version_rows("1.17", 2)),
        ]
    )


@pytest.fixture
def listing_doc(listing_html):
    return parse(listing_html)


@pytest.fixture
def release_row():
    """单个完整的下载行"""
    return download_row("OptiFine HD U G8", mirror_url("1.16.5"))
