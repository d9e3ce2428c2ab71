"""测试页面构建工具

按 optifine.net 下载列表和镜像页面的结构生成 HTML
"""

from html import escape
from typing import Iterable, List, Optional, Sequence, Tuple

BASE_ENDPOINT = "https://optifine.net"


def mirror_url(version: str, edition: str = "HD_U_G8") -> str:
    """生成包含版本号的镜像页面URL"""
    return f"{BASE_ENDPOINT}/adloadx?f=OptiFine_{version}_{edition}.jar"


def download_row(filename: Optional[str], mirror: Optional[str]) -> str:
    """下载行；filename 为 None 时不生成文件名单元格，mirror 为 None 时镜像单元格没有链接"""
    cells = []
    if filename is not None:
        cells.append(f'<td class="colFile">{escape(filename)}</td>')
    cells.append('<td class="colDownload"><a href="#">Download</a></td>')
    if mirror is not None:
        cells.append(f'<td class="colMirror"><a href="{escape(mirror)}">(Mirror)</a></td>')
    else:
        cells.append('<td class="colMirror"></td>')
    cells.append('<td class="colDate">01.01.2021</td>')
    return f'<tr class="downloadLine">{"".join(cells)}</tr>'


def separator_row() -> str:
    """没有镜像链接的分隔行"""
    return '<tr class="downloadLine"><td colspan="5">&nbsp;</td></tr>'


def listing_page(sections: Iterable[Tuple[str, Sequence[str]]]) -> str:
    """按版本分组的下载列表页面

    Args:
        sections: (标题文本, 下载行HTML列表)
    """
    body = []
    for header, rows in sections:
        body.append(f"<h2>{escape(header)}</h2>")
        body.append(f'<table class="downloadTable mainTable">{"".join(rows)}</table>')
    return _page(f'<span class="downloads">{"".join(body)}</span>')


def flat_listing_page(headers: Sequence[str], rows: Sequence[str]) -> str:
    """所有标题在前、所有下载行在后的页面，下载行的文档顺序即列表顺序"""
    header_html = "".join(f"<h2>{escape(h)}</h2>" for h in headers)
    return _page(
        f'<span class="downloads">{header_html}'
        f'<table class="downloadTable">{"".join(rows)}</table></span>'
    )


def version_rows(version: str, count: int) -> List[str]:
    """某个版本下的若干下载行"""
    return [
        download_row(f"OptiFine {version} HD U G{n}", mirror_url(version, f"HD_U_G{n}"))
        for n in range(count)
    ]


def mirror_page(href: Optional[str], with_anchor: bool = True) -> str:
    """镜像页面；href 为 None 时下载按钮链接没有 href 属性"""
    if not with_anchor:
        return _page('<div class="downloadButton"><span>Download</span></div>')
    attr = f' href="{escape(href)}"' if href is not None else ""
    return _page(
        f'<table><tr><td><span class="downloadButton"><a{attr} onclick="onDownload()">'
        f"<img src='images/download.png'></a></span></td></tr></table>"
    )


def _page(body: str) -> str:
    return f"<html><head><title>OptiFine Downloads</title></head><body>{body}</body></html>"
