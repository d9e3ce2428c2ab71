"""文件名工具模块

负责把页面上的发布文件名转换为安全的本地文件名
"""

import re
import unicodedata
from pathlib import Path
from typing import Union

DEFAULT_FALLBACK_NAME = "optifine"
DEFAULT_MAX_LENGTH = 200

# 路径分隔符和 Windows 不允许的字符
_ILLEGAL_CHARS = re.compile(r'[<>:"/\\|?*]')
_WHITESPACE = re.compile(r"\s+")

_WINDOWS_RESERVED_NAMES = frozenset(
    {
        "CON",
        "PRN",
        "AUX",
        "NUL",
        *(f"COM{i}" for i in range(1, 10)),
        *(f"LPT{i}" for i in range(1, 10)),
    }
)


def sanitize_filename(filename: str, max_length: int = DEFAULT_MAX_LENGTH) -> str:
    """清理文件名

    Args:
        filename: 原始文件名
        max_length: 最大长度

    Returns:
        清理后的文件名（不含扩展名），为空时返回默认名称
    """
    name = unicodedata.normalize("NFKC", filename)
    name = "".join(ch for ch in name if unicodedata.category(ch)[0] != "C")
    name = _ILLEGAL_CHARS.sub("", name)
    name = _WHITESPACE.sub("_", name.strip())
    name = name.strip("._")[:max_length].rstrip("._")

    if not name or name.upper() in _WINDOWS_RESERVED_NAMES:
        return DEFAULT_FALLBACK_NAME
    return name


def build_destination(
    directory: Union[str, Path],
    filename: str,
    extension: str,
    max_length: int = DEFAULT_MAX_LENGTH,
) -> Path:
    """生成下载目标路径: <directory>/<清理后的文件名><extension>"""
    return Path(directory) / f"{sanitize_filename(filename, max_length)}{extension}"
