"""工具模块

提供各种辅助工具和实用函数
"""

from .filename_utils import build_destination, sanitize_filename

__all__ = [
    "build_destination",
    "sanitize_filename",
]
