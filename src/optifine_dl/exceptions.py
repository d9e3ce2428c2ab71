"""异常定义模块

定义应用专用的异常类，每类异常带有明确的错误种类（kind），
调用方据此决定是重新提示操作员还是终止运行
"""

from enum import Enum
from typing import Any, Dict, Optional


class OptifineDlException(Exception):
    """optifine-dl 基础异常类"""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def _details(self) -> Dict[str, Any]:
        """子类附加的展示字段"""
        return {}

    def __str__(self) -> str:
        parts = [self.message]
        for key, value in self._details().items():
            if value is not None and value != "":
                parts.append(f"{key}: {value}")
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            parts.append(f"Context: {context_str}")
        return " | ".join(parts)


class ExtractErrorKind(Enum):
    """下载列表页面结构错误种类"""

    MALFORMED_HEADER = "malformed_header"
    ASSOCIATION_OVERRUN = "association_overrun"
    MIRROR_HREF_MISSING = "mirror_href_missing"


class ResolveErrorKind(Enum):
    """镜像页面解析错误种类"""

    ANCHOR_NOT_FOUND = "anchor_not_found"
    HREF_MISSING = "href_missing"


class DownloadErrorKind(Enum):
    """文件下载错误种类"""

    CREATE_FAILED = "create_failed"
    STREAM_INTERRUPTED = "stream_interrupted"
    WRITE_FAILED = "write_failed"


class FetchError(OptifineDlException):
    """页面获取异常 - 网络传输失败、非2xx状态或内容无法解码"""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, context)
        self.url = url
        self.status_code = status_code

    def _details(self) -> Dict[str, Any]:
        return {"URL": self.url, "Status": self.status_code}


class ExtractError(OptifineDlException):
    """目录提取异常 - 上游页面格式发生了变化"""

    def __init__(
        self,
        message: str,
        kind: ExtractErrorKind,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, context)
        self.kind = kind

    def _details(self) -> Dict[str, Any]:
        return {"Kind": self.kind.value}


class ResolveError(OptifineDlException):
    """镜像页面解析异常"""

    def __init__(
        self,
        message: str,
        kind: ResolveErrorKind,
        url: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, context)
        self.kind = kind
        self.url = url

    def _details(self) -> Dict[str, Any]:
        return {"Kind": self.kind.value, "URL": self.url}


class DownloadError(OptifineDlException):
    """文件下载异常 - 可能留下不完整的文件"""

    def __init__(
        self,
        message: str,
        kind: DownloadErrorKind,
        url: Optional[str] = None,
        file_path: Optional[str] = None,
        bytes_written: int = 0,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, context)
        self.kind = kind
        self.url = url
        self.file_path = file_path
        self.bytes_written = bytes_written

    def _details(self) -> Dict[str, Any]:
        return {"Kind": self.kind.value, "URL": self.url, "File": self.file_path}


class ConfigurationError(OptifineDlException):
    """配置异常"""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, context)
        self.config_key = config_key
        self.config_value = config_value

    def _details(self) -> Dict[str, Any]:
        return {"Key": self.config_key, "Value": self.config_value}
