"""异常模块

本模块定义了表情生成插件使用的异常类。

Classes:
    MemegenError: 基础异常类
    SchemaFetchError: 表情参数信息获取失败
    RenderRequestError: 预览/生成请求失败
"""

from typing import Optional

PARAMS_MISMATCH_MARKER = "ParamsMismatch"

class MemegenError(Exception):
    """表情生成插件基础异常类"""

    def __init__(self, message: str, cause: Optional[Exception] = None) -> None:
        """初始化异常

        Args:
            message: 错误消息
            cause: 导致此异常的原始异常
        """
        super().__init__(message)
        self.cause = cause

    def __str__(self) -> str:
        if self.cause:
            return f"{super().__str__()}\n原因: {str(self.cause)}"
        return super().__str__()

class SchemaFetchError(MemegenError):
    """表情参数信息获取失败

    Attributes:
        key: 表情 key
    """
    def __init__(self, key: str, message: str, cause: Optional[Exception] = None) -> None:
        self.key = key
        super().__init__(message, cause)

class RenderRequestError(MemegenError):
    """预览或生成请求失败

    Attributes:
        key: 表情 key
        status: HTTP 状态码，传输层错误时为 None
        body: 响应体文本，传输层错误时为 None
    """
    def __init__(
        self,
        key: str,
        message: str,
        status: Optional[int] = None,
        body: Optional[str] = None,
        cause: Optional[Exception] = None
    ) -> None:
        self.key = key
        self.status = status
        self.body = body
        super().__init__(message, cause)

    @property
    def is_params_mismatch(self) -> bool:
        """响应体中包含 ParamsMismatch 时视为用户输入错误"""
        return bool(self.body) and PARAMS_MISMATCH_MARKER in self.body
