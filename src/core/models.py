"""核心数据模型

纯数据模型，不包含业务逻辑。
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class HttpMethod(Enum):
    """HTTP 方法枚举（值为线上传输的动词）"""

    GET = "GET"
    POST = "POST"
    DELETE = "DELETE"


class NetworkStatus(Enum):
    """网络路径状态"""

    UNKNOWN = "unknown"
    SATISFIED = "satisfied"
    UNSATISFIED = "unsatisfied"


@dataclass(frozen=True)
class Request:
    """单次请求（每次调用构造，调用结束后丢弃）"""

    url: str
    method: HttpMethod = HttpMethod.GET
    headers: dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None


@dataclass(frozen=True)
class Response:
    """传输层返回的原始响应"""

    status: int
    body: bytes = b""

    @property
    def ok(self) -> bool:
        """仅 200 视为成功"""
        return self.status == 200
