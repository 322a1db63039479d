"""核心接口定义

使用 Protocol 定义接口，支持鸭子类型和依赖注入。
"""

from typing import Any, Protocol, TypeVar, runtime_checkable

from core.models import Request, Response

T = TypeVar("T")


@runtime_checkable
class Transport(Protocol):
    """传输层接口

    失败时抛出 core.exceptions.TransportError。
    """

    async def execute(self, request: Request) -> Response:
        """发送请求并返回状态码与原始响应体"""
        ...


@runtime_checkable
class Codec(Protocol):
    """JSON 编解码接口"""

    def encode(self, value: Any) -> bytes: ...

    def decode(self, data: bytes, type_: type[T]) -> T: ...


@runtime_checkable
class Reachability(Protocol):
    """网络可达性接口"""

    def is_connected(self) -> bool:
        """返回最近一次观测到的状态（不阻塞）"""
        ...
