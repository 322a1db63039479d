"""类型化 JSON API 客户端

请求管道：连通性检查 -> 构造请求 -> 传输 -> 校验状态码 -> 解码 -> 错误归一化。
每次调用要么返回指定类型的值，要么抛出 NetworkError 的某一个子类。
"""

import asyncio
import logging
from typing import Any, Optional, TypeVar
from urllib.parse import urlsplit

import requests

from config.settings import Config
from core.exceptions import (
    CustomError,
    EncodingError,
    InvalidResponseError,
    InvalidUrlError,
    NetworkError,
    NoInternetError,
    TransportError,
    to_network_error,
)
from core.interfaces import Codec, Reachability, Transport
from core.models import HttpMethod, Request
from services.codec import JsonCodec
from services.http_service import RequestsTransport
from services.reachability import ReachabilityMonitor

D = TypeVar("D")

JSON_CONTENT_TYPE = "application/json"


def parse_url(url: str) -> str:
    """校验并规范化 URL

    只接受带主机名的 http/https 绝对地址。

    Raises:
        InvalidUrlError: URL 无法解析
    """
    if not isinstance(url, str) or not url or any(c.isspace() for c in url):
        raise InvalidUrlError(url if isinstance(url, str) else None)

    try:
        parts = urlsplit(url)
        hostname = parts.hostname
    except ValueError as e:
        raise InvalidUrlError(url) from e

    if parts.scheme.lower() not in ("http", "https") or not hostname:
        raise InvalidUrlError(url)

    prepared = requests.PreparedRequest()
    try:
        prepared.prepare_url(url, None)
    except requests.RequestException as e:
        raise InvalidUrlError(url) from e
    return prepared.url


class ApiClient:
    """类型化 HTTP 客户端

    未注入的传输层和可达性监视器由客户端自行创建并负责关闭。
    调用本身不支持取消：取消 asyncio 任务只会放弃等待，工作线程仍会完成请求。
    """

    def __init__(
        self,
        transport: Optional[Transport] = None,
        codec: Optional[Codec] = None,
        monitor: Optional[Reachability] = None,
        config: Optional[Config] = None,
    ):
        self.config = config or Config()
        self._owned: list[Any] = []

        if transport is None:
            transport = RequestsTransport(config=self.config.client)
            self._owned.append(transport)
        self.transport = transport

        self.codec = codec or JsonCodec(strict=self.config.client.strict_decoding)

        if monitor is None:
            monitor = ReachabilityMonitor(config=self.config.reachability)
            monitor.start()
            self._owned.append(monitor)
        self.monitor = monitor

    async def get(self, url: str, response_type: type[D]) -> D:
        """发送 GET 请求并将响应体解码为 response_type

        Raises:
            NetworkError: 六种错误之一
        """
        request = Request(
            url=parse_url(url),
            method=HttpMethod.GET,
            headers={"Accept": JSON_CONTENT_TYPE},
        )
        return await self._execute(request, response_type)

    async def post(self, url: str, payload: Any, response_type: type[D]) -> D:
        """将 payload 编码为 JSON 后发送 POST 请求，并将响应体解码为 response_type

        Raises:
            NetworkError: 六种错误之一
        """
        parsed = parse_url(url)
        try:
            body = self.codec.encode(payload)
        except Exception as e:
            raise EncodingError(e, parsed) from e

        request = Request(
            url=parsed,
            method=HttpMethod.POST,
            headers={"Accept": JSON_CONTENT_TYPE, "Content-Type": JSON_CONTENT_TYPE},
            body=body,
        )
        return await self._execute(request, response_type)

    async def _execute(self, request: Request, response_type: type[D]) -> D:
        if not self.monitor.is_connected():
            logging.debug(f"{request.method.value} {request.url} skipped: offline")
            raise NoInternetError(request.url)

        logging.debug(f"{request.method.value} {request.url}")
        try:
            response = await self.transport.execute(request)
        except TransportError as e:
            raise CustomError(e.inner, request.url) from e
        except NetworkError:
            raise
        except Exception as e:
            raise CustomError(e, request.url) from e

        try:
            if not response.ok:
                logging.warning(
                    f"{request.method.value} {request.url} rejected: "
                    f"status {response.status}, {len(response.body)} bytes"
                )
                raise InvalidResponseError(response.status, response.body, request.url)
            return self.codec.decode(response.body, response_type)
        except Exception as e:
            error = to_network_error(e, request.url)
            if error is e:
                raise
            raise error from e

    async def close(self):
        """关闭客户端自行创建的组件

        阻塞的关闭操作（等待探测线程、等待进行中的请求）在工作线程中执行，
        不会阻塞事件循环。某个组件关闭失败时仍会继续关闭其余组件，最后抛出第一个异常。
        """
        first_error: Optional[Exception] = None
        while self._owned:
            component = self._owned.pop()
            teardown = (
                component.stop
                if isinstance(component, ReachabilityMonitor)
                else component.close
            )
            try:
                await asyncio.to_thread(teardown)
            except Exception as e:
                logging.warning(f"Failed to close {type(component).__name__}: {e}")
                if first_error is None:
                    first_error = e
        if first_error is not None:
            raise first_error

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info):
        await self.close()
