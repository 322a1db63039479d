"""HTTP 传输服务

基于 requests.Session 的默认传输层实现，在线程池中执行阻塞请求。
"""

import asyncio
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

import requests
import urllib3

from config.settings import ClientConfig
from core.exceptions import TransportError
from core.models import Request, Response


class RequestsTransport:
    """基于 requests 的异步传输层"""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        config: Optional[ClientConfig] = None,
    ):
        """初始化传输层

        Args:
            session: 可选的 requests.Session 实例
            config: 客户端配置（超时、SSL 验证、User-Agent、线程数）
        """
        self.config = config or ClientConfig()
        self.verify_ssl = self.config.verify_ssl
        self.timeout = self.config.http_timeout
        self.session = session or self._create_session()
        self.executor = ThreadPoolExecutor(
            max_workers=self.config.max_workers, thread_name_prefix="transport"
        )

        # 只在禁用 SSL 验证时才禁用警告
        if not self.verify_ssl:
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    def _create_session(self) -> requests.Session:
        """创建 HTTP 会话"""
        session = requests.Session()
        session.verify = self.verify_ssl
        session.headers.update({"User-Agent": self.config.user_agent})
        return session

    async def execute(self, request: Request) -> Response:
        """发送请求

        Args:
            request: 请求（方法、URL、请求头、请求体）

        Returns:
            状态码与原始响应体；非 2xx 状态码不会抛出异常

        Raises:
            TransportError: 连接失败、DNS 失败、超时等传输层错误
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self.executor, self._send, request)

    def _send(self, request: Request) -> Response:
        """在工作线程中执行阻塞请求"""
        start_time = time.time()
        try:
            resp = self.session.request(
                request.method.value,
                request.url,
                headers=request.headers or None,
                data=request.body,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logging.debug(f"{request.method.value} {request.url} failed: {e}")
            raise TransportError(e, request.url) from e

        elapsed = time.time() - start_time
        logging.debug(
            f"{request.method.value} {request.url} -> {resp.status_code} ({elapsed:.3f}s)"
        )
        return Response(status=resp.status_code, body=resp.content)

    def close(self):
        """关闭线程池和会话"""
        self.executor.shutdown(wait=True)
        self.session.close()
