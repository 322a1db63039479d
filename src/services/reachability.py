"""网络可达性监视

后台线程周期性探测网络，请求管道只读取最近一次的缓存状态。
"""

import logging
import socket
import threading
from typing import Callable, Optional

from config.settings import ReachabilityConfig
from core.models import NetworkStatus


def tcp_probe(host: str, port: int, timeout: float) -> bool:
    """尝试建立 TCP 连接，成功即视为网络可用"""
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return True
    except OSError:
        return False


class ReachabilityMonitor:
    """网络可达性监视器

    由客户端的所有者显式 start()/stop()；未探测前和停止后状态为 UNKNOWN，视为断网。

    默认探测是到 probe_host:probe_port（1.1.1.1:53）的 TCP 连接，检查的是公网可达，
    比“存在可用网络路径”更严格：屏蔽该主机或端口的网络中，访问局域网或本机 API
    也会得到 NoInternetError。此类场景应通过 REACHABILITY_PROBE_HOST/PORT 指向
    目标服务本身，或注入自定义 probe。
    """

    def __init__(
        self,
        probe: Optional[Callable[[], bool]] = None,
        interval: Optional[float] = None,
        config: Optional[ReachabilityConfig] = None,
    ):
        """初始化监视器

        Args:
            probe: 探测函数，返回网络是否可用（默认 TCP 探测）
            interval: 探测间隔（秒），默认取配置
            config: 可达性配置
        """
        self.config = config or ReachabilityConfig()
        self.probe = probe or self._default_probe
        self.interval = interval if interval is not None else self.config.probe_interval
        self._status = NetworkStatus.UNKNOWN
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    def _default_probe(self) -> bool:
        return tcp_probe(
            self.config.probe_host, self.config.probe_port, self.config.probe_timeout
        )

    @property
    def status(self) -> NetworkStatus:
        """最近一次观测到的状态"""
        return self._status

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def is_connected(self) -> bool:
        """网络是否可用（不阻塞，可能略有滞后）"""
        return self._status is NetworkStatus.SATISFIED

    def _observe(self) -> NetworkStatus:
        try:
            satisfied = bool(self.probe())
        except Exception as e:
            logging.debug(f"Reachability probe raised: {e}")
            satisfied = False
        return NetworkStatus.SATISFIED if satisfied else NetworkStatus.UNSATISFIED

    def _store(self, status: NetworkStatus):
        if status is not self._status:
            logging.info(f"Network status changed: {self._status.value} -> {status.value}")
        self._status = status

    def refresh(self) -> NetworkStatus:
        """同步执行一次探测并更新状态"""
        status = self._observe()
        self._store(status)
        return status

    def _run(self):
        while not self._stop_event.is_set():
            status = self._observe()
            # stop() 期间完成的探测结果作废
            if self._stop_event.is_set():
                break
            self._store(status)
            self._stop_event.wait(self.interval)

    def start(self):
        """启动后台探测线程（重复调用无副作用）"""
        with self._lock:
            if self.running:
                return
            self._stop_event.clear()
            self._thread = threading.Thread(
                target=self._run, name="ReachabilityMonitor", daemon=True
            )
            self._thread.start()

    def stop(self, timeout: Optional[float] = None):
        """停止后台探测线程"""
        with self._lock:
            thread = self._thread
            self._thread = None
            self._stop_event.set()
        if thread is not None:
            thread.join(timeout)
        self._status = NetworkStatus.UNKNOWN

    def __enter__(self) -> "ReachabilityMonitor":
        self.start()
        return self

    def __exit__(self, *exc_info):
        self.stop()
