"""ReachabilityMonitor 单元测试"""

import threading
from unittest.mock import MagicMock, patch

from config.settings import ReachabilityConfig
from core.interfaces import Reachability
from core.models import NetworkStatus
from services.reachability import ReachabilityMonitor, tcp_probe


class TestTcpProbe:
    """tcp_probe 测试类"""

    @patch("services.reachability.socket.create_connection")
    def test_connect_success(self, mock_connect):
        """测试连接成功"""
        mock_connect.return_value = MagicMock()
        assert tcp_probe("1.1.1.1", 53, 1.0) is True
        mock_connect.assert_called_once_with(("1.1.1.1", 53), timeout=1.0)

    @patch("services.reachability.socket.create_connection")
    def test_connect_failure(self, mock_connect):
        """测试连接失败"""
        mock_connect.side_effect = OSError("unreachable")
        assert tcp_probe("1.1.1.1", 53, 1.0) is False


class TestReachabilityMonitor:
    """ReachabilityMonitor 测试类"""

    def test_unknown_before_first_probe(self):
        """测试首次探测前视为断网"""
        monitor = ReachabilityMonitor(probe=lambda: True)
        assert monitor.status is NetworkStatus.UNKNOWN
        assert monitor.is_connected() is False

    def test_refresh_satisfied(self):
        """测试探测成功"""
        monitor = ReachabilityMonitor(probe=lambda: True)
        assert monitor.refresh() is NetworkStatus.SATISFIED
        assert monitor.is_connected() is True

    def test_refresh_unsatisfied(self):
        """测试探测失败"""
        monitor = ReachabilityMonitor(probe=lambda: False)
        assert monitor.refresh() is NetworkStatus.UNSATISFIED
        assert monitor.is_connected() is False

    def test_probe_exception_means_unsatisfied(self):
        """测试探测异常视为断网"""

        def probe():
            raise RuntimeError("boom")

        monitor = ReachabilityMonitor(probe=probe)
        assert monitor.refresh() is NetworkStatus.UNSATISFIED

    def test_status_transitions(self):
        """测试状态变化"""
        results = iter([True, False, True])
        monitor = ReachabilityMonitor(probe=lambda: next(results))

        monitor.refresh()
        assert monitor.is_connected()
        monitor.refresh()
        assert not monitor.is_connected()
        monitor.refresh()
        assert monitor.is_connected()

    @patch("services.reachability.tcp_probe")
    def test_default_probe_uses_config(self, mock_probe):
        """测试默认探测使用配置"""
        mock_probe.return_value = True
        config = ReachabilityConfig(probe_host="9.9.9.9", probe_port=443, probe_timeout=2)
        monitor = ReachabilityMonitor(config=config)

        monitor.refresh()

        mock_probe.assert_called_once_with("9.9.9.9", 443, 2)
        assert monitor.interval == config.probe_interval

    def test_start_and_stop(self):
        """测试后台线程启动和停止"""
        probed = threading.Event()

        def probe():
            probed.set()
            return True

        monitor = ReachabilityMonitor(probe=probe, interval=0.01)
        monitor.start()
        assert probed.wait(2)
        assert monitor.running

        monitor.stop(timeout=2)
        assert not monitor.running
        assert not monitor.is_connected()

    def test_stop_resets_status(self):
        """测试停止后状态回到 UNKNOWN"""
        monitor = ReachabilityMonitor(probe=lambda: True)
        monitor.refresh()
        assert monitor.is_connected()

        monitor.stop()
        assert monitor.status is NetworkStatus.UNKNOWN
        assert not monitor.is_connected()

    def test_probe_finishing_after_stop_is_discarded(self):
        """测试停止期间完成的探测不会覆盖状态"""
        entered = threading.Event()
        release = threading.Event()

        def probe():
            entered.set()
            release.wait(2)
            return True

        monitor = ReachabilityMonitor(probe=probe, interval=0.01)
        monitor.start()
        assert entered.wait(2)
        thread = monitor._thread

        monitor.stop(timeout=0.05)
        release.set()
        thread.join(2)

        assert not thread.is_alive()
        assert monitor.status is NetworkStatus.UNKNOWN

    def test_start_is_idempotent(self):
        """测试重复启动"""
        monitor = ReachabilityMonitor(probe=lambda: True, interval=0.01)
        monitor.start()
        thread = monitor._thread
        monitor.start()
        assert monitor._thread is thread
        monitor.stop(timeout=2)

    def test_stop_without_start(self):
        """测试未启动时停止"""
        monitor = ReachabilityMonitor(probe=lambda: True)
        monitor.stop()
        assert not monitor.running

    def test_context_manager(self):
        """测试上下文管理器"""
        probed = threading.Event()

        def probe():
            probed.set()
            return False

        with ReachabilityMonitor(probe=probe, interval=0.01) as monitor:
            assert probed.wait(2)
            assert monitor.running
        assert not monitor.running

    def test_implements_protocol(self):
        """测试满足 Reachability 接口"""
        assert isinstance(ReachabilityMonitor(probe=lambda: True), Reachability)
