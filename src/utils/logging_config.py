"""日志配置模块

客户端本身只通过 logging 输出诊断信息，是否以及如何显示由调用方决定。
"""

import logging

# 请求过程中会产生大量 DEBUG 日志的第三方库
NOISY_LOGGERS = ("urllib3", "requests")


def setup_logging(
    level: str = "INFO",
    quiet_libraries: bool = True,
):
    """配置日志系统

    Args:
        level: 日志级别（DEBUG, INFO, WARNING, ERROR, CRITICAL）
        quiet_libraries: 是否将 urllib3/requests 的日志级别提升到 WARNING

    Returns:
        根日志记录器
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # 清除现有的处理器
    root_logger.handlers.clear()

    formatter = logging.Formatter(
        fmt="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if quiet_libraries:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    return root_logger
