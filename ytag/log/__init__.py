"""日志模块

基于标准库 logging 的日志配置工具：
- 日志记录器配置（控制台 / 轮转文件）
- 自动推断模块名的 get_logger

使用示例:
    from ytag.log import setup_logger, get_logger

    # 应用启动时配置
    setup_logger("ytag", level="DEBUG", log_file="logs/ytag.log")

    # 库内部使用
    logger = get_logger()
"""

from .logger import (
    setup_logger,
    setup_root_logger,
    create_formatter,
    MicrosecondFormatter,
    DEFAULT_LOG_FORMAT,
    orm_logger,
    logger,
    get_logger,
)

__all__ = [
    "setup_logger",
    "setup_root_logger",
    "create_formatter",
    "MicrosecondFormatter",
    "DEFAULT_LOG_FORMAT",
    "orm_logger",
    "logger",
    "get_logger",
]
