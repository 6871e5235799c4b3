"""日志功能测试

测试 get_logger 自动推断模块名、前缀处理以及 setup_logger 配置
"""

import logging
import os

import pytest

from ytag.config import LoggingSettings


class TestGetLoggerAutoInfer:
    """测试 get_logger 自动推断功能"""

    def test_auto_infer_module_name(self):
        """测试无参数调用时自动推断模块名"""
        from ytag.log import get_logger

        logger = get_logger()

        assert logger.name == __name__

    def test_library_module_logger(self):
        """测试库内部模块的日志器名称"""
        from ytag.orm.tag_array import tag_array_mixin

        assert tag_array_mixin._logger.name == "ytag.orm.tag_array.tag_array_mixin"


class TestGetLoggerWithName:
    """测试 get_logger 显式指定名称功能"""

    def test_simple_name_adds_prefix(self):
        """测试简单名称自动添加 ytag 前缀"""
        from ytag.log import get_logger

        assert get_logger("orm").name == "ytag.orm"

    def test_prefix_not_duplicated(self):
        """测试已有 ytag 前缀不重复添加"""
        from ytag.log import get_logger

        assert get_logger("ytag.orm.session").name == "ytag.orm.session"
        assert get_logger("ytag").name == "ytag"

    def test_external_module_no_prefix(self):
        """测试外部模块名（含点号）不添加前缀"""
        from ytag.log import get_logger

        assert get_logger("sqlalchemy.engine").name == "sqlalchemy.engine"

    def test_predefined_loggers(self):
        """测试预定义的日志记录器"""
        from ytag.log import logger, orm_logger

        assert logger.name == "ytag"
        assert orm_logger.name == "ytag.orm"


class TestSetupLogger:
    """setup_logger 测试"""

    def test_console_only(self):
        """测试只输出到控制台"""
        from ytag.log import setup_logger

        logger = setup_logger("ytag.test_console", level="DEBUG")

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.StreamHandler)

    def test_file_handler(self, log_dir):
        """测试写入文件"""
        from ytag.log import setup_logger

        log_file = os.path.join(log_dir, "plain.log")
        logger = setup_logger("ytag.test_file", log_file=log_file, console=False)
        logger.info("hello")
        for handler in logger.handlers:
            handler.flush()

        with open(log_file, encoding="utf-8") as f:
            assert "hello" in f.read()

        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)

    def test_rotating_file_handler(self, log_dir):
        """测试提供文件选项时使用轮转文件处理器"""
        from logging.handlers import RotatingFileHandler
        from ytag.log import setup_logger

        log_file = os.path.join(log_dir, "rotating.log")
        logger = setup_logger(
            "ytag.test_rotating",
            log_file=log_file,
            console=False,
            file_handler_options={"maxBytes": 1024, "backupCount": 2},
        )

        handler = logger.handlers[0]
        assert isinstance(handler, RotatingFileHandler)
        assert handler.maxBytes == 1024
        assert handler.backupCount == 2

        handler.close()
        logger.removeHandler(handler)

    def test_invalid_level_falls_back_to_info(self):
        """测试无效日志级别回退为 INFO"""
        from ytag.log import setup_logger

        logger = setup_logger("ytag.test_level", level="verbose")

        assert logger.level == logging.INFO


class TestSetupRootLogger:
    """setup_root_logger 测试"""

    @pytest.fixture(autouse=True)
    def restore_root(self):
        """恢复根日志器"""
        root = logging.getLogger()
        handlers, level, propagate = list(root.handlers), root.level, root.propagate
        yield
        for handler in list(root.handlers):
            handler.close()
        root.handlers[:] = handlers
        root.setLevel(level)
        root.propagate = propagate

    def test_from_config(self, log_dir):
        """测试从 LoggingSettings 配置"""
        from logging.handlers import RotatingFileHandler
        from ytag.log import setup_root_logger

        config = LoggingSettings(
            level="WARNING",
            file_path=os.path.join(log_dir, "root.log"),
            file_backup_count=3,
            enable_console=False,
        )
        root = setup_root_logger(config=config)

        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], RotatingFileHandler)
        assert root.handlers[0].backupCount == 3


class TestMicrosecondFormatter:
    """MicrosecondFormatter 测试"""

    def test_microseconds(self):
        """测试时间戳包含微秒"""
        from ytag.log import MicrosecondFormatter

        formatter = MicrosecondFormatter(fmt="%(asctime)s")
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
        record.created = 1700000000.123456

        assert formatter.format(record).split(".")[-1].startswith("123")
