"""
标签数组全局配置管理

提供进程级的默认解析器和标签配置（启动时设置一次，之后只读）。
模型通过 tag_array_model(parser=...) 注入的解析器优先于这里的默认解析器。
"""

import importlib
from typing import Any, Callable, Optional

from ytag.config import TagArraySettings
from ytag.log import get_logger

_logger = get_logger()


def _import_parser(path: str) -> Callable[[Any], Any]:
    """按 "package.module:attribute" 导入解析器

    导入的对象是类时自动实例化。
    """
    module_name, _, attr = path.partition(":")
    if not attr:
        module_name, _, attr = path.rpartition(".")
    target = getattr(importlib.import_module(module_name), attr)
    if isinstance(target, type):
        target = target()
    if not callable(target):
        raise TypeError(f"解析器必须是可调用对象: {path}")
    return target


class TagArrayConfig:
    """标签数组全局配置类

    使用类变量存储全局配置：
    - settings: TagArraySettings（分隔符、搜索上限等）
    - default parser: 未显式注入解析器的模型使用的解析器
    """

    _settings: Optional[TagArraySettings] = None
    _default_parser: Optional[Callable[[Any], Any]] = None

    @classmethod
    def configure(
        cls,
        settings: Optional[TagArraySettings] = None,
        parser: Optional[Callable[[Any], Any]] = None,
    ):
        """配置全局标签设置

        Args:
            settings: 标签配置，None 时从环境变量读取
            parser: 默认解析器，None 时按 settings.parser 导入，
                    settings.parser 也为空时使用 GenericTagParser

        Examples:
            >>> configure_tag_array(TagArraySettings(delimiter=";"))
            >>> configure_tag_array(parser=my_parser)
        """
        if parser is not None and not callable(parser):
            raise TypeError("parser 必须是可调用对象")

        cls._settings = settings if settings is not None else TagArraySettings()
        cls._default_parser = parser
        if parser is None and cls._settings.parser:
            cls._default_parser = _import_parser(cls._settings.parser)
        _logger.debug(
            f"标签配置已更新: delimiter={cls._settings.delimiter!r}, "
            f"search_limit={cls._settings.search_limit}, parser={cls._default_parser!r}"
        )

    @classmethod
    def get_settings(cls) -> TagArraySettings:
        """获取当前标签配置（首次访问时从环境变量加载）"""
        if cls._settings is None:
            cls._settings = TagArraySettings()
        return cls._settings

    @classmethod
    def get_default_parser(cls) -> Callable[[Any], Any]:
        """获取默认解析器（首次访问时按配置创建）"""
        if cls._default_parser is None:
            settings = cls.get_settings()
            if settings.parser:
                cls._default_parser = _import_parser(settings.parser)
            else:
                from .parser import GenericTagParser
                cls._default_parser = GenericTagParser(
                    delimiter=settings.delimiter,
                    force_lowercase=settings.force_lowercase,
                )
        return cls._default_parser

    @classmethod
    def set_default_parser(cls, parser: Callable[[Any], Any]):
        """设置默认解析器"""
        if not callable(parser):
            raise TypeError("parser 必须是可调用对象")
        cls._default_parser = parser

    @classmethod
    def reset(cls):
        """重置为默认配置（主要用于测试）"""
        cls._settings = None
        cls._default_parser = None


def configure_tag_array(
    settings: Optional[TagArraySettings] = None,
    parser: Optional[Callable[[Any], Any]] = None,
):
    """配置全局标签设置（便捷函数）

    这是 TagArrayConfig.configure() 的便捷封装。

    Examples:
        >>> from ytag.orm import configure_tag_array
        >>> from ytag.config import TagArraySettings
        >>> configure_tag_array(TagArraySettings(delimiter=";", search_limit=50))
    """
    TagArrayConfig.configure(settings=settings, parser=parser)


def configure_default_parser(parser: Callable[[Any], Any]):
    """设置进程级默认解析器"""
    TagArrayConfig.set_default_parser(parser)


def get_default_parser() -> Callable[[Any], Any]:
    """获取进程级默认解析器"""
    return TagArrayConfig.get_default_parser()


def get_tag_array_settings() -> TagArraySettings:
    """获取当前标签配置"""
    return TagArrayConfig.get_settings()


def reset_tag_array_config():
    """重置全局标签配置"""
    TagArrayConfig.reset()


__all__ = [
    "TagArrayConfig",
    "configure_tag_array",
    "configure_default_parser",
    "get_default_parser",
    "get_tag_array_settings",
    "reset_tag_array_config",
]
