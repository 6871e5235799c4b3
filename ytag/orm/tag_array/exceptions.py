"""标签数组异常定义

提供标签数组相关的异常类。
"""

from typing import Any


class TagArrayError(Exception):
    """标签数组基础异常"""
    pass


class TagColumnConfigError(TagArrayError):
    """标签列配置异常

    调用 tag_array_model() 时未指定任何标签列时抛出，
    此时不会生成任何 Mixin 类或方法。
    """

    def __init__(self, message: str = "Columns not specified"):
        super().__init__(message)


class TagParseError(TagArrayError):
    """标签解析异常

    通用解析器无法识别输入类型时抛出。

    Attributes:
        value: 无法解析的原始值
    """

    def __init__(self, value: Any):
        self.value = value
        super().__init__(
            f"Cannot parse tags from {type(value).__name__}: {value!r}"
        )


class TagQueryError(TagArrayError):
    """标签查询构建异常"""
    pass


class UnknownTagColumnError(TagQueryError):
    """未知标签列异常

    查询目标列名在模型上无法解析为列时抛出。

    Attributes:
        model: 模型类
        column: 列名
    """

    def __init__(self, model: Any, column: Any):
        self.model = model
        self.column = column
        model_name = getattr(model, "__name__", repr(model))
        super().__init__(f"Unknown tag column '{column}' on {model_name}")


__all__ = [
    "TagArrayError",
    "TagColumnConfigError",
    "TagParseError",
    "TagQueryError",
    "UnknownTagColumnError",
]
