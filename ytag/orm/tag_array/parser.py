"""标签解析器

解析器负责把外部的标签表示（字符串、列表等）转换为有序的 TagList，
str(TagList) 再把它还原为字符串表示。

- TagParser: 解析器协议，任何 `callable(value) -> TagList` 都可以作为解析器
- GenericTagParser: 默认解析器，按分隔符拆分字符串，支持引号包裹含分隔符的标签
- TagList: 去重、保持顺序的标签列表

使用示例:
    parser = GenericTagParser()
    tags = parser('python, "web, api", python')
    list(tags)   # ["python", "web, api"]
    str(tags)    # 'python, "web, api"'
"""

import re
from collections import abc
from typing import Any, Iterable, List, Optional, Protocol, runtime_checkable

from .exceptions import TagParseError


class TagList(list):
    """标签列表

    保持插入顺序并自动去重、去除空白标签。
    转换为字符串时使用分隔符连接，含分隔符的标签用引号包裹。
    """

    def __init__(self, tags: Iterable[str] = (), delimiter: str = ","):
        super().__init__()
        self.delimiter = delimiter
        self.add(*tags)

    def add(self, *tags: str) -> "TagList":
        """追加标签（忽略空白和重复）"""
        for tag in tags:
            if tag is None:
                continue
            tag = str(tag).strip()
            if tag and tag not in self:
                self.append(tag)
        return self

    def remove(self, *tags: str) -> "TagList":
        """移除标签（不存在时忽略）"""
        for tag in tags:
            if tag in self:
                super().remove(tag)
        return self

    def _quote(self, tag: str) -> str:
        if self.delimiter not in tag:
            return tag
        if '"' in tag:
            return f"'{tag}'"
        return f'"{tag}"'

    def __str__(self) -> str:
        separator = self.delimiter if self.delimiter.endswith(" ") else f"{self.delimiter} "
        return separator.join(self._quote(tag) for tag in self)

    def __repr__(self) -> str:
        return f"TagList({list.__repr__(self)})"


@runtime_checkable
class TagParser(Protocol):
    """标签解析器协议"""

    def __call__(self, value: Any) -> TagList: ...


class GenericTagParser:
    """通用标签解析器

    支持的输入：
    - None: 空列表
    - 字符串: 按分隔符拆分，去除首尾空白；用单引号或双引号包裹的标签可以包含分隔符
    - 可迭代对象（列表、元组、集合、TagList 等）: 逐项去除空白

    其他类型抛出 TagParseError。

    Args:
        delimiter: 分隔符，默认读取 TagArraySettings.delimiter
        force_lowercase: 是否转为小写，默认读取 TagArraySettings.force_lowercase
    """

    def __init__(self, delimiter: Optional[str] = None, force_lowercase: Optional[bool] = None):
        if delimiter is None or force_lowercase is None:
            from .tag_array_config import TagArrayConfig
            settings = TagArrayConfig.get_settings()
            if delimiter is None:
                delimiter = settings.delimiter
            if force_lowercase is None:
                force_lowercase = settings.force_lowercase
        self.delimiter = delimiter
        self.force_lowercase = force_lowercase
        self._quoted_pattern = re.compile(
            r"""\s*(["'])(.*?)\1\s*(?:%s|\Z)""" % re.escape(delimiter.strip() or delimiter)
        )

    def __call__(self, value: Any) -> TagList:
        if value is None:
            tags: Iterable[Any] = []
        elif isinstance(value, str):
            tags = self._split(value)
        elif isinstance(value, (bytes, bytearray)):
            raise TagParseError(value)
        elif isinstance(value, abc.Iterable):
            tags = value
        else:
            raise TagParseError(value)

        if self.force_lowercase:
            tags = [str(tag).lower() for tag in tags if tag is not None]
        return TagList(tags, delimiter=self.delimiter)

    def _split(self, value: str) -> List[str]:
        delimiter = self.delimiter.strip() or self.delimiter
        tags = []
        pos = 0
        while pos <= len(value):
            match = self._quoted_pattern.match(value, pos)
            if match:
                tags.append(match.group(2))
                pos = match.end()
                continue
            end = value.find(delimiter, pos)
            if end == -1:
                tags.append(value[pos:])
                break
            tags.append(value[pos:end])
            pos = end + len(delimiter)
        return tags

    def __repr__(self) -> str:
        return f"GenericTagParser(delimiter={self.delimiter!r})"


__all__ = [
    "TagList",
    "TagParser",
    "GenericTagParser",
]
