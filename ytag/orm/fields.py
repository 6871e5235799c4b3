"""标签数组字段

声明 PostgreSQL 字符串数组列的快捷函数。
"""

from typing import Any

from sqlalchemy import String
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import mapped_column


def tag_array_column(*args: Any, **kwargs: Any):
    """声明标签数组列（PostgreSQL VARCHAR[]）

    默认非空，Python 端默认值为空列表，数据库端默认值为 '{}'。
    所有参数都会传给 mapped_column()，可覆盖默认值。

    使用示例:
        class Post(BaseModel, tag_array_model(columns=["tags", "categories"])):
            __tablename__ = "post"

            tags: Mapped[List[str]] = tag_array_column()
            categories: Mapped[List[str]] = tag_array_column(comment="分类")
    """
    kwargs.setdefault("nullable", False)
    kwargs.setdefault("default", list)
    kwargs.setdefault("server_default", "{}")
    return mapped_column(*args, ARRAY(String), **kwargs)


__all__ = [
    "tag_array_column",
]
