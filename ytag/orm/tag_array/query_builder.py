"""标签查询条件构建器

把"目标列 + 标签列表 + 选项"组合为一个 SQLAlchemy 布尔表达式：

- all 模式: column @> ARRAY[tags]   （列包含全部标签）
- any 模式: column && ARRAY[tags]   （列与标签有交集）
- exclude:  NOT coalesce(<条件>, false)，列为 NULL 时视为不包含
- 多列之间按 join_operator（AND / OR）组合；列内部只做数组包含/相交判断

标签列表为空时返回 true()，即不过滤。

目标列必须是 sqlalchemy.dialects.postgresql.ARRAY 类型（见 tag_array_column），
通用的 sqlalchemy.ARRAY 不支持 contains / overlap。

使用示例:
    builder = TagQueryBuilder()
    predicate = builder(Post, ["tags", "categories"], ["python", "web"], any=True)
    Post.query.filter(predicate)
"""

from enum import Enum
from typing import Any, List, Optional, Sequence, Union

from sqlalchemy import and_, false, func, not_, or_, true
from sqlalchemy.orm import QueryableAttribute
from sqlalchemy.sql.elements import ColumnElement

from .exceptions import TagQueryError, UnknownTagColumnError


class JoinOperator(str, Enum):
    """多列条件的组合方式"""
    AND = "and"
    OR = "or"

    def __str__(self) -> str:
        return self.value


AND = JoinOperator.AND
OR = JoinOperator.OR

JoinOperatorType = Union[str, JoinOperator]


def resolve_join_operator(value: Optional[JoinOperatorType]) -> JoinOperator:
    """把字符串或枚举统一为 JoinOperator，None 视为 OR

    Raises:
        TagQueryError: 不支持的组合方式
    """
    if value is None:
        return OR
    if isinstance(value, JoinOperator):
        return value
    if isinstance(value, str):
        try:
            return JoinOperator(value.lower())
        except ValueError:
            pass
    raise TagQueryError(f"Unsupported join operator: {value!r}")


def resolve_tag_column(model: Any, column: Any):
    """把列名解析为可用于构建表达式的列对象

    已经是列对象（映射属性或表列）时原样返回。
    """
    if not isinstance(column, str):
        return column
    attr = getattr(model, column, None)
    if isinstance(attr, QueryableAttribute):
        return attr
    table = getattr(model, "__table__", None)
    if table is not None and column in table.c:
        return table.c[column]
    raise UnknownTagColumnError(model, column)


class TagQueryBuilder:
    """标签查询条件构建器

    只负责构建表达式，不执行查询。
    """

    def __call__(
        self,
        model: Any,
        columns: Sequence[Any],
        tags: Sequence[str],
        join_operator: Optional[JoinOperatorType] = OR,
        any: bool = False,
        exclude: bool = False,
    ) -> ColumnElement:
        """构建查询条件

        Args:
            model: 模型类，用于解析列名
            columns: 目标列名（或列对象）列表
            tags: 已解析的标签列表
            join_operator: 多列组合方式，AND 或 OR，None 视为 OR
            any: True 时任一标签命中即可，False 时需包含全部标签
            exclude: True 时取反（不包含）

        Returns:
            SQLAlchemy 布尔表达式
        """
        if not tags:
            return true()

        operator = resolve_join_operator(join_operator)
        tags = list(tags)
        conditions = [
            self.build_condition(resolve_tag_column(model, column), tags, any=any, exclude=exclude)
            for column in columns
        ]

        if not conditions:
            raise TagQueryError("No tag columns given")
        if len(conditions) == 1:
            return conditions[0]
        if operator is AND:
            return and_(*conditions)
        return or_(*conditions)

    def build_condition(
        self,
        column: Any,
        tags: List[str],
        any: bool = False,
        exclude: bool = False,
    ) -> ColumnElement:
        """构建单列条件"""
        condition = column.overlap(tags) if any else column.contains(tags)
        if exclude:
            return not_(func.coalesce(condition, false()))
        return condition


__all__ = [
    "JoinOperator",
    "JoinOperatorType",
    "AND",
    "OR",
    "resolve_join_operator",
    "resolve_tag_column",
    "TagQueryBuilder",
]
