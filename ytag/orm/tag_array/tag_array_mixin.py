"""标签数组 Mixin

为 PostgreSQL 字符串数组列提供标签查询能力。标签直接存放在模型自身的
ARRAY 列中，不需要标签表和关联表。

使用示例:
    from ytag.orm import BaseModel, tag_array_model, tag_array_column

    class Post(BaseModel, tag_array_model(columns=["tags", "categories"])):
        __tablename__ = "post"

        title: Mapped[str] = mapped_column(String(200))
        tags: Mapped[List[str]] = tag_array_column()
        categories: Mapped[List[str]] = tag_array_column()

    # 写入（经过解析器）
    post = Post(title="SQLAlchemy 入门")
    post.tag_list = "python, orm, postgres"
    post.tag_list            # TagList(['python', 'orm', 'postgres'])

    # 查询（返回 Query，可继续链式调用）
    Post.with_all_tags(["python", "orm"]).all()
    Post.with_any_tags("python, rust").all()
    Post.without_any_categories(["draft"]).all()
    Post.tagged_with(["python"], on=["tags", "categories"], join_operator=AND).all()

    # 统计
    Post.tag_cloud()         # [("python", 3), ("orm", 1), ...]
    Post.tag_list()          # ["orm", "postgres", "python"]（类上调用）
    Post.tag_search("py")    # ["python"]

每个标签列 <col>（方法名中的 <name> 为其单数形式，如 tags -> tag）生成:
    - with_all_<col> / with_any_<col> / without_all_<col> / without_any_<col>
    - <name>_list: 实例上读写 TagList，类上调用返回去重后的全部标签
    - <name>_cloud / <name>_search
以及每个模型一份的 tagged_with / tag_array_cloud / tag_array_list。
"""

from functools import reduce
from types import MappingProxyType
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple, Type, Union

from sqlalchemy import String, func

from ytag.log import get_logger

from ..utils import singularize
from .exceptions import TagColumnConfigError
from .query_builder import OR, JoinOperatorType, TagQueryBuilder, resolve_tag_column
from .tag_array_config import TagArrayConfig

_logger = get_logger()

# UNNEST 结果列名
TAG_NAME = "tag_name"
TAGGINGS_COUNT = "taggings_count"

Refine = Callable[[Any], Any]
ColumnsArg = Union[str, Iterable[str], None]


# ==================== 内部工具 ====================

def _merge_columns(column: Optional[str] = None, columns: ColumnsArg = None) -> List[str]:
    """合并 column / columns 参数，去重并去除空值"""
    if isinstance(columns, str):
        columns = [columns]
    merged = []
    for name in [column, *(columns if columns is not None else [])]:
        if name is None:
            continue
        if isinstance(name, str):
            name = name.strip()
            if not name or name in merged:
                continue
        elif any(name is seen for seen in merged):
            continue
        merged.append(name)
    return merged


def _bind_parser(parser: Optional[Callable[[Any], Any]]) -> Callable[[Any], Any]:
    """绑定解析器

    显式注入的解析器优先；未注入时每次调用读取全局默认解析器。
    """
    def parse(value: Any):
        active = parser if parser is not None else TagArrayConfig.get_default_parser()
        return active(value)
    return parse


def _base_query(cls, query=None):
    return cls.query if query is None else query


def _unnest_subquery(cls, columns: Sequence[Any], query=None, refine: Refine = None,
                     distinct: bool = False):
    """构建 UNNEST 子查询

    多列时先用 || 拼接数组再展开。

    Returns:
        (session, subquery)
    """
    base = _base_query(cls, query)
    expressions = [resolve_tag_column(cls, column) for column in columns]
    array_expr = reduce(lambda left, right: left.concat(right), expressions)

    # DISTINCT 子查询不能保留基础查询的 ORDER BY
    unnested = base.order_by(None).with_entities(func.unnest(array_expr, type_=String).label(TAG_NAME))
    if distinct:
        unnested = unnested.distinct()
    if refine is not None:
        unnested = refine(unnested)
    return base.session, unnested.subquery()


def _tag_cloud(cls, columns: Sequence[Any], refine: Refine = None, query=None) -> List[Tuple[str, int]]:
    if not columns:
        return []
    session, subquery = _unnest_subquery(cls, columns, query=query, refine=refine)
    tag_name = subquery.c[TAG_NAME]
    rows = (
        session.query(tag_name, func.count().label(TAGGINGS_COUNT))
        .group_by(tag_name)
        .all()
    )
    return [(row[0], row[1]) for row in rows]


def _tag_list(cls, columns: Sequence[Any], refine: Refine = None, query=None) -> List[str]:
    if not columns:
        return []
    session, subquery = _unnest_subquery(cls, columns, query=query, refine=refine, distinct=True)
    return [row[0] for row in session.query(subquery.c[TAG_NAME]).all()]


def _tag_search(cls, column: str, term: Any, refine: Refine = None, query=None,
                limit: Optional[int] = None) -> List[str]:
    if limit is None:
        limit = cls.__tag_array_search_limit__
    if limit is None:
        limit = TagArrayConfig.get_settings().search_limit

    session, subquery = _unnest_subquery(cls, [column], query=query, refine=refine, distinct=True)
    tag_name = subquery.c[TAG_NAME]
    result = session.query(tag_name)

    # 各子词依次叠加过滤（AND），空白子词被 split() 丢弃
    sub_terms = str(term).split() if term is not None else []
    for sub_term in sub_terms:
        result = result.filter(tag_name.contains(sub_term, autoescape=True))

    return [row[0] for row in result.order_by(tag_name).limit(limit).all()]


# ==================== 生成的方法 ====================

class TagListAttribute:
    """<name>_list 描述符

    - 实例读取: 存储的数组经解析器返回 TagList
    - 实例赋值: 解析后写入数组列，解析结果为空时写入 []（不会写入 None）
    - 类上读取: 返回函数，调用后得到该列全部去重标签
    """

    def __init__(self, column: str, parse: Callable[[Any], Any]):
        self.column = column
        self.parse = parse

    def __set_name__(self, owner, name):
        self.name = name

    def __get__(self, instance, owner=None):
        if instance is None:
            column = self.column

            def distinct_tags(refine: Refine = None, query=None) -> List[str]:
                return _tag_list(owner, [column], refine=refine, query=query)

            distinct_tags.__name__ = f"{singularize(column)}_list"
            return distinct_tags
        return self.parse(getattr(instance, self.column))

    def __set__(self, instance, value):
        parsed = self.parse(value)
        setattr(instance, self.column, list(parsed or []))


def _make_tagged_with(parse: Callable[[Any], Any], builder: TagQueryBuilder):
    def tagged_with(cls, tags: Any = "", on: ColumnsArg = None,
                    join_operator: JoinOperatorType = OR, any: bool = False,
                    exclude: bool = False, query=None):
        """按标签过滤

        Args:
            tags: 标签（表示形式由解析器决定，如 "a, b" 或 ["a", "b"]）
            on: 目标列，默认全部已配置的标签列
            join_operator: 多列组合方式 AND / OR，默认 OR
            any: True 时任一标签命中即可，默认需包含全部标签
            exclude: True 时取反
            query: 基础查询（Query 或 Select），默认 cls.query

        Returns:
            添加过滤条件后的查询；解析后的标签为空时原样返回基础查询
        """
        base = _base_query(cls, query)
        parsed = list(parse(tags) or [])
        if not parsed:
            return base

        columns = _merge_columns(None, on) or list(cls.__tag_array_columns__)
        predicate = builder(cls, columns, parsed, join_operator=join_operator,
                            any=any, exclude=exclude)
        return base.filter(predicate)

    return tagged_with


def _make_scope(column: str, any: bool, exclude: bool):
    def scope(cls, tags: Any, query=None):
        return cls.tagged_with(tags, on=[column], any=any, exclude=exclude, query=query)
    return scope


def _make_cloud(column: str):
    def cloud(cls, refine: Refine = None, query=None) -> List[Tuple[str, int]]:
        """标签云：[(标签, 出现次数), ...]"""
        return _tag_cloud(cls, [column], refine=refine, query=query)
    return cloud


def _make_search(column: str):
    def search(cls, term: Any, refine: Refine = None, query=None,
               limit: Optional[int] = None) -> List[str]:
        """按子串搜索标签，空白分隔的多个子词需同时命中"""
        return _tag_search(cls, column, term, refine=refine, query=query, limit=limit)
    return search


def tag_array_cloud(cls, *columns: str, refine: Refine = None, query=None) -> List[Tuple[str, int]]:
    """多列合并后的标签云，未指定列时返回 []"""
    return _tag_cloud(cls, columns, refine=refine, query=query)


def tag_array_list(cls, *columns: str, refine: Refine = None, query=None) -> List[str]:
    """多列合并后的去重标签，未指定列时返回 []"""
    return _tag_list(cls, columns, refine=refine, query=query)


# ==================== 安装 ====================

def install_tag_array(
    cls: Type,
    columns: ColumnsArg,
    parser: Optional[Callable[[Any], Any]] = None,
    builder: Optional[TagQueryBuilder] = None,
    search_limit: Optional[int] = None,
    **options: Any,
) -> Type:
    """在模型类上安装标签数组方法

    可对同一个类多次调用：标签列累加到 __tag_array_columns__，
    已存在的 tagged_with 不会被覆盖。

    Args:
        cls: 模型类
        columns: 标签列名（单个或列表）
        parser: 解析器，默认使用全局默认解析器
        builder: 查询条件构建器，默认 TagQueryBuilder()
        search_limit: <name>_search 默认结果上限，默认读取全局配置
        **options: 其他选项，保存在 __tag_array_options__

    Raises:
        TagColumnConfigError: 未指定任何标签列
    """
    columns = _merge_columns(None, columns)
    if not columns:
        raise TagColumnConfigError()

    parse = _bind_parser(parser)
    builder = builder or TagQueryBuilder()

    existing = tuple(getattr(cls, "__tag_array_columns__", ()))
    cls.__tag_array_columns__ = existing + tuple(c for c in columns if c not in existing)
    cls.__tag_array_options__ = MappingProxyType(
        {**getattr(cls, "__tag_array_options__", {}), **options}
    )
    if search_limit is not None or not hasattr(cls, "__tag_array_search_limit__"):
        cls.__tag_array_search_limit__ = search_limit

    for column in columns:
        name = singularize(column)
        setattr(cls, f"with_all_{column}", classmethod(_make_scope(column, any=False, exclude=False)))
        setattr(cls, f"with_any_{column}", classmethod(_make_scope(column, any=True, exclude=False)))
        setattr(cls, f"without_all_{column}", classmethod(_make_scope(column, any=False, exclude=True)))
        setattr(cls, f"without_any_{column}", classmethod(_make_scope(column, any=True, exclude=True)))

        list_attr = TagListAttribute(column, parse)
        list_attr.__set_name__(cls, f"{name}_list")
        setattr(cls, f"{name}_list", list_attr)
        setattr(cls, f"{name}_cloud", classmethod(_make_cloud(column)))
        setattr(cls, f"{name}_search", classmethod(_make_search(column)))

    if not hasattr(cls, "tagged_with"):
        cls.tagged_with = classmethod(_make_tagged_with(parse, builder))
    if not hasattr(cls, "tag_array_cloud"):
        cls.tag_array_cloud = classmethod(tag_array_cloud)
    if not hasattr(cls, "tag_array_list"):
        cls.tag_array_list = classmethod(tag_array_list)

    _logger.debug(f"{cls.__name__} 已安装标签列: {', '.join(columns)}")
    return cls


def tag_array_model(
    column: Optional[str] = None,
    columns: ColumnsArg = None,
    parser: Optional[Callable[[Any], Any]] = None,
    **options: Any,
) -> Type:
    """生成标签数组 Mixin 类

    模型继承返回的 Mixin 时自动调用 install_tag_array()。

    Args:
        column: 单个标签列名
        columns: 标签列名列表，与 column 合并去重
        parser: 解析器，默认使用全局默认解析器
        **options: 传给 install_tag_array() 的其他选项（builder、search_limit 等）

    Returns:
        Mixin 类

    Raises:
        TagColumnConfigError: 未指定任何标签列

    使用示例:
        class Post(BaseModel, tag_array_model(column="tags")):
            __tablename__ = "post"
            tags: Mapped[List[str]] = tag_array_column()
    """
    mixin_columns = tuple(_merge_columns(column, columns))
    if not mixin_columns:
        raise TagColumnConfigError()
    mixin_options = dict(options)

    class TagArrayMixin:
        def __init_subclass__(cls, **kwargs):
            # 先安装再交给后续 Mixin，保证多个 Mixin 按声明顺序安装
            install_tag_array(cls, mixin_columns, parser=parser, **mixin_options)
            super().__init_subclass__(**kwargs)

    TagArrayMixin.__name__ = TagArrayMixin.__qualname__ = (
        "TagArrayMixin_" + "_".join(mixin_columns)
    )
    return TagArrayMixin


__all__ = [
    "TagListAttribute",
    "install_tag_array",
    "tag_array_model",
    "TAG_NAME",
    "TAGGINGS_COUNT",
]
