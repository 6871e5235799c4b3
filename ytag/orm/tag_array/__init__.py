"""标签数组模块

基于 PostgreSQL 字符串数组列的标签功能，标签直接存放在模型自身的列中。

导出:
    - tag_array_model: 生成标签数组 Mixin
    - install_tag_array: 在已有模型类上安装标签方法
    - TagQueryBuilder / AND / OR: 查询条件构建
    - GenericTagParser / TagList: 默认解析器与标签列表
    - configure_tag_array / configure_default_parser: 全局配置

使用示例:
    from ytag.orm import BaseModel, tag_array_column
    from ytag.orm.tag_array import tag_array_model, AND

    class Post(BaseModel, tag_array_model(columns=["tags", "categories"])):
        __tablename__ = "post"

        tags: Mapped[List[str]] = tag_array_column()
        categories: Mapped[List[str]] = tag_array_column()

    Post.with_all_tags(["python", "orm"]).all()
    Post.tagged_with("python", join_operator=AND).all()
    Post.tag_cloud()
"""

from .exceptions import (
    TagArrayError,
    TagColumnConfigError,
    TagParseError,
    TagQueryError,
    UnknownTagColumnError,
)
from .parser import TagList, TagParser, GenericTagParser
from .query_builder import (
    JoinOperator,
    JoinOperatorType,
    AND,
    OR,
    TagQueryBuilder,
    resolve_join_operator,
    resolve_tag_column,
)
from .tag_array_config import (
    TagArrayConfig,
    configure_tag_array,
    configure_default_parser,
    get_default_parser,
    get_tag_array_settings,
    reset_tag_array_config,
)
from .tag_array_mixin import (
    TagListAttribute,
    install_tag_array,
    tag_array_model,
    TAG_NAME,
    TAGGINGS_COUNT,
)

__all__ = [
    # 异常
    "TagArrayError",
    "TagColumnConfigError",
    "TagParseError",
    "TagQueryError",
    "UnknownTagColumnError",
    # 解析器
    "TagList",
    "TagParser",
    "GenericTagParser",
    # 查询构建
    "JoinOperator",
    "JoinOperatorType",
    "AND",
    "OR",
    "TagQueryBuilder",
    "resolve_join_operator",
    "resolve_tag_column",
    # 配置
    "TagArrayConfig",
    "configure_tag_array",
    "configure_default_parser",
    "get_default_parser",
    "get_tag_array_settings",
    "reset_tag_array_config",
    # Mixin
    "TagListAttribute",
    "install_tag_array",
    "tag_array_model",
    "TAG_NAME",
    "TAGGINGS_COUNT",
]
