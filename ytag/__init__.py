"""
YTag - PostgreSQL 数组标签的 SQLAlchemy 扩展

提供标签数组 Mixin、解析器、配置和日志等功能
"""

from .version import __version__, __author__, __description__

# 导出ORM
from .orm import (
    Base,
    BaseModel,
    init_database,
    get_engine,
    get_db,
    db_session_scope,
    on_request_end,
    tag_array_column,
    tag_array_model,
    install_tag_array,
    TagList,
    GenericTagParser,
    TagQueryBuilder,
    AND,
    OR,
    configure_tag_array,
    configure_default_parser,
    TagArrayError,
    TagColumnConfigError,
    TagParseError,
    TagQueryError,
    UnknownTagColumnError,
)

# 导出配置
from .config import (
    AppSettings,
    TagArraySettings,
    DatabaseSettings,
    LoggingSettings,
    load_yaml_config,
)

# 导出日志
from .log import setup_logger, setup_root_logger, get_logger

__all__ = [
    "__version__",
    "__author__",
    "__description__",
    # ORM
    "Base",
    "BaseModel",
    "init_database",
    "get_engine",
    "get_db",
    "db_session_scope",
    "on_request_end",
    "tag_array_column",
    "tag_array_model",
    "install_tag_array",
    "TagList",
    "GenericTagParser",
    "TagQueryBuilder",
    "AND",
    "OR",
    "configure_tag_array",
    "configure_default_parser",
    # 异常
    "TagArrayError",
    "TagColumnConfigError",
    "TagParseError",
    "TagQueryError",
    "UnknownTagColumnError",
    # 配置
    "AppSettings",
    "TagArraySettings",
    "DatabaseSettings",
    "LoggingSettings",
    "load_yaml_config",
    # 日志
    "setup_logger",
    "setup_root_logger",
    "get_logger",
]
