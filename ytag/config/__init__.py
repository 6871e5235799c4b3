"""配置模块

提供配置管理功能：
- AppSettings: 应用配置，聚合以下子配置，支持 YAML + 环境变量
- TagArraySettings: 标签分隔符、默认解析器、搜索结果上限
- DatabaseSettings / LoggingSettings: 数据库与日志配置
- ConfigLoader: YAML 配置加载器

快速开始:
    from ytag.config import AppSettings, load_yaml_config

    settings = load_yaml_config("config/settings.yaml", AppSettings)

配置优先级: 初始化参数 > 环境变量 > 默认值
"""

from .settings import (
    AppSettings,
    TagArraySettings,
    DatabaseSettings,
    LoggingSettings,
)

from .loader import (
    ConfigLoader,
    load_yaml_config,
)

__all__ = [
    # Settings Classes
    "AppSettings",
    "TagArraySettings",
    "DatabaseSettings",
    "LoggingSettings",

    # Config Loader
    "ConfigLoader",
    "load_yaml_config",
]
