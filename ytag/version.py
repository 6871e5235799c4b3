"""版本信息"""

__version__ = "0.1.0"
__author__ = "ytag"
__description__ = "PostgreSQL 数组标签的 SQLAlchemy 扩展"
