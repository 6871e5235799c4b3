"""ORM 工具函数

提供生成方法名时使用的命名转换工具。
"""


def singularize(name: str) -> str:
    """简单的英文单数形式（去复数化）

    Args:
        name: 复数形式的名称（通常是标签列名）

    Returns:
        单数形式的名称

    Examples:
        >>> singularize("tags")
        'tag'
        >>> singularize("categories")
        'category'
        >>> singularize("address")
        'address'
        >>> singularize("skill_tags")
        'skill_tag'

    Note:
        这是一个简化实现，处理常见的复数后缀：
        - ies → y (categories → category)
        - s → 去掉 (tags → tag)
        - ss 结尾不处理 (address → address)
    """
    if name.endswith('ies'):
        return name[:-3] + 'y'
    elif name.endswith('s') and not name.endswith('ss'):
        return name[:-1]
    return name


__all__ = [
    "singularize",
]
