"""
Scopes Module - 资源作用域

- ResourceScope: 持有一组资源，按逆序释放
- with_resource / with_resources: 单资源、多资源作用域
- with_resource_or_default: 使用失败时返回默认值
"""

from .policies import with_resource_or_default
from .scope import ResourceScope, with_resource, with_resources

__all__ = [
    "ResourceScope",
    "with_resource",
    "with_resources",
    "with_resource_or_default",
]
