"""
资源作用域的枚举类型定义
"""

from enum import Enum


class ResourceState(str, Enum):
    """资源生命周期状态枚举"""

    UNOPENED = "unopened"  # 尚未获取
    OPEN = "open"  # 已获取，可以使用
    CLOSED = "closed"  # 已释放（只会发生一次）


class ReleaseOutcome(str, Enum):
    """单次释放的结果"""

    RELEASED = "released"  # 正常释放
    SKIPPED = "skipped"  # 已经关闭，未重复释放
