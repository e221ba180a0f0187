"""
Resources Module - 可释放资源

职责：
- 资源生命周期基类（获取 / 使用 / 释放）
- 生命周期观察者
- 字节流、行流资源及流复制
"""

from .base import Releasable, Resource
from .observers import LoggingObserver, MetricsObserver, ScopeObserver
from .streams import (
    ByteSink,
    ByteSource,
    FileByteSink,
    FileByteSource,
    FileLineSource,
    LineSource,
    MemoryByteSink,
    MemoryByteSource,
    MemoryLineSource,
    copy_stream,
)
from .types import CopyResult

__all__ = [
    # 基类和接口
    "Releasable",
    "Resource",
    "ByteSource",
    "ByteSink",
    "LineSource",
    # 观察者
    "ScopeObserver",
    "LoggingObserver",
    "MetricsObserver",
    # 流资源
    "FileByteSource",
    "FileByteSink",
    "FileLineSource",
    "MemoryByteSource",
    "MemoryByteSink",
    "MemoryLineSource",
    "copy_stream",
    "CopyResult",
]
