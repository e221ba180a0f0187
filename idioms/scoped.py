"""
作用域释放：with_resource / with_resources 写法

与 idioms.manual 中的 try/finally 相比：
- 多个资源不需要嵌套，按获取逆序自动释放
- 释放失败不会覆盖原始失败，而是作为被抑制失败附加在原始失败上
- 可以在使用失败时直接返回默认值，同时仍然释放资源
"""

from pathlib import Path
from typing import List, Optional, Union

from loguru import logger

from core.config import get_settings
from resources.base import Resource
from resources.observers import ScopeObserver
from resources.streams import FileByteSink, FileByteSource, FileLineSource, copy_stream
from resources.types import CopyResult
from scopes import with_resource, with_resource_or_default, with_resources

PathLike = Union[str, Path]


class GreetingResource(Resource):
    """演示用资源，没有真正的底层资源"""

    greeting = "hello"

    def _do_open(self) -> None:
        pass

    def use(self) -> str:
        with self._using("use"):
            logger.info(self.greeting)
            return self.greeting


def greet(observers: Optional[List[ScopeObserver]] = None) -> str:
    """在作用域内使用演示资源"""
    return with_resource(GreetingResource, lambda resource: resource.use(), observers)


def copy(
    src: PathLike,
    dst: PathLike,
    buffer_size: Optional[int] = None,
    observers: Optional[List[ScopeObserver]] = None,
) -> CopyResult:
    """
    复制文件

    先获取 source 再获取 sink，释放顺序相反：先 sink 后 source。

    Args:
        src: 源文件路径
        dst: 目标文件路径
        buffer_size: 缓冲区大小，默认取配置 COPY_BUFFER_SIZE
        observers: 生命周期观察者列表

    Returns:
        复制结果
    """
    if buffer_size is None:
        buffer_size = get_settings().COPY_BUFFER_SIZE

    return with_resources(
        [lambda: FileByteSource(src), lambda: FileByteSink(dst)],
        lambda source, sink: copy_stream(source, sink, buffer_size),
        observers,
    )


def first_line_of_file(
    path: PathLike,
    default: Optional[str],
    encoding: Optional[str] = None,
) -> Optional[str]:
    """
    读取文件第一行，打开或读取失败（包括文件不存在）时返回 default

    读取成功但关闭文件失败时，ReleaseFailure 仍然传播给调用方。
    空文件返回 None。
    """
    return with_resource_or_default(
        lambda: FileLineSource(path, encoding),
        lambda reader: reader.read_line(),
        default,
        default_on_acquire=True,
    )
