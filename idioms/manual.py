"""
手动释放：try/finally 写法

只涉及一个资源时还算清晰（first_line_of_file）；
资源一多就需要嵌套 try/finally（copy），可读性迅速下降。

更重要的是 finally 里的释放本身也可能失败。
这时释放失败会取代正在传播的原始失败，原始失败只剩下
隐式的 __context__ 链，调用方很难分辨根因。
作用域写法见 idioms.scoped。
"""

from pathlib import Path
from typing import Any, Callable, Optional, TypeVar, Union

from resources.base import Resource
from resources.streams import FileByteSink, FileByteSource, FileLineSource, copy_stream
from resources.types import CopyResult

T = TypeVar("T")
PathLike = Union[str, Path]


def release_in_finally(acquire: Callable[[], Resource], body: Callable[[Any], T]) -> T:
    """
    最朴素的写法：获取后在 finally 中释放

    body 与释放同时失败时，抛出的是释放失败，body 的失败被覆盖。
    """
    resource = acquire().open()
    try:
        return body(resource)
    finally:
        resource.release()


def first_line_of_file(path: PathLike, encoding: Optional[str] = None) -> Optional[str]:
    """读取文件第一行（单个 try/finally）"""
    reader = FileLineSource(path, encoding).open()
    try:
        return reader.read_line()
    finally:
        reader.release()


def copy(src: PathLike, dst: PathLike, buffer_size: Optional[int] = None) -> CopyResult:
    """复制文件（嵌套 try/finally）"""
    source = FileByteSource(src).open()
    try:
        sink = FileByteSink(dst).open()
        try:
            return copy_stream(source, sink, buffer_size)
        finally:
            sink.release()
    finally:
        source.release()


def first_byte_of_file(path: PathLike) -> int:
    """
    读取文件第一个字节，空文件返回 -1

    获取放在 try 内部，因此 finally 需要判断资源是否已经获取。
    """
    source = None
    try:
        source = FileByteSource(path).open()
        buffer = bytearray(1)
        if source.read(buffer) == 0:
            return -1
        return buffer[0]
    finally:
        if source is not None:
            source.release()
