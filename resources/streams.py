"""
Streams - 字节流与行流资源

外部协作方只按最小接口使用：
- ByteSource.read(buffer) -> 读取的字节数，0 表示流结束
- ByteSink.write(buffer, length)
- LineSource.read_line() -> 一行（不含换行符），None 表示流结束

文件实现的 I/O 错误会被转换为 AcquisitionFailure / UseFailure / ReleaseFailure。
"""

from pathlib import Path
from typing import IO, Iterator, Optional, Protocol, Union, runtime_checkable

from loguru import logger

from core.config import get_settings

from .base import Resource
from .types import CopyResult

PathLike = Union[str, Path]


# ============================================================================
# 接口
# ============================================================================


@runtime_checkable
class ByteSource(Protocol):
    """字节源接口"""

    def read(self, buffer: bytearray) -> int:
        ...


@runtime_checkable
class ByteSink(Protocol):
    """字节汇接口"""

    def write(self, buffer: bytes, length: int) -> None:
        ...


@runtime_checkable
class LineSource(Protocol):
    """行源接口"""

    def read_line(self) -> Optional[str]:
        ...


def _strip_newline(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


# ============================================================================
# 文件实现
# ============================================================================


class _FileResource(Resource):
    """基于文件对象的资源"""

    mode = "rb"

    def __init__(self, path: PathLike, name: Optional[str] = None):
        self.path = Path(path)
        super().__init__(name or str(self.path))
        self._file: Optional[IO] = None

    def _open_file(self) -> IO:
        return open(self.path, self.mode)

    def _do_open(self) -> None:
        self._file = self._open_file()

    def _do_release(self) -> None:
        try:
            self._file.close()
        finally:
            self._file = None


class FileByteSource(_FileResource):
    """文件字节源"""

    def read(self, buffer: bytearray) -> int:
        with self._using("read"):
            return self._file.readinto(buffer) or 0


class FileByteSink(_FileResource):
    """文件字节汇（覆盖写入）"""

    mode = "wb"

    def write(self, buffer: bytes, length: int) -> None:
        with self._using("write"):
            self._file.write(memoryview(buffer)[:length])


class FileLineSource(_FileResource):
    """文件行源"""

    mode = "r"

    def __init__(
        self,
        path: PathLike,
        encoding: Optional[str] = None,
        name: Optional[str] = None,
    ):
        super().__init__(path, name)
        self.encoding = encoding or get_settings().FILE_ENCODING

    def _open_file(self) -> IO:
        return open(self.path, self.mode, encoding=self.encoding)

    def read_line(self) -> Optional[str]:
        with self._using("read_line"):
            line = self._file.readline()
        if line == "":
            return None
        return _strip_newline(line)


# ============================================================================
# 内存实现
# ============================================================================


class MemoryByteSource(Resource):
    """内存字节源"""

    def __init__(self, data: bytes, name: Optional[str] = None):
        super().__init__(name)
        self._data = bytes(data)
        self._position = 0

    def _do_open(self) -> None:
        self._position = 0

    def read(self, buffer: bytearray) -> int:
        with self._using("read"):
            chunk = self._data[self._position:self._position + len(buffer)]
            buffer[:len(chunk)] = chunk
            self._position += len(chunk)
            return len(chunk)


class MemoryByteSink(Resource):
    """内存字节汇，释放后内容仍可读取"""

    def __init__(self, name: Optional[str] = None):
        super().__init__(name)
        self._data = bytearray()

    def _do_open(self) -> None:
        self._data = bytearray()

    def write(self, buffer: bytes, length: int) -> None:
        with self._using("write"):
            self._data.extend(memoryview(buffer)[:length])

    def getvalue(self) -> bytes:
        return bytes(self._data)


class MemoryLineSource(Resource):
    """内存行源"""

    def __init__(self, text: str, name: Optional[str] = None):
        super().__init__(name)
        self._text = text
        self._lines: Optional[Iterator[str]] = None

    def _do_open(self) -> None:
        self._lines = iter(self._text.splitlines())

    def read_line(self) -> Optional[str]:
        with self._using("read_line"):
            return next(self._lines, None)


# ============================================================================
# 流复制
# ============================================================================


def copy_stream(
    source: ByteSource, sink: ByteSink, buffer_size: Optional[int] = None
) -> CopyResult:
    """
    使用固定大小的缓冲区把 source 复制到 sink，直到流结束

    Args:
        source: 字节源
        sink: 字节汇
        buffer_size: 缓冲区大小，默认取配置 COPY_BUFFER_SIZE

    Returns:
        复制结果（总字节数、循环次数、每次的块大小）
    """
    if buffer_size is None:
        buffer_size = get_settings().COPY_BUFFER_SIZE
    if buffer_size < 1:
        raise ValueError(f"buffer_size must be positive, got {buffer_size}")

    buffer = bytearray(buffer_size)
    result = CopyResult()

    while True:
        n = source.read(buffer)
        if not n or n < 0:
            break
        sink.write(buffer, n)
        result.record(n)

    logger.debug(
        f"Copied {result.bytes_copied} bytes in {result.cycles} cycles "
        f"(buffer={buffer_size})"
    )
    return result
