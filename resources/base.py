"""
Scoped Resource - 可释放资源基类

资源生命周期：UNOPENED -> OPEN -> CLOSED
- open() 失败时不存在任何资源，状态保持 UNOPENED
- release() 只会真正执行一次，之后的调用都是空操作
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, Optional, Protocol, runtime_checkable

from loguru import logger

from core.enums import ReleaseOutcome, ResourceState
from core.exceptions import (
    AcquisitionFailure,
    ReleaseFailure,
    ResourceFailure,
    ResourceStateException,
    UseFailure,
)
from core.suppression import add_suppressed


@runtime_checkable
class Releasable(Protocol):
    """最小能力接口：只要求能够被释放"""

    def release(self) -> object:
        ...


class Resource(ABC):
    """
    可释放资源基类（模板方法）

    子类实现：
    - _do_open(): 真正获取底层资源
    - _do_release(): 真正释放底层资源（可选）

    使用阶段的操作应包在 self._using(...) 中，
    非 ResourceFailure 的异常会被转换为 UseFailure。
    """

    def __init__(self, name: Optional[str] = None):
        """
        Args:
            name: 资源名称（用于日志和错误信息），默认使用类名
        """
        self.name = name or self.__class__.__name__
        self.state = ResourceState.UNOPENED
        self.release_count = 0

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.name!r} {self.state.value}>"

    @abstractmethod
    def _do_open(self) -> None:
        """获取底层资源（子类实现）"""
        pass

    def _do_release(self) -> None:
        """释放底层资源（子类可选实现）"""
        pass

    # ========================================================================
    # 生命周期
    # ========================================================================

    def open(self) -> "Resource":
        """
        获取资源

        Returns:
            self，便于链式调用

        Raises:
            AcquisitionFailure: 底层获取失败
            ResourceStateException: 资源已经打开或已关闭
        """
        if self.state is not ResourceState.UNOPENED:
            raise ResourceStateException(self.name, self.state.value, "open")

        try:
            self._do_open()
        except AcquisitionFailure:
            raise
        except Exception as e:
            raise AcquisitionFailure(f"Failed to acquire {self.name}: {e}", e) from e

        self.state = ResourceState.OPEN
        logger.debug(f"Opened resource: {self.name}")
        return self

    def release(self) -> ReleaseOutcome:
        """
        释放资源

        已关闭的资源再次释放是空操作；未打开的资源直接标记为关闭。
        即使底层释放失败，资源也会进入 CLOSED 状态，不会再次尝试。

        Returns:
            RELEASED 或 SKIPPED

        Raises:
            ReleaseFailure: 底层释放失败
        """
        if self.state is ResourceState.CLOSED:
            return ReleaseOutcome.SKIPPED

        was_open = self.state is ResourceState.OPEN
        self.state = ResourceState.CLOSED
        if not was_open:
            return ReleaseOutcome.SKIPPED

        self.release_count += 1
        try:
            self._do_release()
        except ReleaseFailure:
            raise
        except Exception as e:
            raise ReleaseFailure(f"Failed to release {self.name}: {e}", e) from e

        logger.debug(f"Released resource: {self.name}")
        return ReleaseOutcome.RELEASED

    @property
    def is_open(self) -> bool:
        return self.state is ResourceState.OPEN

    @property
    def is_closed(self) -> bool:
        return self.state is ResourceState.CLOSED

    # ========================================================================
    # 使用阶段
    # ========================================================================

    def _ensure_open(self, operation: str) -> None:
        if self.state is not ResourceState.OPEN:
            raise ResourceStateException(self.name, self.state.value, operation)

    @contextmanager
    def _using(self, operation: str) -> Iterator[None]:
        """
        使用阶段保护

        检查资源已打开，并把底层异常转换为 UseFailure

        Args:
            operation: 操作名称（用于错误信息）
        """
        self._ensure_open(operation)
        try:
            yield
        except ResourceFailure:
            raise
        except Exception as e:
            raise UseFailure(f"{self.name} {operation} failed: {e}", e) from e

    # ========================================================================
    # with 语句支持
    # ========================================================================

    def __enter__(self) -> "Resource":
        if self.state is ResourceState.UNOPENED:
            self.open()
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        if exc_value is None:
            self.release()
            return False

        try:
            self.release()
        except Exception as e:
            add_suppressed(exc_value, e)
            logger.warning(f"Suppressed release failure of {self.name}: {e}")
        return False
