"""
Resource Scope - 资源作用域

保证作用域内成功获取的每个资源都恰好释放一次，并且按获取的逆序释放。

失败合并规则：
- 时间上第一个失败为主失败，最终抛给调用方
- 之后释放阶段发生的失败全部作为被抑制失败附加到主失败上
"""

from typing import Any, Callable, List, Optional, Sequence, Tuple, TypeVar

from loguru import logger

from core.enums import ResourceState
from core.exceptions import ResourceStateException
from core.suppression import add_suppressed
from resources.base import Releasable, Resource
from resources.observers import LoggingObserver, ScopeObserver

T = TypeVar("T")
Acquire = Callable[[], Any]


def _release_callback(resource: Any) -> Callable[[], Any]:
    """找到资源的释放方法（Releasable 优先，其次 close()）"""
    if isinstance(resource, Releasable):
        return resource.release
    close = getattr(resource, "close", None)
    if callable(close):
        return close
    raise TypeError(
        f"{type(resource).__name__} is not releasable "
        f"(expected a release() or close() method)"
    )


class ResourceScope:
    """
    资源作用域（上下文管理器）

    使用示例：
        with ResourceScope() as scope:
            source = scope.acquire(lambda: FileByteSource(src))
            sink = scope.acquire(lambda: FileByteSink(dst))
            copy_stream(source, sink)
        # 先释放 sink，再释放 source
    """

    def __init__(
        self,
        observers: Optional[List[ScopeObserver]] = None,
        name: str = "scope",
    ):
        """
        Args:
            observers: 生命周期观察者列表（默认只有日志观察者）
            name: 作用域名称（用于日志）
        """
        self.name = name
        self.observers: List[ScopeObserver] = (
            observers if observers is not None else [LoggingObserver()]
        )
        self._stack: List[Tuple[Any, Callable[[], Any]]] = []
        self._closed = False

    def __enter__(self) -> "ResourceScope":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> bool:
        self.close(exc_value)
        return False

    @property
    def resources(self) -> Tuple[Any, ...]:
        """当前持有的资源（按获取顺序）"""
        return tuple(resource for resource, _ in self._stack)

    @property
    def closed(self) -> bool:
        return self._closed

    def __len__(self) -> int:
        return len(self._stack)

    def acquire(self, acquire: Acquire) -> Any:
        """
        获取一个资源并纳入作用域管理

        acquire 返回未打开的 Resource 时会先打开它。
        获取失败时异常直接传播，作用域不会持有该资源。

        Args:
            acquire: 无参的获取函数

        Returns:
            获取到的资源

        Raises:
            ResourceStateException: 作用域已关闭
            TypeError: 获取到的对象没有 release() / close() 方法
        """
        if self._closed:
            raise ResourceStateException(self.name, "closed", "acquire")

        resource = acquire()
        if isinstance(resource, Resource) and resource.state is ResourceState.UNOPENED:
            resource.open()

        self._stack.append((resource, _release_callback(resource)))
        self._notify("on_acquired", resource)
        return resource

    def close(self, primary: Optional[BaseException] = None) -> None:
        """
        按获取的逆序释放所有资源

        Args:
            primary: 正在传播的主失败；释放失败会作为被抑制失败附加到它上面

        Raises:
            没有主失败时，抛出第一个释放失败（其余释放失败附加在它上面）
        """
        if self._closed:
            return
        self._closed = True

        failure = primary
        while self._stack:
            resource, release = self._stack.pop()
            try:
                release()
            except BaseException as e:
                self._notify("on_release_failed", resource, e)
                if failure is None:
                    failure = e
                else:
                    add_suppressed(failure, e)
                    self._notify("on_suppressed", failure, e)
            else:
                self._notify("on_released", resource)

        if primary is None and failure is not None:
            logger.debug(f"[{self.name}] Release failed: {failure!r}")
            raise failure

    def _notify(self, event: str, *args: Any) -> None:
        """通知所有观察者"""
        for observer in self.observers:
            try:
                getattr(observer, event)(*args)
            except Exception as e:
                logger.error(f"❌ Observer notification error ({event}): {e}")


def with_resource(
    acquire: Acquire,
    body: Callable[[Any], T],
    observers: Optional[List[ScopeObserver]] = None,
) -> T:
    """
    获取一个资源，执行 body，并保证资源恰好释放一次

    - 获取失败：直接传播，不释放
    - body 成功、释放成功：返回 body 的结果
    - body 成功、释放失败：传播释放失败
    - body 失败、释放成功：传播 body 的失败
    - body 失败、释放失败：传播 body 的失败，释放失败作为被抑制失败附加其上

    Args:
        acquire: 无参的获取函数
        body: 接收资源并返回结果的函数
        observers: 生命周期观察者列表

    Returns:
        body 的返回值
    """
    with ResourceScope(observers, name="with_resource") as scope:
        resource = scope.acquire(acquire)
        return body(resource)


def with_resources(
    acquires: Sequence[Acquire],
    body: Callable[..., T],
    observers: Optional[List[ScopeObserver]] = None,
) -> T:
    """
    按顺序获取多个资源，执行 body，并按逆序释放全部资源

    第 k 个资源获取失败时，前 k-1 个资源按逆序释放，
    后续资源不会尝试获取，获取失败作为主失败传播。

    Args:
        acquires: 获取函数序列（按获取顺序）
        body: 按位置接收全部资源的函数
        observers: 生命周期观察者列表

    Returns:
        body 的返回值
    """
    with ResourceScope(observers, name="with_resources") as scope:
        resources = [scope.acquire(acquire) for acquire in acquires]
        return body(*resources)
