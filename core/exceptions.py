"""
资源作用域的自定义异常

失败分为三个阶段：获取（acquire）、使用（use）、释放（release）。
每个失败对象都可以携带一组有序的"被抑制失败"，
用于记录主失败传播过程中清理阶段又发生的失败。
"""
from typing import List, Optional, Tuple


class ScopedResourcesException(Exception):
    """scoped-resources 基础异常类"""
    pass


# ========== 资源失败 ==========

class ResourceFailure(ScopedResourcesException):
    """
    资源失败基类

    携带消息、可选的底层原因，以及按发生顺序排列的被抑制失败列表。
    被抑制失败只能追加，不能覆盖或删除。
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause
        self._suppressed: List[BaseException] = []

    def add_suppressed(self, exc: BaseException) -> None:
        """
        追加一个被抑制的失败

        Args:
            exc: 清理阶段发生的失败

        Raises:
            ValueError: 试图抑制自身
            TypeError: exc 不是异常对象
        """
        if exc is self:
            raise ValueError("A failure cannot suppress itself")
        if not isinstance(exc, BaseException):
            raise TypeError(f"Expected an exception, got {type(exc).__name__}")
        self._suppressed.append(exc)

    @property
    def suppressed(self) -> Tuple[BaseException, ...]:
        """被抑制的失败（按发生顺序）"""
        return tuple(self._suppressed)

    def get_suppressed(self) -> Tuple[BaseException, ...]:
        """获取被抑制的失败（按发生顺序）"""
        return self.suppressed


class AcquisitionFailure(ResourceFailure):
    """资源获取失败，此时没有资源需要释放"""
    pass


class UseFailure(ResourceFailure):
    """资源使用过程中的失败"""
    pass


class ReleaseFailure(ResourceFailure):
    """资源释放失败"""
    pass


# ========== 状态异常 ==========

class ResourceStateException(ScopedResourcesException):
    """资源生命周期状态转换异常"""
    def __init__(self, resource_name: str, current_state: str, operation: str):
        self.resource_name = resource_name
        self.current_state = current_state
        self.operation = operation
        super().__init__(
            f"Resource {resource_name} cannot {operation} in state {current_state}"
        )

