"""
Default-on-Failure Policy - 使用失败时返回默认值

只把使用阶段（body）的失败降级为默认值：
- 获取失败默认向调用方传播（可通过 default_on_acquire 或配置改变）
- body 成功而释放失败时，释放失败总是传播
- body 失败后释放又失败时，释放失败附加到 body 失败上并记录日志，然后返回默认值
"""

from typing import Any, Callable, List, Optional, Tuple, Type, TypeVar

from loguru import logger

from core.config import get_settings
from core.suppression import format_failure
from resources.observers import ScopeObserver

from .scope import Acquire, ResourceScope

T = TypeVar("T")


def with_resource_or_default(
    acquire: Acquire,
    body: Callable[[Any], T],
    default: T,
    *,
    catch: Tuple[Type[BaseException], ...] = (Exception,),
    default_on_acquire: Optional[bool] = None,
    observers: Optional[List[ScopeObserver]] = None,
) -> T:
    """
    获取资源并执行 body；body 失败时释放资源并返回 default

    Args:
        acquire: 无参的获取函数
        body: 接收资源并返回结果的函数
        default: body 失败时的返回值
        catch: 会被降级为默认值的异常类型
        default_on_acquire: 获取失败时是否也返回默认值
            （None 时使用配置 DEFAULT_ON_ACQUIRE_FAILURE）
        observers: 生命周期观察者列表

    Returns:
        body 的返回值，或 default
    """
    if default_on_acquire is None:
        default_on_acquire = get_settings().DEFAULT_ON_ACQUIRE_FAILURE

    scope = ResourceScope(observers, name="with_resource_or_default")

    try:
        resource = scope.acquire(acquire)
    except catch as e:
        scope.close()
        if not default_on_acquire:
            raise
        logger.warning(f"Acquisition failed, returning default: {e}")
        return default

    try:
        result = body(resource)
    except catch as e:
        scope.close(e)
        logger.warning(f"Use failed, returning default: {format_failure(e)}")
        return default
    except BaseException as e:
        scope.close(e)
        raise

    scope.close()
    return result
