"""
作用域观察者 - 资源生命周期监控
"""
from abc import ABC, abstractmethod
from typing import Any, Dict

from loguru import logger


def _describe(resource: Any) -> str:
    return getattr(resource, "name", None) or type(resource).__name__


class ScopeObserver(ABC):
    """作用域观察者接口"""

    @abstractmethod
    def on_acquired(self, resource: Any) -> None:
        """资源获取成功时调用"""
        pass

    @abstractmethod
    def on_released(self, resource: Any) -> None:
        """资源释放成功时调用"""
        pass

    @abstractmethod
    def on_release_failed(self, resource: Any, error: BaseException) -> None:
        """
        资源释放失败时调用

        Args:
            resource: 释放失败的资源
            error: 释放时抛出的异常
        """
        pass

    @abstractmethod
    def on_suppressed(self, primary: BaseException, error: BaseException) -> None:
        """
        失败被抑制时调用

        Args:
            primary: 主失败（最终抛给调用方）
            error: 被附加到主失败上的清理失败
        """
        pass


class LoggingObserver(ScopeObserver):
    """日志观察者（默认）"""

    def on_acquired(self, resource: Any) -> None:
        logger.debug(f"Acquired: {_describe(resource)}")

    def on_released(self, resource: Any) -> None:
        logger.debug(f"Released: {_describe(resource)}")

    def on_release_failed(self, resource: Any, error: BaseException) -> None:
        logger.warning(f"Release of {_describe(resource)} failed: {error!r}")

    def on_suppressed(self, primary: BaseException, error: BaseException) -> None:
        logger.warning(
            f"Suppressed {type(error).__name__} while propagating "
            f"{type(primary).__name__}: {error}"
        )


class MetricsObserver(ScopeObserver):
    """
    指标收集观察者

    对于任意作用域，acquisitions 应等于 releases + release_failures
    """

    def __init__(self):
        self.metrics = {
            "acquisitions": 0,
            "releases": 0,
            "release_failures": 0,
            "suppressed": 0,
        }

    def on_acquired(self, resource: Any) -> None:
        self.metrics["acquisitions"] += 1

    def on_released(self, resource: Any) -> None:
        self.metrics["releases"] += 1

    def on_release_failed(self, resource: Any, error: BaseException) -> None:
        self.metrics["release_failures"] += 1

    def on_suppressed(self, primary: BaseException, error: BaseException) -> None:
        self.metrics["suppressed"] += 1

    def get_metrics(self) -> Dict[str, int]:
        """获取指标"""
        return self.metrics.copy()
