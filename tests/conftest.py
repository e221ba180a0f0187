"""
测试公共夹具
"""
import sys
from typing import Any, List, Optional, Tuple

import pytest
from loguru import logger

from core.config import get_settings
from resources.base import Resource
from resources.observers import ScopeObserver


class RecordingResource(Resource):
    """把 open / use / release 事件写入共享列表的测试资源"""

    def __init__(
        self,
        name: str,
        events: List[Tuple[str, str]],
        fail_open: Optional[Exception] = None,
        fail_use: Optional[Exception] = None,
        fail_release: Optional[Exception] = None,
    ):
        super().__init__(name)
        self.events = events
        self.fail_open = fail_open
        self.fail_use = fail_use
        self.fail_release = fail_release

    def _do_open(self) -> None:
        self.events.append(("open", self.name))
        if self.fail_open is not None:
            raise self.fail_open

    def use(self) -> str:
        with self._using("use"):
            self.events.append(("use", self.name))
            if self.fail_use is not None:
                raise self.fail_use
            return self.name

    def _do_release(self) -> None:
        self.events.append(("release", self.name))
        if self.fail_release is not None:
            raise self.fail_release


class RecordingObserver(ScopeObserver):
    """按顺序记录观察到的事件"""

    def __init__(self):
        self.acquired: List[str] = []
        self.released: List[str] = []
        self.release_failed: List[str] = []
        self.suppressed: List[Tuple[BaseException, BaseException]] = []

    def on_acquired(self, resource: Any) -> None:
        self.acquired.append(resource.name)

    def on_released(self, resource: Any) -> None:
        self.released.append(resource.name)

    def on_release_failed(self, resource: Any, error: BaseException) -> None:
        self.release_failed.append(resource.name)

    def on_suppressed(self, primary: BaseException, error: BaseException) -> None:
        self.suppressed.append((primary, error))


@pytest.fixture(autouse=True)
def _reset_logger():
    """命令行测试会重新配置 loguru，测试结束后恢复默认输出"""
    yield
    logger.remove()
    logger.add(sys.stderr, level="WARNING")


@pytest.fixture(autouse=True)
def _reset_settings():
    """每个测试前后清除配置缓存，保证环境变量修改生效"""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def events() -> List[Tuple[str, str]]:
    return []


@pytest.fixture
def make_resource(events):
    """创建共享事件列表的 RecordingResource"""

    def factory(name: str, **failures: Exception) -> RecordingResource:
        return RecordingResource(name, events, **failures)

    return factory


@pytest.fixture
def recorder() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture
def caplog(caplog):
    """把 loguru 日志转发到 pytest caplog"""
    handler_id = logger.add(caplog.handler, format="{message}", level=0)
    yield caplog
    logger.remove(handler_id)
