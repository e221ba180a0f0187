"""
被抑制失败的记录与查询

ResourceFailure 自带被抑制失败列表；其他任意异常对象
则把列表保存在 __suppressed__ 属性上。两种情况都只追加、不覆盖。
"""

from typing import List, Tuple

from core.exceptions import ResourceFailure

_SUPPRESSED_ATTR = "__suppressed__"


def add_suppressed(primary: BaseException, secondary: BaseException) -> None:
    """
    把 secondary 记录为 primary 的被抑制失败

    Args:
        primary: 正在传播的主失败
        secondary: 清理阶段发生的失败

    Raises:
        ValueError: primary 与 secondary 是同一个对象
    """
    if isinstance(primary, ResourceFailure):
        primary.add_suppressed(secondary)
        return

    if secondary is primary:
        raise ValueError("A failure cannot suppress itself")

    suppressed: List[BaseException] = getattr(primary, _SUPPRESSED_ATTR, None)
    if suppressed is None:
        suppressed = []
        setattr(primary, _SUPPRESSED_ATTR, suppressed)
    suppressed.append(secondary)


def get_suppressed(exc: BaseException) -> Tuple[BaseException, ...]:
    """
    获取 exc 上记录的被抑制失败（按发生顺序）

    Returns:
        被抑制失败的元组，没有时为空元组
    """
    if isinstance(exc, ResourceFailure):
        return exc.suppressed
    return tuple(getattr(exc, _SUPPRESSED_ATTR, ()))


def format_failure(exc: BaseException) -> str:
    """
    把失败及其被抑制失败格式化为多行文本（用于日志）
    """
    lines = [f"{type(exc).__name__}: {exc}"]
    for index, suppressed in enumerate(get_suppressed(exc), start=1):
        lines.append(f"  suppressed[{index}] {type(suppressed).__name__}: {suppressed}")
    return "\n".join(lines)
