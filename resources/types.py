"""
资源类型定义
"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class CopyResult:
    """流复制结果"""

    bytes_copied: int = 0
    cycles: int = 0  # 读写循环次数
    chunk_sizes: List[int] = field(default_factory=list)

    def record(self, length: int) -> None:
        """记录一次读写循环"""
        self.bytes_copied += length
        self.cycles += 1
        self.chunk_sizes.append(length)
