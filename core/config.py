"""
使用 Pydantic Settings 进行配置管理
从 app.properties 文件和环境变量加载配置
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from loguru import logger


class Settings(BaseSettings):
    """应用配置，包含参数校验"""

    # 日志配置
    LOG_LEVEL: str = Field(default="INFO", description="日志级别")
    LOG_FILE: Optional[str] = Field(default=None, description="日志文件路径")
    LOG_ROTATION: str = Field(default="10 MB", description="日志文件轮转规则")
    LOG_RETENTION: str = Field(default="7 days", description="日志文件保留时间")

    # 流复制配置
    COPY_BUFFER_SIZE: int = Field(default=1024, description="流复制缓冲区大小（字节）")
    FILE_ENCODING: str = Field(default="utf-8", description="文本文件编码")

    # 默认值策略配置
    DEFAULT_ON_ACQUIRE_FAILURE: bool = Field(
        default=False,
        description="获取失败时是否也返回默认值（否则向调用方传播）",
    )

    model_config = SettingsConfigDict(
        env_file="app.properties",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("COPY_BUFFER_SIZE")
    @classmethod
    def validate_copy_buffer_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError("COPY_BUFFER_SIZE 至少为 1")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"LOG_LEVEL 必须为 {valid_levels} 中的一项")
        return v_upper


# ========== 配置获取函数 ==========


@lru_cache()
def get_settings() -> Settings:
    """
    获取配置实例（单例）

    返回:
        配置实例
    """
    settings = Settings()
    logger.debug("Settings loaded")
    return settings


def reload_settings() -> Settings:
    """
    重新加载配置

    清除 lru_cache 缓存并重新加载配置

    返回:
        新的配置实例
    """
    get_settings.cache_clear()
    logger.debug("Settings reloaded")
    return get_settings()
