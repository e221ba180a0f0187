"""
scoped-resources 安装配置
"""
from setuptools import setup, find_packages

setup(
    name="scoped-resources",
    version="1.0.0",
    description="手动释放与作用域释放两种资源清理写法的对照与工具",
    author="scoped-resources Team",
    author_email="",
    packages=find_packages(include=[
        "core", "core.*",
        "resources", "resources.*",
        "scopes", "scopes.*",
        "idioms", "idioms.*",
    ]),
    python_requires=">=3.10",
    install_requires=[
        "loguru>=0.7",
        "pydantic>=2.0",
        "pydantic-settings>=2.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "scoped-resources=idioms.main:main",
        ],
    },
)
