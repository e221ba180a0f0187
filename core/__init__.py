"""
Core - 配置、异常与通用工具
"""
