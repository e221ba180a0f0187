"""
Idioms - 两种资源释放写法的对照

- manual: try/finally 手动释放
- scoped: 作用域自动释放
"""
